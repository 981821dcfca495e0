"""
Unit tests for status-to-color mapping and badge styling.
"""

import pytest

from models.status import JobPriority, JobStatus, WorkerStatus
from utils.dashboard import badge_classes, get_priority_color
from utils.status_colors import DEFAULT_STATUS_COLOR, StatusColor, get_status_color


class TestGetStatusColor:
    """Tests for get_status_color."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("pending", StatusColor.ORANGE),
            ("assigned", StatusColor.BLUE),
            ("in_progress", StatusColor.YELLOW),
            ("completed", StatusColor.GREEN),
            ("cancelled", StatusColor.RED),
            ("available", StatusColor.GREEN),
            ("working", StatusColor.RED),
            ("offline", StatusColor.SLATE),
            ("normal", StatusColor.BLUE),
            ("high", StatusColor.ORANGE),
            ("urgent", StatusColor.RED),
        ],
    )
    def test_known_values(self, value, expected):
        assert get_status_color(value) == expected

    def test_enum_members_map_like_their_values(self):
        """Enum members must not be looked up by name."""
        assert get_status_color(JobStatus.IN_PROGRESS) == StatusColor.YELLOW
        assert get_status_color(WorkerStatus.AVAILABLE) == StatusColor.GREEN
        assert get_status_color(JobPriority.URGENT) == StatusColor.RED

    @pytest.mark.parametrize("value", ["unknown", "", "PENDING", None, 42, ["pending"]])
    def test_unknown_values_default_to_slate(self, value):
        assert get_status_color(value) == DEFAULT_STATUS_COLOR == StatusColor.SLATE


class TestPriorityColor:
    """Tests for get_priority_color."""

    def test_priority_colors(self):
        assert get_priority_color("urgent") == StatusColor.RED
        assert get_priority_color(JobPriority.HIGH) == StatusColor.ORANGE
        assert get_priority_color("normal") == StatusColor.BLUE

    def test_unknown_priority_is_blue(self):
        assert get_priority_color("whenever") == StatusColor.BLUE


class TestBadgeClasses:
    """Tests for badge_classes."""

    def test_badge_classes_for_red(self):
        assert badge_classes(StatusColor.RED) == (
            "bg-red-100 text-red-800 dark:bg-red-900/20 dark:text-red-400"
        )

    def test_badge_classes_accepts_plain_value(self):
        assert badge_classes("green").startswith("bg-green-100 ")
