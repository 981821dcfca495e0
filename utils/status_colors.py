"""
Status and priority to presentation-color mapping.

Job statuses, worker statuses and job priorities share one lookup table.
Several call sites render any of the three through ``get_status_color``, so
the merged namespace is kept as-is.
"""

from enum import Enum
from typing import Any, Dict

from models.status import enum_value


class StatusColor(str, Enum):
    """Semantic color tags understood by the presentation layer."""

    ORANGE = "orange"
    BLUE = "blue"
    YELLOW = "yellow"
    GREEN = "green"
    RED = "red"
    SLATE = "slate"


DEFAULT_STATUS_COLOR = StatusColor.SLATE

STATUS_COLORS: Dict[str, StatusColor] = {
    # Job status
    "pending": StatusColor.ORANGE,
    "assigned": StatusColor.BLUE,
    "in_progress": StatusColor.YELLOW,
    "completed": StatusColor.GREEN,
    "cancelled": StatusColor.RED,
    # Worker status
    "available": StatusColor.GREEN,
    "working": StatusColor.RED,
    "offline": StatusColor.SLATE,
    # Priority
    "normal": StatusColor.BLUE,
    "high": StatusColor.ORANGE,
    "urgent": StatusColor.RED,
}


def get_status_color(value: Any) -> StatusColor:
    """
    Map a job status, worker status or priority to its color tag.

    Unknown values, ``None`` and non-string inputs all map to
    ``DEFAULT_STATUS_COLOR``.

    Examples:
        >>> get_status_color("in_progress")
        <StatusColor.YELLOW: 'yellow'>
        >>> get_status_color("bogus")
        <StatusColor.SLATE: 'slate'>
    """
    key = enum_value(value)
    if not isinstance(key, str):
        return DEFAULT_STATUS_COLOR
    return STATUS_COLORS.get(key, DEFAULT_STATUS_COLOR)
