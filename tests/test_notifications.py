"""
Unit tests for toasts and the tool response envelope.
"""

from models.errors import create_internal_error, create_remote_error, create_validation_error
from utils.notifications import (
    build_error_response,
    build_success_response,
    error_toast,
    success_toast,
    toast_for_error,
)


class TestToasts:
    """Tests for toast construction."""

    def test_success_toast(self):
        toast = success_toast("Job created successfully")
        assert toast.variant == "default"
        assert toast.description is None

    def test_error_toast_is_destructive(self):
        assert error_toast("Failed").variant == "destructive"

    def test_validation_error_uses_message_as_title(self):
        toast = toast_for_error(create_validation_error("Please select a worker"), "Failed to assign job")
        assert toast.title == "Please select a worker"
        assert toast.description is None

    def test_remote_error_uses_failure_title(self):
        toast = toast_for_error(create_remote_error("500: Server exploded"), "Failed to assign job")
        assert toast.title == "Failed to assign job"
        assert toast.description == "500: Server exploded"


class TestEnvelopes:
    """Tests for response envelopes."""

    def test_success_response(self):
        response = build_success_response("Job created successfully", ["/api/jobs"], job={"id": 1})
        assert response == {
            "success": True,
            "toast": {"title": "Job created successfully", "variant": "default"},
            "invalidated": ["/api/jobs"],
            "job": {"id": 1},
        }

    def test_error_response(self):
        response = build_error_response(create_internal_error("boom"), "Failed to create job")
        assert response["success"] is False
        assert response["invalidated"] == []
        assert response["toast"] == {
            "title": "Failed to create job",
            "description": "Internal error: boom",
            "variant": "destructive",
        }
        assert response["error"]["code"] == "INTERNAL_ERROR"

    def test_error_response_extra_data(self):
        response = build_error_response(
            create_validation_error("Please select a worker"), "Failed", assignments={3: 0}
        )
        assert response["assignments"] == {3: 0}
