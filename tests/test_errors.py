"""
Unit tests for error model and sanitization functions.

Tests error codes, error structure, and message handling.
"""

from models.errors import (
    ErrorCode,
    ToolError,
    sanitize_stack_trace,
    create_validation_error,
    create_remote_error,
    create_internal_error,
)


class TestErrorCode:
    """Tests for ErrorCode enum."""

    def test_all_error_codes_exist(self):
        """Test that all required error codes are defined."""
        assert ErrorCode.VALIDATION_ERROR == "VALIDATION_ERROR"
        assert ErrorCode.REMOTE_ERROR == "REMOTE_ERROR"
        assert ErrorCode.INTERNAL_ERROR == "INTERNAL_ERROR"

    def test_error_codes_are_strings(self):
        """Test that error codes are string values."""
        for code in ErrorCode:
            assert isinstance(code.value, str)


class TestToolError:
    """Tests for ToolError exception class."""

    def test_tool_error_creation(self):
        """Test creating a ToolError with all fields."""
        error = ToolError(code=ErrorCode.VALIDATION_ERROR, message="Test error", retryable=False)

        assert error.code == ErrorCode.VALIDATION_ERROR
        assert error.message == "Test error"
        assert error.retryable is False
        assert error.original_error is None

    def test_tool_error_with_original_exception(self):
        """Test creating a ToolError wrapping another exception."""
        original = ValueError("Original error")
        error = ToolError(
            code=ErrorCode.INTERNAL_ERROR,
            message="Wrapped error",
            retryable=True,
            original_error=original,
        )

        assert error.original_error is original
        assert str(error) == "Wrapped error"

    def test_to_dict_format(self):
        """Test converting ToolError to dictionary format."""
        error = ToolError(code=ErrorCode.REMOTE_ERROR, message="500: boom", retryable=True)

        assert error.to_dict() == {
            "error": {"code": "REMOTE_ERROR", "message": "500: boom", "retryable": True}
        }


class TestSanitizeStackTrace:
    """Tests for stack trace removal."""

    def test_keeps_first_line_only(self):
        message = "Something failed\n  File \"x.py\", line 1\n    raise"
        assert sanitize_stack_trace(message) == "Something failed"

    def test_single_line_unchanged(self):
        assert sanitize_stack_trace("plain message") == "plain message"


class TestErrorFactories:
    """Tests for the error factory functions."""

    def test_validation_error_is_not_retryable(self):
        error = create_validation_error("Please fill in all required fields")
        assert error.code == ErrorCode.VALIDATION_ERROR
        assert error.message == "Please fill in all required fields"
        assert error.retryable is False

    def test_remote_error_keeps_message_verbatim(self):
        """The backend's text reaches the user unchanged."""
        original = RuntimeError("socket closed")
        error = create_remote_error("400: Invalid job data", original_error=original)

        assert error.code == ErrorCode.REMOTE_ERROR
        assert error.message == "400: Invalid job data"
        assert error.retryable is True
        assert error.original_error is original

    def test_internal_error_is_prefixed_and_sanitized(self):
        error = create_internal_error("KeyError: 'x'\nTraceback...")
        assert error.code == ErrorCode.INTERNAL_ERROR
        assert error.message == "Internal error: KeyError: 'x'"
        assert error.retryable is True
