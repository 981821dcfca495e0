"""
Toast outcomes and tool response envelopes.

Every mutation tool answers with the same envelope:

    {"success": bool, "toast": {...}, "invalidated": [...], ...data}

and, on failure, the structured ``"error"`` block from ``ToolError.to_dict``.
Validation failures show their own message as the toast title; remote and
internal failures show the operation's failure title with the underlying
message as the description.
"""

from typing import Any, Dict, Iterable, Optional

from models.errors import ErrorCode, ToolError
from schemas.common import Toast


def success_toast(title: str, description: Optional[str] = None) -> Toast:
    return Toast(title=title, description=description)


def error_toast(title: str, description: Optional[str] = None) -> Toast:
    return Toast(title=title, description=description, variant="destructive")


def toast_for_error(error: ToolError, failure_title: str) -> Toast:
    """Pick the toast for a failed operation."""
    if error.code == ErrorCode.VALIDATION_ERROR:
        return error_toast(error.message)
    return error_toast(failure_title, error.message)


def build_success_response(
    title: str, invalidated: Iterable[str] = (), **data: Any
) -> Dict[str, Any]:
    """Envelope for an acknowledged mutation."""
    response = {
        "success": True,
        "toast": success_toast(title).model_dump(exclude_none=True),
        "invalidated": list(invalidated),
    }
    response.update(data)
    return response


def build_error_response(error: ToolError, failure_title: str, **data: Any) -> Dict[str, Any]:
    """Envelope for a validation, remote or internal failure."""
    response = {
        "success": False,
        "toast": toast_for_error(error, failure_title).model_dump(exclude_none=True),
        "invalidated": [],
    }
    response.update(error.to_dict())
    response.update(data)
    return response
