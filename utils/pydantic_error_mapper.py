"""Map pydantic ValidationError into the VALIDATION_ERROR ToolError contract."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from models.errors import ToolError, create_validation_error

_VALUE_ERROR_PREFIX = "Value error, "


def _field_path(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc if part != "__root__")


def _issue_message(issue: dict[str, Any]) -> str:
    message = issue.get("msg", "Invalid input")
    if message.startswith(_VALUE_ERROR_PREFIX):
        message = message[len(_VALUE_ERROR_PREFIX) :]
    if issue.get("type") == "missing":
        return "is required"
    return message


def map_pydantic_validation_error(error: ValidationError) -> ToolError:
    """
    Report the first failing field as ``Invalid <field>: <reason>``.

    Nested locations are dotted (``form.estimated_duration``). When more
    fields failed, the count of the rest is appended.
    """
    issues = error.errors()
    if not issues:
        return create_validation_error("Invalid input")

    first = issues[0]
    field = _field_path(first.get("loc", ()))
    message = _issue_message(first)
    text = f"Invalid {field}: {message}" if field else message

    if len(issues) > 1:
        text = f"{text} (and {len(issues) - 1} more)"
    return create_validation_error(text)
