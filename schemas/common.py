"""Shared schema primitives for entity records and MCP tool request/response models."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StrictIgnoreRequest(BaseModel):
    """Request base with strict typing and ignored unknown fields."""

    model_config = ConfigDict(extra="ignore", strict=True)


class StrictResponse(BaseModel):
    """Response/result base with strict typing and forbidden unknown fields."""

    model_config = ConfigDict(extra="forbid")


class CamelRecord(BaseModel):
    """Immutable record exchanged with the REST backend.

    The backend speaks camelCase JSON; attributes are snake_case. Both names
    are accepted on input, and ``to_wire`` dumps camelCase.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump to JSON-ready camelCase dict."""
        return self.model_dump(mode="json", by_alias=True)


class Toast(StrictResponse):
    """User-facing outcome notification."""

    title: str
    description: Optional[str] = None
    variant: Literal["default", "destructive"] = "default"

