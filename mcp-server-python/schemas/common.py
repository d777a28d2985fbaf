"""Shared schema primitives for MCP tool request/response models."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


def validate_required_str(value: Optional[str], label: str) -> str:
    """Validate required string fields that cannot be missing/empty/whitespace."""
    if value is None or not value.strip():
        raise ValueError(f"{label} is required.")
    return value


def blank_to_none(value: Optional[str]) -> Optional[str]:
    """Normalise empty/whitespace optional strings to None."""
    if value is None or not value.strip():
        return None
    return value


class StrictIgnoreRequest(BaseModel):
    """Request base with strict typing and ignored unknown fields."""

    model_config = ConfigDict(extra="ignore", strict=True)


class IgnoreRequest(BaseModel):
    """Request base with ignored unknown fields.

    Not strict: timestamps and identities arrive over MCP as ISO 8601 and
    UUID strings and must be parsed.
    """

    model_config = ConfigDict(extra="ignore")


class StrictResponse(BaseModel):
    """Response/result base with strict typing and forbidden unknown fields."""

    model_config = ConfigDict(extra="forbid")


class ApplicationIdMixin(BaseModel):
    """Reusable required application id field."""

    id: UUID
