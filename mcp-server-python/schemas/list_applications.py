"""Pydantic schemas for list_applications tool."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import field_validator

from schemas.application import ApplicationSummary
from schemas.common import StrictIgnoreRequest, StrictResponse

MIN_LIMIT = 1
MAX_LIMIT = 1000


class ListApplicationsRequest(StrictIgnoreRequest):
    """Request schema for list_applications.

    ``limit`` of None means "use the configured default".
    """

    limit: Optional[int] = None
    top_jobs_only: bool = False

    @field_validator("limit")
    @classmethod
    def validate_limit(cls, value: Optional[int]) -> Optional[int]:
        """Validate limit range."""
        if value is None:
            return None
        if value < MIN_LIMIT:
            raise ValueError(f"{value} is below minimum of {MIN_LIMIT}")
        if value > MAX_LIMIT:
            raise ValueError(f"{value} exceeds maximum of {MAX_LIMIT}")
        return value

    @field_validator("top_jobs_only", mode="before")
    @classmethod
    def coerce_top_jobs_none(cls, value: Any) -> Any:
        if value is None:
            return False
        return value


class ListApplicationsResponse(StrictResponse):
    """Success response schema for list_applications."""

    applications: list[ApplicationSummary]
    count: int
    total: int
    has_more: bool
