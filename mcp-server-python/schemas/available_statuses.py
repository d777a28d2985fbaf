"""Pydantic schemas for available_statuses tool."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import model_validator

from models.status import ApplicationStatus
from schemas.common import IgnoreRequest, StrictResponse


class AvailableStatusesRequest(IgnoreRequest):
    """Request schema for available_statuses.

    Exactly one of ``application_id`` (look up a registered application) or
    ``statuses`` (explicit history, may be empty) must be provided.
    """

    application_id: Optional[UUID] = None
    statuses: Optional[list[str]] = None

    @model_validator(mode="after")
    def require_exactly_one_source(self) -> "AvailableStatusesRequest":
        if self.application_id is None and self.statuses is None:
            raise ValueError("Either application_id or statuses is required")
        if self.application_id is not None and self.statuses is not None:
            raise ValueError("Provide application_id or statuses, not both")
        return self


class AvailableStatusesResponse(StrictResponse):
    """Success response schema for available_statuses."""

    application_id: Optional[UUID] = None
    current_statuses: list[str]
    available_statuses: list[ApplicationStatus]
