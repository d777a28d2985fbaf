"""Pydantic schemas for delete_application tool."""

from __future__ import annotations

from uuid import UUID

from schemas.common import ApplicationIdMixin, IgnoreRequest, StrictResponse


class DeleteApplicationRequest(ApplicationIdMixin, IgnoreRequest):
    """Request schema for delete_application."""


class DeleteApplicationResponse(StrictResponse):
    """Success response schema for delete_application."""

    id: UUID
    deleted: bool
