"""Pydantic schemas for create_application tool."""

from __future__ import annotations

from uuid import UUID

from schemas.application import ApplicationFieldsMixin
from schemas.common import StrictResponse


class CreateApplicationRequest(ApplicationFieldsMixin):
    """Request schema for create_application.

    Status items and events are always created as new entries; any ``id``
    they carry is ignored.
    """


class CreateApplicationResponse(StrictResponse):
    """Success response schema for create_application."""

    id: UUID
    status_item_count: int
    application_event_count: int
