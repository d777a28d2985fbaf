"""Pydantic schemas for update_application tool."""

from __future__ import annotations

from uuid import UUID

from schemas.application import ApplicationFieldsMixin
from schemas.common import ApplicationIdMixin, StrictResponse


class UpdateApplicationRequest(ApplicationIdMixin, ApplicationFieldsMixin):
    """Request schema for update_application.

    ``status_items`` and ``application_events`` are the desired state of the
    child collections: omitted or null clears the collection.
    """


class ReconcileCounts(StrictResponse):
    """Per-collection reconciliation summary."""

    added: int
    updated: int
    removed: int
    ignored: int


class UpdateApplicationResponse(StrictResponse):
    """Success response schema for update_application."""

    id: UUID
    status_items: ReconcileCounts
    application_events: ReconcileCounts
