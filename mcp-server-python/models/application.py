"""
In-memory aggregate for a tracked job application.

A ``JobApplication`` owns two child collections that are kept in sync by
``utils.reconciler``: its status history (``StatusItem``) and its free-text
notes (``ApplicationEvent``). Child fields are mutable so reconciliation can
update entries in place.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator

from models.status import ApplicationStatus


def utc_now() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so history entries stay comparable."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class StatusItem(BaseModel):
    """One timestamped entry of an application's status history."""

    id: UUID = Field(default_factory=uuid4)
    occurred: datetime
    status: ApplicationStatus

    @field_validator("occurred")
    @classmethod
    def normalize_occurred(cls, value: datetime) -> datetime:
        return as_utc(value)


class ApplicationEvent(BaseModel):
    """Free-text note attached to an application (call notes, follow-ups)."""

    id: UUID = Field(default_factory=uuid4)
    occurred: datetime
    description: str

    @field_validator("occurred")
    @classmethod
    def normalize_occurred(cls, value: datetime) -> datetime:
        return as_utc(value)


class Recruiter(BaseModel):
    """Recruiter contact, at most one per application."""

    name: str
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class JobApplication(BaseModel):
    """Aggregate root for one job application."""

    id: UUID = Field(default_factory=uuid4)
    company: str
    position: str
    description: Optional[str] = None
    salary: Optional[str] = None
    top_job: bool = False
    source_page: Optional[str] = None
    review_page: Optional[str] = None
    login_notes: Optional[str] = None
    recruiter: Optional[Recruiter] = None
    status_items: list[StatusItem] = Field(default_factory=list)
    application_events: list[ApplicationEvent] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: Optional[datetime] = None

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, value: datetime) -> datetime:
        return as_utc(value)

    def sorted_status_items(self) -> list[StatusItem]:
        """Status history ordered by ``occurred`` (storage order is not guaranteed)."""
        return sorted(self.status_items, key=lambda item: item.occurred)

    @property
    def current_status(self) -> Optional[ApplicationStatus]:
        """Status of the most recent history entry, or None without history."""
        history = self.sorted_status_items()
        if not history:
            return None
        return history[-1].status

    @property
    def applied_date(self) -> Optional[datetime]:
        """Timestamp of the earliest ``Applied`` entry, if any."""
        for item in self.sorted_status_items():
            if item.status == ApplicationStatus.APPLIED:
                return item.occurred
        return None
