"""Pydantic schemas shared by the application registry tools."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator

from models.application import ApplicationEvent, JobApplication, Recruiter, StatusItem, as_utc
from models.status import ApplicationStatus
from schemas.common import (
    IgnoreRequest,
    StrictResponse,
    blank_to_none,
    validate_required_str,
)


class StatusItemInput(IgnoreRequest):
    """Desired status history entry; ``id`` is None for new entries."""

    occurred: datetime
    status: ApplicationStatus
    id: Optional[UUID] = None

    @field_validator("occurred")
    @classmethod
    def normalize_occurred(cls, value: datetime) -> datetime:
        return as_utc(value)

    def to_entity(self) -> StatusItem:
        return StatusItem(occurred=self.occurred, status=self.status)


class ApplicationEventInput(IgnoreRequest):
    """Desired free-text note; ``id`` is None for new entries."""

    occurred: datetime
    description: str
    id: Optional[UUID] = None

    @field_validator("occurred")
    @classmethod
    def normalize_occurred(cls, value: datetime) -> datetime:
        return as_utc(value)

    @field_validator("description")
    @classmethod
    def validate_description(cls, value: str) -> str:
        return validate_required_str(value, "Description")

    def to_entity(self) -> ApplicationEvent:
        return ApplicationEvent(occurred=self.occurred, description=self.description)


class RecruiterInput(IgnoreRequest):
    """Recruiter contact as supplied by the caller."""

    name: str
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return validate_required_str(value, "Recruiter name")

    @field_validator("company", "email", "phone")
    @classmethod
    def normalize_optional(cls, value: Optional[str]) -> Optional[str]:
        return blank_to_none(value)

    def to_entity(self) -> Recruiter:
        return Recruiter(**self.model_dump())


class ApplicationFieldsMixin(IgnoreRequest):
    """Scalar fields and child collections shared by create and update requests."""

    company: Optional[str] = Field(default=None, validate_default=True)
    position: Optional[str] = Field(default=None, validate_default=True)
    description: Optional[str] = None
    salary: Optional[str] = None
    top_job: bool = False
    source_page: Optional[str] = None
    review_page: Optional[str] = None
    login_notes: Optional[str] = None
    recruiter: Optional[RecruiterInput] = None
    status_items: Optional[list[StatusItemInput]] = None
    application_events: Optional[list[ApplicationEventInput]] = None

    @field_validator("company")
    @classmethod
    def validate_company(cls, value: Optional[str]) -> str:
        return validate_required_str(value, "Company")

    @field_validator("position")
    @classmethod
    def validate_position(cls, value: Optional[str]) -> str:
        return validate_required_str(value, "Position")

    @field_validator("source_page", "review_page", "login_notes")
    @classmethod
    def normalize_optional(cls, value: Optional[str]) -> Optional[str]:
        return blank_to_none(value)

    def scalar_fields(self) -> dict:
        """Scalar field values to copy onto the aggregate."""
        return {
            "company": self.company,
            "position": self.position,
            "description": self.description,
            "salary": self.salary,
            "top_job": self.top_job,
            "source_page": self.source_page,
            "review_page": self.review_page,
            "login_notes": self.login_notes,
        }


class StatusItemView(StrictResponse):
    id: UUID
    occurred: datetime
    status: ApplicationStatus


class ApplicationEventView(StrictResponse):
    id: UUID
    occurred: datetime
    description: str


class RecruiterView(StrictResponse):
    name: str
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class ApplicationDetail(StrictResponse):
    """Detail view of one application, history ordered by ``occurred``."""

    id: UUID
    company: str
    position: str
    description: Optional[str] = None
    salary: Optional[str] = None
    top_job: bool
    source_page: Optional[str] = None
    review_page: Optional[str] = None
    login_notes: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    recruiter: Optional[RecruiterView] = None
    status_items: list[StatusItemView]
    application_events: list[ApplicationEventView]

    @classmethod
    def from_entity(cls, application: JobApplication) -> "ApplicationDetail":
        recruiter = application.recruiter
        return cls(
            id=application.id,
            company=application.company,
            position=application.position,
            description=application.description,
            salary=application.salary,
            top_job=application.top_job,
            source_page=application.source_page,
            review_page=application.review_page,
            login_notes=application.login_notes,
            created_at=application.created_at,
            updated_at=application.updated_at,
            recruiter=RecruiterView(**recruiter.model_dump()) if recruiter else None,
            status_items=[
                StatusItemView(**item.model_dump())
                for item in application.sorted_status_items()
            ],
            application_events=[
                ApplicationEventView(**event.model_dump())
                for event in sorted(application.application_events, key=lambda e: e.occurred)
            ],
        )


class ApplicationSummary(StrictResponse):
    """List row with fields derived from the status history."""

    id: UUID
    company: str
    position: str
    salary: Optional[str] = None
    top_job: bool
    created_at: datetime
    current_status: Optional[ApplicationStatus] = None
    current_status_text: str
    applied_date: Optional[datetime] = None
    recruiter: Optional[RecruiterView] = None
    event_count: int

    @classmethod
    def from_entity(cls, application: JobApplication) -> "ApplicationSummary":
        current = application.current_status
        recruiter = application.recruiter
        return cls(
            id=application.id,
            company=application.company,
            position=application.position,
            salary=application.salary,
            top_job=application.top_job,
            created_at=application.created_at,
            current_status=current,
            current_status_text=current.value if current else "",
            applied_date=application.applied_date,
            recruiter=RecruiterView(**recruiter.model_dump()) if recruiter else None,
            event_count=len(application.application_events),
        )
