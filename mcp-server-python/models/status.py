"""
Centralized, type-safe status definitions for the HireTrack pipeline.

This module is the single source of truth for the status vocabulary recorded
in an application's status history. ``ApplicationStatus`` inherits from
``(str, Enum)`` so that members compare equal to plain strings and serialize
naturally to JSON at the MCP boundary.
"""

from enum import Enum
from typing import Any, Optional


class ApplicationStatus(str, Enum):
    """Enum for statuses recorded in an application's status history.

    Expected flow of a job application:
        Applied  ->  Rejected | Screen
        Screen  ->  Interview
        Interview  ->  Offer | NoOffer | Withdrawn

    Declaration order carries no meaning; adjacency lives in
    ``utils.status_engine``.
    """

    APPLIED = "Applied"
    REJECTED = "Rejected"
    SCREEN = "Screen"
    INTERVIEW = "Interview"
    OFFER = "Offer"
    WITHDRAWN = "Withdrawn"
    NO_OFFER = "NoOffer"


def coerce_status(value: Any) -> Optional[ApplicationStatus]:
    """Return the matching ApplicationStatus, or None for unrecognized values."""
    if isinstance(value, ApplicationStatus):
        return value
    try:
        return ApplicationStatus(value)
    except ValueError:
        return None
