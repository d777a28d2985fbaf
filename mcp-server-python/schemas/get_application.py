"""Pydantic schemas for get_application tool."""

from __future__ import annotations

from schemas.common import ApplicationIdMixin, IgnoreRequest


class GetApplicationRequest(ApplicationIdMixin, IgnoreRequest):
    """Request schema for get_application."""
