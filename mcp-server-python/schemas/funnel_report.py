"""Pydantic schemas for funnel_report tool."""

from __future__ import annotations

from pydantic import ConfigDict, Field

from schemas.common import StrictResponse


class FunnelEdgeRecord(StrictResponse):
    """One funnel edge as returned to callers (``from``/``to`` on the wire)."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    from_stage: str = Field(alias="from")
    to_stage: str = Field(alias="to")
    count: int


class FunnelReportResponse(StrictResponse):
    """Success response schema for funnel_report."""

    edges: list[FunnelEdgeRecord]
    application_count: int
