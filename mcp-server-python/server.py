#!/usr/bin/env python3
"""
MCP Server entry point for HireTrack.

This server tracks job applications through a fixed hiring pipeline and
exposes tools to register and edit applications, ask which statuses may be
recorded next, and aggregate every application into a hiring-funnel report.

The registry is in-memory and lives as long as the server process.

Usage:
    python server.py

The server runs in stdio mode by default, which is the standard transport
for MCP servers that are invoked by LLM agents.
"""

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from config import get_config
from tools.available_statuses import available_statuses
from tools.create_application import create_application
from tools.delete_application import delete_application
from tools.funnel_report import funnel_report
from tools.get_application import get_application
from tools.list_applications import list_applications
from tools.update_application import update_application

# Create FastMCP server instance
config = get_config()
mcp = FastMCP(
    name=config.server_name,
    instructions=(
        "This server provides tools for tracking job applications through the hiring pipeline "
        "Applied -> Rejected | Screen -> Interview -> Offer | NoOffer | Withdrawn."
        "\n\n"
        "REGISTRY TOOLS:\n"
        "Use create_application to register an application with its status history and notes. "
        "Use update_application to replace an application's fields; status_items and "
        "application_events are the full desired state: entries with an id are updated, entries "
        "without an id are added, and stored entries left out are removed. "
        "Use get_application for the detail view and list_applications for summary rows. "
        "Use delete_application to remove an application."
        "\n\n"
        "PIPELINE TOOLS:\n"
        "Use available_statuses before adding a status to learn which statuses are legal next. "
        "Use funnel_report to aggregate all applications into stage-to-stage counts."
    ),
)


def _provided(**kwargs: Any) -> dict:
    """Only forward parameters that were explicitly provided."""
    return {key: value for key, value in kwargs.items() if value is not None}


@mcp.tool(
    name="available_statuses",
    description=(
        "Return the statuses that may be recorded next for an application, given either its id "
        "or an explicit list of statuses already recorded."
    ),
)
def available_statuses_tool(
    application_id: str | None = None,
    statuses: list[str] | None = None,
) -> dict:
    """
    Return the statuses legal to add next.

    Args:
        application_id: Registered application UUID.
        statuses: Explicit status history (Applied, Rejected, Screen, Interview,
            Offer, Withdrawn, NoOffer). An empty list yields ['Applied'].

    Returns:
        {"application_id", "current_statuses", "available_statuses"} or {"error": {...}}
    """
    return available_statuses(_provided(application_id=application_id, statuses=statuses))


@mcp.tool(
    name="funnel_report",
    description=(
        "Aggregate every registered application into the six hiring-funnel edges "
        "(Applied->No Response, Applied->Responded, Responded->Rejected, "
        "Responded->Interview, Interview->Offer, Interview->No Offer), sorted by count."
    ),
)
def funnel_report_tool() -> dict:
    """
    Generate the funnel report.

    Returns:
        {"edges": [{"from", "to", "count"}], "application_count": int}
    """
    return funnel_report({})


@mcp.tool(
    name="create_application",
    description="Register a new job application with optional recruiter, status history and notes.",
)
def create_application_tool(
    company: str,
    position: str,
    description: str | None = None,
    salary: str | None = None,
    top_job: bool | None = None,
    source_page: str | None = None,
    review_page: str | None = None,
    login_notes: str | None = None,
    recruiter: dict | None = None,
    status_items: list[dict] | None = None,
    application_events: list[dict] | None = None,
) -> dict:
    """
    Register a new job application.

    Args:
        company: Company name (required, non-blank).
        position: Position title (required, non-blank).
        description: Job description.
        salary: Salary text.
        top_job: Flag as a top job (default: false).
        source_page: URL of the posting.
        review_page: URL of a company review page.
        login_notes: Notes on the application portal login.
        recruiter: {"name", "company"?, "email"?, "phone"?}.
        status_items: [{"occurred": ISO 8601, "status": str}].
        application_events: [{"occurred": ISO 8601, "description": str}].

    Returns:
        {"id", "status_item_count", "application_event_count"} or {"error": {...}}
    """
    return create_application(
        _provided(
            company=company,
            position=position,
            description=description,
            salary=salary,
            top_job=top_job,
            source_page=source_page,
            review_page=review_page,
            login_notes=login_notes,
            recruiter=recruiter,
            status_items=status_items,
            application_events=application_events,
        )
    )


@mcp.tool(
    name="update_application",
    description=(
        "Update a job application. status_items and application_events are the full desired "
        "state of each collection and are reconciled by id."
    ),
)
def update_application_tool(
    id: str,
    company: str,
    position: str,
    description: str | None = None,
    salary: str | None = None,
    top_job: bool | None = None,
    source_page: str | None = None,
    review_page: str | None = None,
    login_notes: str | None = None,
    recruiter: dict | None = None,
    status_items: list[dict] | None = None,
    application_events: list[dict] | None = None,
) -> dict:
    """
    Update an existing job application.

    Args:
        id: Application UUID.
        company: Company name (required, non-blank).
        position: Position title (required, non-blank).
        description, salary, top_job, source_page, review_page, login_notes:
            Scalar fields, overwritten as given (omitted means cleared/default).
        recruiter: Recruiter contact; omitted removes the recruiter.
        status_items: [{"id"?, "occurred", "status"}]; omitted clears the history.
        application_events: [{"id"?, "occurred", "description"}]; omitted clears the notes.

    Returns:
        {"id", "status_items": {...}, "application_events": {...}} or {"error": {...}}
    """
    return update_application(
        _provided(
            id=id,
            company=company,
            position=position,
            description=description,
            salary=salary,
            top_job=top_job,
            source_page=source_page,
            review_page=review_page,
            login_notes=login_notes,
            recruiter=recruiter,
            status_items=status_items,
            application_events=application_events,
        )
    )


@mcp.tool(
    name="get_application",
    description="Return one job application with recruiter, status history and notes.",
)
def get_application_tool(id: str) -> dict:
    """
    Fetch one application.

    Args:
        id: Application UUID.

    Returns:
        Application detail or {"error": {...}}
    """
    return get_application({"id": id})


@mcp.tool(
    name="list_applications",
    description=(
        "List job applications newest first with current status and applied date derived "
        "from each status history."
    ),
)
def list_applications_tool(limit: int | None = None, top_jobs_only: bool | None = None) -> dict:
    """
    List applications.

    Args:
        limit: Maximum rows, 1-1000 (default: HIRETRACK_LIST_LIMIT).
        top_jobs_only: Only applications flagged as top jobs.

    Returns:
        {"applications", "count", "total", "has_more"} or {"error": {...}}
    """
    return list_applications(_provided(limit=limit, top_jobs_only=top_jobs_only))


@mcp.tool(
    name="delete_application",
    description="Delete a job application with its status history and notes.",
)
def delete_application_tool(id: str) -> dict:
    """
    Delete one application.

    Args:
        id: Application UUID.

    Returns:
        {"id", "deleted": true} or {"error": {...}}
    """
    return delete_application({"id": id})


def main():
    """
    Main entry point for the MCP server.

    Runs the server in stdio mode, which is the standard transport
    for MCP servers that are invoked by LLM agents.
    """
    config.setup_logging()

    logger = logging.getLogger(__name__)
    logger.info("Starting HireTrack MCP Server")
    logger.info(f"Server name: {config.server_name}")

    for warning in config.validate():
        logger.warning(warning)

    logger.info("Server starting in stdio mode")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
