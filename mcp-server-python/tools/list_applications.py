"""
Main MCP tool handler for list_applications.

Builds summary rows whose current status and applied date are derived from
each application's status history.
"""

from typing import Any, Dict, Optional

from pydantic import ValidationError

from config import get_config
from db.application_store import ApplicationStore, get_store
from models.errors import ToolError, create_internal_error
from schemas.application import ApplicationSummary
from schemas.list_applications import ListApplicationsRequest, ListApplicationsResponse
from utils.pydantic_error_mapper import map_pydantic_validation_error


def list_applications(
    args: Optional[Dict[str, Any]] = None, store: Optional[ApplicationStore] = None
) -> Dict[str, Any]:
    """
    List registered applications, newest first.

    Derived fields:
    - current_status: status of the latest history entry by ``occurred``
    - current_status_text: its value, or "" without history
    - applied_date: ``occurred`` of the earliest Applied entry

    Args:
        args: Dictionary containing optional parameters:
            - limit (int): Maximum rows, 1-1000 (default: HIRETRACK_LIST_LIMIT)
            - top_jobs_only (bool): Only applications flagged top_job
        store: Optional store override (default: global store)

    Returns:
        Dictionary with structure:
        {
            "applications": [...],  # ApplicationSummary rows
            "count": int,           # Rows returned
            "total": int,           # Rows matching before the limit
            "has_more": bool
        }
    """
    try:
        request = ListApplicationsRequest.model_validate(args or {})
        limit = request.limit or get_config().list_limit

        with (store or get_store()).session() as session:
            applications = session.list_all()

        if request.top_jobs_only:
            applications = [a for a in applications if a.top_job]

        applications.sort(key=lambda a: a.created_at, reverse=True)
        page = applications[:limit]

        return ListApplicationsResponse(
            applications=[ApplicationSummary.from_entity(a) for a in page],
            count=len(page),
            total=len(applications),
            has_more=len(applications) > limit,
        ).model_dump(mode="json")

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        return create_internal_error(message=str(e), original_error=e).to_dict()
