"""
Main MCP tool handler for create_application.

Validates the request, builds a new JobApplication aggregate with fresh
identities for every child entry, and registers it in the application store.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from db.application_store import ApplicationStore, get_store
from models.application import JobApplication
from models.errors import ToolError, create_internal_error
from schemas.create_application import CreateApplicationRequest, CreateApplicationResponse
from utils.pydantic_error_mapper import map_pydantic_validation_error

logger = logging.getLogger(__name__)


def build_application(request: CreateApplicationRequest) -> JobApplication:
    """Map a validated create request onto a new aggregate."""
    return JobApplication(
        **request.scalar_fields(),
        recruiter=request.recruiter.to_entity() if request.recruiter else None,
        status_items=[item.to_entity() for item in request.status_items or []],
        application_events=[event.to_entity() for event in request.application_events or []],
    )


def create_application(
    args: Dict[str, Any], store: Optional[ApplicationStore] = None
) -> Dict[str, Any]:
    """
    Register a new job application.

    Args:
        args: Dictionary containing parameters:
            - company (str): Required, non-blank
            - position (str): Required, non-blank
            - description, salary, source_page, review_page, login_notes (str, optional)
            - top_job (bool, optional): default False
            - recruiter (dict, optional): {name, company?, email?, phone?}
            - status_items (list, optional): [{occurred, status}]
            - application_events (list, optional): [{occurred, description}]
        store: Optional store override (default: global store)

    Returns:
        Dictionary with structure (success case):
        {
            "id": str,
            "status_item_count": int,
            "application_event_count": int
        }

        On error, returns:
        {
            "error": {
                "code": str,         # VALIDATION_ERROR, INTERNAL_ERROR
                "message": str,
                "retryable": bool
            }
        }
    """
    try:
        request = CreateApplicationRequest.model_validate(args)
        application = build_application(request)

        with (store or get_store()).session() as session:
            session.add(application)
            session.commit()

        logger.info(
            f"Created application {application.id} ({application.company} / {application.position})"
        )
        return CreateApplicationResponse(
            id=application.id,
            status_item_count=len(application.status_items),
            application_event_count=len(application.application_events),
        ).model_dump(mode="json")

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        logger.exception("create_application failed")
        return create_internal_error(message=str(e), original_error=e).to_dict()
