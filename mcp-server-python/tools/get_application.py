"""
Main MCP tool handler for get_application.

Returns the detail view of one registered application.
"""

from typing import Any, Dict, Optional

from pydantic import ValidationError

from db.application_store import ApplicationStore, get_store
from models.errors import ToolError, create_internal_error, create_not_found_error
from schemas.application import ApplicationDetail
from schemas.get_application import GetApplicationRequest
from utils.pydantic_error_mapper import map_pydantic_validation_error


def get_application(
    args: Dict[str, Any], store: Optional[ApplicationStore] = None
) -> Dict[str, Any]:
    """
    Fetch one application with its recruiter, status history and notes.

    Status items and notes are returned ordered by ``occurred``.

    Args:
        args: Dictionary containing parameters:
            - id (str): Application UUID
        store: Optional store override (default: global store)

    Returns:
        ApplicationDetail as a dictionary, or an error dictionary with code
        VALIDATION_ERROR, NOT_FOUND or INTERNAL_ERROR
    """
    try:
        request = GetApplicationRequest.model_validate(args)

        with (store or get_store()).session() as session:
            application = session.get(request.id)

        if application is None:
            raise create_not_found_error(request.id)

        return ApplicationDetail.from_entity(application).model_dump(mode="json")

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        return create_internal_error(message=str(e), original_error=e).to_dict()
