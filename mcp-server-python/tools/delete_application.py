"""
Main MCP tool handler for delete_application.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from db.application_store import ApplicationStore, get_store
from models.errors import ToolError, create_internal_error, create_not_found_error
from schemas.delete_application import DeleteApplicationRequest, DeleteApplicationResponse
from utils.pydantic_error_mapper import map_pydantic_validation_error

logger = logging.getLogger(__name__)


def delete_application(
    args: Dict[str, Any], store: Optional[ApplicationStore] = None
) -> Dict[str, Any]:
    """
    Remove one application together with its history and notes.

    Args:
        args: Dictionary containing parameters:
            - id (str): Application UUID
        store: Optional store override (default: global store)

    Returns:
        {"id": str, "deleted": true} on success, or an error dictionary with
        code VALIDATION_ERROR, NOT_FOUND or INTERNAL_ERROR
    """
    try:
        request = DeleteApplicationRequest.model_validate(args)

        with (store or get_store()).session() as session:
            if not session.delete(request.id):
                raise create_not_found_error(request.id)
            session.commit()

        logger.info(f"Deleted application {request.id}")
        return DeleteApplicationResponse(id=request.id, deleted=True).model_dump(mode="json")

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        logger.exception("delete_application failed")
        return create_internal_error(message=str(e), original_error=e).to_dict()
