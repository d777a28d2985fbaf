"""
Main MCP tool handler for available_statuses.

Feeds "add status" pickers: given an application (or an explicit status
history), returns the statuses that may be recorded next.
"""

from typing import Any, Dict, Optional

from pydantic import ValidationError

from db.application_store import ApplicationStore, get_store
from models.errors import ToolError, create_internal_error, create_not_found_error
from schemas.available_statuses import AvailableStatusesRequest, AvailableStatusesResponse
from utils.pydantic_error_mapper import map_pydantic_validation_error
from utils.status_engine import available_statuses as next_statuses


def available_statuses(
    args: Dict[str, Any], store: Optional[ApplicationStore] = None
) -> Dict[str, Any]:
    """
    Return the statuses legal to add next.

    Args:
        args: Dictionary containing exactly one of:
            - application_id (str): Registered application UUID
            - statuses (list[str]): Explicit status history, may be empty
        store: Optional store override (default: global store)

    Returns:
        Dictionary with structure:
        {
            "application_id": str | null,
            "current_statuses": [str],      # History statuses, ordered by occurred
            "available_statuses": [str]     # Possibly empty
        }

        On error, returns {"error": {...}} with VALIDATION_ERROR, NOT_FOUND
        or INTERNAL_ERROR.

    Examples:
        available_statuses({"statuses": []})
        # -> {"application_id": None, "current_statuses": [], "available_statuses": ["Applied"]}
    """
    try:
        request = AvailableStatusesRequest.model_validate(args)

        if request.application_id is not None:
            with (store or get_store()).session() as session:
                application = session.get(request.application_id)
            if application is None:
                raise create_not_found_error(request.application_id)
            current = [item.status.value for item in application.sorted_status_items()]
        else:
            current = list(request.statuses)

        return AvailableStatusesResponse(
            application_id=request.application_id,
            current_statuses=current,
            available_statuses=next_statuses(current),
        ).model_dump(mode="json")

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        return create_internal_error(message=str(e), original_error=e).to_dict()
