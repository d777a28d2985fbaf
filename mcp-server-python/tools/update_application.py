"""
Main MCP tool handler for update_application.

Orchestrates validation, scalar updates, recruiter sync, and reconciliation
of both child collections (status history and notes) against the desired
state supplied by the caller.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError

from db.application_store import ApplicationStore, get_store
from models.application import (
    ApplicationEvent,
    JobApplication,
    StatusItem,
    utc_now,
)
from models.errors import ToolError, create_internal_error, create_not_found_error
from schemas.application import ApplicationEventInput, RecruiterInput, StatusItemInput
from schemas.update_application import UpdateApplicationRequest, UpdateApplicationResponse
from utils.pydantic_error_mapper import map_pydantic_validation_error
from utils.reconciler import ReconcileResult, copy_fields, reconcile

logger = logging.getLogger(__name__)

STATUS_ITEM_FIELDS = ("occurred", "status")
APPLICATION_EVENT_FIELDS = ("occurred", "description")


def sync_recruiter(application: JobApplication, recruiter: Optional[RecruiterInput]) -> None:
    """
    Sync the optional recruiter child.

    - None removes the recruiter
    - No stored recruiter creates one
    - Otherwise the stored recruiter is updated in place
    """
    if recruiter is None:
        application.recruiter = None
    elif application.recruiter is None:
        application.recruiter = recruiter.to_entity()
    else:
        copy_fields(application.recruiter, recruiter, ("name", "company", "email", "phone"))


def sync_status_items(
    application: JobApplication, desired: Optional[list[StatusItemInput]]
) -> ReconcileResult:
    """Reconcile the status history against the desired entries."""

    def apply(existing: StatusItem, entry: StatusItemInput) -> bool:
        return copy_fields(existing, entry, STATUS_ITEM_FIELDS)

    return reconcile(
        application.status_items,
        desired,
        apply=apply,
        create=StatusItemInput.to_entity,
    )


def sync_application_events(
    application: JobApplication, desired: Optional[list[ApplicationEventInput]]
) -> ReconcileResult:
    """Reconcile the free-text notes against the desired entries."""

    def apply(existing: ApplicationEvent, entry: ApplicationEventInput) -> bool:
        return copy_fields(existing, entry, APPLICATION_EVENT_FIELDS)

    return reconcile(
        application.application_events,
        desired,
        apply=apply,
        create=ApplicationEventInput.to_entity,
    )


def apply_update(
    application: JobApplication, request: UpdateApplicationRequest
) -> Tuple[ReconcileResult, ReconcileResult]:
    """
    Apply a validated update request to a working copy of the aggregate.

    Returns:
        (status item ReconcileResult, application event ReconcileResult)
    """
    for field, value in request.scalar_fields().items():
        setattr(application, field, value)

    sync_recruiter(application, request.recruiter)
    status_result = sync_status_items(application, request.status_items)
    event_result = sync_application_events(application, request.application_events)

    application.updated_at = utc_now()
    return status_result, event_result


def update_application(
    args: Dict[str, Any], store: Optional[ApplicationStore] = None
) -> Dict[str, Any]:
    """
    Update an existing job application.

    This is the main entry point for the MCP tool. It orchestrates all components:
    1. Validates the request (id, non-blank company and position, child entries)
    2. Loads the application; unknown id returns NOT_FOUND
    3. Overwrites scalar fields and syncs the recruiter
    4. Reconciles status_items and application_events by identity:
       entries with a known id are updated, entries without id are added,
       stored entries missing from the request are removed
    5. Commits the aggregate

    Omitting ``status_items`` or ``application_events`` (or passing null)
    clears that collection.

    Args:
        args: Dictionary containing parameters:
            - id (str): Application UUID
            - company, position (str): Required, non-blank
            - other scalar fields as for create_application
            - recruiter (dict, optional): null removes the recruiter
            - status_items (list, optional): [{id?, occurred, status}]
            - application_events (list, optional): [{id?, occurred, description}]
        store: Optional store override (default: global store)

    Returns:
        Dictionary with structure (success case):
        {
            "id": str,
            "status_items": {"added": int, "updated": int, "removed": int, "ignored": int},
            "application_events": {"added": int, "updated": int, "removed": int, "ignored": int}
        }

        On error, returns:
        {
            "error": {
                "code": str,         # VALIDATION_ERROR, NOT_FOUND, INTERNAL_ERROR
                "message": str,
                "retryable": bool
            }
        }
    """
    try:
        request = UpdateApplicationRequest.model_validate(args)

        with (store or get_store()).session() as session:
            application = session.get(request.id)
            if application is None:
                raise create_not_found_error(request.id)

            status_result, event_result = apply_update(application, request)

            session.save(application)
            session.commit()

        logger.info(
            f"Updated application {application.id}: "
            f"status_items={status_result.to_dict()} "
            f"application_events={event_result.to_dict()}"
        )
        return UpdateApplicationResponse(
            id=application.id,
            status_items=status_result.to_dict(),
            application_events=event_result.to_dict(),
        ).model_dump(mode="json")

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        logger.exception("update_application failed")
        return create_internal_error(message=str(e), original_error=e).to_dict()
