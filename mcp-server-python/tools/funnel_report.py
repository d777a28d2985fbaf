"""
Main MCP tool handler for funnel_report.

Loads every registered application and aggregates their status histories
into the six hiring-funnel edges.
"""

from typing import Any, Dict, Optional

from db.application_store import ApplicationStore, get_store
from models.errors import create_internal_error
from schemas.funnel_report import FunnelEdgeRecord, FunnelReportResponse
from utils.funnel_report import generate_funnel


def funnel_report(
    args: Optional[Dict[str, Any]] = None, store: Optional[ApplicationStore] = None
) -> Dict[str, Any]:
    """
    Generate the funnel report over all registered applications.

    Args:
        args: Unused; accepted for a uniform tool signature
        store: Optional store override (default: global store)

    Returns:
        Dictionary with structure:
        {
            "edges": [                  # Always six, sorted by count descending
                {"from": str, "to": str, "count": int},
                ...
            ],
            "application_count": int
        }
    """
    try:
        with (store or get_store()).session() as session:
            applications = session.list_all()

        edges = generate_funnel(applications)

        return FunnelReportResponse(
            edges=[FunnelEdgeRecord(**edge.to_dict()) for edge in edges],
            application_count=len(applications),
        ).model_dump(mode="json", by_alias=True)

    except Exception as e:
        return create_internal_error(message=str(e), original_error=e).to_dict()
