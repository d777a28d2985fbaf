"""
Funnel aggregation over application status histories.

Classifies every application into stage-to-stage edges of the hiring funnel
and returns aggregate counts, ready to be rendered as a flow diagram.
"""

from typing import Any, Dict, Iterable, List, Optional, Set

from models.status import ApplicationStatus, coerce_status


STAGE_APPLIED = "Applied"
STAGE_NO_RESPONSE = "No Response"
STAGE_RESPONDED = "Responded"
STAGE_REJECTED = "Rejected"
STAGE_INTERVIEW = "Interview"
STAGE_OFFER = "Offer"
STAGE_NO_OFFER = "No Offer"

# Initialization order doubles as the tie-break order of the report
FUNNEL_EDGES = (
    (STAGE_APPLIED, STAGE_NO_RESPONSE),
    (STAGE_APPLIED, STAGE_RESPONDED),
    (STAGE_RESPONDED, STAGE_REJECTED),
    (STAGE_RESPONDED, STAGE_INTERVIEW),
    (STAGE_INTERVIEW, STAGE_OFFER),
    (STAGE_INTERVIEW, STAGE_NO_OFFER),
)

RESPONDED_STATUSES = frozenset(
    {ApplicationStatus.REJECTED, ApplicationStatus.SCREEN, ApplicationStatus.INTERVIEW}
)
INTERVIEW_STATUSES = frozenset({ApplicationStatus.SCREEN, ApplicationStatus.INTERVIEW})


class FunnelEdge:
    """A directed edge between two funnel stages with an aggregate count."""

    def __init__(self, from_stage: str, to_stage: str, count: int = 0):
        self.from_stage = from_stage
        self.to_stage = to_stage
        self.count = count

    @property
    def key(self) -> str:
        return f"{self.from_stage}->{self.to_stage}"

    def increment(self) -> None:
        self.count += 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert edge to dictionary format."""
        return {"from": self.from_stage, "to": self.to_stage, "count": self.count}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FunnelEdge):
            return NotImplemented
        return (self.from_stage, self.to_stage, self.count) == (
            other.from_stage,
            other.to_stage,
            other.count,
        )

    def __repr__(self) -> str:
        return f"FunnelEdge({self.key!r}, count={self.count})"


def initialize_edges() -> List[FunnelEdge]:
    """Create the six funnel edges in canonical order, all at zero."""
    return [FunnelEdge(from_stage, to_stage) for from_stage, to_stage in FUNNEL_EDGES]


def _history_of(application: Any) -> List[Any]:
    """Status history of an application object or a bare list of events."""
    if hasattr(application, "status_items"):
        return list(application.status_items or [])
    return list(application or [])


def _status_of(event: Any) -> Any:
    return getattr(event, "status", event)


def classify_application(history: List[Any]) -> List[str]:
    """
    Return the keys of the edges one application contributes to.

    Rules (each edge counted at most once per application):
    - No events: contributes nothing
    - Exactly one event: Applied->No Response only, whatever the status is
    - Otherwise, over every status ever recorded:
      a. Rejected/Screen/Interview present -> Applied->Responded
      b. Rejected present -> Responded->Rejected, and stop
      c. Screen/Interview present -> Responded->Interview
      d. Offer present -> Interview->Offer, else Interview->No Offer

    Step d fires for every non-rejected multi-event history, including one
    that never reached Screen or Interview (e.g. Applied then Withdrawn).

    Args:
        history: Status events (objects with a ``status`` attribute) or bare statuses

    Returns:
        Edge keys in the form "<from>-><to>"
    """
    if not history:
        return []

    if len(history) == 1:
        return [f"{STAGE_APPLIED}->{STAGE_NO_RESPONSE}"]

    recorded: Set[ApplicationStatus] = set()
    for event in history:
        status = coerce_status(_status_of(event))
        if status is not None:
            recorded.add(status)

    keys = []
    if not recorded.isdisjoint(RESPONDED_STATUSES):
        keys.append(f"{STAGE_APPLIED}->{STAGE_RESPONDED}")

    if ApplicationStatus.REJECTED in recorded:
        keys.append(f"{STAGE_RESPONDED}->{STAGE_REJECTED}")
        return keys

    if not recorded.isdisjoint(INTERVIEW_STATUSES):
        keys.append(f"{STAGE_RESPONDED}->{STAGE_INTERVIEW}")

    if ApplicationStatus.OFFER in recorded:
        keys.append(f"{STAGE_INTERVIEW}->{STAGE_OFFER}")
    else:
        keys.append(f"{STAGE_INTERVIEW}->{STAGE_NO_OFFER}")

    return keys


def generate_funnel(applications: Optional[Iterable[Any]] = None) -> List[FunnelEdge]:
    """
    Aggregate a batch of applications into funnel edge counts.

    Args:
        applications: Applications exposing ``status_items``, or bare status
            histories. None is treated as an empty batch.

    Returns:
        The six funnel edges sorted by count descending; equal counts keep
        the canonical edge order.

    Examples:
        >>> edges = generate_funnel([])
        >>> len(edges), sum(edge.count for edge in edges)
        (6, 0)
    """
    edges = initialize_edges()
    by_key = {edge.key: edge for edge in edges}

    for application in applications or []:
        for key in classify_application(_history_of(application)):
            by_key[key].increment()

    # sorted() is stable, also with reverse=True
    return sorted(edges, key=lambda edge: edge.count, reverse=True)
