"""
Status transition engine for application status history.

This module answers "what can be recorded next" for one application:
- Empty history starts the workflow at Applied
- The furthest-progressed stage marker present decides the next statuses
- A stage whose successors are already recorded is settled and yields nothing
- Terminal-only or unrecognized histories yield no transitions
"""

from typing import Iterable, List, Optional, Set, Tuple

from models.status import ApplicationStatus, coerce_status


INITIAL_STATUSES: Tuple[ApplicationStatus, ...] = (ApplicationStatus.APPLIED,)

# (stage marker, statuses reachable from it), furthest stage first
WORKFLOW_RULES: Tuple[Tuple[ApplicationStatus, Tuple[ApplicationStatus, ...]], ...] = (
    (
        ApplicationStatus.INTERVIEW,
        (ApplicationStatus.OFFER, ApplicationStatus.NO_OFFER, ApplicationStatus.WITHDRAWN),
    ),
    (ApplicationStatus.SCREEN, (ApplicationStatus.INTERVIEW,)),
    (ApplicationStatus.APPLIED, (ApplicationStatus.REJECTED, ApplicationStatus.SCREEN)),
)


def _recorded_statuses(statuses: Optional[Iterable]) -> Set[ApplicationStatus]:
    """Collapse raw statuses into the set of recognized vocabulary members."""
    recorded = set()
    for value in statuses or ():
        status = coerce_status(value)
        if status is not None:
            recorded.add(status)
    return recorded


def available_statuses(statuses: Optional[Iterable] = None) -> List[ApplicationStatus]:
    """
    Return the statuses that may be added next to an application's history.

    Rules are evaluated in order and the first match wins:
    1. Interview recorded, no Offer/NoOffer/Withdrawn yet -> Offer, NoOffer, Withdrawn
    2. Screen recorded, no Interview yet -> Interview
    3. Applied recorded, no Rejected/Screen yet -> Rejected, Screen
    4. Nothing recorded -> Applied
    5. Anything else (terminal or unreachable state) -> no transitions

    Only the set of statuses ever reached is consulted; timestamps and
    duplicates do not matter. Values that are not part of the vocabulary are
    ignored, and an input made only of such values is treated as a
    terminal state rather than an empty history.

    Args:
        statuses: Statuses (enum members or their string values) already
            recorded for one application. None is treated as empty.

    Returns:
        List of allowed next statuses, possibly empty, never None

    Examples:
        >>> available_statuses([])
        [<ApplicationStatus.APPLIED: 'Applied'>]
        >>> [s.value for s in available_statuses(["Applied", "Screen"])]
        ['Interview']
        >>> available_statuses(["Interview", "Offer"])
        []
    """
    raw = list(statuses or ())
    if not raw:
        return list(INITIAL_STATUSES)

    recorded = _recorded_statuses(raw)

    for marker, successors in WORKFLOW_RULES:
        if marker in recorded and recorded.isdisjoint(successors):
            return list(successors)

    return []
