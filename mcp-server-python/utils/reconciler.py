"""
Identity-based reconciliation of an aggregate's child collections.

One routine keeps any stored child collection (status history, notes) in
sync with a caller-supplied desired list:
- Stored entries whose identity is missing from the desired list are removed
- Desired entries carrying a known identity overwrite the stored entry in place
- Desired entries without identity are appended as new entries
- Desired entries carrying an unknown (stale) identity are ignored
"""

import logging
from typing import Any, Callable, Dict, Hashable, List, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
D = TypeVar("D")


class ReconcileResult:
    """Summary of the changes applied by one reconcile call."""

    def __init__(self, added: int = 0, updated: int = 0, removed: int = 0, ignored: int = 0):
        self.added = added
        self.updated = updated
        self.removed = removed
        self.ignored = ignored

    @property
    def changed(self) -> bool:
        return bool(self.added or self.updated or self.removed)

    def to_dict(self) -> Dict[str, int]:
        """Convert result to dictionary format."""
        return {
            "added": self.added,
            "updated": self.updated,
            "removed": self.removed,
            "ignored": self.ignored,
        }


def _identity(entry: Any) -> Optional[Hashable]:
    return getattr(entry, "id", None)


def reconcile(
    current: List[T],
    desired: Optional[Sequence[D]],
    *,
    apply: Callable[[T, D], bool],
    create: Callable[[D], T],
    current_key: Callable[[T], Optional[Hashable]] = _identity,
    desired_key: Callable[[D], Optional[Hashable]] = _identity,
) -> ReconcileResult:
    """
    Mutate ``current`` in place so it matches ``desired`` by identity.

    Steps:
    1. Remove every stored entry whose identity is not carried by any desired
       entry. Desired entries without identity protect nothing.
    2. Walk ``desired`` in order: entries with an identity update the matching
       stored entry through ``apply``; entries without one are appended via
       ``create``. An identity that matches nothing is skipped without error.

    Running the same fully-identified desired list twice leaves ``current``
    unchanged on the second call.

    Args:
        current: Stored child collection, mutated in place
        desired: Desired entries; None is treated as an empty list
        apply: Copies a desired entry's fields onto a stored entry and
            returns True if any field changed
        create: Builds a new stored entry from an identity-less desired entry
        current_key: Identity accessor for stored entries (default: ``.id``)
        desired_key: Identity accessor for desired entries (default: ``.id``)

    Returns:
        ReconcileResult with added/updated/removed/ignored counts
    """
    desired = list(desired or [])
    result = ReconcileResult()

    kept_ids = {desired_key(entry) for entry in desired}
    kept_ids.discard(None)

    survivors = [entry for entry in current if current_key(entry) in kept_ids]
    result.removed = len(current) - len(survivors)
    current[:] = survivors

    by_id = {current_key(entry): entry for entry in current}

    for entry in desired:
        entry_id = desired_key(entry)
        if entry_id is None:
            current.append(create(entry))
            result.added += 1
            continue

        existing = by_id.get(entry_id)
        if existing is None:
            logger.debug("Ignoring desired entry with unknown id %s", entry_id)
            result.ignored += 1
            continue

        if apply(existing, entry):
            result.updated += 1

    logger.debug(
        "Reconciled collection: added=%d updated=%d removed=%d ignored=%d",
        result.added,
        result.updated,
        result.removed,
        result.ignored,
    )
    return result


def copy_fields(target: Any, source: Any, fields: Sequence[str]) -> bool:
    """
    Copy named attributes from ``source`` onto ``target``.

    Returns:
        True if at least one attribute value changed
    """
    changed = False
    for field in fields:
        value = getattr(source, field)
        if getattr(target, field) != value:
            setattr(target, field, value)
            changed = True
    return changed
