"""
In-memory application registry for the HireTrack MCP tools.

Provides session-scoped access to registered applications with commit and
rollback semantics. Sessions work on deep copies, so changes become visible
to other sessions only after ``commit()``.
"""

import logging
import threading
from typing import Dict, List, Optional
from uuid import UUID

from models.application import JobApplication

logger = logging.getLogger(__name__)


class ApplicationStore:
    """
    Process-wide registry of JobApplication records keyed by id.

    Usage:
        with store.session() as session:
            application = session.get(application_id)
            application.company = "Acme"
            session.save(application)
            session.commit()
    """

    def __init__(self, applications: Optional[List[JobApplication]] = None):
        self._records: Dict[UUID, JobApplication] = {}
        self._lock = threading.Lock()
        for application in applications or []:
            self._records[application.id] = application.model_copy(deep=True)

    def session(self) -> "ApplicationSession":
        """Open a new unit of work against this store."""
        return ApplicationSession(self)

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def _snapshot(self, application_id: UUID) -> Optional[JobApplication]:
        with self._lock:
            record = self._records.get(application_id)
            return record.model_copy(deep=True) if record is not None else None

    def _snapshot_all(self) -> List[JobApplication]:
        with self._lock:
            return [record.model_copy(deep=True) for record in self._records.values()]

    def _apply(self, upserts: Dict[UUID, JobApplication], deletes: List[UUID]) -> None:
        with self._lock:
            for application_id in deletes:
                self._records.pop(application_id, None)
            for application_id, application in upserts.items():
                self._records[application_id] = application.model_copy(deep=True)


class ApplicationSession:
    """
    Context manager for one unit of work on the application store.

    Pending upserts and deletes are discarded on exception or when the
    session is closed without ``commit()``.
    """

    def __init__(self, store: ApplicationStore):
        self.store = store
        self._upserts: Dict[UUID, JobApplication] = {}
        self._deletes: List[UUID] = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """
        Discard pending changes that were not committed.

        Returns:
            False to propagate exceptions
        """
        if self.has_pending_changes:
            if exc_type is not None:
                logger.debug("Rolling back session after %s", exc_type.__name__)
            self.rollback()
        return False

    @property
    def has_pending_changes(self) -> bool:
        return bool(self._upserts or self._deletes)

    def get(self, application_id: UUID) -> Optional[JobApplication]:
        """
        Fetch a working copy of one application.

        Returns:
            The pending version if this session already touched it, None if
            unknown or deleted in this session
        """
        if application_id in self._deletes:
            return None
        if application_id in self._upserts:
            return self._upserts[application_id]
        return self.store._snapshot(application_id)

    def list_all(self) -> List[JobApplication]:
        """Working copies of every application, pending changes included."""
        records = {
            application.id: application
            for application in self.store._snapshot_all()
            if application.id not in self._deletes
        }
        records.update(self._upserts)
        return list(records.values())

    def add(self, application: JobApplication) -> None:
        self.save(application)

    def save(self, application: JobApplication) -> None:
        """Stage an application (new or modified) for the next commit."""
        if application.id in self._deletes:
            self._deletes.remove(application.id)
        self._upserts[application.id] = application

    def delete(self, application_id: UUID) -> bool:
        """
        Stage removal of one application.

        Returns:
            False if the application does not exist
        """
        if self.get(application_id) is None:
            return False
        self._upserts.pop(application_id, None)
        self._deletes.append(application_id)
        return True

    def commit(self) -> None:
        """Publish pending changes to the store."""
        if not self.has_pending_changes:
            return
        self.store._apply(self._upserts, self._deletes)
        logger.debug(
            "Committed %d upsert(s) and %d delete(s)", len(self._upserts), len(self._deletes)
        )
        self._upserts = {}
        self._deletes = []

    def rollback(self) -> None:
        """Discard pending changes."""
        self._upserts = {}
        self._deletes = []


_store = ApplicationStore()


def get_store() -> ApplicationStore:
    """
    Get the global application store.

    Returns:
        Global ApplicationStore instance
    """
    return _store


def reset_store(applications: Optional[List[JobApplication]] = None) -> ApplicationStore:
    """Replace the global store, optionally seeded with applications."""
    global _store
    _store = ApplicationStore(applications)
    return _store
