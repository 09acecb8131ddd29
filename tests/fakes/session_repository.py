"""
Fake Session Repository for testing.

This module provides an in-memory implementation of SessionRepository
for fast, isolated testing without database dependencies.
"""
from typing import Dict, List, Optional
from datetime import datetime, timezone
import uuid

from application.exceptions import RepositoryError
from domain.models import Session


class FakeSessionRepository:
    """
    In-memory fake implementation of SessionRepository for testing.

    Stores sessions in a dict keyed by session ID. Set ``fail_writes`` or
    ``fail_reads`` to simulate an unavailable backend.

    Usage:
        repo = FakeSessionRepository()
        repo.seed([Session(id="s1", title="Leg Day")])
        session_id = repo.create(Session(title="Push"))
    """

    def __init__(self):
        """Initialize with empty storage."""
        self._sessions: Dict[str, Session] = {}
        self.fail_writes = False
        self.fail_reads = False
        self.write_count = 0

    def reset(self) -> None:
        """Clear all stored sessions and failure flags."""
        self._sessions.clear()
        self.fail_writes = False
        self.fail_reads = False
        self.write_count = 0

    def seed(self, sessions: List[Session]) -> None:
        """
        Seed the repository with test data.

        Sessions without an id get a generated one.
        """
        for session in sessions:
            session_id = session.id or str(uuid.uuid4())
            self._sessions[session_id] = session.with_id(session_id)

    def stored(self) -> List[Session]:
        """All stored sessions (test helper)."""
        return list(self._sessions.values())

    # =========================================================================
    # SessionRepository Protocol Methods
    # =========================================================================

    def create(self, session: Session) -> str:
        self._check_writes()
        session_id = str(uuid.uuid4())
        now = datetime.now(timezone.utc)
        self._sessions[session_id] = session.model_copy(
            update={"id": session_id, "created_at": now, "updated_at": now}
        )
        self.write_count += 1
        return session_id

    def update(self, session_id: str, session: Session) -> None:
        self._check_writes()
        existing = self._sessions.get(session_id)
        if existing is None:
            raise RepositoryError(f"Session {session_id} not found for update")
        self._sessions[session_id] = session.model_copy(
            update={
                "id": session_id,
                "created_at": existing.created_at,
                "updated_at": datetime.now(timezone.utc),
            }
        )
        self.write_count += 1

    def get(self, session_id: str) -> Optional[Session]:
        self._check_reads()
        return self._sessions.get(session_id)

    def get_all(self) -> List[Session]:
        self._check_reads()
        return sorted(
            self._sessions.values(),
            key=lambda s: s.updated_at or datetime.min.replace(tzinfo=timezone.utc),
            reverse=True,
        )

    def delete(self, session_id: str) -> bool:
        self._check_writes()
        return self._sessions.pop(session_id, None) is not None

    def _check_writes(self) -> None:
        if self.fail_writes:
            raise RepositoryError("Simulated write failure")

    def _check_reads(self) -> None:
        if self.fail_reads:
            raise RepositoryError("Simulated read failure")
