"""
Session Repository Interface (Port).

This module defines the abstract interface for session persistence.
Implementations may use Supabase, in-memory storage, or other backends.
"""
from typing import List, Optional, Protocol

from domain.models import Session


class SessionRepository(Protocol):
    """
    Abstract interface for session persistence operations.

    Implementations raise ``application.exceptions.RepositoryError`` when
    the backend fails, so callers can tell "not found" (None) apart from
    "storage unavailable".
    """

    def create(self, session: Session) -> str:
        """
        Persist a new session.

        Args:
            session: Session to store (its ``id`` is ignored)

        Returns:
            The generated session id
        """
        ...

    def update(self, session_id: str, session: Session) -> None:
        """
        Overwrite an existing session.

        Args:
            session_id: Id of the stored session
            session: New content
        """
        ...

    def get(self, session_id: str) -> Optional[Session]:
        """
        Get a single session by id.

        Returns:
            Session or None if not found
        """
        ...

    def get_all(self) -> List[Session]:
        """Get all sessions, most recently updated first."""
        ...

    def delete(self, session_id: str) -> bool:
        """
        Delete a session.

        Returns:
            True if a session was deleted, False if it did not exist
        """
        ...
