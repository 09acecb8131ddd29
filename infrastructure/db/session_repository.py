"""
Supabase implementation of SessionRepository.

Sessions are stored one row per session; the block tree is a JSON column.
The client is injected via constructor for testability.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from supabase import Client

from application.exceptions import RepositoryError
from domain.converters import db_row_to_session, session_to_db_row
from domain.models import Session

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "training_sessions"


def _log_permission_hint(error: Exception) -> None:
    error_msg = str(error)
    if "PGRST" in error_msg or "permission" in error_msg.lower() or "row-level security" in error_msg.lower():
        logger.error("RLS/Permissions error: Consider using SUPABASE_SERVICE_ROLE_KEY instead of SUPABASE_ANON_KEY for backend API")


class SupabaseSessionRepository:
    """
    Supabase implementation of SessionRepository protocol.

    Backend failures are logged and re-raised as RepositoryError.
    """

    def __init__(self, client: Client, table: str = DEFAULT_TABLE):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
            table: Name of the sessions table
        """
        self._client = client
        self._table = table

    def create(self, session: Session) -> str:
        """Insert a new session row and return its id."""
        data = session_to_db_row(session)
        data.pop("id", None)
        now = datetime.now(timezone.utc).isoformat()
        data["created_at"] = now
        data["updated_at"] = now

        try:
            result = self._client.table(self._table).insert(data).execute()
        except Exception as e:
            logger.error(f"Failed to create session '{session.title}': {e}")
            _log_permission_hint(e)
            raise RepositoryError(f"Failed to create session: {e}") from e

        if not result.data:
            raise RepositoryError("Session insert returned no row")

        session_id = str(result.data[0]["id"])
        logger.info(f"Session created: {session_id}")
        return session_id

    def update(self, session_id: str, session: Session) -> None:
        """Overwrite the row of ``session_id``."""
        data = session_to_db_row(session)
        data.pop("id", None)
        data["updated_at"] = datetime.now(timezone.utc).isoformat()

        try:
            result = self._client.table(self._table).update(data).eq("id", session_id).execute()
        except Exception as e:
            logger.error(f"Failed to update session {session_id}: {e}")
            _log_permission_hint(e)
            raise RepositoryError(f"Failed to update session: {e}") from e

        if not result.data:
            raise RepositoryError(f"Session {session_id} not found for update")
        logger.info(f"Session updated: {session_id}")

    def get(self, session_id: str) -> Optional[Session]:
        """Get a single session by id."""
        try:
            result = self._client.table(self._table).select("*").eq("id", session_id).limit(1).execute()
        except Exception as e:
            logger.error(f"Failed to get session {session_id}: {e}")
            raise RepositoryError(f"Failed to get session: {e}") from e

        if not result.data:
            return None
        try:
            return db_row_to_session(result.data[0])
        except ValueError as e:
            logger.error(f"Unreadable session row {session_id}: {e}")
            raise RepositoryError(f"Unreadable session row {session_id}: {e}") from e

    def get_all(self) -> List[Session]:
        """Get all sessions, most recently updated first."""
        try:
            result = self._client.table(self._table).select("*").order("updated_at", desc=True).execute()
        except Exception as e:
            logger.error(f"Failed to list sessions: {e}")
            raise RepositoryError(f"Failed to list sessions: {e}") from e

        sessions: List[Session] = []
        for row in result.data or []:
            try:
                sessions.append(db_row_to_session(row))
            except ValueError as e:
                # One corrupt row must not hide the others.
                logger.error(f"Skipping unreadable session row {row.get('id')}: {e}")
        return sessions

    def delete(self, session_id: str) -> bool:
        """Delete a session; False if it did not exist."""
        try:
            result = self._client.table(self._table).delete().eq("id", session_id).execute()
        except Exception as e:
            logger.error(f"Failed to delete session {session_id}: {e}")
            raise RepositoryError(f"Failed to delete session: {e}") from e

        deleted = bool(result.data)
        if deleted:
            logger.info(f"Session deleted: {session_id}")
        return deleted
