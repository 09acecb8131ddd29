"""
Session read and delete use cases.

LoadSession hydrates the stored session before handing it to the editor,
so legacy records come back with translated names, instructions and media
filled in where the catalog knows them.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from application.exceptions import RepositoryError
from application.ports import SessionRepository
from backend.services.hydration_service import HydrationService
from domain.models import Session

logger = logging.getLogger(__name__)


@dataclass
class LoadSessionResult:
    """Result of the LoadSession use case execution."""

    success: bool
    session: Optional[Session] = None
    not_found: bool = False
    error: Optional[str] = None
    hydration_failures: List[str] = field(default_factory=list)
    hydrated_items: int = 0


class LoadSessionUseCase:
    """
    Use case for loading a session ready for editing.

    Usage:
        >>> use_case = LoadSessionUseCase(session_repo=repo, hydration_service=hydration)
        >>> result = await use_case.execute("session-123")
    """

    def __init__(self, session_repo: SessionRepository, hydration_service: HydrationService) -> None:
        self._session_repo = session_repo
        self._hydration_service = hydration_service

    async def execute(self, session_id: str, *, hydrate: bool = True) -> LoadSessionResult:
        """
        Load and hydrate a session.

        Hydration failures do not fail the load; they are returned in
        ``hydration_failures`` next to the (partially) hydrated session.
        """
        try:
            session = self._session_repo.get(session_id)
        except RepositoryError as e:
            logger.error(f"Failed to load session {session_id}: {e}")
            return LoadSessionResult(success=False, error=str(e))

        if session is None:
            return LoadSessionResult(success=False, not_found=True, error=f"Session {session_id} not found")

        if not hydrate:
            return LoadSessionResult(success=True, session=session)

        report = await self._hydration_service.hydrate(session)
        return LoadSessionResult(
            success=True,
            session=report.session,
            hydration_failures=report.failures,
            hydrated_items=report.hydrated_items,
        )


class ListSessionsUseCase:
    """Use case for listing stored sessions (not hydrated)."""

    def __init__(self, session_repo: SessionRepository) -> None:
        self._session_repo = session_repo

    def execute(self) -> List[Session]:
        """
        Raises:
            RepositoryError: If sessions cannot be read
        """
        return self._session_repo.get_all()


class DeleteSessionUseCase:
    """Use case for deleting a stored session."""

    def __init__(self, session_repo: SessionRepository) -> None:
        self._session_repo = session_repo

    def execute(self, session_id: str) -> bool:
        """
        Returns:
            True if deleted, False if the session did not exist

        Raises:
            RepositoryError: If the backend call fails
        """
        deleted = self._session_repo.delete(session_id)
        if deleted:
            logger.info(f"Deleted session {session_id}")
        return deleted
