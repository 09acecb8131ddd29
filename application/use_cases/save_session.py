"""
SaveSession Use Case.

Validates a session, computes its summary metadata and persists it,
handling both create (new session) and update (existing session).
"""

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

from application.exceptions import RepositoryError
from application.ports import SessionRepository
from domain.models import Block, Session, SessionMetadata

logger = logging.getLogger(__name__)

# Minutes assumed for a block without a time cap or EMOM length.
DEFAULT_BLOCK_MINUTES = 5


class SessionValidationError(Exception):
    """Raised when session validation fails."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


@dataclass
class SaveSessionResult:
    """Result of the SaveSession use case execution."""

    success: bool
    session: Optional[Session] = None
    session_id: Optional[str] = None
    is_update: bool = False
    error: Optional[str] = None
    validation_errors: List[str] = field(default_factory=list)

    @property
    def is_validation_failure(self) -> bool:
        return bool(self.validation_errors)


def block_minutes(block: Block) -> float:
    """Estimated minutes of a block: time cap, else EMOM minutes, else the default."""
    if block.params and block.params.time_cap_seconds:
        return block.params.time_cap_seconds / 60
    if block.params and block.params.emom_minutes:
        return block.params.emom_minutes
    return DEFAULT_BLOCK_MINUTES


def compute_metadata(session: Session) -> SessionMetadata:
    """
    Summary figures for a session.

    Examples:
        >>> from domain.models import Block, BlockParams
        >>> session = Session(blocks=[Block(params=BlockParams(time_cap_seconds=270)), Block()])
        >>> compute_metadata(session).duration_minutes
        10
    """
    return SessionMetadata(
        duration_minutes=math.ceil(sum(block_minutes(block) for block in session.blocks)),
        block_count=len(session.blocks),
        total_exercises=session.exercise_count,
    )


class SaveSessionUseCase:
    """
    Use case for saving sessions with validation.

    Orchestrates the following workflow:
    1. Validate title and exercise count
    2. Compute duration / block count / exercise count metadata
    3. Create or update via the repository
    4. Return the saved session with its id

    The input session is never modified: on failure the caller still holds
    exactly the session it tried to save.

    Usage:
        >>> use_case = SaveSessionUseCase(session_repo=session_repo)
        >>> result = use_case.execute(session)
        >>> if result.success:
        ...     print(f"Saved session: {result.session_id}")
    """

    def __init__(self, session_repo: SessionRepository) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            session_repo: Repository for persisting sessions
        """
        self._session_repo = session_repo

    def execute(self, session: Session) -> SaveSessionResult:
        """
        Execute the save session workflow.

        Args:
            session: Session to save (``id`` set means update)

        Returns:
            SaveSessionResult with success status and saved session
        """
        try:
            self._validate(session)
        except SessionValidationError as e:
            logger.warning(f"Session validation failed: {e.errors}")
            return SaveSessionResult(
                success=False,
                error=e.message,
                validation_errors=e.errors,
            )

        is_update = session.id is not None
        to_save = session.model_copy(update={"metadata": compute_metadata(session)})
        operation = "update" if is_update else "create"
        logger.info(f"Saving session ({operation}): {session.title}")

        try:
            if is_update:
                self._session_repo.update(session.id, to_save)
                session_id = session.id
            else:
                session_id = self._session_repo.create(to_save)
        except RepositoryError as e:
            logger.error(f"Failed to save session '{session.title}': {e}")
            return SaveSessionResult(
                success=False,
                error=str(e),
                is_update=is_update,
            )

        logger.info(f"Session saved successfully: {session_id}")
        return SaveSessionResult(
            success=True,
            session=to_save.with_id(session_id),
            session_id=session_id,
            is_update=is_update,
        )

    def _validate(self, session: Session) -> None:
        """
        Validate session business rules.

        Pydantic handles structural validation (types, enums). This method
        handles the rules checked before saving.

        Raises:
            SessionValidationError: If any rule is broken
        """
        errors: List[str] = []

        if not session.title or not session.title.strip():
            errors.append("Session title is required")

        if session.exercise_count == 0:
            errors.append("Session must contain at least one exercise")

        if errors:
            raise SessionValidationError("Session validation failed", errors)
