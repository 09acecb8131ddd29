"""
Fake Repository and Collaborator Implementations for Testing.

This package provides in-memory fake implementations of the application
ports for fast, isolated testing. No database or network required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Failure switches to exercise error paths

Usage:
    from tests.fakes import FakeSessionRepository, create_session_repo

    repo = FakeSessionRepository()
    repo.seed([Session(id="s1", title="Leg Day")])

    # Factory function with pre-populated data
    repo = create_session_repo(num_sessions=3)
"""
from domain.models import Block, ExerciseIdentity, ExerciseItem, Session

from tests.fakes.session_repository import FakeSessionRepository
from tests.fakes.module_repository import FakeModuleRepository
from tests.fakes.exercise_catalog import FakeExerciseCatalogClient, FakeExerciseLibraryRepository
from tests.fakes.translation_service import FakeMediaUploader, FakeTranslationService


# =============================================================================
# Factory Functions
# =============================================================================


def create_session_repo(*, num_sessions: int = 0) -> FakeSessionRepository:
    """
    Create a FakeSessionRepository with optional pre-populated sessions.

    Args:
        num_sessions: Number of sample sessions to create

    Returns:
        Pre-populated FakeSessionRepository
    """
    repo = FakeSessionRepository()
    repo.seed(
        [
            Session(
                id=f"session-{i + 1}",
                title=f"Test Session {i + 1}",
                blocks=[Block(name="Block 1", items=[ExerciseItem(name="Back Squat")])],
            )
            for i in range(num_sessions)
        ]
    )
    return repo


def sample_catalog() -> list:
    """A small bulk catalog with English names and instructions."""
    return [
        ExerciseIdentity(
            id="Barbell_Squat",
            name="Barbell Squat",
            instructions=["Stand with the bar on your back.", "Squat down and stand up."],
            media_url="https://img.test/Barbell_Squat/0.jpg",
            pattern="Squat",
            quality="F",
        ),
        ExerciseIdentity(
            id="Pushups",
            name="Pushups",
            instructions=["Lie prone.", "Push up."],
            media_url="https://img.test/Pushups/0.jpg",
            pattern="Push",
            quality="F",
        ),
    ]


__all__ = [
    "FakeSessionRepository",
    "FakeModuleRepository",
    "FakeExerciseLibraryRepository",
    "FakeExerciseCatalogClient",
    "FakeTranslationService",
    "FakeMediaUploader",
    "create_session_repo",
    "sample_catalog",
]
