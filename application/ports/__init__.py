"""
Repository and collaborator interfaces (Ports) for the session composer.

This package defines abstract interfaces that decouple domain logic from
infrastructure (database, external services). Implementations are provided
in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the domain needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import SessionRepository

    class SessionService:
        def __init__(self, session_repo: SessionRepository):
            self.session_repo = session_repo
"""

# Session persistence
from application.ports.session_repository import SessionRepository

# Module library
from application.ports.module_repository import ModuleRepository

# Exercise reference data
from application.ports.exercise_catalog import (
    ExerciseCatalogClient,
    ExerciseLibraryRepository,
)

# External collaborators
from application.ports.translation_service import TranslationService
from application.ports.media_uploader import MediaUploader

__all__ = [
    "SessionRepository",
    "ModuleRepository",
    "ExerciseLibraryRepository",
    "ExerciseCatalogClient",
    "TranslationService",
    "MediaUploader",
]
