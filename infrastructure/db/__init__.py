"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository interfaces
defined in application.ports. These implementations can be injected into services
and routers for clean separation of concerns and testability.

Usage:
    from supabase import create_client
    from infrastructure.db import SupabaseSessionRepository

    client = create_client(url, key)
    session_repo = SupabaseSessionRepository(client)
"""

from infrastructure.db.exercise_library_repository import SupabaseExerciseLibraryRepository
from infrastructure.db.module_repository import SupabaseModuleRepository
from infrastructure.db.session_repository import SupabaseSessionRepository

__all__ = [
    "SupabaseSessionRepository",
    "SupabaseModuleRepository",
    "SupabaseExerciseLibraryRepository",
]
