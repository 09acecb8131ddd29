"""
Infrastructure Layer for the session composer.

This package contains concrete implementations of the application ports:
- db/: Supabase database implementations
- external/: HTTP clients for the exercise catalog and translation
"""

from infrastructure.db import (
    SupabaseExerciseLibraryRepository,
    SupabaseModuleRepository,
    SupabaseSessionRepository,
)
from infrastructure.external import ExerciseCatalogHttpClient, GoogleTranslationClient

__all__ = [
    "SupabaseSessionRepository",
    "SupabaseModuleRepository",
    "SupabaseExerciseLibraryRepository",
    "ExerciseCatalogHttpClient",
    "GoogleTranslationClient",
]
