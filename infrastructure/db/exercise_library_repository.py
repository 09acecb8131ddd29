"""
Supabase implementation of ExerciseLibraryRepository.

Read-only access to the user's exercise library.
"""
import logging
from typing import List

from supabase import Client

from application.exceptions import RepositoryError
from domain.converters import db_row_to_exercise_identity
from domain.models import ExerciseIdentity

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "exercises"


class SupabaseExerciseLibraryRepository:
    """Supabase implementation of ExerciseLibraryRepository protocol."""

    def __init__(self, client: Client, table: str = DEFAULT_TABLE):
        self._client = client
        self._table = table

    def get_all(self) -> List[ExerciseIdentity]:
        try:
            result = self._client.table(self._table).select("*").execute()
        except Exception as e:
            logger.error(f"Failed to load exercise library: {e}")
            raise RepositoryError(f"Failed to load exercise library: {e}") from e

        exercises: List[ExerciseIdentity] = []
        for row in result.data or []:
            identity = db_row_to_exercise_identity(row)
            if identity is not None:
                exercises.append(identity)
        logger.debug(f"Loaded {len(exercises)} library exercises")
        return exercises
