"""
Exercise catalog interfaces (Ports).

Two sources feed the reference catalog used by hydration:
- ExerciseLibraryRepository: the user's own exercise library (read-only here)
- ExerciseCatalogClient: the bulk third-party catalog, fetched over HTTP
"""
from typing import List, Protocol

from domain.models import ExerciseIdentity


class ExerciseLibraryRepository(Protocol):
    """Read access to the user's exercise library."""

    def get_all(self) -> List[ExerciseIdentity]:
        """
        Get every exercise of the library.

        Raises:
            RepositoryError: If the library cannot be read
        """
        ...


class ExerciseCatalogClient(Protocol):
    """Access to the bulk external exercise catalog."""

    async def fetch_full_catalog(self) -> List[ExerciseIdentity]:
        """
        Download and flatten the whole catalog.

        Raises:
            CatalogClientError: If the catalog cannot be fetched
        """
        ...
