"""
Process-wide exercise reference catalog.

The catalog merges the user's exercise library with the bulk external
catalog. Downloading the bulk catalog is slow, so it happens at most once
per process: the first ``get()`` starts the fetch and every concurrent
caller awaits that same in-flight fetch. A successful result is kept for
the process lifetime and is never mutated afterwards. A failed fetch is
not cached, so a later load can try again.

The cache object is created once (see ``api.deps``) and injected into the
hydration service.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from application.exceptions import CatalogClientError, RepositoryError
from application.ports import ExerciseCatalogClient, ExerciseLibraryRepository
from domain.models import ExerciseIdentity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogSnapshot:
    """Read-only view of the merged catalog with lookup indexes."""

    exercises: List[ExerciseIdentity] = field(default_factory=list)
    by_id: Dict[str, ExerciseIdentity] = field(default_factory=dict)
    by_name: Dict[str, ExerciseIdentity] = field(default_factory=dict)
    available: bool = True
    errors: List[str] = field(default_factory=list)

    @classmethod
    def build(
        cls,
        exercises: List[ExerciseIdentity],
        available: bool = True,
        errors: Optional[List[str]] = None,
    ) -> "CatalogSnapshot":
        """Index ``exercises``; earlier entries win on id or name clashes."""
        by_id: Dict[str, ExerciseIdentity] = {}
        by_name: Dict[str, ExerciseIdentity] = {}
        for exercise in exercises:
            by_id.setdefault(exercise.id, exercise)
            for name in (exercise.name, exercise.translated_name):
                if name:
                    by_name.setdefault(name.strip().lower(), exercise)
        return cls(
            exercises=list(exercises),
            by_id=by_id,
            by_name=by_name,
            available=available,
            errors=list(errors or []),
        )

    def find(self, exercise_id: Optional[str], *names: Optional[str]) -> Optional[ExerciseIdentity]:
        """
        Look up by catalog id, else by case-insensitive exact name.

        Args:
            exercise_id: Catalog id of the item, if any.
            names: Candidate names (source and translated).
        """
        if exercise_id and exercise_id in self.by_id:
            return self.by_id[exercise_id]
        for name in names:
            if name:
                match = self.by_name.get(name.strip().lower())
                if match is not None:
                    return match
        return None

    def __len__(self) -> int:
        return len(self.exercises)


class CatalogCache:
    """
    Initialize-once holder of the merged exercise catalog.

    Usage:
        >>> cache = CatalogCache(library_repo=library_repo, catalog_client=client)
        >>> snapshot = await cache.get()
        >>> snapshot.find(None, "Goblet Squat")
    """

    def __init__(
        self,
        library_repo: Optional[ExerciseLibraryRepository],
        catalog_client: ExerciseCatalogClient,
    ) -> None:
        """
        Args:
            library_repo: User exercise library, or None when no database is configured
            catalog_client: Bulk catalog client
        """
        self._library_repo = library_repo
        self._catalog_client = catalog_client
        self._snapshot: Optional[CatalogSnapshot] = None
        self._inflight: Optional["asyncio.Future[CatalogSnapshot]"] = None
        self.fetch_count = 0
        self.last_error: Optional[str] = None

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    async def get(self) -> CatalogSnapshot:
        """
        Return the merged catalog, fetching it on first use.

        Never raises for collaborator failures: a snapshot with
        ``available=False`` and the error messages is returned instead.
        """
        if self._snapshot is not None:
            return self._snapshot

        # No await between the check and the assignment, so concurrent
        # callers in one event loop always share the same future.
        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._load())

        return await asyncio.shield(self._inflight)

    async def _load(self) -> CatalogSnapshot:
        try:
            errors: List[str] = []
            library = await self._load_library(errors)

            self.fetch_count += 1
            try:
                bulk = await self._catalog_client.fetch_full_catalog()
            except CatalogClientError as e:
                message = f"Exercise catalog unavailable: {e}"
                logger.warning(message)
                self.last_error = message
                errors.append(message)
                return CatalogSnapshot.build(library, available=False, errors=errors)

            snapshot = CatalogSnapshot.build(library + bulk, errors=errors)
            self._snapshot = snapshot
            self.last_error = None
            logger.info(
                "Exercise catalog loaded: %d library + %d bulk entries",
                len(library),
                len(bulk),
            )
            return snapshot
        finally:
            self._inflight = None

    async def _load_library(self, errors: List[str]) -> List[ExerciseIdentity]:
        if self._library_repo is None:
            return []
        try:
            return await asyncio.to_thread(self._library_repo.get_all)
        except RepositoryError as e:
            message = f"Exercise library unavailable: {e}"
            logger.warning(message)
            errors.append(message)
            return []


class TranslationMemo:
    """Process-wide memo of successful translations, keyed by source text."""

    def __init__(self, max_size: int = 5000) -> None:
        self._entries: Dict[str, str] = {}
        self._max_size = max_size

    def get(self, text: str) -> Optional[str]:
        return self._entries.get(text)

    def put(self, text: str, translated: str) -> None:
        if len(self._entries) >= self._max_size:
            # Drop the oldest entry (dicts keep insertion order).
            self._entries.pop(next(iter(self._entries)))
        self._entries[text] = translated

    def __len__(self) -> int:
        return len(self._entries)
