"""
Hydration: repair legacy sessions against the exercise catalog.

Older sessions often lack translated names, instructions, descriptions or
media. Hydration runs once when a session is loaded, before editing:

1. Match each exercise against the catalog (by catalog id, else by exact
   case-insensitive name in either language).
2. Gap-fill from the match: only empty fields are written, populated
   fields are never overwritten.
3. If there is still no translated name, either copy the name (when it
   already looks Spanish) or ask the translator for the name and, when
   missing, the instructions. Translation failures keep a fallback and
   are reported, never raised.
4. An empty description falls back to the joined translated instructions.

Every write is a gap-fill, so hydrating twice gives the same result as
hydrating once.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from application.exceptions import TranslationError
from application.ports import TranslationService
from backend.core.language import looks_spanish
from backend.services.catalog_cache import CatalogCache, CatalogSnapshot, TranslationMemo
from domain.models import Block, ExerciseIdentity, ExerciseItem, Session, WorkItem

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 4


@dataclass
class HydrationReport:
    """Result of hydrating one session."""

    session: Session
    hydrated_items: int = 0
    translated_items: int = 0
    failures: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failures


def _gap_fill(item: ExerciseItem, match: ExerciseIdentity) -> Dict[str, Any]:
    """Field updates taking catalog values only where the item is empty."""
    updates: Dict[str, Any] = {}

    if not item.exercise_id:
        updates["exercise_id"] = match.id
    if not item.translated_name and match.translated_name:
        updates["translated_name"] = match.translated_name
    if not item.instructions and match.instructions:
        updates["instructions"] = list(match.instructions)
    if not item.translated_instructions and match.translated_instructions:
        updates["translated_instructions"] = list(match.translated_instructions)
    if not item.description:
        description = match.description or " ".join(match.translated_instructions)
        if description:
            updates["description"] = description
    if not item.media_url and match.best_media_url:
        updates["media_url"] = match.best_media_url

    return updates


class HydrationService:
    """
    Backfills exercise metadata of a session from the catalog.

    Usage:
        >>> service = HydrationService(catalog_cache=cache, translator=translator)
        >>> report = await service.hydrate(session)
        >>> report.session  # hydrated copy; the input is untouched
    """

    def __init__(
        self,
        catalog_cache: CatalogCache,
        translator: TranslationService,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        translation_memo: Optional[TranslationMemo] = None,
    ) -> None:
        """
        Args:
            catalog_cache: Shared catalog holder
            translator: Translation collaborator
            max_concurrency: Items translated at the same time
            translation_memo: Shared memo of past translations
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        self._catalog_cache = catalog_cache
        self._translator = translator
        self._max_concurrency = max_concurrency
        self._memo = translation_memo if translation_memo is not None else TranslationMemo()

    async def hydrate(self, session: Session) -> HydrationReport:
        """
        Hydrate every exercise of ``session``.

        If the catalog cannot be fetched the session is returned unchanged
        and the failure is reported.
        """
        snapshot = await self._catalog_cache.get()
        if not snapshot.available:
            logger.warning("Skipping hydration of '%s': catalog unavailable", session.title)
            return HydrationReport(session=session, failures=list(snapshot.errors))

        failures: List[str] = list(snapshot.errors)
        semaphore = asyncio.Semaphore(self._max_concurrency)

        blocks: List[Block] = []
        hydrated = 0
        translated = 0
        for block in session.blocks:
            results = await asyncio.gather(
                *(self._hydrate_item(item, snapshot, semaphore, failures) for item in block.items)
            )
            items: List[WorkItem] = []
            for original, (item, was_translated) in zip(block.items, results):
                items.append(item)
                if item != original:
                    hydrated += 1
                if was_translated:
                    translated += 1

            updates: Dict[str, Any] = {"items": items}
            if not block.stable_id:
                updates["stable_id"] = block.id
            blocks.append(block.model_copy(update=updates))

        logger.info(
            "Hydrated session '%s': %d items updated, %d translated, %d failures",
            session.title,
            hydrated,
            translated,
            len(failures),
        )
        return HydrationReport(
            session=session.with_blocks(blocks),
            hydrated_items=hydrated,
            translated_items=translated,
            failures=failures,
        )

    async def _hydrate_item(
        self,
        item: WorkItem,
        snapshot: CatalogSnapshot,
        semaphore: asyncio.Semaphore,
        failures: List[str],
    ) -> Tuple[WorkItem, bool]:
        if not isinstance(item, ExerciseItem):
            return item, False

        match = snapshot.find(item.exercise_id, item.name, item.translated_name)
        if match is not None:
            updates = _gap_fill(item, match)
            if updates:
                item = item.model_copy(update=updates)

        translated = False
        if not item.translated_name and item.name:
            if looks_spanish(item.name):
                item = item.model_copy(update={"translated_name": item.name})
            else:
                async with semaphore:
                    item = await self._translate_item(item, failures)
                translated = True

        if not item.description and item.translated_instructions:
            item = item.model_copy(update={"description": " ".join(item.translated_instructions)})

        return item, translated

    async def _translate_item(self, item: ExerciseItem, failures: List[str]) -> ExerciseItem:
        """Translate name and, if missing, instructions of one item in parallel."""
        needs_instructions = not item.translated_instructions and bool(item.instructions)
        joined = "\n".join(item.instructions)

        if needs_instructions:
            name, instructions = await asyncio.gather(
                self._translate(item.name, failures),
                self._translate(joined, failures),
            )
        else:
            name, instructions = await self._translate(item.name, failures), None

        updates: Dict[str, Any] = {"translated_name": name or item.name}
        if needs_instructions:
            if instructions:
                updates["translated_instructions"] = [line for line in instructions.split("\n") if line.strip()]
            else:
                updates["translated_instructions"] = list(item.instructions)
        return item.model_copy(update=updates)

    async def _translate(self, text: str, failures: List[str]) -> Optional[str]:
        """Translate via memo or collaborator; None on failure."""
        cached = self._memo.get(text)
        if cached is not None:
            return cached

        try:
            result = await self._translator.translate(text)
        except TranslationError as e:
            message = f"Translation failed for '{text[:40]}': {e}"
            logger.warning(message)
            failures.append(message)
            return None

        if result:
            self._memo.put(text, result)
        return result
