"""
HTTP client for the bulk exercise catalog.

Downloads the whole third-party exercise catalog as one JSON document and
flattens it into ExerciseIdentity records. Two document shapes are
understood:

- free-exercise-db (``exercises.json``): ``id``, ``name``, ``category``,
  ``primaryMuscles``, ``equipment``, ``instructions``, ``images``
- ExerciseDB style: ``id``, ``name``, ``bodyPart``, ``target``,
  ``equipment``, ``instructions``, ``gifUrl``

The document may be a list, or an object whose values are lists (e.g.
grouped by body part); either way it is flattened.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

import httpx

from application.exceptions import (
    CatalogClientError,
    CatalogResponseError,
    CatalogUnavailableError,
)
from domain.models import ExerciseIdentity
from infrastructure.external.retry import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_WAIT_SECONDS,
    DEFAULT_MIN_WAIT_SECONDS,
    build_async_retrying,
)

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_URL = "https://raw.githubusercontent.com/yuhonas/free-exercise-db/main/dist/exercises.json"
DEFAULT_IMAGE_BASE_URL = "https://raw.githubusercontent.com/yuhonas/free-exercise-db/main/exercises/"

# Body part / muscle -> movement pattern
_PATTERNS: Dict[str, str] = {
    "back": "Pull",
    "lats": "Pull",
    "middle back": "Pull",
    "traps": "Pull",
    "biceps": "Pull",
    "forearms": "Pull",
    "lower arms": "Pull",
    "chest": "Push",
    "shoulders": "Push",
    "triceps": "Push",
    "upper arms": "Push",
    "quadriceps": "Squat",
    "upper legs": "Squat",
    "lower legs": "Squat",
    "calves": "Squat",
    "hamstrings": "Hinge",
    "glutes": "Hinge",
    "lower back": "Hinge",
    "abdominals": "Core",
    "waist": "Core",
    "stretching": "Mobility",
    "cardio": "Global",
}

_CATEGORY_PATTERNS: Dict[str, str] = {
    "stretching": "Mobility",
    "cardio": "Global",
}

# Catalog category -> physical quality tag
_QUALITIES: Dict[str, str] = {
    "cardio": "E",
    "stretching": "M",
    "plyometrics": "P",
}


def map_pattern(*candidates: Optional[str]) -> str:
    """First known movement pattern among ``candidates``, else 'Global'."""
    for candidate in candidates:
        if candidate and candidate.lower() in _PATTERNS:
            return _PATTERNS[candidate.lower()]
    return "Global"


def _is_retryable(exception: BaseException) -> bool:
    if isinstance(exception, CatalogUnavailableError):
        return True
    if isinstance(exception, CatalogResponseError):
        return exception.status_code == 429 or exception.status_code >= 500
    return False


class ExerciseCatalogHttpClient:
    """
    HTTP client for the bulk exercise catalog.

    Implements the ExerciseCatalogClient port.
    """

    def __init__(
        self,
        catalog_url: str = DEFAULT_CATALOG_URL,
        image_base_url: str = DEFAULT_IMAGE_BASE_URL,
        timeout: float = 30.0,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        min_wait_seconds: float = DEFAULT_MIN_WAIT_SECONDS,
        max_wait_seconds: float = DEFAULT_MAX_WAIT_SECONDS,
    ):
        """
        Initialize the catalog client.

        Args:
            catalog_url: URL of the catalog JSON document
            image_base_url: Prefix for relative image paths
            timeout: Request timeout in seconds
            max_attempts: Attempts for transient failures
            min_wait_seconds: Minimum backoff between attempts
            max_wait_seconds: Maximum backoff between attempts
        """
        self._catalog_url = catalog_url
        self._image_base_url = image_base_url if image_base_url.endswith("/") else image_base_url + "/"
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._min_wait = min_wait_seconds
        self._max_wait = max_wait_seconds

    async def fetch_full_catalog(self) -> List[ExerciseIdentity]:
        """
        Download and flatten the catalog.

        Raises:
            CatalogUnavailableError: If the host is unreachable after retries
            CatalogResponseError: If the host answers with an error or bad JSON
        """
        retrying = build_async_retrying(
            _is_retryable,
            max_attempts=self._max_attempts,
            min_wait_seconds=self._min_wait,
            max_wait_seconds=self._max_wait,
        )
        async for attempt in retrying:
            with attempt:
                payload = await self._download()

        exercises = self.flatten(payload)
        logger.info(f"Fetched {len(exercises)} exercises from bulk catalog")
        return exercises

    async def _download(self) -> Any:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=True) as client:
                response = await client.get(self._catalog_url)
        except httpx.ConnectError as e:
            logger.error(f"Exercise catalog unavailable: {e}")
            raise CatalogUnavailableError(f"Exercise catalog is not available at {self._catalog_url}") from e
        except httpx.TimeoutException as e:
            logger.error(f"Exercise catalog timeout: {e}")
            raise CatalogUnavailableError("Exercise catalog request timed out") from e
        except httpx.TransportError as e:
            logger.error(f"Exercise catalog transport error: {e}")
            raise CatalogUnavailableError(f"Exercise catalog connection failed: {e}") from e

        if response.status_code != 200:
            logger.error(f"Exercise catalog error: {response.status_code}")
            raise CatalogResponseError(
                f"Exercise catalog returned {response.status_code}",
                response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise CatalogResponseError("Exercise catalog returned invalid JSON", response.status_code) from e

    def flatten(self, payload: Any) -> List[ExerciseIdentity]:
        """Flatten a catalog document into identities, skipping unusable entries."""
        exercises: List[ExerciseIdentity] = []
        for entry in _iter_entries(payload):
            identity = self._to_identity(entry)
            if identity is not None:
                exercises.append(identity)
        return exercises

    def _to_identity(self, entry: Dict[str, Any]) -> Optional[ExerciseIdentity]:
        exercise_id = entry.get("id")
        name = entry.get("name")
        if not exercise_id or not name:
            return None

        images = entry.get("images") or []
        media_url = None
        if images:
            first = str(images[0])
            media_url = first if first.startswith("http") else self._image_base_url + first

        primary = entry.get("primaryMuscles") or []
        category = entry.get("category")

        return ExerciseIdentity(
            id=str(exercise_id),
            name=str(name).strip(),
            instructions=[str(line).strip() for line in entry.get("instructions") or [] if str(line).strip()],
            media_url=media_url,
            gif_url=entry.get("gifUrl") or None,
            pattern=_CATEGORY_PATTERNS.get(str(category).lower()) or map_pattern(*primary, entry.get("bodyPart"), entry.get("target")),
            equipment=entry.get("equipment") or None,
            quality=_QUALITIES.get(str(category or entry.get("bodyPart") or "").lower(), "F"),
        )


def _iter_entries(payload: Any, top: bool = True) -> Iterable[Dict[str, Any]]:
    if isinstance(payload, list):
        for entry in payload:
            if isinstance(entry, dict):
                yield entry
    elif isinstance(payload, dict):
        for value in payload.values():
            if isinstance(value, (list, dict)):
                yield from _iter_entries(value, top=False)
    elif top:
        raise CatalogClientError(f"Unexpected catalog document type: {type(payload).__name__}")
