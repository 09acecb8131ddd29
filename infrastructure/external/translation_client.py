"""
HTTP client for machine translation.

Uses the public Google Translate ``translate_a/single`` endpoint
(``client=gtx``), which answers with nested JSON arrays:

    [[["translated segment", "source segment", ...], ...], ...]

The translated segments are concatenated in order.
"""

import logging
from typing import Any

import httpx

from application.exceptions import TranslationError
from backend.core.language import informal_imperative
from infrastructure.external.retry import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_WAIT_SECONDS,
    DEFAULT_MIN_WAIT_SECONDS,
    build_async_retrying,
)

logger = logging.getLogger(__name__)

DEFAULT_TRANSLATE_URL = "https://translate.googleapis.com/translate_a/single"


class TranslationUnavailableError(TranslationError):
    """Translation host unreachable or timed out."""

    pass


class TranslationResponseError(TranslationError):
    """Translation host answered with an error status or an unreadable body."""

    def __init__(self, message: str, status_code: int = 0):
        super().__init__(message)
        self.status_code = status_code


def _is_retryable(exception: BaseException) -> bool:
    if isinstance(exception, TranslationUnavailableError):
        return True
    if isinstance(exception, TranslationResponseError):
        return exception.status_code == 429 or exception.status_code >= 500
    return False


def parse_segments(payload: Any) -> str:
    """
    Join the translated segments of a ``translate_a/single`` response.

    Raises:
        TranslationResponseError: If the payload does not have the expected shape.

    Examples:
        >>> parse_segments([[["Hola ", "Hello ", None], ["mundo", "world", None]], None, "en"])
        'Hola mundo'
    """
    try:
        return "".join(segment[0] for segment in payload[0] if segment and segment[0])
    except (TypeError, IndexError, KeyError) as e:
        raise TranslationResponseError("Unexpected translation payload") from e


class GoogleTranslationClient:
    """
    HTTP client for the Google Translate web endpoint.

    Implements the TranslationService port.
    """

    def __init__(
        self,
        source_language: str = "en",
        target_language: str = "es",
        base_url: str = DEFAULT_TRANSLATE_URL,
        timeout: float = 10.0,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        min_wait_seconds: float = DEFAULT_MIN_WAIT_SECONDS,
        max_wait_seconds: float = DEFAULT_MAX_WAIT_SECONDS,
    ):
        """
        Initialize the translation client.

        Args:
            source_language: Language code of the input text
            target_language: Language code to translate into
            base_url: Endpoint URL
            timeout: Request timeout in seconds
            max_attempts: Attempts for transient failures
            min_wait_seconds: Minimum backoff between attempts
            max_wait_seconds: Maximum backoff between attempts
        """
        self._source = source_language
        self._target = target_language
        self._base_url = base_url
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._min_wait = min_wait_seconds
        self._max_wait = max_wait_seconds

    async def translate(self, text: str) -> str:
        """
        Translate ``text`` into the target language.

        Raises:
            TranslationError: If no translation could be obtained after retries
        """
        if not text or not text.strip():
            return ""

        retrying = build_async_retrying(
            _is_retryable,
            max_attempts=self._max_attempts,
            min_wait_seconds=self._min_wait,
            max_wait_seconds=self._max_wait,
        )
        async for attempt in retrying:
            with attempt:
                translated = await self._request(text)

        if self._target == "es":
            translated = informal_imperative(translated)
        return translated

    async def _request(self, text: str) -> str:
        params = {
            "client": "gtx",
            "sl": self._source,
            "tl": self._target,
            "dt": "t",
            "q": text,
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(self._base_url, params=params)
        except httpx.ConnectError as e:
            logger.error(f"Translation service unavailable: {e}")
            raise TranslationUnavailableError("Translation service is not available") from e
        except httpx.TimeoutException as e:
            logger.error(f"Translation service timeout: {e}")
            raise TranslationUnavailableError("Translation request timed out") from e
        except httpx.TransportError as e:
            logger.error(f"Translation service transport error: {e}")
            raise TranslationUnavailableError(f"Translation service connection failed: {e}") from e

        if response.status_code != 200:
            logger.error(f"Translation error: {response.status_code}")
            raise TranslationResponseError(
                f"Translation service returned {response.status_code}",
                response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise TranslationResponseError("Translation service returned invalid JSON", response.status_code) from e

        return parse_segments(payload)
