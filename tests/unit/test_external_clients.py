"""
Unit tests for the outbound HTTP clients (bulk exercise catalog and
translation) and their retry helper.
"""

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from application.exceptions import CatalogResponseError, CatalogUnavailableError, TranslationError
from infrastructure.external.catalog_client import ExerciseCatalogHttpClient, map_pattern
from infrastructure.external.retry import build_async_retrying
from infrastructure.external.translation_client import (
    GoogleTranslationClient,
    TranslationResponseError,
    TranslationUnavailableError,
    parse_segments,
)

FREE_EXERCISE_DB = [
    {
        "id": "Barbell_Squat",
        "name": "Barbell Squat",
        "category": "strength",
        "primaryMuscles": ["quadriceps"],
        "equipment": "barbell",
        "instructions": ["Stand tall.", "  ", "Squat."],
        "images": ["Barbell_Squat/0.jpg"],
    },
    {
        "id": "Rowing_Stationary",
        "name": "Rowing, Stationary",
        "category": "cardio",
        "primaryMuscles": ["quadriceps"],
        "instructions": [],
        "images": [],
    },
    {"id": "", "name": "No id"},
]


def _mock_async_client(mock_client_class, *, response=None, side_effect=None):
    mock_client = MagicMock()
    mock_client_class.return_value.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client_class.return_value.__aexit__ = AsyncMock(return_value=False)
    mock_client.get = AsyncMock(return_value=response, side_effect=side_effect)
    return mock_client


def _response(status_code=200, payload=None, invalid_json=False):
    response = MagicMock()
    response.status_code = status_code
    if invalid_json:
        response.json = MagicMock(side_effect=ValueError("bad json"))
    else:
        response.json = MagicMock(return_value=payload)
    return response


# =============================================================================
# Retry Helper Tests
# =============================================================================


@pytest.mark.unit
class TestBuildAsyncRetrying:
    def test_rejects_zero_attempts(self):
        with pytest.raises(ValueError):
            build_async_retrying(lambda e: True, max_attempts=0)

    def test_rejects_inverted_waits(self):
        with pytest.raises(ValueError):
            build_async_retrying(lambda e: True, min_wait_seconds=5, max_wait_seconds=1)


# =============================================================================
# Catalog Client Tests
# =============================================================================


@pytest.fixture
def catalog_client() -> ExerciseCatalogHttpClient:
    return ExerciseCatalogHttpClient(
        catalog_url="https://catalog.test/exercises.json",
        image_base_url="https://img.test",
        max_attempts=2,
        min_wait_seconds=0,
        max_wait_seconds=0,
    )


@pytest.mark.unit
class TestCatalogFlatten:
    def test_free_exercise_db_shape(self, catalog_client):
        exercises = catalog_client.flatten(FREE_EXERCISE_DB)

        assert [e.id for e in exercises] == ["Barbell_Squat", "Rowing_Stationary"]
        squat = exercises[0]
        assert squat.instructions == ["Stand tall.", "Squat."]
        assert squat.media_url == "https://img.test/Barbell_Squat/0.jpg"
        assert squat.pattern == "Squat"
        assert squat.quality == "F"
        assert exercises[1].pattern == "Global"
        assert exercises[1].quality == "E"

    def test_grouped_exercisedb_shape(self, catalog_client):
        payload = {
            "chest": [{"id": "0025", "name": "barbell bench press", "bodyPart": "chest", "gifUrl": "https://gif.test/0025.gif"}],
            "back": [{"id": "0027", "name": "barbell bent over row", "bodyPart": "back"}],
        }
        exercises = catalog_client.flatten(payload)

        assert len(exercises) == 2
        assert exercises[0].best_media_url == "https://gif.test/0025.gif"
        assert exercises[0].pattern == "Push"
        assert exercises[1].pattern == "Pull"

    def test_map_pattern_fallback(self):
        assert map_pattern(None, "unknown") == "Global"


@pytest.mark.unit
@patch("infrastructure.external.catalog_client.httpx.AsyncClient")
class TestCatalogFetch:
    @pytest.mark.asyncio
    async def test_fetch_success(self, mock_client_class, catalog_client):
        mock_client = _mock_async_client(mock_client_class, response=_response(payload=FREE_EXERCISE_DB))

        exercises = await catalog_client.fetch_full_catalog()

        assert len(exercises) == 2
        mock_client.get.assert_awaited_once_with("https://catalog.test/exercises.json")

    @pytest.mark.asyncio
    async def test_connect_error_retried_then_raised(self, mock_client_class, catalog_client):
        mock_client = _mock_async_client(mock_client_class, side_effect=httpx.ConnectError("refused"))

        with pytest.raises(CatalogUnavailableError):
            await catalog_client.fetch_full_catalog()
        assert mock_client.get.await_count == 2

    @pytest.mark.asyncio
    async def test_server_error_recovers(self, mock_client_class, catalog_client):
        mock_client = _mock_async_client(mock_client_class)
        mock_client.get = AsyncMock(side_effect=[_response(503), _response(payload=FREE_EXERCISE_DB)])

        exercises = await catalog_client.fetch_full_catalog()
        assert len(exercises) == 2

    @pytest.mark.asyncio
    async def test_not_found_not_retried(self, mock_client_class, catalog_client):
        mock_client = _mock_async_client(mock_client_class, response=_response(404))

        with pytest.raises(CatalogResponseError) as exc_info:
            await catalog_client.fetch_full_catalog()
        assert exc_info.value.status_code == 404
        assert mock_client.get.await_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [httpx.ReadError("connection reset"), httpx.RemoteProtocolError("peer closed"), httpx.WriteError("broken pipe")],
    )
    async def test_transport_errors_become_unavailable(self, mock_client_class, catalog_client, error):
        mock_client = _mock_async_client(mock_client_class, side_effect=error)

        with pytest.raises(CatalogUnavailableError):
            await catalog_client.fetch_full_catalog()
        assert mock_client.get.await_count == 2

    @pytest.mark.asyncio
    async def test_invalid_json(self, mock_client_class, catalog_client):
        _mock_async_client(mock_client_class, response=_response(invalid_json=True))

        with pytest.raises(CatalogResponseError):
            await catalog_client.fetch_full_catalog()


# =============================================================================
# Translation Client Tests
# =============================================================================


@pytest.fixture
def translator() -> GoogleTranslationClient:
    return GoogleTranslationClient(max_attempts=2, min_wait_seconds=0, max_wait_seconds=0)


@pytest.mark.unit
class TestParseSegments:
    def test_joins_segments(self):
        payload = [[["Mantenga la espalda recta. ", "Keep your back straight. "], ["Baje.", "Lower."]], None, "en"]
        assert parse_segments(payload) == "Mantenga la espalda recta. Baje."

    def test_unexpected_shape(self):
        with pytest.raises(TranslationResponseError):
            parse_segments(None)


@pytest.mark.unit
@patch("infrastructure.external.translation_client.httpx.AsyncClient")
class TestTranslate:
    @pytest.mark.asyncio
    async def test_translate_applies_informal_imperative(self, mock_client_class, translator):
        payload = [[["Mantenga la espalda recta.", "Keep your back straight."]]]
        mock_client = _mock_async_client(mock_client_class, response=_response(payload=payload))

        assert await translator.translate("Keep your back straight.") == "Mantén la espalda recta."
        params = mock_client.get.await_args.kwargs["params"]
        assert (params["sl"], params["tl"], params["q"]) == ("en", "es", "Keep your back straight.")

    @pytest.mark.asyncio
    async def test_blank_text_skips_request(self, mock_client_class, translator):
        mock_client = _mock_async_client(mock_client_class)
        assert await translator.translate("   ") == ""
        mock_client.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_timeout_raises_translation_error(self, mock_client_class, translator):
        mock_client = _mock_async_client(mock_client_class, side_effect=httpx.ReadTimeout("slow"))

        with pytest.raises(TranslationUnavailableError):
            await translator.translate("Squat")
        assert mock_client.get.await_count == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [httpx.ReadError("connection reset"), httpx.RemoteProtocolError("peer closed")],
    )
    async def test_transport_errors_raise_translation_error(self, mock_client_class, translator, error):
        mock_client = _mock_async_client(mock_client_class, side_effect=error)

        with pytest.raises(TranslationUnavailableError):
            await translator.translate("Squat")
        assert mock_client.get.await_count == 2

    @pytest.mark.asyncio
    async def test_rate_limit_retried(self, mock_client_class, translator):
        mock_client = _mock_async_client(mock_client_class)
        mock_client.get = AsyncMock(side_effect=[_response(429), _response(payload=[[["Sentadilla", "Squat"]]])])

        assert await translator.translate("Squat") == "Sentadilla"

    @pytest.mark.asyncio
    async def test_client_error_is_translation_error(self, mock_client_class, translator):
        _mock_async_client(mock_client_class, response=_response(400))

        with pytest.raises(TranslationError):
            await translator.translate("Squat")

    @pytest.mark.asyncio
    async def test_other_target_language_untouched(self, mock_client_class):
        client = GoogleTranslationClient(target_language="pt", max_attempts=1, min_wait_seconds=0, max_wait_seconds=0)
        _mock_async_client(mock_client_class, response=_response(payload=[[["Mantenga", "Keep"]]]))

        assert await client.translate("Keep") == "Mantenga"
