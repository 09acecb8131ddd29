"""
Fake translation and media collaborators for testing.
"""
from typing import Dict, List, Optional, Set

from application.exceptions import TranslationError


class FakeTranslationService:
    """
    Fake implementation of TranslationService.

    Known texts come from ``translations``; anything else is returned
    prefixed with "ES:". Texts in ``failing`` raise TranslationError.
    """

    def __init__(self, translations: Optional[Dict[str, str]] = None):
        self.translations: Dict[str, str] = dict(translations or {})
        self.failing: Set[str] = set()
        self.fail_all = False
        self.calls: List[str] = []

    def reset(self) -> None:
        self.translations.clear()
        self.failing.clear()
        self.fail_all = False
        self.calls.clear()

    async def translate(self, text: str) -> str:
        self.calls.append(text)
        if self.fail_all or text in self.failing:
            raise TranslationError(f"Simulated translation failure for '{text}'")
        return self.translations.get(text, f"ES:{text}")


class FakeMediaUploader:
    """Fake implementation of MediaUploader keeping uploads in memory."""

    def __init__(self, base_url: str = "https://media.test/"):
        self.base_url = base_url
        self.uploads: Dict[str, bytes] = {}

    def reset(self) -> None:
        self.uploads.clear()

    async def upload(self, data: bytes, filename: str) -> str:
        self.uploads[filename] = data
        return f"{self.base_url}{filename}"
