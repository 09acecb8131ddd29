"""
Translation Service Interface (Port).

Used by hydration to fill in target-language names and instructions.
The collaborator is slow and fallible; it is only called for fields that
are missing.
"""
from typing import Protocol


class TranslationService(Protocol):
    """Translates text from the source to the target language."""

    async def translate(self, text: str) -> str:
        """
        Translate ``text``.

        Raises:
            TranslationError: If the translation could not be obtained
        """
        ...
