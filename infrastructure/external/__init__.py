"""
External service integrations.

- ExerciseCatalogHttpClient: bulk exercise catalog download
- GoogleTranslationClient: machine translation
"""

from infrastructure.external.catalog_client import ExerciseCatalogHttpClient
from infrastructure.external.translation_client import GoogleTranslationClient

__all__ = [
    "ExerciseCatalogHttpClient",
    "GoogleTranslationClient",
]
