"""Backend services for the session composer."""

from backend.services.catalog_cache import CatalogCache, CatalogSnapshot, TranslationMemo
from backend.services.hydration_service import HydrationReport, HydrationService

__all__ = [
    "CatalogCache",
    "CatalogSnapshot",
    "TranslationMemo",
    "HydrationService",
    "HydrationReport",
]
