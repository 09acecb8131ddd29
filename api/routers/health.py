"""
Health check router.

This router provides health check endpoints for monitoring and load balancers.
"""

import logging

from fastapi import APIRouter, Depends

from api.deps import get_catalog_cache
from backend.services import CatalogCache

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Health"],
)


@router.get("/health")
def health():
    """
    Simple liveness endpoint for session-composer.

    Returns:
        dict: Status indicator for health checks
    """
    return {"status": "ok"}


@router.get("/health/catalog")
def catalog_health(catalog_cache: CatalogCache = Depends(get_catalog_cache)):
    """Report whether the exercise catalog has been loaded (never triggers a fetch)."""
    return {
        "loaded": catalog_cache.is_loaded,
        "fetch_count": catalog_cache.fetch_count,
        "last_error": catalog_cache.last_error,
    }
