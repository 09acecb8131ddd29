"""
API package for the Session Composer API.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_catalog_cache,
    get_hydration_service,
    get_module_repo,
    get_session_repo,
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
)

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_session_repo",
    "get_module_repo",
    # Hydration
    "get_catalog_cache",
    "get_hydration_service",
]
