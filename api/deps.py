"""
FastAPI Dependency Providers for the Session Composer API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fake implementations.

Architecture:
- Settings, the Supabase client and the catalog cache are cached per-process (lru_cache)
- Repository and use case providers create new instances per-request

Usage in routers:
    from api.deps import get_session_repo
    from application.ports import SessionRepository

    @router.get("/sessions")
    def list_sessions(session_repo: SessionRepository = Depends(get_session_repo)):
        return session_repo.get_all()

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_session_repo] = lambda: FakeSessionRepository()
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, HTTPException
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import (
    ExerciseCatalogClient,
    ModuleRepository,
    SessionRepository,
    TranslationService,
)

# Use cases
from application.use_cases import (
    DeleteSessionUseCase,
    ImportModuleUseCase,
    ListSessionsUseCase,
    LoadSessionUseCase,
    SaveModuleUseCase,
    SaveSessionUseCase,
)

# Concrete implementations
from infrastructure import (
    ExerciseCatalogHttpClient,
    GoogleTranslationClient,
    SupabaseExerciseLibraryRepository,
    SupabaseModuleRepository,
    SupabaseSessionRepository,
)

from backend.services import CatalogCache, HydrationService, TranslationMemo
from backend.settings import Settings, get_settings as _get_settings


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings.
    Returns None if credentials are not configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Use this dependency when the endpoint requires database access.

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_session_repo(
    client: Client = Depends(get_supabase_client_required),
    settings: Settings = Depends(get_settings),
) -> SessionRepository:
    """
    Get SessionRepository implementation.

    Returns a SupabaseSessionRepository instance with injected client.
    The return type is the Protocol to enable easy mocking.
    """
    return SupabaseSessionRepository(client, table=settings.sessions_table)


def get_module_repo(
    client: Client = Depends(get_supabase_client_required),
    settings: Settings = Depends(get_settings),
) -> ModuleRepository:
    """Get ModuleRepository implementation."""
    return SupabaseModuleRepository(client, table=settings.modules_table)


# =============================================================================
# Process-wide Collaborators
# =============================================================================


@lru_cache
def get_catalog_client() -> ExerciseCatalogClient:
    """Get the bulk exercise catalog client (cached)."""
    settings = _get_settings()
    return ExerciseCatalogHttpClient(
        catalog_url=settings.exercise_catalog_url,
        image_base_url=settings.exercise_image_base_url,
        timeout=settings.http_timeout_seconds,
        max_attempts=settings.http_retry_attempts,
    )


@lru_cache
def get_translation_service() -> TranslationService:
    """Get the translation client (cached)."""
    settings = _get_settings()
    return GoogleTranslationClient(
        source_language=settings.translation_source_language,
        target_language=settings.translation_target_language,
        base_url=settings.translation_url,
        timeout=settings.http_timeout_seconds,
        max_attempts=settings.http_retry_attempts,
    )


@lru_cache
def get_translation_memo() -> TranslationMemo:
    """Get the process-wide translation memo."""
    return TranslationMemo()


@lru_cache
def get_catalog_cache() -> CatalogCache:
    """
    Get the process-wide catalog cache.

    The catalog is fetched at most once per process; every request shares
    this instance. The user library is merged in when Supabase is configured.
    """
    settings = _get_settings()
    client = get_supabase_client()
    library_repo = (
        SupabaseExerciseLibraryRepository(client, table=settings.exercises_table)
        if client is not None
        else None
    )
    return CatalogCache(library_repo=library_repo, catalog_client=get_catalog_client())


def get_hydration_service(
    catalog_cache: CatalogCache = Depends(get_catalog_cache),
    translator: TranslationService = Depends(get_translation_service),
    memo: TranslationMemo = Depends(get_translation_memo),
    settings: Settings = Depends(get_settings),
) -> HydrationService:
    """Get a HydrationService bound to the shared cache and memo."""
    return HydrationService(
        catalog_cache=catalog_cache,
        translator=translator,
        max_concurrency=settings.hydration_max_concurrency,
        translation_memo=memo,
    )


# =============================================================================
# Use Case Providers
# =============================================================================


def get_save_session_use_case(
    session_repo: SessionRepository = Depends(get_session_repo),
) -> SaveSessionUseCase:
    """
    Get SaveSessionUseCase with injected dependencies.

    Returns:
        SaveSessionUseCase: Use case for saving sessions
    """
    return SaveSessionUseCase(session_repo=session_repo)


def get_load_session_use_case(
    session_repo: SessionRepository = Depends(get_session_repo),
    hydration_service: HydrationService = Depends(get_hydration_service),
) -> LoadSessionUseCase:
    """Get LoadSessionUseCase with injected dependencies."""
    return LoadSessionUseCase(session_repo=session_repo, hydration_service=hydration_service)


def get_list_sessions_use_case(
    session_repo: SessionRepository = Depends(get_session_repo),
) -> ListSessionsUseCase:
    return ListSessionsUseCase(session_repo=session_repo)


def get_delete_session_use_case(
    session_repo: SessionRepository = Depends(get_session_repo),
) -> DeleteSessionUseCase:
    return DeleteSessionUseCase(session_repo=session_repo)


def get_save_module_use_case(
    module_repo: ModuleRepository = Depends(get_module_repo),
) -> SaveModuleUseCase:
    return SaveModuleUseCase(module_repo=module_repo)


def get_import_module_use_case(
    module_repo: ModuleRepository = Depends(get_module_repo),
) -> ImportModuleUseCase:
    return ImportModuleUseCase(module_repo=module_repo)
