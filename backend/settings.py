"""
Centralized settings configuration using Pydantic BaseSettings.

All environment variables are defined here with types, defaults, and validation.
Use get_settings() for dependency injection compatibility in FastAPI.

Usage:
    from backend.settings import get_settings, Settings

    # In FastAPI endpoints (dependency injection)
    @app.get("/")
    def read_root(settings: Settings = Depends(get_settings)):
        return {"environment": settings.environment}

    # Direct access (module-level)
    settings = get_settings()
    print(settings.supabase_url)
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, staging, production, test",
    )

    # -------------------------------------------------------------------------
    # Supabase Database
    # -------------------------------------------------------------------------
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL",
    )
    supabase_service_role_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key (full access)",
    )
    supabase_anon_key: Optional[str] = Field(
        default=None,
        description="Supabase anonymous key (limited access)",
    )
    sessions_table: str = Field(
        default="training_sessions",
        description="Table holding saved sessions",
    )
    modules_table: str = Field(
        default="training_modules",
        description="Table holding the module library",
    )
    exercises_table: str = Field(
        default="exercises",
        description="Table holding the user's exercise library",
    )

    @property
    def supabase_key(self) -> Optional[str]:
        """Get the best available Supabase key (service role preferred)."""
        return self.supabase_service_role_key or self.supabase_anon_key

    # -------------------------------------------------------------------------
    # External Services - Exercise Catalog
    # -------------------------------------------------------------------------
    exercise_catalog_url: str = Field(
        default="https://raw.githubusercontent.com/yuhonas/free-exercise-db/main/dist/exercises.json",
        description="URL of the bulk exercise catalog JSON document",
    )
    exercise_image_base_url: str = Field(
        default="https://raw.githubusercontent.com/yuhonas/free-exercise-db/main/exercises/",
        description="Prefix for relative catalog image paths",
    )

    # -------------------------------------------------------------------------
    # External Services - Translation
    # -------------------------------------------------------------------------
    translation_url: str = Field(
        default="https://translate.googleapis.com/translate_a/single",
        description="Translation endpoint",
    )
    translation_source_language: str = Field(
        default="en",
        description="Language of the catalog text",
    )
    translation_target_language: str = Field(
        default="es",
        description="Language sessions are written in",
    )

    # -------------------------------------------------------------------------
    # HTTP Clients & Hydration
    # -------------------------------------------------------------------------
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for outbound HTTP requests",
    )
    http_retry_attempts: int = Field(
        default=3,
        ge=1,
        description="Attempts for transient outbound HTTP failures",
    )
    hydration_max_concurrency: int = Field(
        default=4,
        ge=1,
        description="Items translated concurrently while hydrating a session",
    )

    # -------------------------------------------------------------------------
    # HTTP Server
    # -------------------------------------------------------------------------
    cors_allowed_origins: str = Field(
        default="",
        description="Comma-separated list of extra CORS origins",
    )

    @property
    def cors_allowed_origins_list(self) -> List[str]:
        """Parse extra CORS origins into a list."""
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    # -------------------------------------------------------------------------
    # Observability - Sentry
    # -------------------------------------------------------------------------
    sentry_dsn: Optional[str] = Field(
        default=None,
        description="Sentry DSN for error tracking",
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()

    # -------------------------------------------------------------------------
    # Helper Properties
    # -------------------------------------------------------------------------
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    For testing, you can clear the cache with get_settings.cache_clear().

    Returns:
        Settings: Application settings instance
    """
    return Settings()
