"""
==============================================================================
Application Settings Module
==============================================================================

Configuration management using Pydantic Settings.

A single Settings instance is cached for the process lifetime through
get_settings().

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables
2. .env file
3. Default values

Database Connection:
-------------------
The SQL backend needs either DATABASE_URL or the discrete PostgreSQL
parameters DB_HOST, DB_USER and DB_NAME (DB_PORT and DB_PASSWORD are
optional). When neither is present the application refuses to start.

==============================================================================
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import List, Optional
from urllib.parse import quote_plus

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Module logger
logger = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Raised when a required configuration value is missing."""


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Display name for the application
        app_env: Environment mode (development/staging/production)
        debug: Enable debug mode for verbose logging
        host: Server bind address
        port: Server port number
        catalog_backend: Store implementation, "sql" or "memory"
        database_url: Full SQLAlchemy connection string
        db_host, db_port, db_user, db_password, db_name: Discrete
            PostgreSQL connection parameters
        db_pool_size, db_max_overflow, db_pool_timeout: Pool bounds
        seed_sample_products: Seed the demo catalog into an empty store
        cors_origins: Allowed CORS origins (JSON array string)
        gemini_api_key: API key enabling smart search
        gemini_model: Text generation model used by smart search
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================
    app_name: str = Field(
        default="ShelfSpot Catalog API",
        description="Display name for the application"
    )

    app_env: str = Field(
        default="development",
        description="Environment mode: development, staging, production"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode for verbose logging"
    )

    # =========================================================================
    # SERVER SETTINGS
    # =========================================================================
    host: str = Field(default="0.0.0.0", description="Server bind address")

    port: int = Field(
        default=3001,
        ge=1,
        le=65535,
        description="Server port number"
    )

    # =========================================================================
    # STORE SETTINGS
    # =========================================================================
    catalog_backend: str = Field(
        default="sql",
        description="Catalog store backend: sql or memory"
    )

    seed_sample_products: bool = Field(
        default=False,
        description="Insert the demo catalog when the store is empty"
    )

    # =========================================================================
    # DATABASE SETTINGS
    # =========================================================================
    database_url: Optional[str] = Field(
        default=None,
        description="SQLAlchemy database connection string"
    )

    db_host: Optional[str] = Field(default=None, description="PostgreSQL host")
    db_port: int = Field(default=5432, ge=1, le=65535, description="PostgreSQL port")
    db_user: Optional[str] = Field(default=None, description="PostgreSQL user")
    db_password: Optional[str] = Field(default=None, description="PostgreSQL password")
    db_name: Optional[str] = Field(default=None, description="PostgreSQL database")

    db_pool_size: int = Field(default=5, ge=1, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=100)
    db_pool_timeout: int = Field(
        default=30,
        ge=1,
        le=300,
        description="Seconds to wait for a pooled connection"
    )

    # =========================================================================
    # CORS SETTINGS
    # =========================================================================
    cors_origins: str = Field(
        default='["*"]',
        description="Allowed CORS origins as JSON array string"
    )

    # =========================================================================
    # SMART SEARCH SETTINGS
    # =========================================================================
    gemini_api_key: Optional[str] = Field(
        default=None,
        description="Google Gemini API key; smart search is disabled without it"
    )

    gemini_model: str = Field(
        default="gemini-2.5-flash",
        description="Model used for smart search"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, value: str) -> str:
        """Normalize the environment name, falling back to development."""
        valid_envs = {"development", "staging", "production"}
        normalized = value.lower().strip()

        if normalized not in valid_envs:
            logger.warning(
                f"Unknown environment '{value}', defaulting to 'development'"
            )
            return "development"

        return normalized

    @field_validator("catalog_backend")
    @classmethod
    def validate_catalog_backend(cls, value: str) -> str:
        """
        Validate the catalog store backend.

        Raises:
            ValueError: If the backend is not recognized
        """
        normalized = value.lower().strip()
        if normalized not in {"sql", "memory"}:
            raise ValueError(
                f"Unsupported catalog backend: {value}. Supported: sql, memory"
            )
        return normalized

    @field_validator("database_url", "db_host", "db_user", "db_name", "gemini_api_key")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        """Treat empty environment values as unset."""
        if value is not None and not value.strip():
            return None
        return value

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def uses_memory_store(self) -> bool:
        """Check if the in-memory prototype store is selected."""
        return self.catalog_backend == "memory"

    @property
    def resolved_database_url(self) -> Optional[str]:
        """
        Connection string built from DATABASE_URL or the DB_* parameters.

        Returns:
            SQLAlchemy URL, or None when the parameters are incomplete
        """
        if self.database_url:
            return self.database_url

        if not (self.db_host and self.db_user and self.db_name):
            return None

        credentials = quote_plus(self.db_user)
        if self.db_password:
            credentials += ":" + quote_plus(self.db_password)

        return (
            f"postgresql+psycopg2://{credentials}@{self.db_host}:"
            f"{self.db_port}/{self.db_name}"
        )

    @property
    def database_configured(self) -> bool:
        """Check if the selected backend has what it needs to start."""
        return self.uses_memory_store or self.resolved_database_url is not None

    @property
    def smart_search_enabled(self) -> bool:
        """Check if an API key for smart search is present."""
        return self.gemini_api_key is not None

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from JSON string to list."""
        try:
            origins = json.loads(self.cors_origins)
            if isinstance(origins, list):
                return origins
            return ["*"]
        except json.JSONDecodeError:
            logger.warning(
                f"Invalid CORS origins JSON: {self.cors_origins}, "
                "defaulting to ['*']"
            )
            return ["*"]

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================
    def require_database_url(self) -> str:
        """
        Get the database URL or fail loudly.

        Returns:
            SQLAlchemy connection string

        Raises:
            ConfigurationError: If no connection parameters are configured
        """
        url = self.resolved_database_url
        if url is None:
            raise ConfigurationError(
                "Database connection is not configured. Set DATABASE_URL or "
                "DB_HOST, DB_USER and DB_NAME."
            )
        return url

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"Settings(app_name={self.app_name!r}, "
            f"app_env={self.app_env!r}, "
            f"catalog_backend={self.catalog_backend!r}, "
            f"debug={self.debug})"
        )


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the global Settings instance.

    lru_cache keeps a single instance for the process; tests call
    get_settings.cache_clear() after changing the environment.

    Returns:
        Global Settings instance
    """
    settings = Settings()

    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
