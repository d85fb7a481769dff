"""
==============================================================================
Application Settings Module
==============================================================================

Configuration management using Pydantic Settings.

A single global configuration instance is shared for the whole application
lifecycle through ``get_settings()``.

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables
2. .env file
3. Default values

Business Rule Settings:
----------------------
- FRESH_EXPIRY_THRESHOLD_DAYS: minimum whole days between now and the
  expiry date of a "Fresh" product at creation time

Store Settings:
--------------
- DATABASE_URL: SQLAlchemy URL of the store holding the Products and
  Catalogs collections
- STORE_RETRY_ATTEMPTS / STORE_RETRY_BACKOFF_SECONDS: bounded retry on
  transient store errors

==============================================================================
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Module logger
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Display name for the application
        app_env: Environment mode (development/staging/production)
        debug: Enable debug mode for verbose logging
        host: Server bind address
        port: Server port number
        database_url: SQLAlchemy connection string for the store
        products_collection: Name of the products collection
        catalogs_collection: Name of the catalogs collection
        fresh_expiry_threshold_days: Minimum days to expiry for "Fresh" products
        store_retry_attempts: Attempts per store call before giving up
        store_retry_backoff_seconds: Initial backoff between attempts
        cors_origins: Allowed CORS origins (JSON array string)

    Example:
        >>> settings = Settings()
        >>> print(settings.fresh_expiry_threshold_days)
        7
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
        default="Product Catalog API",
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
    host: str = Field(
        default="0.0.0.0",
        description="Server bind address"
    )

    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Server port number"
    )

    # =========================================================================
    # STORE SETTINGS
    # =========================================================================
    database_url: str = Field(
        default="sqlite:///./storage/db/catalog.db",
        description="SQLAlchemy connection string for the document store"
    )

    products_collection: str = Field(
        default="Products",
        min_length=1,
        description="Name of the products collection"
    )

    catalogs_collection: str = Field(
        default="Catalogs",
        min_length=1,
        description="Name of the catalogs collection"
    )

    store_retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts per store call on transient errors"
    )

    store_retry_backoff_seconds: float = Field(
        default=0.1,
        ge=0,
        le=10,
        description="Initial backoff between store attempts, doubled each retry"
    )

    # =========================================================================
    # BUSINESS RULE SETTINGS
    # =========================================================================
    fresh_expiry_threshold_days: int = Field(
        default=7,
        ge=0,
        le=365,
        description="Minimum whole days to expiry for Fresh products"
    )

    # =========================================================================
    # CORS SETTINGS
    # =========================================================================
    cors_origins: str = Field(
        default='["*"]',
        description="Allowed CORS origins as JSON array string"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, value: str) -> str:
        """
        Validate and normalize application environment.

        Unknown values fall back to "development" with a warning.
        """
        valid_envs = {"development", "staging", "production"}
        normalized = value.lower().strip()

        if normalized not in valid_envs:
            logger.warning(
                f"Unknown environment '{value}', defaulting to 'development'"
            )
            return "development"

        return normalized

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def cors_origins_list(self) -> List[str]:
        """
        Parse CORS origins from JSON string to list.

        Returns:
            List of allowed origin strings
        """
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
    def get_database_path(self) -> Optional[Path]:
        """
        Extract database file path for file-backed SQLite stores.

        Returns:
            Path to database file, or None for in-memory or non-SQLite stores
        """
        if self.database_url.startswith("sqlite:///"):
            db_path = self.database_url.replace("sqlite:///", "")
            if db_path.startswith("./"):
                db_path = db_path[2:]
            if db_path and db_path != ":memory:":
                return Path(db_path)
        return None

    def ensure_directories(self) -> None:
        """Create the database directory for file-backed SQLite stores."""
        db_path = self.get_database_path()
        if db_path:
            db_path.parent.mkdir(parents=True, exist_ok=True)

        logger.debug("Required directories created/verified")

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"Settings(app_name={self.app_name!r}, "
            f"app_env={self.app_env!r}, "
            f"debug={self.debug})"
        )


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the global Settings instance.

    Returns:
        Global Settings instance
    """
    settings = Settings()
    settings.ensure_directories()

    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
