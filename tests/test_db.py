"""
==============================================================================
Store Setup Tests
==============================================================================

Tests for settings, the store manager and startup initialization.

==============================================================================
"""

from pathlib import Path

import pytest

from app.config import Settings, get_settings
from app.db import DatabaseInitializer, DatabaseManager


class TestSettings:
    """Tests for configuration parsing."""

    def test_in_memory_store_has_no_path(self):
        assert Settings(database_url="sqlite://").get_database_path() is None
        assert Settings(database_url="sqlite:///:memory:").get_database_path() is None

    def test_file_store_path(self):
        settings = Settings(database_url="sqlite:///./storage/db/catalog.db")
        assert settings.get_database_path() == Path("storage/db/catalog.db")

    def test_unknown_env_falls_back(self):
        assert Settings(app_env="Qa").app_env == "development"
        assert Settings(app_env=" Production ").app_env == "production"

    def test_cors_origins(self):
        assert Settings(cors_origins='["http://a"]').cors_origins_list == ["http://a"]
        assert Settings(cors_origins="not json").cors_origins_list == ["*"]

    def test_defaults(self):
        settings = get_settings()
        assert settings.products_collection == "Products"
        assert settings.catalogs_collection == "Catalogs"
        assert settings.fresh_expiry_threshold_days == 7


class TestDatabaseManager:
    """Tests for the store manager singleton."""

    def test_singleton(self):
        assert DatabaseManager() is DatabaseManager()

    def test_collections(self):
        manager = DatabaseManager()
        products = manager.get_collection("Products")

        assert {"_id", "id", "isactive", "ExpiryDate"} <= set(products.c.keys())
        assert set(manager.get_collection("Catalogs").c.keys()) == {"_id", "id", "title", "products"}

        with pytest.raises(KeyError):
            manager.get_collection("Orders")

    def test_verify_connection(self):
        assert DatabaseManager().verify_connection() is True


class TestDatabaseInitializer:
    """Tests for startup initialization."""

    def test_initialize_creates_collections(self):
        initializer = DatabaseInitializer()
        initializer.initialize()

        assert initializer.get_counts() == {"Products": 0, "Catalogs": 0}

    def test_unreachable_store(self, monkeypatch):
        manager = DatabaseManager()
        monkeypatch.setattr(manager, "verify_connection", lambda: False)

        with pytest.raises(RuntimeError):
            DatabaseInitializer(manager).initialize()
