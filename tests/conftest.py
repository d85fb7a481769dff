"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides test store, client, and seed data fixtures.

==============================================================================
"""

import os

# Settings are cached on first import; point them at an in-memory store first
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("STORE_RETRY_BACKOFF_SECONDS", "0")

from typing import Callable, Generator, List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.database import Base, get_db
from app.db.data_access import DataAccessLayer


# ============================================================================
# STORE FIXTURES
# ============================================================================

SQLALCHEMY_TEST_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh store for each test."""
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create test client with store override."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def dal(db: Session) -> DataAccessLayer:
    """Data access layer bound to the test store, no retry backoff."""
    return DataAccessLayer(db, retry_attempts=3, retry_backoff=0)


# ============================================================================
# SEED FIXTURES
# ============================================================================

@pytest.fixture
def add_product(dal: DataAccessLayer) -> Callable[..., None]:
    """Insert a product directly, bypassing business rules."""
    def _add(product_id: int, title: str = "", price: str = "1", category: str = "Electric", **extra):
        dal.create_product(
            product_id,
            title or f"Product {product_id}",
            extra.get("description", ""),
            price,
            category,
            extra.get("is_active", True),
            extra.get("expiry_date"),
            extra.get("voltage", "220"),
            extra.get("socket", "UK"),
        )
    return _add


@pytest.fixture
def seeded_products(add_product) -> List[int]:
    """Products 1, 2 and 3."""
    add_product(1, "Kettle", price="30")
    add_product(2, "Toaster", price="45")
    add_product(3, "Lamp", price="12")
    return [1, 2, 3]
