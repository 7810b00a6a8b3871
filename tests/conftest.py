"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides test database, stores, API client and catalog client fixtures.

==============================================================================
"""

import os

# Configure the environment before the application module is imported
os.environ["CATALOG_BACKEND"] = "memory"
os.environ["SEED_SAMPLE_PRODUCTS"] = "false"
os.environ.pop("GEMINI_API_KEY", None)

import pytest
from typing import Generator, List, Sequence
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from shelfspot.main import app
from shelfspot.db.database import Base
from shelfspot.catalog.store import CatalogStore, InMemoryCatalogStore
from shelfspot.catalog.sql_store import SqlCatalogStore
from shelfspot.client.api_client import CatalogApiClient
from shelfspot.core.dependencies import get_catalog_store, get_product_ranker
from shelfspot.search.ranker import ProductNameRanker, SmartSearchError


# ============================================================================
# DATABASE FIXTURES
# ============================================================================

# In-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


# ============================================================================
# STORE FIXTURES
# ============================================================================

@pytest.fixture
def sql_store(db: Session) -> SqlCatalogStore:
    """Catalog store on the test database."""
    return SqlCatalogStore(db)


@pytest.fixture(params=["sql", "memory"])
def store(request, db: Session) -> CatalogStore:
    """Each store implementation in turn."""
    if request.param == "sql":
        return SqlCatalogStore(db)
    return InMemoryCatalogStore()


# ============================================================================
# RANKER FIXTURES
# ============================================================================

class FakeRanker(ProductNameRanker):
    """Ranker returning canned names and recording its calls."""

    def __init__(self, names: Sequence[str] = (), fail: bool = False):
        self.names = list(names)
        self.fail = fail
        self.calls: List[tuple] = []

    def rank_names(self, query: str, available_products: Sequence[str]) -> List[str]:
        self.calls.append((query, list(available_products)))
        if self.fail:
            raise SmartSearchError("model unavailable")
        return [name for name in self.names if name in available_products]


@pytest.fixture
def ranker() -> FakeRanker:
    """Fake ranker used by the smart search endpoint."""
    return FakeRanker()


# ============================================================================
# CLIENT FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def client(sql_store: SqlCatalogStore, ranker: FakeRanker) -> Generator[TestClient, None, None]:
    """Create test client backed by the SQL store on the test database."""
    def override_get_catalog_store():
        yield sql_store

    app.dependency_overrides[get_catalog_store] = override_get_catalog_store
    app.dependency_overrides[get_product_ranker] = lambda: ranker

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def api(client: TestClient) -> CatalogApiClient:
    """Catalog client talking to the test application."""
    return CatalogApiClient(base_url="http://testserver/api", http_client=client)
