"""
==============================================================================
FastAPI Dependencies Module
==============================================================================

Providers injected into route handlers.

Dependency Hierarchy:
--------------------
                    ┌─────────────────┐
                    │  get_settings() │
                    └────────┬────────┘
                             │
              ┌──────────────┴──────────────┐
              │                             │
    ┌─────────▼─────────┐         ┌─────────▼─────────┐
    │ get_catalog_store │         │get_product_ranker │
    └───────────────────┘         └───────────────────┘

Tests replace either provider through app.dependency_overrides.

==============================================================================
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Generator, Optional

from shelfspot.catalog.sql_store import SqlCatalogStore
from shelfspot.catalog.store import CatalogStore, get_memory_store
from shelfspot.config import get_settings
from shelfspot.db.database import get_database_manager
from shelfspot.search.ranker import GeminiProductRanker, ProductNameRanker


# Module logger
logger = logging.getLogger(__name__)


def get_catalog_store() -> Generator[CatalogStore, None, None]:
    """
    Yield the configured catalog store.

    SQL backend: a store bound to a request-scoped session, closed after
    the request. Memory backend: the process-wide in-memory store.

    Usage:
        @router.get("/products")
        def list_products(store: CatalogStore = Depends(get_catalog_store)):
            return store.list_products()
    """
    if get_settings().uses_memory_store:
        yield get_memory_store()
        return

    session = get_database_manager().get_session()
    try:
        yield SqlCatalogStore(session)
    finally:
        session.close()


@lru_cache(maxsize=4)
def _gemini_ranker(api_key: str, model: str) -> GeminiProductRanker:
    logger.info(f"Smart search enabled with model {model}")
    return GeminiProductRanker(api_key=api_key, model=model)


def get_product_ranker() -> Optional[ProductNameRanker]:
    """
    Smart search ranker for the configured model, None without an API key.

    The endpoint decides what a missing ranker means, so requests that
    never reach the model still succeed on unconfigured servers.
    """
    settings = get_settings()
    if not settings.smart_search_enabled:
        return None

    return _gemini_ranker(settings.gemini_api_key, settings.gemini_model)
