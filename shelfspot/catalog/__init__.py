"""
==============================================================================
Catalog Package - Product Store
==============================================================================

Ownership of the product collection behind a store interface.

Classes:
--------
- ProductRecord: Pydantic model returned by every store
- CatalogStore: Store interface (list/create/delete)
- InMemoryCatalogStore: Process-local store (prototype mode, tests)
- SqlCatalogStore: Relational store (shelfspot.catalog.sql_store)

==============================================================================
"""

from .models import (
    ProductRecord,
    derive_display_hint,
    normalize_display_hint,
    placeholder_image_url,
)
from .store import CatalogStore, InMemoryCatalogStore, get_memory_store

__all__ = [
    "ProductRecord",
    "derive_display_hint",
    "normalize_display_hint",
    "placeholder_image_url",
    "CatalogStore",
    "InMemoryCatalogStore",
    "get_memory_store",
]
