"""
==============================================================================
Catalog Store Module
==============================================================================

Store abstraction owning the product collection.

Classes:
--------
- CatalogStore: Interface every store implements (list/create/delete)
- InMemoryCatalogStore: Process-local store for prototype mode and tests

Callers depend only on CatalogStore; the SQL implementation lives in
sql_store.py.

Ordering:
--------
list_products() always returns newest first (descending created_at).

==============================================================================
"""

from __future__ import annotations

import logging
import threading
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Iterable, List, Optional

from shelfspot.catalog.models import (
    ProductRecord,
    derive_display_hint,
    normalize_display_hint,
    placeholder_image_url,
)
from shelfspot.core import exceptions
from shelfspot.utils.validators import ProductInputValidator

if TYPE_CHECKING:
    from shelfspot.schemas.product import ProductCreate


# Module logger
logger = logging.getLogger(__name__)


class CatalogStore(ABC):
    """
    Product collection owner.

    Implementations assign ids and timestamps, derive the optional fields
    and raise AppException for every failure:

    - VALIDATION_ERROR when required fields are missing or malformed
    - PRODUCT_NOT_FOUND when deleting an unknown id
    - STORE_ERROR when the underlying persistence fails
    """

    def __init__(self, validator: Optional[ProductInputValidator] = None) -> None:
        self._validator = validator or ProductInputValidator()

    @abstractmethod
    def list_products(self) -> List[ProductRecord]:
        """All products, newest first."""

    @abstractmethod
    def create_product(self, data: ProductCreate) -> ProductRecord:
        """Validate, persist and return a new product."""

    @abstractmethod
    def delete_product(self, product_id: str) -> None:
        """Remove a product by id."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored products."""

    def build_record(self, data: ProductCreate) -> ProductRecord:
        """
        Turn creation input into a complete record.

        Assigns id and created_at, fills image_url and display_hint when
        they are absent.

        Raises:
            AppException: VALIDATION_ERROR for malformed input
        """
        is_valid, error = self._validator.validate(data.name, data.price, data.description)
        if not is_valid:
            logger.warning(f"Product rejected: {error}")
            raise exceptions.validation_error(error)

        product_id = str(uuid.uuid4())
        name = data.name.strip()

        return ProductRecord(
            id=product_id,
            name=name,
            price=data.price,
            description=data.description.strip(),
            image_url=data.image_url or placeholder_image_url(product_id),
            display_hint=normalize_display_hint(data.display_hint) or derive_display_hint(name),
            created_at=datetime.now(timezone.utc),
        )


class InMemoryCatalogStore(CatalogStore):
    """
    Catalog kept in a process-local list.

    Data is lost on restart. Mutations are serialized by a lock because
    FastAPI runs sync handlers in a threadpool.

    Example:
        >>> store = InMemoryCatalogStore()
        >>> record = store.create_product(ProductCreate(
        ...     name="Desk Lamp", price=49.5, description="A bright lamp"
        ... ))
        >>> store.list_products()[0].id == record.id
        True
    """

    def __init__(
        self,
        products: Optional[Iterable[ProductRecord]] = None,
        validator: Optional[ProductInputValidator] = None
    ) -> None:
        super().__init__(validator)
        self._lock = threading.Lock()
        self._products: List[ProductRecord] = sorted(
            products or [],
            key=lambda p: p.created_at,
            reverse=True
        )

    def list_products(self) -> List[ProductRecord]:
        with self._lock:
            return list(self._products)

    def create_product(self, data: ProductCreate) -> ProductRecord:
        record = self.build_record(data)

        with self._lock:
            self._products.insert(0, record)

        logger.info(f"Product created: {record.name} ({record.id})")
        return record

    def delete_product(self, product_id: str) -> None:
        with self._lock:
            for index, product in enumerate(self._products):
                if product.id == product_id:
                    del self._products[index]
                    break
            else:
                raise exceptions.product_not_found(product_id)

        logger.info(f"Product deleted: {product_id}")

    def count(self) -> int:
        with self._lock:
            return len(self._products)

    def clear(self) -> None:
        """Remove every product."""
        with self._lock:
            self._products.clear()


_memory_store: Optional[InMemoryCatalogStore] = None
_memory_store_lock = threading.Lock()


def get_memory_store() -> InMemoryCatalogStore:
    """Process-wide in-memory store used when CATALOG_BACKEND=memory."""
    global _memory_store

    with _memory_store_lock:
        if _memory_store is None:
            _memory_store = InMemoryCatalogStore()
            logger.info("In-memory catalog store created; data will not survive restarts")
        return _memory_store
