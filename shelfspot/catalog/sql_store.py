"""
==============================================================================
SQL Catalog Store Module
==============================================================================

CatalogStore backed by the products table through a SQLAlchemy session.

Every operation is a single statement followed by a commit. Failures are
rolled back, logged with their detail and re-raised as STORE_ERROR so the
caller never sees driver messages.

==============================================================================
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shelfspot.catalog.models import ProductRecord
from shelfspot.catalog.store import CatalogStore
from shelfspot.core import exceptions
from shelfspot.db.models import Product
from shelfspot.utils.validators import ProductInputValidator

if TYPE_CHECKING:
    from shelfspot.schemas.product import ProductCreate


# Module logger
logger = logging.getLogger(__name__)


class SqlCatalogStore(CatalogStore):
    """
    Relational catalog store.

    Attributes:
        _db: Request-scoped database session

    Example:
        >>> with db_manager.session_scope() as session:
        ...     store = SqlCatalogStore(session)
        ...     products = store.list_products()
    """

    def __init__(
        self,
        db: Session,
        validator: Optional[ProductInputValidator] = None
    ) -> None:
        super().__init__(validator)
        self._db = db

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    def list_products(self) -> List[ProductRecord]:
        try:
            rows = (
                self._db.query(Product)
                .order_by(Product.created_at.desc())
                .all()
            )
        except SQLAlchemyError as e:
            self._db.rollback()
            logger.error(f"Failed to list products: {e}")
            raise exceptions.store_error() from e

        return [ProductRecord.from_row(row) for row in rows]

    def count(self) -> int:
        try:
            return self._db.query(func.count(Product.id)).scalar() or 0
        except SQLAlchemyError as e:
            self._db.rollback()
            logger.error(f"Failed to count products: {e}")
            raise exceptions.store_error() from e

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    def create_product(self, data: ProductCreate) -> ProductRecord:
        """
        Insert a product row.

        The returned record is read back from the row, so price carries
        the column's rounding.

        Raises:
            AppException: VALIDATION_ERROR or STORE_ERROR
        """
        record = self.build_record(data)

        row = Product(
            id=record.id,
            name=record.name,
            price=Decimal(str(record.price)),
            description=record.description,
            image_url=record.image_url,
            display_hint=record.display_hint,
            created_at=record.created_at.replace(tzinfo=None),
        )

        try:
            self._db.add(row)
            self._db.commit()
            self._db.refresh(row)
        except SQLAlchemyError as e:
            self._db.rollback()
            logger.error(f"Failed to create product {record.name!r}: {e}")
            raise exceptions.store_error() from e

        logger.info(f"Product created: {row.name} ({row.id})")
        return ProductRecord.from_row(row)

    def delete_product(self, product_id: str) -> None:
        """
        Delete a product row.

        Raises:
            AppException: PRODUCT_NOT_FOUND or STORE_ERROR
        """
        try:
            row = self._db.get(Product, product_id)
        except SQLAlchemyError as e:
            self._db.rollback()
            logger.error(f"Failed to load product {product_id}: {e}")
            raise exceptions.store_error() from e

        if row is None:
            logger.warning(f"Delete requested for unknown product: {product_id}")
            raise exceptions.product_not_found(product_id)

        try:
            self._db.delete(row)
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            logger.error(f"Failed to delete product {product_id}: {e}")
            raise exceptions.store_error() from e

        logger.info(f"Product deleted: {product_id}")
