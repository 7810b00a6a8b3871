"""
==============================================================================
Product Catalog Endpoints
==============================================================================

List, create and delete catalog products.

    GET    /api/products          200 [product, ...]   newest first
    POST   /api/products          201 product          400 on bad input
    DELETE /api/products/{id}     204                  404 if unknown

==============================================================================
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status

from shelfspot.catalog.models import ProductRecord
from shelfspot.catalog.store import CatalogStore
from shelfspot.core.dependencies import get_catalog_store
from shelfspot.schemas.product import ProductCreate


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["Products"])


class ProductController:
    """Controller for product catalog operations."""

    def __init__(self, store: CatalogStore):
        self._store = store

    def list_products(self) -> List[ProductRecord]:
        """All products in store order."""
        products = self._store.list_products()
        logger.debug(f"Listing {len(products)} products")
        return products

    def create_product(self, data: ProductCreate) -> ProductRecord:
        """Create a product from a validated request."""
        return self._store.create_product(data)

    def delete_product(self, product_id: str) -> None:
        """Delete a product by id."""
        self._store.delete_product(product_id)


@router.get("", response_model=List[ProductRecord])
def list_products(store: CatalogStore = Depends(get_catalog_store)):
    """List all products, newest first."""
    return ProductController(store).list_products()


@router.post("", response_model=ProductRecord, status_code=status.HTTP_201_CREATED)
def create_product(payload: ProductCreate, store: CatalogStore = Depends(get_catalog_store)):
    """
    Create a product.

    imageUrl defaults to a placeholder derived from the new id and
    displayHint to the first two words of the name.
    """
    return ProductController(store).create_product(payload)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_product(product_id: str, store: CatalogStore = Depends(get_catalog_store)):
    """Delete a product by id."""
    ProductController(store).delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
