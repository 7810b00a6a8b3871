"""
==============================================================================
Client Catalog Cache
==============================================================================

Local view of the catalog kept in step with the API.

Behaviour per operation:
-----------------------
- load():            success replaces the list; failure clears it to empty
                     and sets `error`
- add_product():     the draft is checked locally first; success prepends
                     the server's record; failure leaves the list untouched
- delete_product():  success removes the id; failure leaves the list
                     untouched (a 404 drops the stale id)

Every outcome pushes a dismissible Notice.

==============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError

from shelfspot.client.api_client import CatalogApiClient
from shelfspot.client.errors import CatalogClientError, ErrorKind
from shelfspot.client.models import CatalogItem, ProductDraft


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notice:
    """Transient message for the user."""

    level: str
    title: str
    message: str


class ClientCatalogCache:
    """
    In-memory product list synchronized with the catalog API.

    Attributes:
        error: Banner message from the last failed operation, if any
        is_loading: True while load() is running

    Example:
        >>> cache = ClientCatalogCache(CatalogApiClient())
        >>> cache.load()
        True
        >>> cache.add_product({"name": "Desk Lamp", "price": 49.5,
        ...                    "description": "A bright lamp"})
    """

    def __init__(self, api: CatalogApiClient) -> None:
        self._api = api
        self._products: List[CatalogItem] = []
        self._notices: List[Notice] = []
        self.error: Optional[str] = None
        self.is_loading = False

    # =========================================================================
    # STATE ACCESS
    # =========================================================================

    @property
    def products(self) -> List[CatalogItem]:
        """Current product list, newest first."""
        return list(self._products)

    @property
    def notices(self) -> List[Notice]:
        """Pending notices, oldest first."""
        return list(self._notices)

    def find(self, product_id: str) -> Optional[CatalogItem]:
        """Product with the given id, if cached."""
        return next((p for p in self._products if p.id == product_id), None)

    def dismiss_notice(self, index: int) -> None:
        """Drop one notice."""
        if 0 <= index < len(self._notices):
            del self._notices[index]

    def clear_notices(self) -> None:
        self._notices.clear()

    def dismiss_error(self) -> None:
        self.error = None

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    def load(self) -> bool:
        """
        Fetch the catalog.

        Returns:
            True on success; on failure the list is empty and `error` is set
        """
        self.is_loading = True
        self.error = None
        try:
            self._products = self._api.list_products()
            return True
        except CatalogClientError as e:
            self._products = []
            self._fail("Error Fetching Products", e)
            return False
        finally:
            self.is_loading = False

    def add_product(
        self,
        draft: Union[ProductDraft, Mapping[str, Any]]
    ) -> Optional[CatalogItem]:
        """
        Create a product and prepend the server's canonical record.

        Drafts failing ProductDraft's rules are never sent.

        Returns:
            The stored product, or None when validation or the request failed
        """
        try:
            checked = draft if isinstance(draft, ProductDraft) else ProductDraft.model_validate(dict(draft))
        except ValidationError as e:
            self._reject("Error Adding Product", ProductDraft.describe(e))
            return None

        try:
            product = self._api.create_product(checked.to_payload())
        except CatalogClientError as e:
            self._fail("Error Adding Product", e)
            return None

        self._products.insert(0, product)
        self._notify("success", "Product Submitted!", f"{product.name} has been added to your products.")
        return product

    def delete_product(self, product_id: str) -> bool:
        """
        Delete a product and drop it from the list.

        Returns:
            True when the server deleted it
        """
        try:
            self._api.delete_product(product_id)
        except CatalogClientError as e:
            if e.kind == ErrorKind.HTTP and e.status_code == 404:
                self._remove(product_id)
                self._notify("info", "Product Not Found", "The product had already been removed.")
                return False
            self._fail("Error Deleting Product", e)
            return False

        removed = self._remove(product_id)
        name = removed.name if removed else product_id
        self._notify("success", "Product Deleted", f"{name} has been removed.")
        return True

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _remove(self, product_id: str) -> Optional[CatalogItem]:
        for index, product in enumerate(self._products):
            if product.id == product_id:
                return self._products.pop(index)
        return None

    def _notify(self, level: str, title: str, message: str) -> None:
        self._notices.append(Notice(level, title, message))

    def _reject(self, title: str, message: str) -> None:
        logger.warning(f"{title}: {message}")
        self.error = message
        self._notify("error", title, message)

    def _fail(self, title: str, error: CatalogClientError) -> None:
        message = self.describe_error(error)
        logger.error(f"{title}: {message}")
        self.error = message
        self._notify("error", title, message)

    @staticmethod
    def describe_error(error: CatalogClientError) -> str:
        """User-facing text for a client error."""
        if error.kind == ErrorKind.NETWORK:
            return f"NetworkError: {error.message}"
        if error.kind == ErrorKind.DECODE:
            return f"The product server sent an unexpected response. {error.message}"
        return error.message
