"""
==============================================================================
Catalog API Client
==============================================================================

httpx client for the catalog REST API.

Every failure surfaces as a CatalogClientError subclass:

    ┌──────────────────────┬───────────────┬───────────────────────────────┐
    │ Error                │ kind          │ Raised when                   │
    ├──────────────────────┼───────────────┼───────────────────────────────┤
    │ NetworkError         │ network       │ connect/read failure, timeout │
    │ ApiResponseError     │ http          │ non-2xx status                │
    │ DecodeError          │ decode        │ 2xx with unexpected body      │
    └──────────────────────┴───────────────┴───────────────────────────────┘

Usage:
------
    with CatalogApiClient("http://localhost:3001/api") as api:
        products = api.list_products()

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from shelfspot.client.errors import ApiResponseError, DecodeError, NetworkError
from shelfspot.client.models import CatalogItem


logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3001/api"
DEFAULT_TIMEOUT_SECONDS = 10.0


class CatalogApiClient:
    """
    Catalog REST API client.

    Attributes:
        base_url: API root, e.g. "http://localhost:3001/api"
        _http: Underlying httpx.Client (owned unless one was passed in)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: Optional[httpx.Client] = None
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "CatalogApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # =========================================================================
    # CATALOG OPERATIONS
    # =========================================================================

    def list_products(self) -> List[CatalogItem]:
        """Fetch the whole catalog in server order."""
        data = self._json(self._request("GET", "/products"))

        if not isinstance(data, list):
            raise DecodeError("Expected a JSON array of products")

        return [self._to_item(item) for item in data]

    def create_product(self, payload: Mapping[str, Any]) -> CatalogItem:
        """
        Create a product.

        Args:
            payload: name, price, description and optional imageUrl /
                displayHint; None values are left out

        Returns:
            The server's stored record
        """
        body = {key: value for key, value in payload.items() if value is not None}
        return self._to_item(self._json(self._request("POST", "/products", json=body)))

    def delete_product(self, product_id: str) -> None:
        """Delete a product by id."""
        self._request("DELETE", f"/products/{quote(product_id, safe='')}")

    def smart_search(self, query: str, available_products: List[str]) -> List[str]:
        """Ask the server which of the given names are relevant to a query."""
        data = self._json(self._request(
            "POST",
            "/ai/smart-search",
            json={"query": query, "availableProducts": list(available_products)},
        ))

        if not isinstance(data, list) or not all(isinstance(n, str) for n in data):
            raise DecodeError("Expected a JSON array of product names")

        return data

    # =========================================================================
    # TRANSPORT HELPERS
    # =========================================================================

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        url = f"{self.base_url}{path}"

        try:
            response = self._http.request(method, url, **kwargs)
        except httpx.TransportError as e:
            logger.error(f"{method} {url} failed: {e}")
            raise NetworkError(
                f"Could not connect to the product server at {self.base_url}. "
                f"Please ensure the backend server is running and reachable. ({e})"
            ) from e

        if response.is_error:
            message = self._error_message(response)
            logger.warning(f"{method} {url} -> {response.status_code}: {message}")
            raise ApiResponseError(message, status_code=response.status_code)

        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Server sent a response that is not JSON: {e}") from e

    @staticmethod
    def _to_item(data: Any) -> CatalogItem:
        try:
            return CatalogItem.model_validate(data)
        except ValidationError as e:
            raise DecodeError(f"Server sent a malformed product: {e}") from e

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        fallback = f"Request failed: {response.status_code} {response.reason_phrase}"
        try:
            body: Dict[str, Any] = response.json()
        except ValueError:
            return response.text.strip() or fallback

        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return fallback
