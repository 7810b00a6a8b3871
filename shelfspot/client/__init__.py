"""
==============================================================================
Client Package
==============================================================================

Python client for the catalog API and the local catalog cache built on it.

Classes:
--------
- CatalogApiClient: httpx wrapper raising typed errors
- CatalogItem: Normalized client-side product
- ProductDraft: User input checked before it is sent
- ClientCatalogCache: Local list kept in step with the API

==============================================================================
"""

from .api_client import DEFAULT_API_URL, CatalogApiClient
from .cache import ClientCatalogCache, Notice
from .errors import (
    ApiResponseError,
    CatalogClientError,
    DecodeError,
    ErrorKind,
    NetworkError,
)
from .models import CatalogItem, ProductDraft, coerce_price

__all__ = [
    "DEFAULT_API_URL",
    "CatalogApiClient",
    "ClientCatalogCache",
    "Notice",
    "ApiResponseError",
    "CatalogClientError",
    "DecodeError",
    "ErrorKind",
    "NetworkError",
    "CatalogItem",
    "ProductDraft",
    "coerce_price",
]
