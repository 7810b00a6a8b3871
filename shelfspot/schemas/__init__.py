"""
==============================================================================
Schemas Package - Pydantic Models
==============================================================================

Request schemas using Pydantic for validation.

Responses are ProductRecord instances from shelfspot.catalog.

==============================================================================
"""

from .product import DISPLAY_HINT_ALIASES, ProductCreate, SmartSearchRequest

__all__ = [
    "DISPLAY_HINT_ALIASES",
    "ProductCreate",
    "SmartSearchRequest",
]
