"""
==============================================================================
API Endpoints
==============================================================================

Routers:
--------
- health: Health check endpoints
- products: Product catalog (list, create, delete)
- search: Smart search

==============================================================================
"""

from . import health, products, search

__all__ = ["health", "products", "search"]
