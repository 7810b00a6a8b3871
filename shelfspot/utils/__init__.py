"""
==============================================================================
Utilities Package
==============================================================================

Utility classes and functions for the application.

Modules:
--------
- validators: Product input validation

==============================================================================
"""

from .validators import MAX_PRICE, ProductInputValidator, has_cents_precision

__all__ = [
    "MAX_PRICE",
    "ProductInputValidator",
    "has_cents_precision",
]
