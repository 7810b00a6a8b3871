"""
==============================================================================
Validation Utilities Module
==============================================================================

Store-level validation of product input.

The API validates request bodies through pydantic before they reach a
store; ProductInputValidator repeats the essential rules so a store never
persists a malformed record, whoever the caller is.

Validation Rules:
----------------
- name: non-empty string
- price: real number (not bool), finite, greater than zero, whole cents
- description: non-empty string

==============================================================================
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, Optional, Tuple


# Largest value a NUMERIC(10, 2) column holds
MAX_PRICE = 99_999_999.99


def has_cents_precision(price: Any) -> bool:
    """
    True when a finite price has at most two decimal places.

    Example:
        >>> has_cents_precision(19.99), has_cents_precision(0.001)
        (True, False)
    """
    return Decimal(str(price)).as_tuple().exponent >= -2


class ProductInputValidator:
    """
    Validator for product creation input.

    Example:
        >>> validator = ProductInputValidator()
        >>> validator.validate("Desk Lamp", 49.5, "A bright lamp")
        (True, None)
        >>> validator.validate("", 49.5, "A bright lamp")
        (False, 'name is required')
    """

    def validate(
        self,
        name: Any,
        price: Any,
        description: Any
    ) -> Tuple[bool, Optional[str]]:
        """
        Validate the required product fields.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not isinstance(name, str) or not name.strip():
            return False, "name is required"

        if isinstance(price, bool) or not isinstance(price, (int, float)):
            return False, "price must be a number"

        if not math.isfinite(price) or price <= 0:
            return False, "price must be greater than zero"

        if price > MAX_PRICE:
            return False, f"price must not exceed {MAX_PRICE}"

        if not has_cents_precision(price):
            return False, "price must have at most two decimal places"

        if not isinstance(description, str) or not description.strip():
            return False, "description is required"

        return True, None

    def is_valid(self, name: Any, price: Any, description: Any) -> bool:
        """Quick validity check."""
        return self.validate(name, price, description)[0]
