"""
==============================================================================
Product Models Module
==============================================================================

Pydantic record returned by every catalog store, plus the rules deriving
the optional image URL and display hint.

==============================================================================
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


PLACEHOLDER_IMAGE_TEMPLATE = "https://picsum.photos/seed/{seed}/400/300"


def placeholder_image_url(product_id: str) -> str:
    """Deterministic placeholder image for a product id."""
    return PLACEHOLDER_IMAGE_TEMPLATE.format(seed=quote(product_id, safe=""))


def normalize_display_hint(hint: Optional[str]) -> Optional[str]:
    """Collapse whitespace and keep at most the first two words."""
    if hint is None:
        return None
    words = hint.split()
    return " ".join(words[:2]) or None


def derive_display_hint(name: str) -> Optional[str]:
    """
    Display hint used when none is supplied.

    Example:
        >>> derive_display_hint("Desk Lamp with USB charger")
        'Desk Lamp'
    """
    return normalize_display_hint(name)


class ProductRecord(BaseModel):
    """
    Stored product as returned by the catalog.

    Field names are snake_case in Python and camelCase on the wire
    (imageUrl, displayHint, createdAt).

    Attributes:
        id: Server-assigned UUID
        name: Product display name
        price: Unit price
        description: Product description
        image_url: Explicit or placeholder image URL
        display_hint: Keywords seeding placeholder images
        created_at: Server-assigned creation time (UTC)
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: str = Field(..., min_length=1)
    name: str
    price: float
    description: str
    image_url: Optional[str] = None
    display_hint: Optional[str] = None
    created_at: datetime

    @field_validator("price", mode="before")
    @classmethod
    def decimal_to_float(cls, v: Any) -> Any:
        if isinstance(v, Decimal):
            return float(v)
        return v

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # Database drivers hand back naive timestamps
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @classmethod
    def from_row(cls, row: Any) -> "ProductRecord":
        """Create a record from an ORM row."""
        return cls(
            id=row.id,
            name=row.name,
            price=row.price,
            description=row.description,
            image_url=row.image_url,
            display_hint=row.display_hint,
            created_at=row.created_at,
        )
