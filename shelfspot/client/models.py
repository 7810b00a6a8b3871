"""
==============================================================================
Client Product Model
==============================================================================

CatalogItem is the client's view of a product. It accepts whatever the
server sends and normalizes it:

- price: numbers and numeric strings become floats; anything else,
  including NaN and infinities, becomes 0.0
- display hint: displayHint, dataAiHint, data-ai-hint, data_ai_hint and
  display_hint are the same field

ProductDraft is the other direction: user input checked before it is
sent, with the rules of the submission form (name 2-100 characters,
positive price in whole cents, description 10-5000 characters, optional
http(s) image URL).

==============================================================================
"""

from __future__ import annotations

import math
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional
from urllib.parse import quote

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from shelfspot.schemas.product import DISPLAY_HINT_ALIASES
from shelfspot.utils.validators import has_cents_precision


CARD_IMAGE_TEMPLATE = "https://picsum.photos/seed/{seed}/600/450"


def coerce_price(value: Any) -> float:
    """
    Price as a finite float, 0.0 when it can't be read.

    Example:
        >>> coerce_price("12.50")
        12.5
        >>> coerce_price("n/a")
        0.0
    """
    if isinstance(value, bool) or value is None:
        return 0.0

    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0

    return number if math.isfinite(number) else 0.0


class CatalogItem(BaseModel):
    """Product as held by the client cache."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    price: float = 0.0
    description: str = ""
    image_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("imageUrl", "image_url"),
    )
    display_hint: Optional[str] = Field(
        default=None,
        validation_alias=DISPLAY_HINT_ALIASES,
    )
    created_at: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("createdAt", "created_at"),
    )

    @field_validator("price", mode="before")
    @classmethod
    def normalize_price(cls, v: Any) -> float:
        return coerce_price(v)

    @field_validator("description", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("image_url", "display_hint", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def image_hint(self) -> str:
        """Hint used to seed a placeholder image."""
        return self.display_hint or " ".join(self.name.split()[:2]) or "product image"

    @property
    def display_image_url(self) -> str:
        """Image to show: the product's own, else a placeholder seeded by the hint."""
        if self.image_url:
            return self.image_url
        return CARD_IMAGE_TEMPLATE.format(seed=quote(self.image_hint, safe=""))


PRICE_MESSAGE = "Price must be a positive number."

_HTTP_URL = TypeAdapter(HttpUrl)


class ProductDraft(BaseModel):
    """
    New product as entered by the user.

    Example:
        >>> draft = ProductDraft.model_validate({
        ...     "name": "Desk Lamp", "price": "49.50",
        ...     "description": "A bright lamp for your desk", "imageUrl": "",
        ... })
        >>> draft.to_payload()
        {'name': 'Desk Lamp', 'price': 49.5, 'description': 'A bright lamp for your desk'}
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str
    price: float
    description: str
    image_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("imageUrl", "image_url"),
    )
    display_hint: Optional[str] = Field(
        default=None,
        validation_alias=DISPLAY_HINT_ALIASES,
    )

    @field_validator("name")
    @classmethod
    def name_length(cls, v: str) -> str:
        if len(v) < 2:
            raise ValueError("Product name must be at least 2 characters.")
        if len(v) > 100:
            raise ValueError("Product name must be at most 100 characters.")
        return v

    @field_validator("price", mode="before")
    @classmethod
    def coerce_number(cls, v: Any) -> Any:
        # Form fields arrive as text
        if isinstance(v, bool) or v is None:
            raise ValueError(PRICE_MESSAGE)
        if isinstance(v, str):
            try:
                return float(v.strip())
            except ValueError:
                raise ValueError(PRICE_MESSAGE) from None
        return v

    @field_validator("price")
    @classmethod
    def positive_cents(cls, v: float) -> float:
        if not math.isfinite(v) or v <= 0:
            raise ValueError(PRICE_MESSAGE)
        if not has_cents_precision(v):
            raise ValueError("Price must have at most two decimal places.")
        return v

    @field_validator("description")
    @classmethod
    def description_length(cls, v: str) -> str:
        if len(v) < 10:
            raise ValueError("Description must be at least 10 characters.")
        if len(v) > 5000:
            raise ValueError("Description must be at most 5000 characters.")
        return v

    @field_validator("image_url", "display_hint", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("image_url")
    @classmethod
    def valid_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        try:
            _HTTP_URL.validate_python(v)
        except ValidationError:
            raise ValueError("Please enter a valid URL.") from None
        return v

    def to_payload(self) -> Dict[str, Any]:
        """Request body for POST /products; unset optional fields are left out."""
        payload: Dict[str, Any] = {
            "name": self.name,
            "price": self.price,
            "description": self.description,
        }
        if self.image_url:
            payload["imageUrl"] = self.image_url
        if self.display_hint:
            payload["displayHint"] = self.display_hint
        return payload

    @staticmethod
    def describe(error: ValidationError) -> str:
        """One line listing every rejected field."""
        messages = []
        for item in error.errors():
            msg = str(item.get("msg", "invalid value"))
            if msg.startswith("Value error, "):
                msg = msg[len("Value error, "):]
            elif item.get("type") == "missing":
                msg = f"{'.'.join(str(p) for p in item.get('loc', ()))} is required."
            messages.append(msg)
        return " ".join(messages)
