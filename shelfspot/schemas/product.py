"""
==============================================================================
Product Schemas Module
==============================================================================

Request schemas for catalog and smart search endpoints.

The wire contract uses camelCase names. Older clients sent the display
hint as "data-ai-hint", "dataAiHint" or "data_ai_hint"; those spellings are
accepted on input and never emitted.

==============================================================================
"""

from typing import Any, List, Optional

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

from shelfspot.catalog.models import normalize_display_hint
from shelfspot.utils.validators import MAX_PRICE, has_cents_precision


DISPLAY_HINT_ALIASES = AliasChoices(
    "displayHint",
    "dataAiHint",
    "data-ai-hint",
    "data_ai_hint",
    "display_hint",
)

_HTTP_URL = TypeAdapter(HttpUrl)


class ProductCreate(BaseModel):
    """Product creation request."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., gt=0, le=MAX_PRICE, allow_inf_nan=False)
    description: str = Field(..., min_length=1)
    image_url: Optional[str] = Field(
        default=None,
        max_length=2048,
        validation_alias=AliasChoices("imageUrl", "image_url"),
    )
    display_hint: Optional[str] = Field(
        default=None,
        max_length=100,
        validation_alias=DISPLAY_HINT_ALIASES,
    )

    @field_validator("price", mode="before")
    @classmethod
    def price_must_be_number(cls, v: Any) -> Any:
        # Strings and booleans are rejected rather than coerced
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("price must be a number")
        return v

    @field_validator("price")
    @classmethod
    def whole_cents(cls, v: float) -> float:
        # Stored as NUMERIC(10, 2); anything finer would be rounded away
        if not has_cents_precision(v):
            raise ValueError("price must have at most two decimal places")
        return v

    @field_validator("image_url", "display_hint", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("image_url")
    @classmethod
    def image_url_must_be_http(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        try:
            _HTTP_URL.validate_python(v)
        except ValidationError:
            raise ValueError("imageUrl must be a valid http(s) URL") from None
        return v

    @field_validator("display_hint")
    @classmethod
    def two_words_at_most(cls, v: Optional[str]) -> Optional[str]:
        return normalize_display_hint(v)


class SmartSearchRequest(BaseModel):
    """Smart search request: a query and the names it may pick from."""

    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(default="", max_length=500)
    available_products: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("availableProducts", "available_products"),
    )
