"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer and the Service layer.
DTOs are immutable (``frozen=True``).

- ``CreateProductDTO``: input for product creation (optionally with tags).
- ``UpdateProductDTO``: partial update addressed by the current name.
- ``AdjustStockDTO``: signed stock delta addressed by name.
- ``ProductSearchDTO``: category/tag search criteria.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.categories.constants import CATEGORY_NAME_MAX_LENGTH
from modules.core.validation import clean_name, tag_name_list
from modules.products.constants import (
    PRICE_DECIMAL_PLACES,
    PRICE_MAX_DIGITS,
    PRODUCT_NAME_MAX_LENGTH,
    STOCK_MAX,
    STOCK_MIN,
)

Price = Annotated[
    Decimal,
    Field(ge=0, max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES),
]
Stock = Annotated[int, Field(ge=STOCK_MIN, le=STOCK_MAX)]


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Validates:
    - ``name`` and ``category_name`` are non-blank.
    - ``price`` is zero or greater, with at most 12 digits and 2 decimals.
    - ``stock_quantity`` fits the 32-bit stock column.
    - ``tag_names`` is stripped of blanks (duplicates are resolved later).
    """

    model_config = ConfigDict(frozen=True)

    name: str
    category_name: str
    price: Price
    stock_quantity: Stock = 0
    tag_names: List[str] = []

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        return clean_name(v, "productName", PRODUCT_NAME_MAX_LENGTH)

    @field_validator("category_name")
    @classmethod
    def category_must_not_be_empty(cls, v: str) -> str:
        return clean_name(v, "categoryName", CATEGORY_NAME_MAX_LENGTH)

    @field_validator("tag_names", mode="before")
    @classmethod
    def normalise_tag_names(cls, v):
        return tag_name_list(v)


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    ``current_name`` selects the product; every other field is optional and
    only supplied fields are applied.
    """

    model_config = ConfigDict(frozen=True)

    current_name: str
    new_name: str | None = None
    category_name: str | None = None
    price: Price | None = None
    stock_quantity: Stock | None = None

    @field_validator("current_name")
    @classmethod
    def current_name_must_not_be_empty(cls, v: str) -> str:
        return clean_name(v, "currentProductName", PRODUCT_NAME_MAX_LENGTH)

    @field_validator("new_name")
    @classmethod
    def strip_new_name(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return clean_name(v, "newProductName", PRODUCT_NAME_MAX_LENGTH)

    @field_validator("category_name")
    @classmethod
    def strip_category_name(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return clean_name(v, "categoryName", CATEGORY_NAME_MAX_LENGTH)


class AdjustStockDTO(BaseModel):
    """Signed change to a product's stock. Negative results are allowed."""

    model_config = ConfigDict(frozen=True)

    product_name: str
    inventory_change: Stock

    @field_validator("product_name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        return clean_name(v, "productName", PRODUCT_NAME_MAX_LENGTH)


class ProductSearchDTO(BaseModel):
    """Search criteria; either part may be absent."""

    model_config = ConfigDict(frozen=True)

    category_name: str | None = None
    tag_names: List[str] = []

    @field_validator("category_name")
    @classmethod
    def blank_category_is_none(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("tag_names", mode="before")
    @classmethod
    def normalise_tag_names(cls, v):
        return tag_name_list(v)
