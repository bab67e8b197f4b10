"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF views) and the
Service layer.  DTOs are immutable (``frozen=True``).

Each input DTO runs its field rules in one ``model_validator(mode="before")``
pass, so every violation of a request is reported together.  Unknown fields
are rejected.

- ``CreateProductDTO``: input for product creation.
- ``UpdateStockDTO``: input for stock updates.
- ``PaginationQueryDTO``: ``limit`` / ``offset`` / ``page`` query string.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from modules.core.validation import (
    Rule,
    is_alphanumeric,
    is_integer,
    is_number,
    is_positive,
    is_present,
    is_string,
    max_length,
    min_integer,
    min_length,
    min_value,
    optional,
    raise_for_violations,
    to_decimal,
)


class ProductValidationErrors:
    NAME_NOT_EXISTS = "Name should exist"
    NAME_IS_CHARACTER = "Name should be a chain of characters"
    NAME_MIN_LENGTH = "Name must be longer than or equal to 2 characters"
    NAME_MAX_LENGTH = "Name must not be longer than 100 characters"
    PRODUCT_TOKEN_IS_ALPHANUMERIC = (
        "Product Token should be composed only of alphanumerical characters"
    )
    PRODUCT_TOKEN_NOT_EMPTY = "Product token should exist"
    PRODUCT_TOKEN_IS_STRING = "productToken must be a string"
    PRICE_NOT_EMPTY = "Price should exist"
    PRICE_IS_POSITIVE = "Price should be a positive number with up to 2 decimal places"
    PRICE_IS_NUMBER = "Price should be a number with up to 2 decimal places"
    STOCK_NOT_EMPTY = "Stock should exist"
    STOCK_IS_POSITIVE = "Stock should be a positive number"
    STOCK_IS_NUMBER = "stock must be a number conforming to the specified constraints"
    PRODUCT_ID = "ProductId should exist"
    PRODUCT_ID_IS_NUMBER = (
        "productId must be a number conforming to the specified constraints"
    )
    PRODUCT_ID_IS_POSITIVE = "productId must be a positive number"


class PaginationValidationErrors:
    LIMIT_IS_INTEGER = "Limit must be an integer value."
    LIMIT_MIN_VALUE = "Limit must be at least 1."
    OFFSET_IS_INTEGER = "Offset must be an integer value."
    OFFSET_MIN_VALUE = "Offset cannot be negative."
    PAGE_IS_INTEGER = "Page must be an integer value."
    PAGE_MIN_VALUE = "Page must be at least 1."


E = ProductValidationErrors
P = PaginationValidationErrors

CREATE_PRODUCT_RULES: dict[str, list[Rule]] = {
    "name": [
        (is_present, E.NAME_NOT_EXISTS),
        (is_string, E.NAME_IS_CHARACTER),
        (min_length(2), E.NAME_MIN_LENGTH),
        (max_length(100), E.NAME_MAX_LENGTH),
    ],
    "productToken": [
        (is_present, E.PRODUCT_TOKEN_NOT_EMPTY),
        (is_string, E.PRODUCT_TOKEN_IS_STRING),
        (is_alphanumeric, E.PRODUCT_TOKEN_IS_ALPHANUMERIC),
    ],
    "price": [
        (is_present, E.PRICE_NOT_EMPTY),
        (is_number(max_decimal_places=2), E.PRICE_IS_NUMBER),
        (is_positive, E.PRICE_IS_POSITIVE),
    ],
    "stock": [
        (is_present, E.STOCK_NOT_EMPTY),
        (is_positive, E.STOCK_IS_POSITIVE),
    ],
}

UPDATE_STOCK_RULES: dict[str, list[Rule]] = {
    "stock": [
        (is_present, E.STOCK_NOT_EMPTY),
        (is_number(), E.STOCK_IS_NUMBER),
        (min_value(0), E.STOCK_IS_POSITIVE),
    ],
    "productId": [
        (is_present, E.PRODUCT_ID),
        (is_number(), E.PRODUCT_ID_IS_NUMBER),
        (is_positive, E.PRODUCT_ID_IS_POSITIVE),
    ],
}

PAGINATION_RULES: dict[str, list[Rule]] = {
    "limit": [
        (optional(is_integer), P.LIMIT_IS_INTEGER),
        (optional(min_integer(1)), P.LIMIT_MIN_VALUE),
    ],
    "offset": [
        (optional(is_integer), P.OFFSET_IS_INTEGER),
        (optional(min_integer(0)), P.OFFSET_MIN_VALUE),
    ],
    "page": [
        (optional(is_integer), P.PAGE_IS_INTEGER),
        (optional(min_integer(1)), P.PAGE_MIN_VALUE),
    ],
}


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for ``POST /products``.

    ``price`` arrives as a JSON number or numeric string and is held as a
    ``Decimal`` with at most two decimal places.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    name: str
    product_token: str = Field(alias="productToken")
    price: Decimal
    stock: int

    @model_validator(mode="before")
    @classmethod
    def check_rules(cls, data: Any) -> Any:
        raise_for_violations(data, CREATE_PRODUCT_RULES)
        return {**data, "price": to_decimal(data["price"])}


class UpdateStockDTO(BaseModel):
    """Immutable DTO for ``PATCH /products/stock``.  Zero stock is allowed."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    product_id: int = Field(alias="productId")
    stock: int

    @model_validator(mode="before")
    @classmethod
    def check_rules(cls, data: Any) -> Any:
        raise_for_violations(data, UPDATE_STOCK_RULES)
        return data


class PaginationQueryDTO(BaseModel):
    """Immutable DTO for the ``GET /products`` query string."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    limit: int = 10
    offset: int = 0
    page: int = 1

    @model_validator(mode="before")
    @classmethod
    def check_rules(cls, data: Any) -> Any:
        raise_for_violations(data, PAGINATION_RULES)
        return data
