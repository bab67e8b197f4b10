"""Unit tests for Product DTOs.

Covers:
- CreateProductDTO: happy path, every field rule, unknown fields, all
  violations reported together.
- UpdateStockDTO: zero stock, numeric strings, missing fields.
- PaginationQueryDTO: defaults, integer strings, bounds.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.core.validation import messages_from
from modules.products.dtos import (
    CreateProductDTO,
    PaginationQueryDTO,
    PaginationValidationErrors,
    ProductValidationErrors,
    UpdateStockDTO,
)

pytestmark = pytest.mark.unit


def _valid_create(**overrides):
    payload = {"name": "Widget", "productToken": "WID001", "price": 9.99, "stock": 5}
    payload.update(overrides)
    return payload


def _messages(dto_class, payload):
    with pytest.raises(ValidationError) as exc_info:
        dto_class.model_validate(payload)
    return messages_from(exc_info.value)


# ===========================================================================
# CreateProductDTO
# ===========================================================================


class TestCreateProductDTOValid:
    def test_create_with_valid_data(self):
        dto = CreateProductDTO.model_validate(_valid_create())
        assert dto.name == "Widget"
        assert dto.product_token == "WID001"
        assert dto.price == Decimal("9.99")
        assert dto.stock == 5

    def test_price_numeric_string_is_coerced(self):
        dto = CreateProductDTO.model_validate(_valid_create(price="12.50"))
        assert dto.price == Decimal("12.50")

    def test_integer_price_accepted(self):
        dto = CreateProductDTO.model_validate(_valid_create(price=10))
        assert dto.price == Decimal("10")

    def test_dto_is_frozen(self):
        dto = CreateProductDTO.model_validate(_valid_create())
        with pytest.raises(ValidationError):
            dto.name = "Other"


class TestCreateProductDTOInvalid:
    def test_name_too_short(self):
        messages = _messages(CreateProductDTO, _valid_create(name="A"))
        assert messages == [ProductValidationErrors.NAME_MIN_LENGTH]

    def test_name_too_long(self):
        messages = _messages(CreateProductDTO, _valid_create(name="x" * 101))
        assert messages == [ProductValidationErrors.NAME_MAX_LENGTH]

    def test_name_missing_reports_every_name_rule(self):
        payload = _valid_create()
        del payload["name"]
        messages = _messages(CreateProductDTO, payload)
        assert ProductValidationErrors.NAME_NOT_EXISTS in messages
        assert ProductValidationErrors.NAME_IS_CHARACTER in messages

    def test_name_not_a_string(self):
        messages = _messages(CreateProductDTO, _valid_create(name=12345))
        assert ProductValidationErrors.NAME_IS_CHARACTER in messages

    def test_token_with_separator_rejected(self):
        messages = _messages(CreateProductDTO, _valid_create(productToken="WID-001"))
        assert messages == [ProductValidationErrors.PRODUCT_TOKEN_IS_ALPHANUMERIC]

    def test_token_missing(self):
        payload = _valid_create()
        del payload["productToken"]
        messages = _messages(CreateProductDTO, payload)
        assert ProductValidationErrors.PRODUCT_TOKEN_NOT_EMPTY in messages

    def test_price_with_three_decimals(self):
        messages = _messages(CreateProductDTO, _valid_create(price=10.999))
        assert messages == [ProductValidationErrors.PRICE_IS_NUMBER]

    def test_negative_price(self):
        messages = _messages(CreateProductDTO, _valid_create(price=-10.99))
        assert messages == [ProductValidationErrors.PRICE_IS_POSITIVE]

    def test_price_not_a_number(self):
        messages = _messages(CreateProductDTO, _valid_create(price="not-a-number"))
        assert ProductValidationErrors.PRICE_IS_NUMBER in messages
        assert ProductValidationErrors.PRICE_IS_POSITIVE in messages

    def test_boolean_price_rejected(self):
        messages = _messages(CreateProductDTO, _valid_create(price=True))
        assert ProductValidationErrors.PRICE_IS_NUMBER in messages

    def test_zero_stock_rejected_on_create(self):
        messages = _messages(CreateProductDTO, _valid_create(stock=0))
        assert messages == [ProductValidationErrors.STOCK_IS_POSITIVE]

    def test_stock_missing(self):
        payload = _valid_create()
        del payload["stock"]
        messages = _messages(CreateProductDTO, payload)
        assert ProductValidationErrors.STOCK_NOT_EMPTY in messages

    def test_unknown_field_rejected(self):
        messages = _messages(CreateProductDTO, _valid_create(color="red"))
        assert messages == ["property color should not exist"]

    def test_all_violations_reported_at_once(self):
        messages = _messages(
            CreateProductDTO,
            {"name": "A", "productToken": "bad token", "price": 1.234, "stock": -1},
        )
        assert set(messages) == {
            ProductValidationErrors.NAME_MIN_LENGTH,
            ProductValidationErrors.PRODUCT_TOKEN_IS_ALPHANUMERIC,
            ProductValidationErrors.PRICE_IS_NUMBER,
            ProductValidationErrors.STOCK_IS_POSITIVE,
        }

    def test_non_object_body_rejected(self):
        messages = _messages(CreateProductDTO, ["not", "an", "object"])
        assert messages == ["Request body must be a JSON object"]


# ===========================================================================
# UpdateStockDTO
# ===========================================================================


class TestUpdateStockDTO:
    def test_zero_stock_allowed(self):
        dto = UpdateStockDTO.model_validate({"productId": 1, "stock": 0})
        assert dto.product_id == 1
        assert dto.stock == 0

    def test_numeric_strings_are_converted(self):
        dto = UpdateStockDTO.model_validate({"productId": "7", "stock": "3"})
        assert dto.product_id == 7
        assert dto.stock == 3

    def test_negative_stock_rejected(self):
        messages = _messages(UpdateStockDTO, {"productId": 1, "stock": -10})
        assert messages == [ProductValidationErrors.STOCK_IS_POSITIVE]

    def test_stock_not_a_number(self):
        messages = _messages(UpdateStockDTO, {"productId": 1, "stock": "not-a-number"})
        assert ProductValidationErrors.STOCK_IS_POSITIVE in messages
        assert ProductValidationErrors.STOCK_IS_NUMBER in messages

    def test_product_id_missing(self):
        messages = _messages(UpdateStockDTO, {"stock": 50})
        assert ProductValidationErrors.PRODUCT_ID in messages

    def test_product_id_must_be_positive(self):
        messages = _messages(UpdateStockDTO, {"productId": 0, "stock": 50})
        assert messages == [ProductValidationErrors.PRODUCT_ID_IS_POSITIVE]

    def test_fractional_stock_rejected_by_type(self):
        messages = _messages(UpdateStockDTO, {"productId": 1, "stock": 1.5})
        assert len(messages) == 1
        assert messages[0].startswith("stock:")


# ===========================================================================
# PaginationQueryDTO
# ===========================================================================


class TestPaginationQueryDTO:
    def test_defaults(self):
        dto = PaginationQueryDTO.model_validate({})
        assert (dto.limit, dto.offset, dto.page) == (10, 0, 1)

    def test_query_strings_are_converted(self):
        dto = PaginationQueryDTO.model_validate({"limit": "2", "offset": "4", "page": "3"})
        assert (dto.limit, dto.offset, dto.page) == (2, 4, 3)

    def test_negative_page(self):
        messages = _messages(PaginationQueryDTO, {"page": "-1"})
        assert messages == [PaginationValidationErrors.PAGE_MIN_VALUE]

    def test_zero_limit(self):
        messages = _messages(PaginationQueryDTO, {"limit": "0"})
        assert messages == [PaginationValidationErrors.LIMIT_MIN_VALUE]

    def test_non_integer_offset(self):
        messages = _messages(PaginationQueryDTO, {"offset": "abc"})
        assert messages == [
            PaginationValidationErrors.OFFSET_IS_INTEGER,
            PaginationValidationErrors.OFFSET_MIN_VALUE,
        ]

    def test_unknown_query_parameter(self):
        messages = _messages(PaginationQueryDTO, {"sort": "name"})
        assert messages == ["property sort should not exist"]
