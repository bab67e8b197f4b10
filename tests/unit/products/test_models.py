"""Unit tests for the Product model.

Covers:
- Valid creation with generated id and timestamps.
- Token uniqueness (DB constraint) and alphanumeric validator.
- Name length, price and stock validators.
- Timestamp refresh on save with ``update_fields``.
- __str__ representation.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError

from modules.products.models import Product

pytestmark = pytest.mark.unit


def _build(**overrides) -> Product:
    defaults = {
        "product_token": "TST001",
        "name": "Test Product",
        "price": Decimal("29.90"),
        "stock": 100,
    }
    defaults.update(overrides)
    return Product(**defaults)


class TestProductCreation:
    def test_create_assigns_integer_id(self, make_product):
        product = make_product()
        assert isinstance(product.id, int)
        assert product.id > 0

    def test_timestamps_set_on_insert(self, make_product):
        product = make_product()
        assert product.created_at is not None
        assert product.updated_at is not None
        assert product.created_at <= product.updated_at

    def test_table_name(self):
        assert Product._meta.db_table == "Product"

    def test_str(self):
        assert str(_build()) == "TST001 - Test Product"


class TestProductConstraints:
    def test_token_unique_at_db_level(self, make_product):
        make_product(product_token="DUP1")
        with pytest.raises(IntegrityError):
            make_product(product_token="DUP1")

    def test_token_must_be_alphanumeric(self):
        with pytest.raises(ValidationError) as exc_info:
            _build(product_token="TST_001").full_clean(validate_unique=False)
        assert "product_token" in exc_info.value.message_dict

    def test_name_min_length(self):
        with pytest.raises(ValidationError) as exc_info:
            _build(name="A").full_clean(validate_unique=False)
        assert "name" in exc_info.value.message_dict

    def test_name_max_length(self):
        with pytest.raises(ValidationError) as exc_info:
            _build(name="x" * 101).full_clean(validate_unique=False)
        assert "name" in exc_info.value.message_dict

    def test_price_must_be_positive(self):
        with pytest.raises(ValidationError) as exc_info:
            _build(price=Decimal("0.00")).full_clean(validate_unique=False)
        assert "price" in exc_info.value.message_dict

    def test_stock_cannot_be_negative(self):
        with pytest.raises(ValidationError) as exc_info:
            _build(stock=-1).full_clean(validate_unique=False)
        assert "stock" in exc_info.value.message_dict

    def test_zero_stock_is_valid(self):
        _build(stock=0).full_clean(validate_unique=False)


class TestTimestamps:
    def test_update_fields_refreshes_updated_at(self, make_product):
        product = make_product()
        before = product.updated_at

        product.stock = 7
        product.save(update_fields=["stock"])
        product.refresh_from_db()

        assert product.stock == 7
        assert product.updated_at >= before


class TestApiFieldNames:
    def test_known_names_are_camel_cased(self):
        assert Product.api_field_name("product_token") == "productToken"
        assert Product.api_field_name("created_at") == "createdAt"

    def test_unknown_names_pass_through(self):
        assert Product.api_field_name("price") == "price"
