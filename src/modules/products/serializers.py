"""Product DRF serializers for API output and the OpenAPI document.

Input validation lives in ``dtos.py``; these serializers render model
instances with the public camelCase field names and describe request and
response shapes for drf-spectacular.
"""

from __future__ import annotations

from decimal import Decimal

from drf_spectacular.utils import extend_schema_serializer
from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Full product representation returned by ``POST /products``."""

    productToken = serializers.CharField(source="product_token")
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Product
        fields = ["id", "productToken", "name", "price", "stock", "createdAt", "updatedAt"]
        read_only_fields = ["id"]


class ProductListItemSerializer(serializers.ModelSerializer):
    """List-page row: the product without its timestamps."""

    productToken = serializers.CharField(source="product_token")

    class Meta:
        model = Product
        fields = ["id", "productToken", "name", "price", "stock"]
        read_only_fields = fields


# ---------------------------------------------------------------------------
# Documentation-only shapes
# ---------------------------------------------------------------------------


class CreateProductRequestSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=100)
    productToken = serializers.RegexField(r"^[A-Za-z0-9]+$")
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.01"))
    stock = serializers.IntegerField(min_value=1)


class UpdateStockRequestSerializer(serializers.Serializer):
    productId = serializers.IntegerField(min_value=1)
    stock = serializers.IntegerField(min_value=0)


@extend_schema_serializer(many=False)
class ProductPageSerializer(serializers.Serializer):
    data = ProductListItemSerializer(many=True)
    pageNumber = serializers.IntegerField()
    pageSize = serializers.IntegerField()
    pageCount = serializers.IntegerField()
    itemsCount = serializers.IntegerField()


class SuccessSerializer(serializers.Serializer):
    success = serializers.BooleanField()


class ErrorSerializer(serializers.Serializer):
    error = serializers.JSONField()
    timestamp = serializers.DateTimeField()
    path = serializers.CharField()


class FieldErrorSerializer(serializers.Serializer):
    field = serializers.CharField(allow_null=True)
    message = serializers.CharField()


class ConstraintErrorSerializer(serializers.Serializer):
    message = serializers.CharField()
    errors = FieldErrorSerializer(many=True)
    timestamp = serializers.DateTimeField()
