"""Product model backed by the single ``Product`` table.

Constraints declared here mirror the table definition:
- ``product_token`` is unique and limited to ASCII letters and digits.
- ``name`` holds 2 to 100 characters.
- ``price`` is a DECIMAL(10, 2) greater than zero.
- ``stock`` is never negative.

The field validators run through ``full_clean()`` in the repository, so the
store reports field-level errors before an INSERT is attempted.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinLengthValidator, MinValueValidator, RegexValidator
from django.db import models

from modules.core.models import TimestampedModel

# Public (JSON) names of the model fields.
API_FIELD_NAMES = {
    "product_token": "productToken",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
}


class Product(TimestampedModel):
    """A stock-keeping item identified by its unique ``product_token``."""

    id = models.AutoField(primary_key=True)
    product_token = models.CharField(
        max_length=255,
        unique=True,
        db_column="productToken",
        validators=[
            RegexValidator(
                r"^[A-Za-z0-9]+$",
                message="Product Token should be composed only of alphanumerical characters",
            )
        ],
    )
    name = models.CharField(max_length=100, validators=[MinLengthValidator(2)])
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    stock = models.PositiveIntegerField()

    class Meta:
        db_table = "Product"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                check=models.Q(price__gt=0),
                name="product_price_positive",
            ),
        ]

    @staticmethod
    def api_field_name(name: str) -> str:
        return API_FIELD_NAMES.get(name, name)

    def __str__(self) -> str:
        return f"{self.product_token} - {self.name}"
