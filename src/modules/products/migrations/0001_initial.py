from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True, db_column="createdAt")),
                ("updated_at", models.DateTimeField(auto_now=True, db_column="updatedAt")),
                ("id", models.AutoField(primary_key=True, serialize=False)),
                (
                    "product_token",
                    models.CharField(
                        db_column="productToken",
                        max_length=255,
                        unique=True,
                        validators=[
                            django.core.validators.RegexValidator(
                                "^[A-Za-z0-9]+$",
                                message="Product Token should be composed only of alphanumerical characters",
                            )
                        ],
                    ),
                ),
                (
                    "name",
                    models.CharField(
                        max_length=100,
                        validators=[django.core.validators.MinLengthValidator(2)],
                    ),
                ),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.01"))],
                    ),
                ),
                ("stock", models.PositiveIntegerField()),
            ],
            options={
                "db_table": "Product",
                "ordering": ["id"],
                "constraints": [
                    models.CheckConstraint(
                        check=models.Q(("price__gt", 0)),
                        name="product_price_positive",
                    )
                ],
            },
        ),
    ]
