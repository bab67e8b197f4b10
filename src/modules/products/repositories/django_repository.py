"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.  Mutations are
single filtered statements that report how many rows they touched; the
Service Layer decides what a zero count means.

Store errors are translated at this seam:
- field validator failures become ``StoreValidationFailed``;
- a unique-constraint ``IntegrityError`` on the token becomes
  ``ProductAlreadyExists``.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Tuple

import structlog
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.utils import timezone

from modules.core.exceptions import StoreValidationFailed
from modules.products.exceptions import ProductAlreadyExists
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

# Columns fetched for list pages; timestamps are left out.
LIST_FIELDS = ("id", "product_token", "name", "price", "stock")


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def create(self, values: Mapping[str, Any]) -> Product:
        """Validate and insert a product; return it with id and timestamps."""
        product = Product(**values)
        try:
            product.full_clean(validate_unique=False)
        except ValidationError as exc:
            raise StoreValidationFailed(
                "Product rejected by the store.",
                errors=[
                    {"field": Product.api_field_name(name), "message": message}
                    for name, messages in exc.message_dict.items()
                    for message in messages
                ],
            ) from exc

        try:
            # Savepoint keeps the connection usable after a constraint error.
            with transaction.atomic():
                product.save(force_insert=True)
        except IntegrityError as exc:
            if self.get_by_token(product.product_token) is not None:
                raise ProductAlreadyExists(product.product_token) from exc
            raise

        logger.info(
            "product.saved",
            product_id=product.id,
            product_token=product.product_token,
        )
        return product

    def find_and_count(self, limit: int, offset: int) -> Tuple[List[Product], int]:
        """Return ``limit`` products starting at ``offset`` plus the total count.

        The window is clipped to the row count so arbitrarily large ``limit``
        and ``offset`` values never reach the LIMIT/OFFSET clause.
        """
        queryset = Product.objects.order_by("id")
        items_count = queryset.count()
        if offset >= items_count:
            return [], items_count
        end = offset + min(limit, items_count - offset)
        rows = list(queryset.only(*LIST_FIELDS)[offset:end])
        return rows, items_count

    def update_stock(self, id: int, stock: int) -> int:
        """Set ``stock`` for the row with ``id``; ``updated_at`` is refreshed too.

        ``QuerySet.update`` bypasses ``auto_now`` and field validators, hence the
        explicit timestamp and range check.
        """
        try:
            Product._meta.get_field("stock").run_validators(stock)
        except ValidationError as exc:
            raise StoreValidationFailed(
                "Stock rejected by the store.",
                errors=[{"field": "stock", "message": message} for message in exc.messages],
            ) from exc

        updated = Product.objects.filter(id=id).update(
            stock=stock, updated_at=timezone.now()
        )
        logger.info("product.stock_updated", product_id=id, stock=stock, rows=updated)
        return updated

    def delete(self, id: int) -> int:
        """Hard-delete the product with ``id``; return the affected row count."""
        deleted, _ = Product.objects.filter(id=id).delete()
        logger.info("product.deleted", product_id=id, rows=deleted)
        return deleted

    def get_by_token(self, product_token: str) -> Optional[Product]:
        return Product.objects.filter(product_token=product_token).first()
