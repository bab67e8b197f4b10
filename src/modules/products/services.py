"""Product service layer (Use Cases).

Orchestrates business logic for the Product table, delegating persistence
to the injected ``IProductRepository``.

Business rules enforced here:
- ``productToken`` must be unique (``ProductAlreadyExists``).
- Stock updates and deletes that match no row raise ``ProductNotFound``
  carrying the requested id.
- List pages echo the requested ``page`` / ``limit``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict

import structlog

from modules.core.pagination import PaginatedResult
from modules.products.exceptions import ProductAlreadyExists, ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateStockDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, dto: CreateProductDTO) -> Product:
        """Insert a new product and return it with id and timestamps.

        Raises:
            ProductAlreadyExists: if ``productToken`` is already taken.
        """
        log = logger.bind(product_token=dto.product_token)

        if self._repo.get_by_token(dto.product_token):
            log.warning("product.duplicate_token")
            raise ProductAlreadyExists(dto.product_token)

        product = self._repo.create(
            {
                "name": dto.name,
                "product_token": dto.product_token,
                "price": dto.price,
                "stock": dto.stock,
            }
        )
        log.info("product.created", product_id=product.id)
        return product

    def update_stock(self, dto: UpdateStockDTO) -> Dict[str, bool]:
        """Set the stock of one product.

        Raises:
            ProductNotFound: if no product has ``dto.product_id``.
        """
        if self._repo.update_stock(dto.product_id, dto.stock) == 0:
            raise ProductNotFound(dto.product_id)
        return {"success": True}

    def delete_product(self, id: int) -> Dict[str, bool]:
        """Hard-delete one product.

        Raises:
            ProductNotFound: if no product has ``id``.
        """
        if self._repo.delete(id) == 0:
            raise ProductNotFound(id)
        return {"success": True}

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self, limit: int, offset: int, page: int) -> PaginatedResult[Product]:
        """Return at most ``limit`` products starting at ``offset``."""
        rows, items_count = self._repo.find_and_count(limit=limit, offset=offset)
        return PaginatedResult.build(rows, items_count=items_count, limit=limit, page=page)
