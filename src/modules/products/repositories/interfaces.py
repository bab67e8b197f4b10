"""Product repository interface.

Extends ``IRepository[Product]`` with the filtered stock update and the
token look-up used to report duplicate tokens.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product table."""

    @abstractmethod
    def update_stock(self, id: int, stock: int) -> int:
        """Set ``stock`` on the row with ``id``; return the affected row count."""

    @abstractmethod
    def get_by_token(self, product_token: str) -> Optional["Product"]:
        """Retrieve a product by its unique token."""
