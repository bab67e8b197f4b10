"""Product domain exceptions.

Raised by the Repository and Service layers.  The error boundary in
``modules.core.exceptions`` renders them as HTTP responses.
"""

from __future__ import annotations

from modules.core.exceptions import ResourceAlreadyExists, ResourceNotFound


class ProductAlreadyExists(ResourceAlreadyExists):
    """A product with the same ``productToken`` already exists."""

    def __init__(self, product_token: str) -> None:
        super().__init__(
            f"Product token '{product_token}' already registered.",
            errors=[{"field": "productToken", "message": "productToken must be unique"}],
        )
        self.product_token = product_token


class ProductNotFound(ResourceNotFound):
    """No product row matched the requested id."""

    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product with ID {product_id} not found")
        self.product_id = product_id
