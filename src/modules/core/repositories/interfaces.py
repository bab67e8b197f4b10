"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that domain-specific
repository interfaces extend.  Service-layer code depends on this
abstraction, never on Django ORM directly.

The contract is filter-based: mutations target rows matching a primary key
and report how many rows were affected, leaving the "nothing matched"
decision to the Service Layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, List, Mapping, Tuple, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the entity managed by the repository
    (e.g. ``Product``).
    """

    @abstractmethod
    def create(self, values: Mapping[str, Any]) -> T:
        """Insert a new entity and return it with store-generated fields."""

    @abstractmethod
    def find_and_count(self, limit: int, offset: int) -> Tuple[List[T], int]:
        """Return one window of entities together with the total row count."""

    @abstractmethod
    def delete(self, id: int) -> int:
        """Hard-delete the entity with ``id``; return the affected row count."""
