"""Offset/limit pagination envelope."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    """One window of rows plus the metadata returned as the page wrapper.

    ``page_number`` and ``page_size`` echo what the caller asked for; they
    are not derived from the offset used to fetch ``data``.
    """

    data: List[T]
    page_number: int
    page_size: int
    page_count: int
    items_count: int

    @classmethod
    def build(
        cls, data: List[T], *, items_count: int, limit: int, page: int
    ) -> PaginatedResult[T]:
        return cls(
            data=data,
            page_number=page,
            page_size=limit,
            page_count=math.ceil(items_count / limit),
            items_count=items_count,
        )

    def as_payload(self, data: Any) -> Dict[str, Any]:
        """Render the page wrapper around already-serialized ``data``."""
        return {
            "data": data,
            "pageNumber": self.page_number,
            "pageSize": self.page_size,
            "pageCount": self.page_count,
            "itemsCount": self.items_count,
        }
