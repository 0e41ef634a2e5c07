"""
Pager
======
Deterministic ordering and fixed-size page slicing for entity listings.
"""

import math
from dataclasses import dataclass
from typing import Generic, List, Optional, Sequence, TypeVar

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100

T = TypeVar('T')


def _parse_int(value) -> Optional[int]:
    """Lenient int parsing for query-string values; None when unusable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        pass
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return int(number)


@dataclass(frozen=True)
class PageRequest:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_params(cls, page=None, limit=None) -> 'PageRequest':
        """
        Clamp raw page/limit values instead of rejecting them.

        page: anything below 1 or unparseable becomes 1.
        limit: unparseable becomes 20, otherwise clamped into [1, 100].
        """
        page_number = _parse_int(page)
        if page_number is None or page_number < 1:
            page_number = DEFAULT_PAGE

        page_size = _parse_int(limit)
        if page_size is None:
            page_size = DEFAULT_LIMIT
        page_size = min(MAX_LIMIT, max(1, page_size))

        return cls(page=page_number, limit=page_size)


@dataclass(frozen=True)
class Page(Generic[T]):
    rows: List[T]
    total: int
    page: int
    limit: int
    total_pages: int


def total_pages(total: int, limit: int) -> int:
    """Number of pages; an empty result still has one (empty) page."""
    return max(1, math.ceil(total / limit))


def paginate(rows: Sequence[T], request: PageRequest) -> Page[T]:
    """
    Order rows by total_shipments descending and slice out one page.

    The sort is stable, so rows with equal shipment counts keep their input
    order and every page boundary is reproducible for the same input.
    A page past the end yields no rows.
    """
    ordered = sorted(rows, key=lambda row: row.total_shipments, reverse=True)
    total = len(ordered)
    start = request.offset

    return Page(
        rows=ordered[start:start + request.limit],
        total=total,
        page=request.page,
        limit=request.limit,
        total_pages=total_pages(total, request.limit),
    )
