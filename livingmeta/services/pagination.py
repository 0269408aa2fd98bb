"""Fixed-size pagination over an already filtered list."""

import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One slice of a result list plus the numbers needed for page links."""

    items: list[T]
    page: int
    page_size: int
    total: int
    total_pages: int

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages

    @property
    def first_index(self) -> int:
        """1-based position of the first item on this page (0 when empty)."""
        return self.page * self.page_size + 1 if self.items else 0

    @property
    def last_index(self) -> int:
        return self.page * self.page_size + len(self.items)


def page_count(total: int, page_size: int) -> int:
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return math.ceil(total / page_size)


def paginate(items: Sequence[T], page_size: int, page: int = 0) -> Page[T]:
    """Return the zero-based *page* of *items*.

    The index is NOT clamped: an out-of-range page gives an empty slice.
    Callers clamp with :func:`clamp_page` first.

    Raises:
        ValueError: If *page_size* is not positive
    """
    total = len(items)
    total_pages = page_count(total, page_size)
    start = page * page_size
    chunk = list(items[start:start + page_size]) if page >= 0 else []
    return Page(
        items=chunk,
        page=page,
        page_size=page_size,
        total=total,
        total_pages=total_pages,
    )


def clamp_page(page: int, total_pages: int) -> int:
    """Clamp *page* to ``[0, total_pages - 1]`` (0 when there are no pages)."""
    if total_pages <= 0:
        return 0
    return max(0, min(page, total_pages - 1))
