"""
Pagination stage of the visitor list engine
"""
import math
from typing import Sequence, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10


class PageWindow(BaseModel):
    """Position of one page within a result set"""
    page: int
    page_count: int
    page_size: int
    total: int

    @property
    def start(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def end(self) -> int:
        return min(self.page * self.page_size, self.total)

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.page_count


def page_count(total: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """Number of pages, an empty result is still one (empty) page"""
    if page_size < 1:
        raise ValueError("page_size must be positive")
    return max(1, math.ceil(total / page_size))


def clamp_page(page: int, count: int) -> int:
    return min(max(page, 1), count)


def paginate(rows: Sequence[T], page: int, page_size: int = DEFAULT_PAGE_SIZE) -> tuple[list[T], PageWindow]:
    """Slice out one page; out of range pages are clamped to the nearest valid page"""
    total = len(rows)
    window = PageWindow(
        page=clamp_page(page, page_count(total, page_size)),
        page_count=page_count(total, page_size),
        page_size=page_size,
        total=total,
    )
    return list(rows[window.start:window.end]), window
