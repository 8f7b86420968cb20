"""Server-side pagination state and database paging helpers."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

from .types import PaginationConfig

T = TypeVar("T")

DEFAULT_DATABASE_LIMIT = 10
PAGE_WINDOW = 5


@dataclass(frozen=True)
class PaginationInfo:
    """Computed pagination state.

    ``start_row``/``end_row`` are 1-indexed and inclusive. When the table is
    empty ``end_row`` is 0, so ``start_row > end_row`` marks an empty page.
    """

    current_page: int
    total_pages: int
    total_rows: int
    page_size: int

    @property
    def start_row(self) -> int:
        return (self.current_page - 1) * self.page_size + 1

    @property
    def end_row(self) -> int:
        return min(self.current_page * self.page_size, self.total_rows)

    @property
    def offset(self) -> int:
        return (self.current_page - 1) * self.page_size

    @property
    def is_empty(self) -> bool:
        return self.start_row > self.end_row

    @property
    def has_prev(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages


def single_page(row_count: int) -> PaginationInfo:
    """State for an unpaginated table: one page holding every row."""
    return PaginationInfo(
        current_page=1,
        total_pages=1,
        total_rows=row_count,
        page_size=row_count,
    )


def paginate(total_rows: int, page: int = 1, page_size: int = 20) -> PaginationInfo:
    """Compute pagination state, clamping *page* to ``[1, total_pages]``."""
    total_rows = max(total_rows, 0)
    if page_size <= 0:
        return single_page(total_rows)
    total_pages = max(1, -(-total_rows // page_size))
    page = max(1, min(page, total_pages))
    return PaginationInfo(
        current_page=page,
        total_pages=total_pages,
        total_rows=total_rows,
        page_size=page_size,
    )


def calculate_pagination(
    row_count: int,
    config: PaginationConfig | None,
    *,
    database: bool = False,
) -> PaginationInfo:
    """Compute the pagination state for one render.

    In-memory mode (the default) treats *row_count* as the size of the full
    data set. Database mode treats it as the size of the current page and
    takes the total from ``config.total_count``, falling back to *row_count*
    when no total was supplied.
    """
    if config is None or not config.enabled or config.page_size <= 0:
        return single_page(row_count)

    total_rows = row_count
    if database and config.total_count > 0:
        total_rows = config.total_count
    return paginate(total_rows, config.current_page, config.page_size)


def page_rows(rows: Sequence[T], info: PaginationInfo) -> list[T]:
    """Slice the current page out of the full in-memory row list."""
    if info.is_empty:
        return []
    return list(rows[info.start_row - 1 : info.end_row])


def page_window(info: PaginationInfo, width: int = PAGE_WINDOW) -> range:
    """Return the page numbers to show as links.

    Small page counts show every page. Larger ones show a *width*-wide
    window centred on the current page and shifted, not narrowed, when it
    would run past either end.
    """
    width = max(width, 1)
    if info.total_pages <= width:
        return range(1, info.total_pages + 1)

    start = max(1, info.current_page - width // 2)
    end = start + width - 1
    if end > info.total_pages:
        end = info.total_pages
        start = max(1, end - width + 1)
    return range(start, end + 1)


def database_offset(page: int, page_size: int) -> int:
    """OFFSET for a database query fetching *page*."""
    return (max(page, 1) - 1) * page_size


def database_limit(page_size: int) -> int:
    """LIMIT for a database query; non-positive sizes fall back to 10."""
    if page_size <= 0:
        return DEFAULT_DATABASE_LIMIT
    return page_size
