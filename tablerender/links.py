"""Navigation URLs for pagination, sorting and search controls.

Every link starts from the same snapshot of the table's query state and
applies one action to it:

* page N: sets the page parameter, keeps everything else;
* sort on a column: sets the sort column and the toggled order, drops the
  page parameter (sorting invalidates offsets);
* page size S: sets the page size and forces page 1;
* search submit / clear: drops the search and page parameters and carries the
  rest as hidden form fields or link parameters.

Overridden parameters come first in the generated query string, followed by
the preserved ones in the order they were collected.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .pagination import PAGE_WINDOW, PaginationInfo, page_window
from .query import build_url, parse_query_params, split_url
from .types import (
    DEFAULT_PAGE_PARAM,
    DEFAULT_PAGE_SIZE_PARAM,
    DEFAULT_SEARCH_PARAM,
    SortConfig,
    SortOrder,
    TableOptions,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageLink:
    number: int
    url: str
    active: bool


@dataclass(frozen=True)
class PageSizeLink:
    size: int
    url: str
    selected: bool


def next_sort_order(column: str, sort_by: str, sort_order: str) -> SortOrder:
    """Order a header link should request when clicked.

    Only the active column currently sorted ascending flips to descending;
    every other case requests ascending.
    """
    if column == sort_by and sort_order == "asc":
        return "desc"
    return "asc"


class LinkBuilder:
    """Builds every navigable URL for one render of one table."""

    def __init__(
        self,
        options: TableOptions,
        info: PaginationInfo,
        *,
        window: int = PAGE_WINDOW,
    ) -> None:
        self._options = options
        self._info = info
        self._window = window

        pagination = options.pagination
        self.page_param = pagination.query_param if pagination else DEFAULT_PAGE_PARAM
        self.page_size_param = (
            pagination.page_size_param if pagination else DEFAULT_PAGE_SIZE_PARAM
        )
        self.search_param = options.search.query_param if options.search else DEFAULT_SEARCH_PARAM
        self._preserve_query = pagination.preserve_query if pagination else True
        self._table_state = self._collect_table_state()

    # -- query state --------------------------------------------------------

    def _collect_table_state(self) -> dict[str, str]:
        state: dict[str, str] = {}
        sorting = self._options.sorting
        if sorting is not None and sorting.enabled and sorting.sort_by:
            state[sorting.query_param] = sorting.sort_by
            state[sorting.order_param] = sorting.sort_order

        pagination = self._options.pagination
        if pagination is not None and pagination.enabled and pagination.page_size > 0:
            state[pagination.page_size_param] = str(pagination.page_size)

        search = self._options.search
        if search is not None and search.enabled and search.search_term:
            # Inverse of the ``+`` decoding applied when the term was parsed.
            state[search.query_param] = search.search_term.replace(" ", "+")
        return state

    def _state(self, base_url: str) -> tuple[str, dict[str, str]]:
        """Return the path to link to and the query state to carry over."""
        path, query = split_url(base_url)
        params: dict[str, str] = {}
        if self._preserve_query:
            params.update(parse_query_params(query))
        params.update(self._table_state)
        return path, params

    def current_params(self, base_url: str = "") -> dict[str, str]:
        """Query state as seen from *base_url* (defaults to the pagination base)."""
        _, params = self._state(base_url or self._pagination_base())
        return params

    @staticmethod
    def _compose(
        path: str,
        overrides: dict[str, str],
        state: dict[str, str],
        drop: Iterable[str] = (),
    ) -> str:
        excluded = set(overrides) | set(drop)
        params = dict(overrides)
        params.update((key, value) for key, value in state.items() if key not in excluded)
        return build_url(path, params)

    def _pagination_base(self) -> str:
        pagination = self._options.pagination
        return pagination.base_url if pagination else ""

    def _sorting_base(self) -> str:
        sorting = self._options.sorting
        if sorting is not None and sorting.base_url:
            return sorting.base_url
        return self._pagination_base()

    def _search_base(self) -> str:
        search = self._options.search
        if search is not None and search.base_url:
            return search.base_url
        return self._pagination_base()

    # -- pagination ---------------------------------------------------------

    def page_url(self, page: int) -> str:
        path, state = self._state(self._pagination_base())
        return self._compose(path, {self.page_param: str(page)}, state)

    def prev_url(self) -> str | None:
        if not self._info.has_prev:
            return None
        return self.page_url(self._info.current_page - 1)

    def next_url(self) -> str | None:
        if not self._info.has_next:
            return None
        return self.page_url(self._info.current_page + 1)

    def page_links(self) -> list[PageLink]:
        """Links for the visible window of page numbers."""
        return [
            PageLink(
                number=number,
                url=self.page_url(number),
                active=number == self._info.current_page,
            )
            for number in page_window(self._info, self._window)
        ]

    def page_size_url(self, size: int) -> str:
        path, state = self._state(self._pagination_base())
        overrides = {self.page_size_param: str(size), self.page_param: "1"}
        return self._compose(path, overrides, state)

    def page_size_links(self, sizes: Sequence[int]) -> list[PageSizeLink]:
        current = self._options.pagination.page_size if self._options.pagination else 0
        return [
            PageSizeLink(size=size, url=self.page_size_url(size), selected=size == current)
            for size in sizes
        ]

    # -- sorting ------------------------------------------------------------

    def _sort_config(self) -> SortConfig:
        return self._options.sorting or SortConfig()

    def sort_url(self, column: str) -> str:
        sorting = self._sort_config()
        path, state = self._state(self._sorting_base())
        order = next_sort_order(column, sorting.sort_by, sorting.sort_order)
        overrides = {sorting.query_param: column, sorting.order_param: order}
        return self._compose(path, overrides, state, drop=(self.page_param,))

    def sort_links(self, headers: Sequence[str]) -> list[str]:
        """One sort-toggle URL per header, in header order."""
        sorting = self._options.sorting
        if sorting is not None and sorting.sort_by and sorting.sort_by not in headers:
            logger.warning("Sort column %r is not among the table headers", sorting.sort_by)
        return [self.sort_url(header) for header in headers]

    # -- search -------------------------------------------------------------

    def search_hidden_params(self) -> dict[str, str]:
        """Parameters a search form must resubmit alongside the new term."""
        _, state = self._state(self._search_base())
        excluded = {self.search_param, self.page_param}
        return {key: value for key, value in state.items() if key not in excluded}

    def search_action_url(self) -> str:
        path, _ = split_url(self._search_base())
        return build_url(path, self.search_hidden_params())

    def clear_search_url(self) -> str:
        """Link dropping the search term; falls back to ``?`` with nothing left."""
        url = self.search_action_url()
        return url or "?"
