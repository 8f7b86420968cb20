"""Preset option bundles for common table setups.

Each builder reads page, page size, sort and search state from the raw
request query string and returns ready-to-render data.

Usage::

    query = request.url.query
    page = parse_page_from_query(query)
    rows, total = repo.fetch(offset=database_offset(page, 25), limit=25)
    data = paginated_sorted_search_data(rows, total, "/users", query, page_size=25)
    html = TableRenderer().render_paginated_html(data)
"""

from __future__ import annotations

from typing import Any

from .config import RendererConfig, get_config
from .query import (
    parse_page_from_query,
    parse_search_from_query,
    parse_sort_from_query,
)
from .types import (
    DatabasePaginatedData,
    PaginationConfig,
    SearchConfig,
    SortConfig,
    TableData,
    TableOptions,
)


def _pagination(
    query: str,
    base_url: str,
    page_size: int,
    total_count: int,
    *,
    page_sizer: bool,
    config: RendererConfig,
) -> PaginationConfig:
    return PaginationConfig(
        enabled=True,
        page_size=page_size,
        current_page=parse_page_from_query(query, config.page_param),
        total_count=total_count,
        show_controls=True,
        show_info=True,
        show_page_sizer=page_sizer,
        page_size_options=list(config.page_size_options) if page_sizer else [],
        base_url=base_url,
        query_param=config.page_param,
        page_size_param=config.page_size_param,
        preserve_query=True,
    )


def _sorting(query: str, base_url: str, config: RendererConfig) -> SortConfig:
    sort_by, sort_order = parse_sort_from_query(query, config.sort_param, config.order_param)
    return SortConfig(
        enabled=True,
        sort_by=sort_by,
        sort_order=sort_order,
        base_url=base_url,
        query_param=config.sort_param,
        order_param=config.order_param,
    )


def _search(search_term: str, base_url: str, config: RendererConfig) -> SearchConfig:
    return SearchConfig(
        enabled=True,
        search_term=search_term,
        placeholder=config.search_placeholder,
        base_url=base_url,
        query_param=config.search_param,
        min_length=1,
    )


def paginated_data(
    records: Any,
    total_count: int,
    base_url: str,
    query: str,
    page_size: int,
    *,
    config: RendererConfig | None = None,
) -> DatabasePaginatedData:
    """Database-paginated, responsive, striped and bordered table."""
    config = config or get_config()
    return DatabasePaginatedData(
        records=records,
        total_count=total_count,
        options=TableOptions(
            responsive=True,
            striped=True,
            bordered=True,
            pagination=_pagination(
                query, base_url, page_size, total_count, page_sizer=False, config=config,
            ),
        ),
    )


def paginated_sorted_data(
    records: Any,
    total_count: int,
    base_url: str,
    query: str,
    page_size: int,
    *,
    sortable: bool = True,
    config: RendererConfig | None = None,
) -> DatabasePaginatedData:
    """Like :func:`paginated_data`, plus a page size selector and sortable headers."""
    return paginated_sorted_search_data(
        records, total_count, base_url, query, page_size,
        sortable=sortable, searchable=False, config=config,
    )


def paginated_sorted_search_data(
    records: Any,
    total_count: int,
    base_url: str,
    query: str,
    page_size: int,
    *,
    sortable: bool = True,
    searchable: bool = True,
    search_term: str | None = None,
    config: RendererConfig | None = None,
) -> DatabasePaginatedData:
    """Database-paginated table with page sizer, sortable headers and a search box.

    *search_term* defaults to the term found in *query*.
    """
    config = config or get_config()
    if search_term is None:
        search_term = parse_search_from_query(query, config.search_param)
    return DatabasePaginatedData(
        records=records,
        total_count=total_count,
        options=TableOptions(
            responsive=True,
            striped=True,
            bordered=True,
            pagination=_pagination(
                query, base_url, page_size, total_count, page_sizer=True, config=config,
            ),
            sorting=_sorting(query, base_url, config) if sortable else None,
            search=_search(search_term, base_url, config) if searchable else None,
        ),
    )


def in_memory_data(
    records: Any,
    base_url: str,
    query: str,
    page_size: int,
    *,
    sortable: bool = False,
    searchable: bool = False,
    config: RendererConfig | None = None,
) -> TableData:
    """Full data set paginated in memory by :meth:`TableRenderer.render_html`."""
    config = config or get_config()
    return TableData(
        records=records,
        options=TableOptions(
            responsive=True,
            striped=True,
            bordered=True,
            pagination=_pagination(query, base_url, page_size, 0, page_sizer=True, config=config),
            sorting=_sorting(query, base_url, config) if sortable else None,
            search=(
                _search(parse_search_from_query(query, config.search_param), base_url, config)
                if searchable
                else None
            ),
        ),
    )
