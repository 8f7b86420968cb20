"""Shared Pydantic models for tablerender.

Every option object is frozen: one render call reads a snapshot of the
options and never mutates it, so a single options object can be shared
between concurrent requests.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

SortOrder = Literal["asc", "desc"]

DEFAULT_PAGE_PARAM = "page"
DEFAULT_PAGE_SIZE_PARAM = "page_size"
DEFAULT_SORT_PARAM = "sort_by"
DEFAULT_ORDER_PARAM = "sort_order"
DEFAULT_SEARCH_PARAM = "search"


class PaginationConfig(BaseModel):
    """Pagination settings for one render call.

    ``page_size <= 0`` disables paging even when ``enabled`` is set: the
    table is rendered as a single page holding every row.
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    page_size: int = 0
    current_page: int = 1
    total_count: int = Field(
        default=0,
        description="Total rows in storage (database mode). 0 means use the supplied row count.",
    )
    show_controls: bool = False
    show_info: bool = False
    show_page_sizer: bool = False
    page_size_options: list[int] = Field(
        default_factory=list,
        description="Page size choices. Empty means the configured defaults.",
    )
    base_url: str = ""
    query_param: str = DEFAULT_PAGE_PARAM
    page_size_param: str = DEFAULT_PAGE_SIZE_PARAM
    preserve_query: bool = Field(
        default=True,
        description="Carry parameters from base_url's own query string into every link.",
    )

    @field_validator("query_param", mode="before")
    @classmethod
    def _default_page_param(cls, value: str | None) -> str:
        return value or DEFAULT_PAGE_PARAM

    @field_validator("page_size_param", mode="before")
    @classmethod
    def _default_page_size_param(cls, value: str | None) -> str:
        return value or DEFAULT_PAGE_SIZE_PARAM


class SortConfig(BaseModel):
    """Server-side sorting state reflected into column header links."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    sort_by: str = ""
    sort_order: SortOrder = "asc"
    base_url: str = ""
    query_param: str = DEFAULT_SORT_PARAM
    order_param: str = DEFAULT_ORDER_PARAM

    @field_validator("sort_order", mode="before")
    @classmethod
    def _normalize_order(cls, value: object) -> str:
        if isinstance(value, str) and value.strip().lower() == "desc":
            return "desc"
        return "asc"

    @field_validator("query_param", mode="before")
    @classmethod
    def _default_sort_param(cls, value: str | None) -> str:
        return value or DEFAULT_SORT_PARAM

    @field_validator("order_param", mode="before")
    @classmethod
    def _default_order_param(cls, value: str | None) -> str:
        return value or DEFAULT_ORDER_PARAM


class SearchConfig(BaseModel):
    """Search box state.

    ``search_columns``, ``case_sensitive`` and ``min_length`` are not applied
    by the renderer; filtering belongs to the caller's query layer (see
    :mod:`tablerender.filtering` for an in-memory version).
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    search_term: str = ""
    placeholder: str = ""
    search_columns: list[str] = Field(default_factory=list)
    case_sensitive: bool = False
    base_url: str = ""
    query_param: str = DEFAULT_SEARCH_PARAM
    min_length: int = 1

    @field_validator("query_param", mode="before")
    @classmethod
    def _default_search_param(cls, value: str | None) -> str:
        return value or DEFAULT_SEARCH_PARAM


class TableOptions(BaseModel):
    """Markup and behaviour options for a rendered table."""

    model_config = ConfigDict(frozen=True)

    css_class: str = ""
    id: str = ""
    striped: bool = False
    bordered: bool = False
    responsive: bool = False
    style: str = ""
    pagination: PaginationConfig | None = None
    sorting: SortConfig | None = None
    search: SearchConfig | None = None


class TableData(BaseModel):
    """Full data set for in-memory pagination.

    Either ``records`` (uniform records, see :mod:`tablerender.records`) or
    ``headers``/``rows`` are supplied. Explicit ``headers`` win over the ones
    derived from ``records``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    headers: list[str] = Field(default_factory=list)
    rows: list[list[Any]] = Field(default_factory=list)
    records: Any = None
    options: TableOptions = Field(default_factory=TableOptions)


class DatabasePaginatedData(TableData):
    """Only the current page's rows plus the storage-side total row count."""

    total_count: int = 0
