"""Query-string parsing and URL composition.

Values are passed through untouched: nothing is percent-decoded or
percent-encoded, so links generated here round-trip byte-for-byte with the
query strings they were parsed from. A value containing ``&`` or ``=`` will
corrupt the generated URL; callers that need such values must encode them
before handing them over. The only decoding performed is ``+`` to space for
search terms (:func:`parse_search_from_query`).
"""

from __future__ import annotations

from collections.abc import Mapping

from .types import (
    DEFAULT_ORDER_PARAM,
    DEFAULT_PAGE_PARAM,
    DEFAULT_PAGE_SIZE_PARAM,
    DEFAULT_SEARCH_PARAM,
    DEFAULT_SORT_PARAM,
    SortOrder,
)


def split_url(url: str) -> tuple[str, str]:
    """Split *url* at the first ``?`` into ``(path, query)``."""
    path, _, query = url.partition("?")
    return path, query


def parse_query_params(url_or_query: str) -> dict[str, str]:
    """Parse a URL or bare query string into a ``name -> value`` mapping.

    Pairs without ``=`` are dropped and the last occurrence of a repeated
    key wins. Empty input yields an empty mapping.
    """
    params: dict[str, str] = {}
    if not url_or_query:
        return params

    query = url_or_query
    if "?" in query:
        _, query = split_url(query)
    query = query.removeprefix("?")

    for pair in query.split("&"):
        if "=" not in pair:
            continue
        key, _, value = pair.partition("=")
        params[key] = value
    return params


def encode_query(params: Mapping[str, str]) -> str:
    return "&".join(f"{key}={value}" for key, value in params.items())


def build_url(base_url: str, params: Mapping[str, str]) -> str:
    """Append *params* to *base_url* in mapping order.

    An empty base produces a relative ``?query`` link; a base that already
    carries a query string is extended with ``&``.
    """
    if not params:
        return base_url
    query = encode_query(params)
    if not base_url:
        return f"?{query}"
    if "?" in base_url:
        return f"{base_url}&{query}"
    return f"{base_url}?{query}"


# ---------------------------------------------------------------------------
# Request helpers
# ---------------------------------------------------------------------------


def _positive_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        number = int(value)
    except ValueError:
        return None
    return number if number > 0 else None


def parse_page_from_query(query: str, param: str = DEFAULT_PAGE_PARAM) -> int:
    """Return the requested page, or 1 when it is missing or not a positive int."""
    page = _positive_int(parse_query_params(query).get(param or DEFAULT_PAGE_PARAM))
    return page or 1


def parse_page_size_from_query(
    query: str,
    default: int,
    param: str = DEFAULT_PAGE_SIZE_PARAM,
    max_page_size: int | None = None,
) -> int:
    """Return the requested page size, falling back to *default*.

    When *max_page_size* is given the result is capped to it.
    """
    size = _positive_int(parse_query_params(query).get(param or DEFAULT_PAGE_SIZE_PARAM))
    if size is None:
        size = default
    if max_page_size is not None and size > max_page_size:
        size = max_page_size
    return size


def parse_sort_from_query(
    query: str,
    sort_param: str = DEFAULT_SORT_PARAM,
    order_param: str = DEFAULT_ORDER_PARAM,
) -> tuple[str, SortOrder]:
    """Return ``(sort_by, sort_order)``; the order is ``"desc"`` only when spelled so."""
    params = parse_query_params(query)
    sort_by = params.get(sort_param or DEFAULT_SORT_PARAM, "")
    order: SortOrder = "desc" if params.get(order_param or DEFAULT_ORDER_PARAM) == "desc" else "asc"
    return sort_by, order


def parse_search_from_query(query: str, param: str = DEFAULT_SEARCH_PARAM) -> str:
    """Return the search term with ``+`` decoded to spaces."""
    term = parse_query_params(query).get(param or DEFAULT_SEARCH_PARAM, "")
    return term.replace("+", " ")
