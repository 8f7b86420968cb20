"""Caller-side search and sort over in-memory rows.

The renderer only reflects search and sort state into the markup. Callers
that keep their data in memory (the demo server, the CLI) apply the state
with these helpers before rendering; database-backed callers translate the
same configs into their query instead.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from .types import SearchConfig, SortConfig

logger = logging.getLogger(__name__)


def search_rows(
    headers: Sequence[str],
    rows: Sequence[Sequence[Any]],
    search: SearchConfig | None,
) -> list[list[Any]]:
    """Keep rows with a cell containing the search term.

    Terms shorter than ``min_length`` do not filter. ``search_columns``
    restricts the match to those headers; unknown names are ignored, and
    when none of them match, every column is searched.
    """
    if search is None or not search.enabled:
        return [list(row) for row in rows]
    term = search.search_term.strip()
    if not term or len(term) < max(search.min_length, 1):
        return [list(row) for row in rows]

    if search.search_columns:
        wanted = set(search.search_columns)
        columns = [index for index, header in enumerate(headers) if header in wanted]
        if not columns:
            logger.warning(
                "Search columns %r are not among the table headers, searching all columns",
                search.search_columns,
            )
            columns = list(range(len(headers)))
    else:
        columns = list(range(len(headers)))

    needle = term if search.case_sensitive else term.lower()
    matched: list[list[Any]] = []
    for row in rows:
        for index in columns:
            if index >= len(row) or row[index] is None:
                continue
            text = str(row[index])
            if not search.case_sensitive:
                text = text.lower()
            if needle in text:
                matched.append(list(row))
                break
    return matched


def sort_rows(
    headers: Sequence[str],
    rows: Sequence[Sequence[Any]],
    sorting: SortConfig | None,
) -> list[list[Any]]:
    """Stable sort by the active column; ``None`` values always sort last."""
    result = [list(row) for row in rows]
    if sorting is None or not sorting.enabled or not sorting.sort_by:
        return result
    if sorting.sort_by not in headers:
        logger.debug("Not sorting by unknown column %r", sorting.sort_by)
        return result

    index = list(headers).index(sorting.sort_by)
    present = [row for row in result if index < len(row) and row[index] is not None]
    missing = [row for row in result if not (index < len(row) and row[index] is not None)]

    def key(row: list[Any]) -> tuple[int, Any]:
        value = row[index]
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return (0, value)
        return (1, str(value).lower())

    present.sort(key=key, reverse=sorting.sort_order == "desc")
    return present + missing
