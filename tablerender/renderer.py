"""Table markup assembly.

Resolves headers and rows, computes the pagination state, asks
:class:`~tablerender.links.LinkBuilder` for every URL and splices the control
fragments from :mod:`tablerender.controls` into the table markup.
"""

from __future__ import annotations

import html
import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Any

from .config import RendererConfig, get_config
from .controls import (
    render_page_sizer,
    render_pagination_info,
    render_pagination_nav,
    render_search_box,
    render_sort_header,
)
from .errors import TemplateError
from .links import LinkBuilder
from .pagination import PaginationInfo, calculate_pagination, page_rows
from .records import records_to_rows
from .types import DatabasePaginatedData, TableData, TableOptions

logger = logging.getLogger(__name__)

PAGE_TEMPLATE = Path(__file__).resolve().parent / "templates" / "table_page.html"
_PAGE_PLACEHOLDERS = ("{{TITLE}}", "{{STYLESHEET_URL}}", "{{TABLE}}")
_PLACEHOLDER_RE = re.compile(r"\{\{(TITLE|STYLESHEET_URL|TABLE)\}\}")


@lru_cache(maxsize=8)
def _load_page_template(path: str) -> str:
    try:
        template = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise TemplateError(f"failed to read page template {path}: {exc}") from exc
    missing = [marker for marker in _PAGE_PLACEHOLDERS if marker not in template]
    if missing:
        raise TemplateError(f"page template {path} is missing {', '.join(missing)}")
    return template


def format_cell(value: Any) -> str:
    """Escaped text for one table cell."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return html.escape(str(value))


def table_classes(options: TableOptions) -> str:
    classes = ["table"]
    if options.css_class:
        classes.append(options.css_class)
    if options.striped:
        classes.append("table-striped")
    if options.bordered:
        classes.append("table-bordered")
    return " ".join(classes)


def resolve_rows(data: TableData) -> tuple[list[str], list[list[Any]]]:
    """Headers and rows from ``records`` or the explicit fields.

    Raises:
        InvalidDataShape: ``records`` is not a sequence of uniform records.
    """
    if data.records is not None:
        headers, rows = records_to_rows(data.records)
        if data.headers:
            headers = list(data.headers)
        return headers, rows
    return list(data.headers), [list(row) for row in data.rows]


class TableRenderer:
    """Renders :class:`TableData` into HTML strings.

    A renderer holds only its config and is safe to share between threads.
    """

    def __init__(self, config: RendererConfig | None = None) -> None:
        self.config = config or get_config()

    # -- entry points -------------------------------------------------------

    def render_html(self, data: TableData) -> str:
        """Render the full in-memory data set, slicing out the current page."""
        headers, rows = resolve_rows(data)
        info = calculate_pagination(len(rows), data.options.pagination)
        return self._render_table(headers, page_rows(rows, info), info, data.options)

    def render_paginated_html(self, data: DatabasePaginatedData) -> str:
        """Render rows that are already the current page of a larger result.

        The total comes from ``data.total_count``, falling back to the
        pagination config's ``total_count`` and then to the row count.
        """
        headers, rows = resolve_rows(data)
        options = data.options
        pagination = options.pagination
        if pagination is not None and data.total_count > 0:
            options = options.model_copy(
                update={"pagination": pagination.model_copy(update={"total_count": data.total_count})}
            )
        info = calculate_pagination(len(rows), options.pagination, database=True)
        return self._render_table(headers, rows, info, options)

    def render_page(self, data: TableData, title: str | None = None) -> str:
        """Render a complete HTML document around the table.

        Raises:
            TemplateError: the page template is unreadable or malformed.
        """
        if isinstance(data, DatabasePaginatedData):
            table = self.render_paginated_html(data)
        else:
            table = self.render_html(data)
        template = _load_page_template(str(PAGE_TEMPLATE))
        values = {
            "TITLE": html.escape(title or self.config.page_title),
            "STYLESHEET_URL": html.escape(self.config.stylesheet_url),
            "TABLE": table,
        }
        # Single pass: substituted values are never rescanned for placeholders.
        return _PLACEHOLDER_RE.sub(lambda match: values[match.group(1)], template)

    # -- assembly -----------------------------------------------------------

    def _render_header_cells(
        self, headers: list[str], options: TableOptions, links: LinkBuilder
    ) -> str:
        sorting = options.sorting
        if sorting is None or not sorting.enabled:
            return "".join(f"<th>{html.escape(header)}</th>" for header in headers)
        return "".join(
            "<th>{cell}</th>".format(
                cell=render_sort_header(header, url, sorting.sort_by, sorting.sort_order)
            )
            for header, url in zip(headers, links.sort_links(headers))
        )

    def _render_table(
        self,
        headers: list[str],
        rows: list[list[Any]],
        info: PaginationInfo,
        options: TableOptions,
    ) -> str:
        logger.debug(
            "Rendering %d rows (page %d of %d, %d total)",
            len(rows), info.current_page, info.total_pages, info.total_rows,
        )
        links = LinkBuilder(options, info, window=self.config.page_window)
        pagination = options.pagination

        nav = ""
        info_line = ""
        page_sizer = ""
        if pagination is not None and pagination.enabled:
            if pagination.show_controls:
                nav = render_pagination_nav(info, links)
            if pagination.show_info:
                info_line = render_pagination_info(info)
            if pagination.show_page_sizer:
                sizes = pagination.page_size_options or list(self.config.page_size_options)
                page_sizer = render_page_sizer(links, sizes)

        search_box = render_search_box(options.search, links, self.config.search_placeholder)

        body = "\n".join(
            "<tr>{cells}</tr>".format(
                cells="".join(f"<td>{format_cell(value)}</td>" for value in row)
            )
            for row in rows
        )

        attributes = ' class="{classes}"'.format(classes=html.escape(table_classes(options)))
        if options.id:
            attributes += ' id="{id}"'.format(id=html.escape(options.id))
        if options.style:
            attributes += ' style="{style}"'.format(style=html.escape(options.style))

        markup = (
            '<div class="table-container">\n'
            "{search}\n"
            '<div class="d-flex justify-content-between align-items-center mb-2">'
            "<div>{page_sizer}</div>"
            "<div>{info}</div>"
            "</div>\n"
            "<table{attributes}>\n"
            "<thead><tr>{header_cells}</tr></thead>\n"
            "<tbody>\n{body}\n</tbody>\n"
            "</table>\n"
            "{nav}\n"
            "</div>"
        ).format(
            search=search_box,
            page_sizer=page_sizer,
            info=info_line,
            attributes=attributes,
            header_cells=self._render_header_cells(headers, options, links),
            body=body,
            nav=nav,
        )

        if options.responsive:
            return f'<div class="table-responsive">{markup}</div>'
        return markup
