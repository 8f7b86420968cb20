"""HTML fragments for the table's navigation controls.

These functions only assemble markup. Every URL comes pre-built from
:class:`~tablerender.links.LinkBuilder`; every value is escaped here.
"""

from __future__ import annotations

import html
from collections.abc import Sequence

from .links import LinkBuilder
from .pagination import PaginationInfo
from .types import SearchConfig

DEFAULT_PAGE_SIZE_OPTIONS = (10, 25, 50, 100)
DEFAULT_SEARCH_PLACEHOLDER = "Search all columns..."

SORT_ASC_MARKER = '<span style="font-size: 0.8em;">&#9650;</span>'
SORT_DESC_MARKER = '<span style="font-size: 0.8em;">&#9660;</span>'
SORT_NONE_MARKER = '<span style="font-size: 0.8em; color: #ccc;">&#11021;</span>'


def _attr(value: object) -> str:
    return html.escape(str(value), quote=True)


def render_pagination_nav(info: PaginationInfo, links: LinkBuilder) -> str:
    """Render Previous / page numbers / Next.

    Returns an empty string when everything fits on one page.
    """
    if info.total_pages <= 1:
        return ""

    items: list[str] = []

    prev_url = links.prev_url()
    if prev_url is not None:
        items.append(
            '<li class="page-item"><a class="page-link" href="{url}">Previous</a></li>'.format(
                url=_attr(prev_url),
            )
        )
    else:
        items.append('<li class="page-item disabled"><span class="page-link">Previous</span></li>')

    for link in links.page_links():
        if link.active:
            items.append(
                '<li class="page-item active"><span class="page-link">{number}</span></li>'.format(
                    number=link.number,
                )
            )
        else:
            items.append(
                '<li class="page-item"><a class="page-link" href="{url}">{number}</a></li>'.format(
                    url=_attr(link.url),
                    number=link.number,
                )
            )

    next_url = links.next_url()
    if next_url is not None:
        items.append(
            '<li class="page-item"><a class="page-link" href="{url}">Next</a></li>'.format(
                url=_attr(next_url),
            )
        )
    else:
        items.append('<li class="page-item disabled"><span class="page-link">Next</span></li>')

    return (
        '<nav aria-label="Table pagination">'
        '<ul class="pagination">{items}</ul>'
        "</nav>"
    ).format(items="".join(items))


def render_pagination_info(info: PaginationInfo) -> str:
    """Render the "Showing A to B of N entries" line."""
    if info.total_rows == 0:
        return '<div class="pagination-info">No records found</div>'
    return (
        '<div class="pagination-info">Showing {start} to {end} of {total} entries</div>'
    ).format(start=info.start_row, end=info.end_row, total=info.total_rows)


def render_page_sizer(
    links: LinkBuilder,
    sizes: Sequence[int] = DEFAULT_PAGE_SIZE_OPTIONS,
) -> str:
    """Render the page size dropdown; each option's value is its target URL."""
    options = "".join(
        '<option value="{url}"{selected}>{size} entries</option>'.format(
            url=_attr(link.url),
            selected=" selected" if link.selected else "",
            size=link.size,
        )
        for link in links.page_size_links(sizes)
    )
    return (
        '<div class="page-size-control d-flex align-items-center mb-3">'
        '<label for="page-size-select" class="form-label me-2 mb-0">Show:</label>'
        '<select id="page-size-select" class="form-select form-select-sm" style="width: auto;"'
        ' onchange="window.location.href=this.value">'
        "{options}"
        "</select>"
        "</div>"
    ).format(options=options)


def render_search_box(
    search: SearchConfig | None,
    links: LinkBuilder,
    default_placeholder: str = DEFAULT_SEARCH_PLACEHOLDER,
) -> str:
    """Render the GET search form.

    The form resubmits every preserved parameter as a hidden field and
    leaves the page parameter out, so a new search starts on page 1.
    """
    if search is None or not search.enabled:
        return ""

    hidden = "".join(
        '<input type="hidden" name="{name}" value="{value}">'.format(
            name=_attr(name), value=_attr(value)
        )
        for name, value in links.search_hidden_params().items()
    )

    clear = ""
    if search.search_term:
        clear = (
            '<a href="{url}" class="btn btn-outline-danger" title="Clear search">'
            '<i class="fas fa-times"></i>'
            "</a>"
        ).format(url=_attr(links.clear_search_url()))

    return (
        '<div class="search-control mb-3">'
        '<form method="GET" action="{action}" class="d-flex align-items-center">'
        "{hidden}"
        '<div class="input-group" style="max-width: 300px;">'
        '<input type="text" name="{name}" class="form-control" placeholder="{placeholder}" value="{term}">'
        '<button class="btn btn-outline-secondary" type="submit">'
        '<i class="fas fa-search"></i> Search'
        "</button>"
        "{clear}"
        "</div>"
        "</form>"
        "</div>"
    ).format(
        action=_attr(links.search_action_url()),
        hidden=hidden,
        name=_attr(search.query_param),
        placeholder=_attr(search.placeholder or default_placeholder),
        term=_attr(search.search_term),
        clear=clear,
    )


def render_sort_header(header: str, url: str, sort_by: str, sort_order: str) -> str:
    """Render a sortable column heading with its direction marker."""
    if header == sort_by:
        marker = SORT_ASC_MARKER if sort_order == "asc" else SORT_DESC_MARKER
    else:
        marker = SORT_NONE_MARKER
    return (
        '<a href="{url}" style="text-decoration: none; color: inherit;">{header} {marker}</a>'
    ).format(url=_attr(url), header=html.escape(header), marker=marker)
