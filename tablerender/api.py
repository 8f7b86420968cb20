"""Demo web server for tablerender.

Serves a people directory through the query-parameter protocol: the
handler reads page, page size, sort and search state from the request's
query string, applies search and sort to its in-memory "database", fetches
one page with offset/limit and renders it in database-paginated mode.

Run locally::

    uvicorn tablerender.api:web_app --reload
    # or
    tablerender serve --port 8080
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from .config import RendererConfig, get_config
from .errors import TableRenderError
from .filtering import search_rows, sort_rows
from .pagination import database_limit, database_offset, paginate
from .presets import paginated_sorted_search_data
from .query import parse_page_size_from_query
from .records import records_to_rows
from .renderer import TableRenderer
from .types import DatabasePaginatedData

logger = logging.getLogger(__name__)

TABLE_PATH = "/v1/table"

web_app = FastAPI(
    title="tablerender demo",
    description="Server-rendered tables with query-string pagination, sorting and search",
    version="0.1.0",
)


@dataclass(frozen=True)
class Person:
    id: int = field(metadata={"alias": "ID"})
    name: str = field(metadata={"alias": "Name"})
    email: str = field(metadata={"alias": "Email"})
    age: int = field(metadata={"alias": "Age"})
    city: str = field(metadata={"alias": "City"})


_FIRST_NAMES = ("John", "Jane", "Bob", "Alice", "Carlos", "Mei", "Priya", "Tom", "Sara", "Omar")
_LAST_NAMES = ("Doe", "Smith", "Wilson", "Garcia", "Chen", "Patel", "Novak", "Okafor")
_CITIES = ("Berlin", "Lagos", "Lima", "Osaka", "Toronto", "Pune")

PEOPLE: tuple[Person, ...] = tuple(
    Person(
        id=index + 1,
        name=f"{_FIRST_NAMES[index % len(_FIRST_NAMES)]} {_LAST_NAMES[index % len(_LAST_NAMES)]}",
        email=(
            f"{_FIRST_NAMES[index % len(_FIRST_NAMES)].lower()}"
            f".{_LAST_NAMES[index % len(_LAST_NAMES)].lower()}{index + 1}@example.com"
        ),
        age=21 + (index * 7) % 45,
        city=_CITIES[index % len(_CITIES)],
    )
    for index in range(47)
)


class HealthResponse(BaseModel):
    status: str


def _runtime_config() -> RendererConfig:
    return get_config()


def people_table(query: str, config: RendererConfig) -> DatabasePaginatedData:
    """Query the demo directory the way a database-backed handler would."""
    page_size = parse_page_size_from_query(
        query, config.default_page_size, config.page_size_param, config.max_page_size,
    )
    state = paginated_sorted_search_data(None, 0, TABLE_PATH, query, page_size, config=config)
    options = state.options

    headers, rows = records_to_rows(list(PEOPLE))
    matching = sort_rows(headers, search_rows(headers, rows, options.search), options.sorting)
    total = len(matching)

    info = paginate(total, options.pagination.current_page if options.pagination else 1, page_size)
    offset = database_offset(info.current_page, page_size)
    current_rows = matching[offset : offset + database_limit(page_size)]
    logger.debug("Demo query matched %d of %d people, page %d", total, len(rows), info.current_page)

    return DatabasePaginatedData(
        headers=headers,
        rows=current_rows,
        total_count=total,
        options=options,
    )


@web_app.get(TABLE_PATH, response_class=HTMLResponse)
async def table_page(request: Request) -> HTMLResponse:
    """Serve the demo table as a full HTML page."""
    config = _runtime_config()
    data = people_table(request.url.query, config)
    try:
        content = TableRenderer(config).render_page(data, title="People")
    except TableRenderError as e:
        logger.error("Failed to render %s: %s", TABLE_PATH, e, exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e
    return HTMLResponse(content=content)


@web_app.get(f"{TABLE_PATH}/fragment", response_class=HTMLResponse)
async def table_fragment(request: Request) -> HTMLResponse:
    """Serve only the table fragment, for embedding in another page."""
    config = _runtime_config()
    data = people_table(request.url.query, config)
    try:
        content = TableRenderer(config).render_paginated_html(data)
    except TableRenderError as e:
        logger.error("Failed to render %s/fragment: %s", TABLE_PATH, e, exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e
    return HTMLResponse(content=content)


@web_app.get("/health")
async def health_check() -> HealthResponse:
    return HealthResponse(status="healthy")


@web_app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "tablerender demo",
        "version": "0.1.0",
        "table": TABLE_PATH,
        "docs": "/docs",
    }


def main(host: str | None = None, port: int | None = None) -> None:
    """Run the demo server with uvicorn."""
    host = host or os.environ.get("TABLERENDER_API_HOST", "127.0.0.1")
    port = port or int(os.environ.get("TABLERENDER_API_PORT", "8080"))
    uvicorn.run(web_app, host=host, port=port)


if __name__ == "__main__":
    main()
