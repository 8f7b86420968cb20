"""tablerender CLI.

Usage:
    tablerender render users.json --query "page=2&sort_by=Name" --sortable
    tablerender render users.json --full-page --output users.html
    tablerender serve --port 8080

Input files hold either ``{"headers": [...], "rows": [[...], ...]}`` or a
list of JSON objects sharing the same keys.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from .config import get_config
from .errors import TableRenderError
from .filtering import search_rows, sort_rows
from .presets import in_memory_data
from .query import parse_page_size_from_query
from .records import records_to_rows
from .renderer import TableRenderer
from .types import TableData


def load_table(path: str) -> tuple[list[str], list[list[Any]]]:
    """Read headers and rows from a JSON file.

    Raises:
        InvalidDataShape: the JSON is neither a table object nor a record list.
    """
    with open(path, encoding="utf-8") as f:
        payload = json.load(f)
    if isinstance(payload, dict) and "rows" in payload:
        return [str(h) for h in payload.get("headers", [])], [list(r) for r in payload["rows"]]
    return records_to_rows(payload)


def cmd_render(args: argparse.Namespace) -> int:
    """Render a JSON table file to HTML."""
    config = get_config()
    query = args.query.removeprefix("?")
    page_size = args.page_size or parse_page_size_from_query(
        query, config.default_page_size, config.page_size_param, config.max_page_size,
    )

    try:
        headers, rows = load_table(args.input)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: cannot read {args.input}: {e}", file=sys.stderr)
        return 1
    except TableRenderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    state = in_memory_data(
        None, args.base_url, query, page_size,
        sortable=args.sortable, searchable=args.searchable, config=config,
    )
    rows = sort_rows(headers, search_rows(headers, rows, state.options.search), state.options.sorting)
    data = TableData(headers=headers, rows=rows, options=state.options)

    renderer = TableRenderer(config)
    try:
        output = renderer.render_page(data, title=args.title) if args.full_page else renderer.render_html(data)
    except TableRenderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        print(f"Wrote {args.output}")
    else:
        print(output)
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the demo server."""
    from .api import main as serve

    serve(host=args.host, port=args.port)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="tablerender",
        description="Render tables to HTML with query-string pagination, sorting and search",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    render_parser = subparsers.add_parser("render", help="Render a JSON table file to HTML")
    render_parser.add_argument("input", help="JSON file with headers/rows or a list of objects")
    render_parser.add_argument(
        "--query",
        default="",
        help="Query string holding page, page size, sort and search state",
    )
    render_parser.add_argument(
        "--page-size",
        type=int,
        default=0,
        help="Rows per page (default: from --query or config)",
    )
    render_parser.add_argument("--base-url", default="", help="Base URL for generated links")
    render_parser.add_argument("--sortable", action="store_true", help="Render sortable headers")
    render_parser.add_argument("--searchable", action="store_true", help="Render a search box")
    render_parser.add_argument("--full-page", action="store_true", help="Wrap in an HTML document")
    render_parser.add_argument("--title", default=None, help="Page title for --full-page")
    render_parser.add_argument("--output", "-o", default=None, help="Write to a file instead of stdout")
    render_parser.set_defaults(func=cmd_render)

    serve_parser = subparsers.add_parser("serve", help="Run the demo web server")
    serve_parser.add_argument("--host", default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Port")
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
