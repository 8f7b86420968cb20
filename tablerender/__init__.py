"""Server-rendered HTML tables with query-string pagination, sorting and search."""

from .errors import InvalidDataShape, TableRenderError, TemplateError
from .renderer import TableRenderer
from .types import DatabasePaginatedData, TableData, TableOptions

__all__ = [
    "DatabasePaginatedData",
    "InvalidDataShape",
    "TableData",
    "TableOptions",
    "TableRenderError",
    "TableRenderer",
    "TemplateError",
]
