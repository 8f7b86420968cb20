"""Tests for TableRenderer markup assembly."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import pytest

from tablerender import renderer as renderer_mod
from tablerender.config import RendererConfig
from tablerender.errors import InvalidDataShape, TemplateError
from tablerender.renderer import TableRenderer, format_cell
from tablerender.types import (
    DatabasePaginatedData,
    PaginationConfig,
    SearchConfig,
    SortConfig,
    TableData,
    TableOptions,
)


@dataclass
class Person:
    id: int = field(metadata={"alias": "ID"})
    name: str = field(metadata={"alias": "Name"})


HEADERS = ["ID", "Name", "Email", "Age"]
ROWS = [
    [1, "John Doe", "john@example.com", 30],
    [2, "Jane Smith", "jane@example.com", 25],
    [3, "Bob Wilson", "bob@example.com", 35],
]


@pytest.fixture()
def renderer() -> TableRenderer:
    return TableRenderer(RendererConfig())


def _numbered_rows(count: int) -> list[list[object]]:
    return [[i, f"row-{i}"] for i in range(1, count + 1)]


class TestPlainTable:
    def test_classes_id_and_style(self, renderer):
        data = TableData(
            headers=HEADERS,
            rows=ROWS,
            options=TableOptions(
                css_class="user-table", id="users", striped=True, bordered=True, style="width: 50%",
            ),
        )
        result = renderer.render_html(data)
        assert '<table class="table user-table table-striped table-bordered" id="users" style="width: 50%">' in result
        assert "<th>Email</th>" in result
        assert "<td>John Doe</td>" in result
        assert result.count("<tr>") == 4
        assert "pagination" not in result

    def test_responsive_wrapper(self, renderer):
        data = TableData(headers=HEADERS, rows=ROWS, options=TableOptions(responsive=True))
        result = renderer.render_html(data)
        assert result.startswith('<div class="table-responsive"><div class="table-container">')
        assert result.endswith("</div></div>")

    def test_cells_are_escaped(self, renderer):
        data = TableData(headers=["<h>"], rows=[["<script>alert(1)</script>"]])
        result = renderer.render_html(data)
        assert "&lt;script&gt;" in result
        assert "<script>" not in result
        assert "<th>&lt;h&gt;</th>" in result

    def test_format_cell(self):
        assert format_cell(None) == ""
        assert format_cell(True) == "true"
        assert format_cell(False) == "false"
        assert format_cell(2.5) == "2.5"
        assert format_cell("a&b") == "a&amp;b"


class TestRecords:
    def test_headers_from_records(self, renderer):
        data = TableData(records=[Person(1, "Ann"), Person(2, "Bo")])
        result = renderer.render_html(data)
        assert "<th>ID</th><th>Name</th>" in result
        assert "<td>1</td><td>Ann</td>" in result

    def test_explicit_headers_override(self, renderer):
        data = TableData(headers=["Number", "Person"], records=[Person(1, "Ann")])
        result = renderer.render_html(data)
        assert "<th>Number</th><th>Person</th>" in result

    def test_invalid_records_fail_fast(self, renderer):
        with pytest.raises(InvalidDataShape):
            renderer.render_html(TableData(records=[1, 2]))


class TestInMemoryPagination:
    def test_slices_current_page(self, renderer):
        data = TableData(
            headers=["n", "label"],
            rows=_numbered_rows(47),
            options=TableOptions(
                pagination=PaginationConfig(
                    enabled=True, page_size=10, current_page=3, show_controls=True, show_info=True,
                ),
            ),
        )
        result = renderer.render_html(data)
        assert "<td>row-21</td>" in result
        assert "<td>row-30</td>" in result
        assert "<td>row-20</td>" not in result
        assert "<td>row-31</td>" not in result
        assert "Showing 21 to 30 of 47 entries" in result
        assert 'href="?page=4&amp;page_size=10">Next</a>' in result

    def test_zero_page_window_still_links_current_page(self):
        data = TableData(
            headers=["n", "label"],
            rows=_numbered_rows(30),
            options=TableOptions(
                pagination=PaginationConfig(
                    enabled=True, page_size=10, current_page=2, show_controls=True,
                ),
            ),
        )
        result = TableRenderer(RendererConfig(page_window=0)).render_html(data)
        assert '<li class="page-item active"><span class="page-link">2</span></li>' in result

    def test_page_beyond_end_is_clamped(self, renderer):
        data = TableData(
            headers=["n", "label"],
            rows=_numbered_rows(15),
            options=TableOptions(
                pagination=PaginationConfig(enabled=True, page_size=10, current_page=9, show_info=True),
            ),
        )
        result = renderer.render_html(data)
        assert "Showing 11 to 15 of 15 entries" in result

    def test_empty_table(self, renderer):
        data = TableData(
            headers=["n"],
            rows=[],
            options=TableOptions(
                pagination=PaginationConfig(enabled=True, page_size=10, show_controls=True, show_info=True),
            ),
        )
        result = renderer.render_html(data)
        assert "No records found" in result
        assert "Table pagination" not in result

    def test_controls_hidden_unless_requested(self, renderer):
        data = TableData(
            headers=["n", "label"],
            rows=_numbered_rows(30),
            options=TableOptions(pagination=PaginationConfig(enabled=True, page_size=10)),
        )
        result = renderer.render_html(data)
        assert "<td>row-10</td>" in result
        assert "<td>row-11</td>" not in result
        assert "Table pagination" not in result
        assert "pagination-info" not in result


class TestDatabasePagination:
    def _data(self, **overrides) -> DatabasePaginatedData:
        values = {
            "headers": ["n", "label"],
            "rows": _numbered_rows(10),
            "total_count": 47,
            "options": TableOptions(
                pagination=PaginationConfig(
                    enabled=True, page_size=10, current_page=3, show_controls=True,
                    show_info=True, show_page_sizer=True,
                ),
                sorting=SortConfig(enabled=True, sort_by="label", sort_order="asc"),
                search=SearchConfig(enabled=True, search_term="row"),
            ),
        }
        values.update(overrides)
        return DatabasePaginatedData(**values)

    def test_rows_are_used_as_is(self, renderer):
        result = renderer.render_paginated_html(self._data())
        assert "<td>row-1</td>" in result
        assert "<td>row-10</td>" in result
        assert "Showing 21 to 30 of 47 entries" in result

    def test_sort_header_links(self, renderer):
        result = renderer.render_paginated_html(self._data())
        assert 'href="?sort_by=label&amp;sort_order=desc&amp;page_size=10&amp;search=row"' in result
        assert 'href="?sort_by=n&amp;sort_order=asc&amp;page_size=10&amp;search=row"' in result

    def test_page_links_preserve_sort_and_search(self, renderer):
        result = renderer.render_paginated_html(self._data())
        assert 'href="?page=4&amp;sort_by=label&amp;sort_order=asc&amp;page_size=10&amp;search=row"' in result

    def test_page_sizer_uses_config_defaults(self, renderer):
        result = renderer.render_paginated_html(self._data())
        for size in (10, 25, 50, 100):
            assert f">{size} entries</option>" in result
        assert 'value="?page_size=25&amp;page=1&amp;sort_by=label&amp;sort_order=asc&amp;search=row"' in result

    def test_search_box(self, renderer):
        result = renderer.render_paginated_html(self._data())
        assert 'value="row"' in result
        assert "Clear search" in result

    def test_total_falls_back_to_pagination_config(self, renderer):
        options = TableOptions(
            pagination=PaginationConfig(
                enabled=True, page_size=10, current_page=2, total_count=25, show_info=True,
            ),
        )
        result = renderer.render_paginated_html(self._data(total_count=0, options=options))
        assert "Showing 11 to 20 of 25 entries" in result

    def test_total_falls_back_to_row_count(self, renderer):
        options = TableOptions(
            pagination=PaginationConfig(enabled=True, page_size=10, show_info=True),
        )
        result = renderer.render_paginated_html(self._data(total_count=0, options=options))
        assert "Showing 1 to 10 of 10 entries" in result

    def test_input_is_not_mutated(self, renderer):
        data = self._data()
        before = data.model_dump()
        renderer.render_paginated_html(data)
        renderer.render_paginated_html(data)
        assert data.model_dump() == before
        assert data.options.pagination.total_count == 0

    def test_unknown_sort_column_warns(self, renderer, caplog):
        data = self._data(
            options=TableOptions(sorting=SortConfig(enabled=True, sort_by="missing")),
        )
        with caplog.at_level(logging.WARNING, logger="tablerender.links"):
            renderer.render_paginated_html(data)
        assert "missing" in caplog.text


class TestRenderPage:
    def test_full_document(self, renderer):
        data = TableData(headers=HEADERS, rows=ROWS)
        result = renderer.render_page(data, title="Users & Co")
        assert result.startswith("<!DOCTYPE html>")
        assert "<title>Users &amp; Co</title>" in result
        assert 'rel="stylesheet" href="https://cdn.jsdelivr.net/npm/bootstrap@5.3.3/dist/css/bootstrap.min.css"' in result
        assert "<td>Jane Smith</td>" in result

    def test_default_title_from_config(self):
        result = TableRenderer(RendererConfig(page_title="Report")).render_page(TableData())
        assert "<title>Report</title>" in result

    def test_placeholders_in_title_are_not_expanded(self, renderer):
        result = renderer.render_page(TableData(headers=HEADERS, rows=ROWS), title="{{TABLE}} {{STYLESHEET_URL}}")
        assert "<title>{{TABLE}} {{STYLESHEET_URL}}</title>" in result
        assert result.count("<table") == 1
        assert result.count("bootstrap.min.css") == 1

    def test_database_mode_dispatch(self, renderer):
        data = DatabasePaginatedData(
            headers=["n"],
            rows=[[1]],
            total_count=30,
            options=TableOptions(pagination=PaginationConfig(enabled=True, page_size=1, show_info=True)),
        )
        assert "Showing 1 to 1 of 30 entries" in renderer.render_page(data)

    def test_missing_template(self, renderer, monkeypatch, tmp_path):
        monkeypatch.setattr(renderer_mod, "PAGE_TEMPLATE", tmp_path / "missing.html")
        with pytest.raises(TemplateError, match="failed to read"):
            renderer.render_page(TableData())

    def test_malformed_template(self, renderer, monkeypatch, tmp_path):
        template = tmp_path / "broken.html"
        template.write_text("<html>{{TITLE}}</html>", encoding="utf-8")
        monkeypatch.setattr(renderer_mod, "PAGE_TEMPLATE", template)
        with pytest.raises(TemplateError, match="TABLE"):
            renderer.render_page(TableData())
