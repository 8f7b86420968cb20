"""Tests for tablerender.pagination utilities."""

from __future__ import annotations

import pytest

from tablerender.pagination import (
    calculate_pagination,
    database_limit,
    database_offset,
    page_rows,
    page_window,
    paginate,
)
from tablerender.types import PaginationConfig

# ---------------------------------------------------------------------------
# paginate() tests
# ---------------------------------------------------------------------------


class TestPaginate:
    def test_basic_math(self):
        info = paginate(total_rows=50, page=1, page_size=10)
        assert info.total_pages == 5
        assert info.current_page == 1
        assert info.offset == 0
        assert info.has_prev is False
        assert info.has_next is True

    def test_middle_page(self):
        info = paginate(total_rows=47, page=3, page_size=10)
        assert info.total_pages == 5
        assert info.start_row == 21
        assert info.end_row == 30
        assert info.offset == 20
        assert info.has_prev is True
        assert info.has_next is True

    def test_partial_last_page(self):
        info = paginate(total_rows=47, page=5, page_size=10)
        assert info.start_row == 41
        assert info.end_row == 47
        assert info.has_next is False

    def test_page_clamped_over(self):
        info = paginate(total_rows=10, page=999, page_size=10)
        assert info.current_page == 1
        assert info.total_pages == 1

    def test_page_clamped_under(self):
        info = paginate(total_rows=30, page=-5, page_size=10)
        assert info.current_page == 1

    def test_zero_rows(self):
        info = paginate(total_rows=0, page=3, page_size=10)
        assert info.total_pages == 1
        assert info.current_page == 1
        assert info.start_row == 1
        assert info.end_row == 0
        assert info.is_empty is True
        assert info.has_prev is False
        assert info.has_next is False

    def test_non_positive_page_size_is_single_page(self):
        info = paginate(total_rows=7, page=3, page_size=0)
        assert info.total_pages == 1
        assert info.page_size == 7
        assert (info.start_row, info.end_row) == (1, 7)

    @pytest.mark.parametrize("total_rows", [0, 1, 9, 10, 11, 99, 100, 101])
    @pytest.mark.parametrize("page_size", [1, 3, 10, 25])
    def test_total_pages_is_ceiling(self, total_rows, page_size):
        info = paginate(total_rows, 1, page_size)
        expected = -(-total_rows // page_size)
        assert info.total_pages == max(1, expected)
        assert info.total_pages >= 1

    @pytest.mark.parametrize("requested", [-10, 0, 1, 2, 4, 5, 6, 1000])
    def test_clamped_page_in_range(self, requested):
        info = paginate(42, requested, 10)
        assert 1 <= info.current_page <= info.total_pages


# ---------------------------------------------------------------------------
# calculate_pagination() tests
# ---------------------------------------------------------------------------


class TestCalculatePagination:
    def test_no_config_is_single_page(self):
        info = calculate_pagination(12, None)
        assert info.total_pages == 1
        assert info.page_size == 12
        assert (info.start_row, info.end_row) == (1, 12)

    def test_disabled_is_single_page(self):
        info = calculate_pagination(12, PaginationConfig(enabled=False, page_size=5))
        assert info.total_pages == 1

    def test_zero_page_size_is_single_page(self):
        info = calculate_pagination(12, PaginationConfig(enabled=True, page_size=0, current_page=2))
        assert info.total_pages == 1
        assert info.current_page == 1

    def test_in_memory_mode_ignores_total_count(self):
        config = PaginationConfig(enabled=True, page_size=10, current_page=2, total_count=500)
        info = calculate_pagination(25, config)
        assert info.total_rows == 25
        assert info.total_pages == 3

    def test_database_mode_uses_total_count(self):
        config = PaginationConfig(enabled=True, page_size=10, current_page=3, total_count=47)
        info = calculate_pagination(10, config, database=True)
        assert info.total_rows == 47
        assert info.total_pages == 5
        assert (info.start_row, info.end_row) == (21, 30)

    def test_database_mode_falls_back_to_row_count(self):
        config = PaginationConfig(enabled=True, page_size=10, current_page=1)
        info = calculate_pagination(4, config, database=True)
        assert info.total_rows == 4
        assert info.total_pages == 1


class TestPageRows:
    def test_slices_current_page(self):
        rows = list(range(1, 48))
        info = paginate(47, 3, 10)
        assert page_rows(rows, info) == list(range(21, 31))

    def test_last_page(self):
        rows = list(range(1, 48))
        assert page_rows(rows, paginate(47, 5, 10)) == [41, 42, 43, 44, 45, 46, 47]

    def test_empty(self):
        assert page_rows([], paginate(0, 1, 10)) == []


# ---------------------------------------------------------------------------
# page_window() tests
# ---------------------------------------------------------------------------


class TestPageWindow:
    def test_all_pages_when_few(self):
        assert list(page_window(paginate(47, 3, 10))) == [1, 2, 3, 4, 5]

    def test_single_page(self):
        assert list(page_window(paginate(3, 1, 10))) == [1]

    def test_left_edge(self):
        assert list(page_window(paginate(120, 1, 10))) == [1, 2, 3, 4, 5]

    def test_centered(self):
        assert list(page_window(paginate(120, 6, 10))) == [4, 5, 6, 7, 8]

    def test_right_edge(self):
        assert list(page_window(paginate(120, 12, 10))) == [8, 9, 10, 11, 12]

    def test_near_right_edge(self):
        assert list(page_window(paginate(120, 11, 10))) == [8, 9, 10, 11, 12]

    def test_custom_width(self):
        assert list(page_window(paginate(120, 6, 10), width=3)) == [5, 6, 7]

    def test_width_below_one_still_shows_current_page(self):
        assert list(page_window(paginate(30, 2, 10), width=0)) == [2]


class TestDatabaseHelpers:
    def test_offset(self):
        assert database_offset(1, 25) == 0
        assert database_offset(3, 25) == 50

    def test_offset_clamps_page(self):
        assert database_offset(0, 25) == 0
        assert database_offset(-4, 25) == 0

    def test_limit(self):
        assert database_limit(25) == 25
        assert database_limit(0) == 10
        assert database_limit(-1) == 10
