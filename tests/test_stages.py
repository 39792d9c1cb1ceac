"""
Unit tests for the filter, sort and pagination stages.
"""

import datetime as dt

import pytest

from acumen_dashboard.table.rows import build_forest
from acumen_dashboard.table.stages import (
    SortDirection,
    SortState,
    clamp_page,
    compare_values,
    filter_rows,
    page_bounds,
    page_count,
    page_numbers,
    page_range_label,
    paginate,
    sort_rows,
)


def ids(rows):
    return [row.id for row in rows]


class TestFilterRows:
    """Tests for the free-text search stage."""

    @pytest.fixture
    def customers(self):
        return build_forest([
            {"id": "1", "name": "MegaMart Chain", "type": "Retail Chain", "locations": 45},
            {"id": "2", "name": "QuickShop Express", "type": "Convenience Store", "locations": 120},
            {"id": "3", "name": "FreshFood Markets", "type": "Supermarket", "locations": None},
        ])

    def test_case_insensitive_match(self, customers):
        assert ids(filter_rows(customers, "megamart")) == ["1"]
        assert ids(filter_rows(customers, "MEGAMART")) == ["1"]

    def test_no_match_is_empty(self, customers):
        assert filter_rows(customers, "zzz") == ()

    def test_empty_search_returns_same_object(self, customers):
        assert filter_rows(customers, "") is customers

    def test_matches_numbers_by_text(self, customers):
        assert ids(filter_rows(customers, "120")) == ["2"]

    def test_integral_floats_search_without_decimal(self):
        rows = build_forest([{"id": "1", "revenue": 4500000.0}])
        assert ids(filter_rows(rows, "4500000")) == ["1"]
        assert filter_rows(rows, "4500000.0") == ()

    def test_dates_search_in_iso_form(self):
        rows = build_forest([{"id": "1", "launched": dt.date(2024, 7, 1)}])
        assert ids(filter_rows(rows, "2024-07")) == ["1"]

    def test_null_field_does_not_exclude_row(self, customers):
        assert ids(filter_rows(customers, "fresh")) == ["3"]

    def test_id_is_not_searched(self, customers):
        assert filter_rows(customers, "3") == ()

    def test_children_do_not_rescue_parent(self):
        rows = build_forest([
            {"id": "p", "name": "Parent", "children": [{"id": "c", "name": "Needle"}]},
        ])
        assert filter_rows(rows, "needle") == ()

    def test_matching_parent_keeps_children(self):
        rows = build_forest([
            {"id": "p", "name": "Needle parent", "children": [{"id": "c", "name": "Other"}]},
        ])
        assert filter_rows(rows, "needle")[0].children[0].id == "c"

    def test_idempotent(self, customers):
        once = filter_rows(customers, "ma")
        assert filter_rows(once, "ma") == once

    @pytest.mark.parametrize("prefix, longer", [("m", "ma"), ("ma", "mar"), ("s", "store"), ("", "chain")])
    def test_monotonic(self, customers, prefix, longer):
        assert set(ids(filter_rows(customers, longer))) <= set(ids(filter_rows(customers, prefix)))

    def test_preserves_order(self, customers):
        assert ids(filter_rows(customers, "e")) == ["1", "2", "3"]


class TestCompareValues:
    """Tests for the ascending comparator."""

    def test_numbers(self):
        assert compare_values(1, 2) == -1
        assert compare_values(2.5, 2) == 1
        assert compare_values(3, 3.0) == 0

    def test_strings_are_lexicographic(self):
        assert compare_values("apple", "banana") == -1
        assert compare_values("10", "9") == -1

    def test_dates_and_datetimes(self):
        assert compare_values(dt.date(2024, 1, 2), dt.datetime(2024, 1, 1, 23)) == 1
        assert compare_values(dt.date(2024, 1, 1), dt.datetime(2024, 1, 1)) == 0

    def test_nulls_sort_last(self):
        assert compare_values(None, 1) == 1
        assert compare_values(1, None) == -1
        assert compare_values(None, None) == 0

    def test_mixed_types_fall_back_to_strings(self):
        assert compare_values(10, "9") == compare_values("10", "9")
        assert compare_values("abc", 5) == 1

    def test_naive_and_aware_datetimes_do_not_raise(self):
        naive = dt.datetime(2024, 1, 1)
        aware = dt.datetime(2024, 1, 1, tzinfo=dt.timezone.utc)
        assert compare_values(naive, aware) in (-1, 0, 1)


class TestSortRows:
    """Tests for the sort stage."""

    @pytest.fixture
    def rows(self):
        return build_forest([
            {"id": "a", "score": 2, "name": "delta"},
            {"id": "b", "score": 1, "name": "alpha"},
            {"id": "c", "score": 2, "name": "charlie"},
            {"id": "d", "score": 3, "name": "bravo"},
            {"id": "e", "score": 1, "name": "echo"},
        ])

    def test_no_column_is_identity(self, rows):
        assert sort_rows(rows, None) is rows

    def test_ascending_numbers(self, rows):
        assert ids(sort_rows(rows, "score")) == ["b", "e", "a", "c", "d"]

    def test_descending_keeps_ties_in_input_order(self, rows):
        assert ids(sort_rows(rows, "score", SortDirection.DESC)) == ["d", "a", "c", "b", "e"]

    def test_direction_accepts_strings(self, rows):
        assert ids(sort_rows(rows, "score", "desc")) == ids(sort_rows(rows, "score", SortDirection.DESC))

    @pytest.mark.parametrize("direction", [SortDirection.ASC, SortDirection.DESC])
    def test_stability(self, rows, direction):
        result = sort_rows(rows, "score", direction)
        for score in (1, 2):
            tied = [row.id for row in result if row["score"] == score]
            assert tied == [row.id for row in rows if row["score"] == score]

    def test_round_trip_without_ties(self, rows):
        asc = sort_rows(rows, "name", SortDirection.ASC)
        desc = sort_rows(rows, "name", SortDirection.DESC)
        assert ids(reversed(asc)) == ids(desc)

    def test_missing_column_values_sort_last(self):
        rows = build_forest([{"id": "x"}, {"id": "y", "v": 5}, {"id": "z", "v": 1}])
        assert ids(sort_rows(rows, "v")) == ["z", "y", "x"]
        assert ids(sort_rows(rows, "v", SortDirection.DESC)) == ["x", "y", "z"]

    def test_mismatched_types_do_not_raise(self):
        rows = build_forest([{"id": "1", "v": 10}, {"id": "2", "v": "n/a"}, {"id": "3", "v": 2}])
        assert ids(sort_rows(rows, "v")) == ["3", "1", "2"]

    def test_children_are_not_resorted(self):
        rows = build_forest([
            {"id": "p", "v": 1, "children": [{"id": "c2", "v": 9}, {"id": "c1", "v": 0}]},
        ])
        assert ids(sort_rows(rows, "v")[0].children) == ["c2", "c1"]

    def test_input_is_not_mutated(self, rows):
        before = ids(rows)
        sort_rows(rows, "score")
        assert ids(rows) == before


class TestSortState:
    def test_direction_is_coerced(self):
        assert SortState("x", "desc").direction is SortDirection.DESC

    def test_flipped(self):
        assert SortDirection.ASC.flipped() is SortDirection.DESC
        assert SortDirection.DESC.flipped() is SortDirection.ASC


class TestPagination:
    """Tests for the pagination stage."""

    def test_slice(self, make_rows):
        rows = make_rows(25)
        assert ids(paginate(rows, 1, 10)) == [str(i) for i in range(10)]
        assert ids(paginate(rows, 3, 10)) == [str(i) for i in range(20, 25)]

    def test_out_of_range_page_is_empty(self, make_rows):
        assert paginate(make_rows(5), 2, 10) == ()

    def test_invalid_arguments(self, make_rows):
        with pytest.raises(ValueError):
            paginate(make_rows(5), 0, 10)
        with pytest.raises(ValueError):
            paginate(make_rows(5), 1, 0)

    @pytest.mark.parametrize("n, expected", [(0, 0), (1, 1), (10, 1), (11, 2), (35, 4)])
    def test_page_count(self, n, expected):
        assert page_count(n, 10) == expected

    @pytest.mark.parametrize("n", range(0, 36))
    def test_pages_cover_all_rows_once(self, make_rows, n):
        rows = make_rows(n)
        collected = []
        for page in range(1, page_count(n, 10) + 1):
            collected.extend(ids(paginate(rows, page, 10)))
        assert collected == ids(rows)

    def test_clamp_page(self):
        assert clamp_page(0, 3) == 1
        assert clamp_page(5, 3) == 3
        assert clamp_page(2, 3) == 2
        assert clamp_page(4, 0) == 1

    def test_page_numbers_window(self):
        assert page_numbers(1, 3) == [1, 2, 3]
        assert page_numbers(1, 8) == [1, 2, 3, 4, 5]
        assert page_numbers(6, 8) == [4, 5, 6, 7, 8]
        assert page_numbers(8, 8) == [4, 5, 6, 7, 8]
        assert page_numbers(1, 0) == []

    def test_page_bounds_and_label(self):
        assert page_bounds(2, 10, 25) == (11, 20)
        assert page_bounds(3, 10, 25) == (21, 25)
        assert page_bounds(1, 10, 0) == (0, 0)
        assert page_range_label(3, 10, 25) == "Showing 21 to 25 of 25 entries"
