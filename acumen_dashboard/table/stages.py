"""
Pure filter, sort and pagination stages over the top-level rows of a forest.

Children are never filtered, sorted or counted here; they travel with their
parent and are laid out by the expansion pass.
"""

from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key
from typing import Any, List, Optional, Sequence, Tuple

from acumen_dashboard.table.rows import FieldValue, Row, ValueKind, value_kind

MAX_PAGE_BUTTONS = 5


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclass(frozen=True)
class SortState:
    column_key: Optional[str] = None
    direction: SortDirection = SortDirection.ASC

    def __post_init__(self):
        object.__setattr__(self, "direction", SortDirection(self.direction))


# ---------- Filter ----------

def _search_text(value: FieldValue) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    return str(value)


def row_matches(row: Row, needle: str) -> bool:
    """True if any of the row's own field values contains `needle` (casefolded)."""
    for value in row.fields.values():
        text = _search_text(value)
        if text is not None and needle in text.casefold():
            return True
    return False


def filter_rows(rows: Sequence[Row], search: str) -> Sequence[Row]:
    if not search:
        return rows
    needle = search.casefold()
    return tuple(row for row in rows if row_matches(row, needle))


# ---------- Sort ----------

def _comparable(value: FieldValue) -> Any:
    # date and datetime do not compare with each other directly
    if isinstance(value, dt.date) and not isinstance(value, dt.datetime):
        return dt.datetime.combine(value, dt.time())
    return value


def compare_values(a: FieldValue, b: FieldValue) -> int:
    """Ascending comparison used by the sort stage.

    Nulls sort after everything. Values of different kinds, or values that
    refuse to compare (naive vs aware datetimes), are compared as strings.
    """
    kind_a, kind_b = value_kind(a), value_kind(b)
    if kind_a is ValueKind.NULL or kind_b is ValueKind.NULL:
        return (kind_a is ValueKind.NULL) - (kind_b is ValueKind.NULL)

    left, right = _comparable(a), _comparable(b)
    if kind_a is kind_b:
        try:
            return (left > right) - (left < right)
        except TypeError:
            pass
    left, right = str(a), str(b)
    return (left > right) - (left < right)


def sort_rows(
    rows: Sequence[Row],
    column_key: Optional[str],
    direction: SortDirection = SortDirection.ASC,
) -> Sequence[Row]:
    if column_key is None:
        return rows
    descending = SortDirection(direction) is SortDirection.DESC

    def _cmp(left: Row, right: Row) -> int:
        result = compare_values(left.get(column_key), right.get(column_key))
        return -result if descending else result

    # sorted() is stable, so ties keep their input order in both directions
    return tuple(sorted(rows, key=cmp_to_key(_cmp)))


# ---------- Pagination ----------

def page_count(total_rows: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    return math.ceil(total_rows / page_size)


def paginate(rows: Sequence[Row], page: int, page_size: int) -> Sequence[Row]:
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    start = (page - 1) * page_size
    return tuple(rows[start:start + page_size])


def clamp_page(page: int, total_pages: int) -> int:
    return max(1, min(page, max(total_pages, 1)))


def page_numbers(current: int, total_pages: int, limit: int = MAX_PAGE_BUTTONS) -> List[int]:
    """Page buttons to offer: at most `limit` consecutive pages around `current`."""
    if total_pages < 1:
        return []
    limit = max(1, min(limit, total_pages))
    start = max(1, min(current - limit // 2, total_pages - limit + 1))
    return list(range(start, start + limit))


def page_bounds(page: int, page_size: int, total_rows: int) -> Tuple[int, int]:
    """1-based (first, last) row numbers shown on `page`; (0, 0) when empty."""
    if total_rows == 0:
        return 0, 0
    first = (page - 1) * page_size + 1
    last = min(page * page_size, total_rows)
    if first > total_rows:
        return 0, 0
    return first, last


def page_range_label(page: int, page_size: int, total_rows: int) -> str:
    first, last = page_bounds(page, page_size, total_rows)
    return f"Showing {first} to {last} of {total_rows} entries"
