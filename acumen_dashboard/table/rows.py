"""
Typed row records for the drill-through table.

A forest is a tuple of top-level `Row` objects; each row carries its own
children. Ids only need to be unique among siblings. Values are restricted to
the kinds the table can format and compare (text, number, date, null), and
anything else is rejected while the forest is built.
"""

from __future__ import annotations

import datetime as dt
import logging
import math
import numbers
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

import pandas as pd

from acumen_dashboard.exceptions import DuplicateRowIdError, RowValidationError

logger = logging.getLogger(__name__)

FieldValue = Union[str, int, float, dt.date, dt.datetime, None]

ID_KEY = "id"
CHILDREN_KEY = "children"


class ValueKind(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    NULL = "null"


def value_kind(value: FieldValue) -> ValueKind:
    if value is None:
        return ValueKind.NULL
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, (dt.date, dt.datetime)):
        return ValueKind.DATE
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return ValueKind.NUMBER
    raise TypeError(f"Unsupported field value type: {type(value).__name__}")


def normalize_value(value: Any) -> FieldValue:
    """Coerce pandas/numpy scalars to plain Python values.

    NaN and NaT become None. Raises TypeError for anything that is not text,
    a number, a date or null.
    """
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, (str, dt.date)):
        return value
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TypeError(f"Unsupported field value type: {type(value).__name__}")
    if isinstance(value, numbers.Integral):
        return int(value)
    value = float(value)
    return None if math.isnan(value) else value


@dataclass(frozen=True)
class Row:
    id: str
    fields: Mapping[str, FieldValue] = field(default_factory=dict)
    children: Tuple["Row", ...] = ()

    def __post_init__(self):
        # read-only views so the forest is safe to share between renders
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))
        object.__setattr__(self, "children", tuple(self.children))

    @property
    def has_children(self) -> bool:
        return len(self.children) > 0

    def get(self, key: str, default: FieldValue = None) -> FieldValue:
        return self.fields.get(key, default)

    def __getitem__(self, key: str) -> FieldValue:
        return self.fields[key]

    def to_dict(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {ID_KEY: self.id, **self.fields}
        if self.children:
            record[CHILDREN_KEY] = [child.to_dict() for child in self.children]
        return record


def _coerce_id(raw: Any, path: Sequence[str]) -> str:
    if raw is None or (isinstance(raw, float) and math.isnan(raw)):
        raise RowValidationError("Row is missing its 'id'", path=path)
    row_id = str(raw)
    if not row_id.strip():
        raise RowValidationError("Row has a blank 'id'", path=path)
    return row_id


def _build_fields(record: Mapping[str, Any], path: Sequence[str]) -> Dict[str, FieldValue]:
    fields: Dict[str, FieldValue] = {}
    for key, raw in record.items():
        if key in (ID_KEY, CHILDREN_KEY):
            continue
        try:
            fields[str(key)] = normalize_value(raw)
        except TypeError:
            raise RowValidationError("Unsupported value", path=path, field=str(key), value=raw) from None
    return fields


def build_row(record: Union[Row, Mapping[str, Any]], path: Sequence[str] = ()) -> Row:
    """Validate one record (and its subtree) into a Row."""
    if isinstance(record, Row):
        _coerce_id(record.id, path)
        if record.children:
            # re-check sibling ids of prebuilt subtrees
            build_forest(record.children, (*path, record.id))
        return record
    if not isinstance(record, Mapping):
        raise RowValidationError(f"Row record must be a mapping, got {type(record).__name__}", path=path)

    row_id = _coerce_id(record.get(ID_KEY), path)
    row_path = (*path, row_id)
    fields = _build_fields(record, row_path)

    raw_children = record.get(CHILDREN_KEY)
    if raw_children is None:
        children: Tuple[Row, ...] = ()
    elif isinstance(raw_children, (list, tuple)):
        children = build_forest(raw_children, row_path)
    else:
        raise RowValidationError("'children' must be a list of rows", path=row_path)
    return Row(id=row_id, fields=fields, children=children)


def build_forest(
    records: Iterable[Union[Row, Mapping[str, Any]]],
    path: Sequence[str] = (),
) -> Tuple[Row, ...]:
    """Build a validated forest from nested dict records.

    Each record is `{"id": ..., <field>: <value>, ..., "children": [...]}`.
    Missing/blank ids, duplicate sibling ids and unsupported values raise
    RowValidationError subclasses.
    """
    rows: List[Row] = []
    seen = set()
    for record in records:
        row = build_row(record, path)
        if row.id in seen:
            raise DuplicateRowIdError(row.id, path=path)
        seen.add(row.id)
        rows.append(row)
    if not path:
        logger.debug("Built forest with %d top-level rows", len(rows))
    return tuple(rows)


def iter_tree(rows: Iterable[Row]) -> Iterator[Tuple[Row, int]]:
    """Yield every (row, depth) pair in pre-order, without recursion."""
    stack = [(row, 0) for row in reversed(tuple(rows))]
    while stack:
        row, depth = stack.pop()
        yield row, depth
        stack.extend((child, depth + 1) for child in reversed(row.children))


def count_rows(rows: Iterable[Row]) -> int:
    return sum(1 for _ in iter_tree(rows))


def find_row(rows: Iterable[Row], row_id: str) -> Optional[Row]:
    """Return the first row (pre-order) with the given id."""
    return next((row for row, _ in iter_tree(rows) if row.id == row_id), None)
