from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Tuple, Union

from acumen_dashboard.exceptions import ColumnDefinitionError

logger = logging.getLogger(__name__)


class ColumnType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    CURRENCY = "currency"
    PERCENTAGE = "percentage"
    DATE = "date"

    @classmethod
    def parse(cls, raw: Union[str, "ColumnType", None]) -> "ColumnType":
        """Resolve a column type, degrading unknown names to TEXT."""
        if raw is None:
            return cls.TEXT
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            logger.warning("Unknown column type %r; rendering as text", raw)
            return cls.TEXT


@dataclass(frozen=True)
class Column:
    key: str
    label: str
    sortable: bool = False
    filterable: bool = True
    type: ColumnType = ColumnType.TEXT
    drillable: bool = False

    @classmethod
    def from_dict(cls, definition: Mapping[str, Any]) -> "Column":
        key = definition.get("key")
        if not isinstance(key, str) or not key:
            raise ColumnDefinitionError(f"Column definition needs a non-empty 'key': {dict(definition)!r}")
        return cls(
            key=key,
            label=str(definition.get("label", key)),
            sortable=bool(definition.get("sortable", False)),
            filterable=bool(definition.get("filterable", True)),
            type=ColumnType.parse(definition.get("type")),
            # the page definitions spell it drillDown
            drillable=bool(definition.get("drillable", definition.get("drillDown", False))),
        )


def build_columns(definitions: Iterable[Union[Column, Mapping[str, Any]]]) -> Tuple[Column, ...]:
    columns = []
    seen = set()
    for definition in definitions:
        column = definition if isinstance(definition, Column) else Column.from_dict(definition)
        if column.key in seen:
            raise ColumnDefinitionError(f"Duplicate column key '{column.key}'")
        seen.add(column.key)
        columns.append(column)
    return tuple(columns)
