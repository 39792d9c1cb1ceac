"""
Exceptions raised while ingesting table definitions and row data.

Every error here is raised up front, when columns or rows are built, so a
render pass never has to guess at a missing id or a bad column.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence


class TableDataError(ValueError):
    """Base exception for invalid table input."""


class RowValidationError(TableDataError):
    """Raised when a row record cannot be turned into a Row."""

    def __init__(
        self,
        message: str,
        path: Optional[Sequence[str]] = None,
        field: Optional[str] = None,
        value: Any = None,
    ):
        self.path = tuple(path or ())
        self.field = field
        self.value = value

        parts = [message]
        if self.path:
            parts.append(f"at row path {'/'.join(self.path)}")
        if field is not None:
            parts.append(f"field '{field}' (got {type(value).__name__}: {value!r})")
        super().__init__(" ".join(parts))


class DuplicateRowIdError(RowValidationError):
    """Raised when two siblings share the same id."""

    def __init__(self, row_id: str, path: Optional[Sequence[str]] = None):
        self.row_id = row_id
        super().__init__(f"Duplicate row id '{row_id}' among siblings", path=path)


class ColumnDefinitionError(TableDataError):
    """Raised for missing or duplicate column keys."""


class HierarchyError(TableDataError):
    """Raised when a flat frame cannot be assembled into a row forest."""
