"""
Drill-through table engine.

`DrillThroughTable` owns the UI-local state of one mounted table (search term,
sort, page, expanded rows) and turns it into a `TableView`: formatted header
and row cells for the current page plus any expanded subtrees. It also routes
user interaction to the caller's drill-down, row-click and row-action
callbacks. The row forest itself is never modified.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Hashable, Iterable, Mapping, Optional, Sequence, Tuple, Union

from acumen_dashboard.config import DEFAULT_ACTIONS, DEFAULT_SETTINGS, TableSettings
from acumen_dashboard.table.columns import Column, build_columns
from acumen_dashboard.table.expansion import ExpansionState, VisibleRow, flatten_visible
from acumen_dashboard.table.rows import FieldValue, Row, build_forest
from acumen_dashboard.table.stages import (
    SortDirection,
    SortState,
    clamp_page,
    filter_rows,
    page_bounds,
    page_count,
    page_numbers,
    page_range_label,
    paginate,
    sort_rows,
)
from acumen_dashboard.utils.formatting import format_value

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "No data available"

DrillDownHandler = Callable[[Row, int], Any]
RowClickHandler = Callable[[Row], Any]
RowActionHandler = Callable[[str, Row], Any]


class ClickTarget(str, Enum):
    ROW = "row"
    EXPAND = "expand"
    DRILL = "drill"
    ACTION = "action"


@dataclass(frozen=True)
class HeaderCell:
    key: str
    label: str
    sortable: bool
    filterable: bool
    sort_direction: Optional[SortDirection] = None


@dataclass(frozen=True)
class CellView:
    column_key: str
    value: FieldValue
    display: str
    drillable: bool


@dataclass(frozen=True)
class RowView:
    row: Row
    depth: int
    has_children: bool
    is_expanded: bool
    cells: Tuple[CellView, ...]

    @property
    def id(self) -> str:
        return self.row.id


@dataclass(frozen=True)
class TableView:
    headers: Tuple[HeaderCell, ...]
    rows: Tuple[RowView, ...]
    page: int
    page_size: int
    total_pages: int
    total_rows: int
    showing_from: int
    showing_to: int
    page_numbers: Tuple[int, ...]
    expandable: bool
    show_actions: bool
    actions: Tuple[str, ...]

    @property
    def empty(self) -> bool:
        return not self.rows

    @property
    def empty_message(self) -> Optional[str]:
        return EMPTY_MESSAGE if self.empty else None

    @property
    def show_pagination(self) -> bool:
        return self.total_pages > 1

    @property
    def range_label(self) -> str:
        return page_range_label(self.page, self.page_size, self.total_rows)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


class _Memo:
    """Single-slot cache: recompute only when the key changes."""

    def __init__(self):
        self._key: Optional[Hashable] = None
        self._value: Any = None
        self._filled = False

    def get(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        if not self._filled or key != self._key:
            self._value = compute()
            self._key = key
            self._filled = True
        return self._value


class DrillThroughTable:
    def __init__(
        self,
        columns: Iterable[Union[Column, Mapping[str, Any]]],
        rows: Iterable[Union[Row, Mapping[str, Any]]],
        *,
        on_drill_down: Optional[DrillDownHandler] = None,
        on_row_click: Optional[RowClickHandler] = None,
        on_row_action: Optional[RowActionHandler] = None,
        expandable: bool = True,
        show_actions: bool = False,
        actions: Optional[Sequence[str]] = None,
        search: str = "",
        sort: Optional[SortState] = None,
        page: int = 1,
        settings: Optional[TableSettings] = None,
    ):
        self.columns: Tuple[Column, ...] = build_columns(columns)
        self.rows: Tuple[Row, ...] = build_forest(rows)
        self.on_drill_down = on_drill_down
        self.on_row_click = on_row_click
        self.on_row_action = on_row_action
        self.expandable = expandable
        self.show_actions = show_actions
        self.actions: Tuple[str, ...] = tuple(actions) if actions is not None else DEFAULT_ACTIONS
        self.settings = settings or DEFAULT_SETTINGS
        self.page_size = self.settings.page_size

        self.search = search
        self.sort = sort or SortState()
        self.expansion = ExpansionState()
        self._processed_memo = _Memo()
        self._window_memo = _Memo()
        self.page = 1
        self.go_to_page(page)
        logger.debug(
            "Table ready: %d columns, %d top-level rows, page size %d",
            len(self.columns),
            len(self.rows),
            self.page_size,
        )

    # ---------- Pipeline ----------

    def processed_rows(self) -> Sequence[Row]:
        """Top-level rows after filtering and sorting."""
        key = (id(self.rows), self.search, self.sort)
        return self._processed_memo.get(key, self._filter_and_sort)

    def _filter_and_sort(self) -> Sequence[Row]:
        filtered = filter_rows(self.rows, self.search)
        return sort_rows(filtered, self.sort.column_key, self.sort.direction)

    def page_rows(self) -> Sequence[Row]:
        """Top-level rows on the current page."""
        processed = self.processed_rows()
        key = (id(self.rows), self.search, self.sort, self.page, self.page_size)
        return self._window_memo.get(key, lambda: paginate(processed, self.page, self.page_size))

    @property
    def total_rows(self) -> int:
        return len(self.processed_rows())

    @property
    def total_pages(self) -> int:
        return page_count(self.total_rows, self.page_size)

    # ---------- State changes ----------

    def set_search(self, term: str) -> None:
        term = term or ""
        if term == self.search:
            return
        self.search = term
        self.page = 1
        logger.debug("Search set to %r; back to page 1", term)

    def sort_by(self, column_key: str) -> None:
        """Header click: same column flips direction, a new column starts ascending."""
        column = self.column(column_key)
        if column is None or not column.sortable:
            logger.debug("Ignoring sort on non-sortable column %r", column_key)
            return
        if self.sort.column_key == column_key:
            self.sort = SortState(column_key, self.sort.direction.flipped())
        else:
            self.sort = SortState(column_key, SortDirection.ASC)
        self.page = 1
        logger.debug("Sorted by %s %s", column_key, self.sort.direction.value)

    def go_to_page(self, page: int) -> int:
        self.page = clamp_page(int(page), self.total_pages)
        return self.page

    def next_page(self) -> int:
        return self.go_to_page(self.page + 1)

    def previous_page(self) -> int:
        return self.go_to_page(self.page - 1)

    def toggle(self, row_id: str) -> bool:
        return self.expansion.toggle(row_id)

    def is_expanded(self, row_id: str) -> bool:
        return self.expansion.is_expanded(row_id)

    def column(self, key: str) -> Optional[Column]:
        return next((column for column in self.columns if column.key == key), None)

    # ---------- Events ----------

    def drill_down(self, row: Row, depth: int, column_key: Optional[str] = None) -> bool:
        """Fire on_drill_down. Expansion state is left alone."""
        if column_key is not None:
            column = self.column(column_key)
            if column is None or not column.drillable:
                logger.debug("Column %r is not drillable", column_key)
                return False
        if self.on_drill_down is None:
            return False
        self.on_drill_down(row, depth)
        return True

    def row_action(self, action: str, row: Row) -> bool:
        if action not in self.actions:
            logger.debug("Ignoring unknown row action %r", action)
            return False
        if self.on_row_action is None:
            return False
        self.on_row_action(action, row)
        return True

    def click(
        self,
        row: Row,
        target: Union[ClickTarget, str] = ClickTarget.ROW,
        *,
        depth: int = 0,
        column_key: Optional[str] = None,
        action: Optional[str] = None,
    ) -> bool:
        """Route one click. Only ROW clicks reach on_row_click.

        Clicks on the expand control, a drill link or an action button are
        handled by that control alone and never also count as a row click.
        """
        target = ClickTarget(target)
        if target is ClickTarget.EXPAND:
            if not (self.expandable and row.has_children):
                return False
            self.toggle(row.id)
            return True
        if target is ClickTarget.DRILL:
            return self.drill_down(row, depth, column_key)
        if target is ClickTarget.ACTION:
            if action is None:
                raise ValueError("ACTION clicks need an action name")
            return self.row_action(action, row)
        if self.on_row_click is None:
            return False
        self.on_row_click(row)
        return True

    # ---------- View ----------

    def view(self) -> TableView:
        total_rows = self.total_rows
        total_pages = page_count(total_rows, self.page_size)
        visible = flatten_visible(self.page_rows(), self.expansion, self.expandable)
        first, last = page_bounds(self.page, self.page_size, total_rows)
        return TableView(
            headers=self._headers(),
            rows=tuple(self._row_view(item) for item in visible),
            page=self.page,
            page_size=self.page_size,
            total_pages=total_pages,
            total_rows=total_rows,
            showing_from=first,
            showing_to=last,
            page_numbers=tuple(page_numbers(self.page, total_pages)),
            expandable=self.expandable,
            show_actions=self.show_actions,
            actions=self.actions if self.show_actions else (),
        )

    def _headers(self) -> Tuple[HeaderCell, ...]:
        return tuple(
            HeaderCell(
                key=column.key,
                label=column.label,
                sortable=column.sortable,
                filterable=column.filterable,
                sort_direction=self.sort.direction if self.sort.column_key == column.key else None,
            )
            for column in self.columns
        )

    def _row_view(self, item: VisibleRow) -> RowView:
        cells = []
        for column in self.columns:
            value = item.row.get(column.key)
            cells.append(
                CellView(
                    column_key=column.key,
                    value=value,
                    display=format_value(value, column.type, self.settings),
                    drillable=column.drillable and self.on_drill_down is not None,
                )
            )
        return RowView(
            row=item.row,
            depth=item.depth,
            has_children=item.has_children,
            is_expanded=item.is_expanded,
            cells=tuple(cells),
        )

    def state(self) -> Dict[str, Any]:
        """JSON-serialisable snapshot of the UI-local state, for logging/debugging."""
        return {
            "search": self.search,
            "sort_column": self.sort.column_key,
            "sort_direction": self.sort.direction.value,
            "page": self.page,
            "expanded": sorted(self.expansion.expanded_ids),
        }
