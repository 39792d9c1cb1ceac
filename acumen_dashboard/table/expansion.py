from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List, Sequence, Set

from acumen_dashboard.table.rows import Row


@dataclass
class ExpansionState:
    """Ids of the rows whose children are currently shown.

    Ids are matched as-is at every depth, so two rows sharing an id in
    different subtrees expand together.
    """

    _expanded: Set[str] = field(default_factory=set)

    def toggle(self, row_id: str) -> bool:
        """Flip `row_id` and return whether it is now expanded."""
        if row_id in self._expanded:
            self._expanded.discard(row_id)
            return False
        self._expanded.add(row_id)
        return True

    def is_expanded(self, row_id: str) -> bool:
        return row_id in self._expanded

    @property
    def expanded_ids(self) -> FrozenSet[str]:
        return frozenset(self._expanded)

    def __len__(self) -> int:
        return len(self._expanded)

    def __contains__(self, row_id: object) -> bool:
        return row_id in self._expanded


@dataclass(frozen=True)
class VisibleRow:
    row: Row
    depth: int
    has_children: bool
    is_expanded: bool


def flatten_visible(
    window: Sequence[Row],
    expansion: ExpansionState,
    expandable: bool = True,
) -> List[VisibleRow]:
    """Lay out a page window and any expanded subtrees in render order.

    Children of an expanded row follow it at depth + 1 regardless of page
    size. The forest must be acyclic; cycles are not detected.
    """
    visible: List[VisibleRow] = []
    stack = [(row, 0) for row in reversed(window)]
    while stack:
        row, depth = stack.pop()
        has_children = expandable and row.has_children
        expanded = has_children and expansion.is_expanded(row.id)
        visible.append(VisibleRow(row=row, depth=depth, has_children=has_children, is_expanded=expanded))
        if expanded:
            stack.extend((child, depth + 1) for child in reversed(row.children))
    return visible

