"""
Assemble a row forest from a flat, parent-referencing DataFrame.

Customer and product hierarchies usually arrive as one row per node with a
parent id column. `build_forest_from_frame` links them into the nested
records the drill-through table expects, preserving frame order among
siblings.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from acumen_dashboard.exceptions import HierarchyError
from acumen_dashboard.table.rows import CHILDREN_KEY, ID_KEY, Row, build_forest

logger = logging.getLogger(__name__)


def _clean_id(value: Any) -> Optional[str]:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    # a parent column with gaps is read back as float: 1.0 -> "1"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def build_forest_from_frame(
    df: pd.DataFrame,
    id_column: str = "id",
    parent_column: str = "parent_id",
) -> Tuple[Row, ...]:
    """Build a validated forest from `df`.

    Ids must be unique across the whole frame. Rows with an empty parent are
    top-level; a parent id that is not in the frame, or a parent chain that
    loops back on itself, raises HierarchyError.
    """
    for col in (id_column, parent_column):
        if col not in df.columns:
            raise HierarchyError(f"Column '{col}' not found in frame")
    if df.empty:
        return ()

    ids = [_clean_id(v) for v in df[id_column]]
    if any(row_id is None for row_id in ids):
        raise HierarchyError(f"Column '{id_column}' has missing ids")
    duplicated = pd.Series(ids)[pd.Series(ids).duplicated()].unique().tolist()
    if duplicated:
        raise HierarchyError(f"Duplicate ids in flat frame: {duplicated}")

    field_columns = [c for c in df.columns if c not in (id_column, parent_column, ID_KEY, CHILDREN_KEY)]
    nodes: Dict[str, Dict[str, Any]] = {}
    parents: Dict[str, Optional[str]] = {}
    for row_id, parent, fields in zip(
        ids,
        df[parent_column],
        df[field_columns].to_dict(orient="records"),
    ):
        nodes[row_id] = {ID_KEY: row_id, **fields, CHILDREN_KEY: []}
        parents[row_id] = _clean_id(parent)

    roots: List[Dict[str, Any]] = []
    for row_id in ids:
        parent = parents[row_id]
        if parent is None:
            roots.append(nodes[row_id])
            continue
        if parent not in nodes:
            raise HierarchyError(f"Row '{row_id}' references unknown parent '{parent}'")
        nodes[parent][CHILDREN_KEY].append(nodes[row_id])

    _check_acyclic(parents)
    forest = build_forest(roots)
    logger.debug("Built hierarchy: %d nodes, %d roots", len(nodes), len(forest))
    return forest


def _check_acyclic(parents: Dict[str, Optional[str]]) -> None:
    settled = set()
    for start in parents:
        chain = []
        current: Optional[str] = start
        while current is not None and current not in settled:
            if current in chain:
                raise HierarchyError(f"Parent cycle detected through '{current}'")
            chain.append(current)
            current = parents[current]
        settled.update(chain)
