"""
Streamlit rendering for the drill-through table engine.
"""

from __future__ import annotations

from typing import Callable, List, Optional

import streamlit as st

from acumen_dashboard.table.engine import ClickTarget, DrillThroughTable, RowView, TableView
from acumen_dashboard.table.export import to_csv_bytes
from acumen_dashboard.table.stages import SortDirection

TABLE_STATE_PREFIX = "dt_table_"
INDENT = "\u2003\u2003"
ACTION_ICONS = {
    "view": "👁",
    "edit": "✏️",
    "delete": "🗑",
}


def get_table(key: str, factory: Callable[[], DrillThroughTable]) -> DrillThroughTable:
    """Return the table mounted under `key`, creating it on first use.

    The instance (and so its search/sort/page/expansion state) lives in
    session_state until `reset_tables` drops it.
    """
    state_key = f"{TABLE_STATE_PREFIX}{key}"
    if state_key not in st.session_state:
        st.session_state[state_key] = factory()
    return st.session_state[state_key]


def reset_tables() -> None:
    """Unmount every table, together with its search box state."""
    for state_key in [k for k in st.session_state.keys() if str(k).startswith(TABLE_STATE_PREFIX)]:
        del st.session_state[state_key]


def _column_widths(view: TableView) -> List[float]:
    widths = [0.4] + [1.0] * len(view.headers)
    if view.show_actions:
        widths.append(0.3 * max(len(view.actions), 1))
    widths.append(0.3)
    return widths


def _sort_label(label: str, direction: Optional[SortDirection]) -> str:
    if direction is None:
        return label
    return f"{label} {'▲' if direction is SortDirection.ASC else '▼'}"


def _render_header(table: DrillThroughTable, view: TableView, key: str) -> None:
    cols = st.columns(_column_widths(view))
    for col, header in zip(cols[1:], view.headers):
        with col:
            if header.sortable:
                st.button(
                    _sort_label(header.label, header.sort_direction),
                    key=f"{key}_sort_{header.key}",
                    on_click=table.sort_by,
                    args=(header.key,),
                    use_container_width=True,
                )
            else:
                st.markdown(f"**{header.label}**")
    if view.show_actions:
        with cols[len(view.headers) + 1]:
            st.markdown("**Actions**")


def _render_row(table: DrillThroughTable, view: TableView, item: RowView, key: str) -> None:
    cols = st.columns(_column_widths(view))
    with cols[0]:
        if item.has_children:
            st.button(
                "▾" if item.is_expanded else "▸",
                key=f"{key}_expand",
                on_click=table.click,
                args=(item.row, ClickTarget.EXPAND),
            )
    for idx, (col, cell) in enumerate(zip(cols[1:], item.cells)):
        prefix = INDENT * item.depth if idx == 0 else ""
        with col:
            if cell.drillable:
                st.button(
                    f"{prefix}{cell.display}",
                    key=f"{key}_drill_{cell.column_key}",
                    on_click=table.click,
                    args=(item.row, ClickTarget.DRILL),
                    kwargs={"depth": item.depth, "column_key": cell.column_key},
                    type="tertiary",
                )
            else:
                st.write(f"{prefix}{cell.display}")
    if view.show_actions:
        with cols[len(item.cells) + 1]:
            action_cols = st.columns(max(len(view.actions), 1))
            for action_col, action in zip(action_cols, view.actions):
                with action_col:
                    st.button(
                        ACTION_ICONS.get(action, action),
                        key=f"{key}_action_{action}",
                        help=action.title(),
                        on_click=table.click,
                        args=(item.row, ClickTarget.ACTION),
                        kwargs={"action": action},
                    )
    if table.on_row_click is not None:
        with cols[-1]:
            st.button("›", key=f"{key}_open", help="Open", on_click=table.click, args=(item.row,))


def _render_pagination(table: DrillThroughTable, view: TableView, key: str) -> None:
    st.caption(view.range_label)
    cols = st.columns(len(view.page_numbers) + 2)
    with cols[0]:
        st.button("Previous", key=f"{key}_prev", disabled=not view.has_previous, on_click=table.previous_page)
    for col, number in zip(cols[1:-1], view.page_numbers):
        with col:
            st.button(
                str(number),
                key=f"{key}_page_{number}",
                type="primary" if number == view.page else "secondary",
                on_click=table.go_to_page,
                args=(number,),
            )
    with cols[-1]:
        st.button("Next", key=f"{key}_next", disabled=not view.has_next, on_click=table.next_page)


def render_drill_through_table(
    table: DrillThroughTable,
    key: str,
    title: str = "Data Analysis",
    export_file_name: str = "export.csv",
) -> TableView:
    """Render `table` and wire its controls back into the engine."""
    head_left, head_right = st.columns([3, 2])
    with head_left:
        st.subheader(title)
    with head_right:
        search = st.text_input("Search", value=table.search, key=f"{TABLE_STATE_PREFIX}{key}_search", placeholder="Search...")
    table.set_search(search)

    view = table.view()
    _render_header(table, view, key)

    if view.empty:
        st.info(view.empty_message)
    else:
        for position, item in enumerate(view.rows):
            # ids are only unique among siblings, so key widgets by position
            _render_row(table, view, item, f"{key}_r{view.page}_{position}")

    if view.show_pagination:
        _render_pagination(table, view, key)

    st.download_button(
        "Export CSV",
        data=to_csv_bytes(view),
        file_name=export_file_name,
        mime="text/csv",
        key=f"{key}_export",
    )
    return view
