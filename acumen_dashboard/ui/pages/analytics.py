from __future__ import annotations

import streamlit as st

from acumen_dashboard.data.loader import ANALYTICS_COLUMNS, load_analytics
from acumen_dashboard.table.engine import DrillThroughTable
from acumen_dashboard.table.rows import Row
from acumen_dashboard.ui.components.tables import get_table, render_drill_through_table
from acumen_dashboard.ui.pages.context import PageContext

TABLE_KEY = "analytics"


def _on_drill_down(row: Row, level: int) -> None:
    st.session_state["analytics_focus"] = {"id": row.id, "name": row.get("name"), "level": level}
    st.toast(f"Drill down: {row.get('name')} (level {level})", icon="🔎")


def _on_row_click(row: Row) -> None:
    st.toast(f"Selected {row.get('name')}")


def render(context: PageContext) -> None:
    st.caption("Deep dive into sales performance by period. Expand a quarter to see its months.")

    table = get_table(
        TABLE_KEY,
        lambda: DrillThroughTable(
            ANALYTICS_COLUMNS,
            load_analytics(),
            on_drill_down=_on_drill_down,
            on_row_click=_on_row_click,
            expandable=True,
            show_actions=True,
            settings=context.settings,
        ),
    )
    render_drill_through_table(table, TABLE_KEY, title="Period Performance", export_file_name="analytics.csv")

    focus = st.session_state.get("analytics_focus")
    if focus:
        st.info(f"Drill-through target: **{focus['name']}** (id {focus['id']}, level {focus['level']})")
