from __future__ import annotations

import streamlit as st

from acumen_dashboard.data.loader import CUSTOMER_COLUMNS, load_customers
from acumen_dashboard.table.engine import DrillThroughTable
from acumen_dashboard.table.rows import Row
from acumen_dashboard.ui.components.tables import get_table, render_drill_through_table
from acumen_dashboard.ui.pages.context import PageContext

TABLE_KEY = "customers"


def _on_row_click(row: Row) -> None:
    st.session_state["customers_selected"] = row.to_dict()


def _on_row_action(action: str, row: Row) -> None:
    if action == "view":
        st.session_state["customers_selected"] = row.to_dict()
        return
    # edit/delete need a backend; acknowledge only
    st.toast(f"{action.title()} requested for {row.get('name')}", icon="📝")


def render(context: PageContext) -> None:
    st.caption("Manage customer accounts and trading relationships.")

    table = get_table(
        TABLE_KEY,
        lambda: DrillThroughTable(
            CUSTOMER_COLUMNS,
            load_customers(),
            on_row_click=_on_row_click,
            on_row_action=_on_row_action,
            show_actions=True,
            settings=context.settings,
        ),
    )
    render_drill_through_table(table, TABLE_KEY, title="Customer Accounts", export_file_name="customers.csv")

    selected = st.session_state.get("customers_selected")
    if selected:
        with st.expander(f"Customer: {selected.get('name')}", expanded=True):
            details = {k: v for k, v in selected.items() if k != "children"}
            st.json(details)
