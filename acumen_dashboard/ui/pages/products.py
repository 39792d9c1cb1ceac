from __future__ import annotations

import streamlit as st

from acumen_dashboard.data.loader import PRODUCT_COLUMNS, load_products
from acumen_dashboard.table.engine import DrillThroughTable
from acumen_dashboard.table.rows import Row
from acumen_dashboard.ui.components.tables import get_table, render_drill_through_table
from acumen_dashboard.ui.pages.context import PageContext

TABLE_KEY = "products"


def _on_drill_down(row: Row, level: int) -> None:
    st.session_state["products_drill"] = row.get("sku")


def render(context: PageContext) -> None:
    st.caption("Product catalogue with regional stock split. Expand a SKU to see regions.")

    table = get_table(
        TABLE_KEY,
        lambda: DrillThroughTable(
            PRODUCT_COLUMNS,
            load_products(),
            on_drill_down=_on_drill_down,
            settings=context.settings,
        ),
    )
    view = render_drill_through_table(table, TABLE_KEY, title="Catalogue", export_file_name="products.csv")

    sku = st.session_state.get("products_drill")
    if sku:
        st.caption(f"Drill-through requested for SKU {sku}")
    st.caption(f"{view.total_rows} products match the current search.")
