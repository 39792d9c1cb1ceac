"""
Layout helpers for the Streamlit application (page config and sidebar).
"""

from __future__ import annotations

import streamlit as st

from acumen_dashboard.config import TableSettings
from acumen_dashboard.ui.components.tables import reset_tables


def setup_page() -> None:
    """Set Streamlit page configuration and top-level styling."""
    st.set_page_config(
        page_title="Acumen Sales Intelligence",
        layout="wide",
        page_icon=":bar_chart:",
    )
    # Tighten the vertical gap between table rows rendered as column blocks
    st.markdown(
        "<style>div[data-testid='stVerticalBlock'] {gap: 0.35rem;}</style>",
        unsafe_allow_html=True,
    )


def sidebar_table_settings(settings: TableSettings) -> None:
    st.sidebar.header("Tables")
    st.sidebar.caption(
        f"{settings.page_size} rows per page · currency {settings.currency_symbol} · dates {settings.date_format}"
    )
    if st.sidebar.button("Reset tables", help="Clear search, sort, paging and expanded rows"):
        reset_tables()
