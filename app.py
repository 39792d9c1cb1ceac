import acumen_dashboard.bootstrap_env  # must be first to set env/secrets
import logging

import streamlit as st

from acumen_dashboard.config import TABS, load_settings
from acumen_dashboard.ui.layout import setup_page, sidebar_table_settings
from acumen_dashboard.ui.pages import analytics, customers, products
from acumen_dashboard.ui.pages.context import PageContext

logger = logging.getLogger(__name__)

PAGE_RENDERERS = {
    "analytics": analytics.render,
    "customers": customers.render,
    "products": products.render,
}


def main() -> None:
    setup_page()
    st.title("Acumen Sales Intelligence")

    settings = load_settings()
    sidebar_table_settings(settings)
    context = PageContext(settings=settings)

    tab_labels = [tab.label for tab in TABS]
    streamlit_tabs = st.tabs(tab_labels)

    for streamlit_tab, tab_config in zip(streamlit_tabs, TABS):
        renderer = PAGE_RENDERERS.get(tab_config.key)
        if renderer is None:
            logger.warning("No renderer registered for tab %s", tab_config.key)
            continue
        with streamlit_tab:
            renderer(context)


if __name__ == "__main__":
    main()
