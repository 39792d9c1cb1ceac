"""Logging configuration for the dashboard and the table engine."""

import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the Streamlit process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )

    # Streamlit's own watchers are chatty at INFO
    logging.getLogger("streamlit").setLevel(logging.WARNING)
    logging.getLogger("watchdog").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
