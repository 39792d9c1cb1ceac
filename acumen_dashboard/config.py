"""
Application-wide configuration constants and helper utilities.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
DEFAULT_ACTIONS = ("view", "edit", "delete")


@dataclass(frozen=True)
class TabConfig:
    key: str
    label: str


# Ordered tab definitions for the dashboard
TABS: List[TabConfig] = [
    TabConfig("analytics", "Analytics"),
    TabConfig("customers", "Customers"),
    TabConfig("products", "Products"),
]


@dataclass(frozen=True)
class TableSettings:
    page_size: int = DEFAULT_PAGE_SIZE
    currency_symbol: str = "$"
    date_format: str = "%m/%d/%Y"
    log_level: str = "INFO"


DEFAULT_SETTINGS = TableSettings()


def _parse_page_size(raw: Optional[str]) -> int:
    if raw is None or not raw.strip():
        return DEFAULT_PAGE_SIZE
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer ACUMEN_PAGE_SIZE=%r", raw)
        return DEFAULT_PAGE_SIZE
    if value < 1:
        logger.warning("Ignoring ACUMEN_PAGE_SIZE=%r; must be >= 1", raw)
        return DEFAULT_PAGE_SIZE
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> TableSettings:
    """Build TableSettings from ACUMEN_* environment variables.

    `environ` defaults to os.environ; bootstrap_env must already have merged
    Streamlit secrets and .env values into it.
    """
    env = os.environ if environ is None else environ
    return TableSettings(
        page_size=_parse_page_size(env.get("ACUMEN_PAGE_SIZE")),
        currency_symbol=env.get("ACUMEN_CURRENCY_SYMBOL") or DEFAULT_SETTINGS.currency_symbol,
        date_format=env.get("ACUMEN_DATE_FORMAT") or DEFAULT_SETTINGS.date_format,
        log_level=(env.get("ACUMEN_LOG_LEVEL") or DEFAULT_SETTINGS.log_level).upper(),
    )
