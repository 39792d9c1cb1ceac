"""
Utility helpers for formatting cell values by column type.
"""

from __future__ import annotations

import datetime as dt
import logging
import numbers
from typing import Any, Optional

import pandas as pd

from acumen_dashboard.config import DEFAULT_SETTINGS, TableSettings

logger = logging.getLogger(__name__)

NULL_DISPLAY = "-"
NUMBER_MAX_DECIMALS = 3


def _is_null(value: Any) -> bool:
    if value is None:
        return True
    # NaN, NaT and pd.NA
    return pd.api.types.is_scalar(value) and bool(pd.isna(value))


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return None
    return value


def format_number(value: Any) -> str:
    numeric = _as_number(value)
    if numeric is None:
        return str(value)
    if isinstance(numeric, numbers.Integral):
        return f"{int(numeric):,}"
    text = f"{numeric:,.{NUMBER_MAX_DECIMALS}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def format_currency(value: Any, symbol: str = "$", decimals: int = 2) -> str:
    numeric = _as_number(value)
    if numeric is None:
        return str(value)
    sign = "-" if numeric < 0 else ""
    return f"{sign}{symbol}{abs(numeric):,.{decimals}f}"


def format_percent(value: Any, decimals: int = 2) -> str:
    """Format a fraction as a percentage: 0.15 -> "15.00%"."""
    numeric = _as_number(value)
    if numeric is None:
        return str(value)
    return f"{numeric * 100:.{decimals}f}%"


def format_date(value: Any, date_format: str = "%m/%d/%Y") -> str:
    if _is_null(value):
        return NULL_DISPLAY
    if isinstance(value, (dt.date, dt.datetime)):
        return value.strftime(date_format)
    if isinstance(value, str):
        parsed = pd.to_datetime(value, errors="coerce")
        if pd.isna(parsed):
            return value
        return parsed.strftime(date_format)
    return str(value)


def format_value(value: Any, column_type: Any, settings: Optional[TableSettings] = None) -> str:
    """Render one cell for display.

    `column_type` may be a ColumnType or its string value; anything unknown is
    shown as plain text. Never raises and never mutates `value`.
    """
    if _is_null(value):
        return NULL_DISPLAY
    settings = settings or DEFAULT_SETTINGS
    kind = getattr(column_type, "value", column_type)

    if kind == "currency":
        return format_currency(value, symbol=settings.currency_symbol)
    if kind == "percentage":
        return format_percent(value)
    if kind == "date":
        return format_date(value, settings.date_format)
    if kind == "number":
        return format_number(value)
    return str(value)
