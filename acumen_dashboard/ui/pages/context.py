from __future__ import annotations

from dataclasses import dataclass

from acumen_dashboard.config import TableSettings


@dataclass
class PageContext:
    settings: TableSettings
