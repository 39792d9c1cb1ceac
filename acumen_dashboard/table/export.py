"""
Export the rows currently on screen (page window plus expanded children).
"""

from __future__ import annotations

import pandas as pd

from acumen_dashboard.table.engine import TableView

ID_COLUMN = "id"
DEPTH_COLUMN = "depth"


def to_frame(view: TableView, formatted: bool = True) -> pd.DataFrame:
    """Visible rows as a DataFrame, one column per table column label.

    Records are built positionally, so repeated labels (or a label equal to
    "id" or "depth") give repeated frame columns rather than dropping data.
    `formatted=False` keeps the raw field values instead of display strings.
    """
    columns = [ID_COLUMN, DEPTH_COLUMN, *(header.label for header in view.headers)]
    records = [
        [row.id, row.depth, *(cell.display if formatted else cell.value for cell in row.cells)]
        for row in view.rows
    ]
    return pd.DataFrame(records, columns=columns)


def to_csv_bytes(view: TableView, formatted: bool = True) -> bytes:
    return to_frame(view, formatted=formatted).to_csv(index=False).encode("utf-8")
