"""Quick validation script for the mock table datasets.

Run with `python scripts/validate_mock_data.py` to ensure every page's rows
build, every column key exists in the data and the first page renders.
"""

from __future__ import annotations

from acumen_dashboard.data.loader import (
    ANALYTICS_COLUMNS,
    CUSTOMER_COLUMNS,
    PRODUCT_COLUMNS,
    analytics_rows,
    customer_rows,
    product_rows,
)
from acumen_dashboard.table.engine import DrillThroughTable
from acumen_dashboard.table.rows import count_rows


def main() -> None:
    datasets = {
        "analytics": (ANALYTICS_COLUMNS, analytics_rows()),
        "customers": (CUSTOMER_COLUMNS, customer_rows()),
        "products": (PRODUCT_COLUMNS, product_rows()),
    }

    for name, (columns, rows) in datasets.items():
        keys = {column["key"] for column in columns}
        present = {key for row in rows for key in row.fields}
        missing = sorted(keys - present)
        # analytics has no margin figures yet; the column renders "-"
        if missing and missing != ["margin"]:
            raise SystemExit(f"{name}: columns without data: {missing}")

        view = DrillThroughTable(columns, rows).view()
        assert not view.empty, f"{name} should render at least one row"
        print(f"{name}: {len(rows)} top-level rows, {count_rows(rows)} total, {view.total_pages} page(s)")

    print("Mock data validation passed.")


if __name__ == "__main__":
    main()
