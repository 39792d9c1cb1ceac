"""Shared fixtures for the drill-through table tests."""

import pytest

from acumen_dashboard.table.rows import build_forest

COLUMNS = [
    {"key": "name", "label": "Name", "sortable": True, "drillDown": True},
    {"key": "revenue", "label": "Revenue", "sortable": True, "type": "currency"},
    {"key": "growth", "label": "Growth", "sortable": True, "type": "percentage"},
    {"key": "status", "label": "Status"},
]


@pytest.fixture
def columns():
    return [dict(column) for column in COLUMNS]


@pytest.fixture
def abc_forest():
    """[A(children=[A1, A2]), B, C]"""
    return build_forest([
        {
            "id": "A",
            "name": "Alpha",
            "revenue": 300,
            "growth": 0.1,
            "children": [
                {"id": "A1", "name": "Alpha One", "revenue": 100, "growth": 0.2},
                {"id": "A2", "name": "Alpha Two", "revenue": 200, "growth": 0.05},
            ],
        },
        {"id": "B", "name": "Bravo", "revenue": 150, "growth": 0.3},
        {"id": "C", "name": "Charlie", "revenue": 50, "growth": None},
    ])


@pytest.fixture
def make_rows():
    """Factory for N flat top-level rows named row-000, row-001, ..."""

    def _make(n):
        return build_forest({"id": str(i), "name": f"row-{i:03d}", "revenue": i * 10} for i in range(n))

    return _make
