"""
Mock datasets for the dashboard pages.

Everything is in-process: analytics periods and customer accounts are fixed
records, the product catalogue is generated from a seeded RNG and linked into
a hierarchy from a flat frame. Loaders are cached with `st.cache_resource`
so the forest keeps its identity across Streamlit reruns and the table's
memoized stages stay warm.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

import numpy as np
import pandas as pd
import streamlit as st

from acumen_dashboard.data.hierarchy import build_forest_from_frame
from acumen_dashboard.table.rows import Row, build_forest

ANALYTICS_COLUMNS: List[Dict[str, Any]] = [
    {"key": "name", "label": "Period", "sortable": True, "drillDown": True},
    {"key": "revenue", "label": "Revenue", "sortable": True, "type": "currency"},
    {"key": "growth", "label": "Growth", "sortable": True, "type": "percentage"},
    {"key": "margin", "label": "Margin", "sortable": True, "type": "percentage"},
    {"key": "roi", "label": "ROI", "sortable": True, "type": "number"},
    {"key": "status", "label": "Status", "sortable": False},
]

CUSTOMER_COLUMNS: List[Dict[str, Any]] = [
    {"key": "name", "label": "Customer Name", "sortable": True, "drillDown": True},
    {"key": "type", "label": "Type", "sortable": True},
    {"key": "locations", "label": "Locations", "sortable": True, "type": "number"},
    {"key": "revenue", "label": "Revenue", "sortable": True, "type": "currency"},
    {"key": "growth", "label": "Growth", "sortable": True, "type": "percentage"},
]

PRODUCT_COLUMNS: List[Dict[str, Any]] = [
    {"key": "name", "label": "Product", "sortable": True, "drillDown": True},
    {"key": "sku", "label": "SKU", "sortable": True},
    {"key": "category", "label": "Category", "sortable": True},
    {"key": "price", "label": "Unit Price", "sortable": True, "type": "currency"},
    {"key": "stock", "label": "Stock", "sortable": True, "type": "number"},
    {"key": "growth", "label": "Growth", "sortable": True, "type": "percentage"},
    {"key": "launch_date", "label": "Launched", "sortable": True, "type": "date"},
]

ANALYTICS_RECORDS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "name": "Q3 2024 Performance",
        "revenue": 4_500_000,
        "growth": 0.15,
        "roi": 2.3,
        "status": "On Track",
        "children": [
            {"id": "1-1", "name": "July 2024", "revenue": 1_400_000, "growth": 0.12, "roi": 2.1, "status": "Completed"},
            {"id": "1-2", "name": "August 2024", "revenue": 1_550_000, "growth": 0.18, "roi": 2.4, "status": "Completed"},
            {"id": "1-3", "name": "September 2024", "revenue": 1_550_000, "growth": 0.15, "roi": 2.3, "status": "In Progress"},
        ],
    },
    {"id": "2", "name": "Q2 2024 Performance", "revenue": 4_200_000, "growth": 0.22, "roi": 2.1, "status": "Completed"},
    {"id": "3", "name": "Q1 2024 Performance", "revenue": 3_800_000, "growth": 0.18, "roi": 1.9, "status": "Completed"},
]

CUSTOMER_RECORDS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "name": "MegaMart Chain",
        "type": "Retail Chain",
        "locations": 45,
        "contact": "John Smith",
        "email": "john@megamart.com",
        "revenue": 12_500_000,
        "growth": 0.15,
        "children": [
            {"id": "1-n", "name": "MegaMart North", "type": "Region", "locations": 20, "revenue": 5_900_000, "growth": 0.17},
            {"id": "1-s", "name": "MegaMart South", "type": "Region", "locations": 25, "revenue": 6_600_000, "growth": 0.13},
        ],
    },
    {
        "id": "2",
        "name": "QuickShop Express",
        "type": "Convenience Store",
        "locations": 120,
        "contact": "Sarah Johnson",
        "email": "sarah@quickshop.com",
        "revenue": 8_300_000,
        "growth": 0.22,
    },
    {
        "id": "3",
        "name": "FreshFood Markets",
        "type": "Supermarket",
        "locations": 28,
        "contact": "Mike Davis",
        "email": "mike@freshfood.com",
        "revenue": 15_700_000,
        "growth": 0.08,
        "children": [
            {
                "id": "3-metro",
                "name": "FreshFood Metro",
                "type": "Banner",
                "locations": 18,
                "revenue": 11_200_000,
                "growth": 0.09,
                "children": [
                    {"id": "3-metro-1", "name": "Metro Downtown", "type": "Store", "locations": 1, "revenue": 1_300_000, "growth": 0.11},
                    {"id": "3-metro-2", "name": "Metro Harbour", "type": "Store", "locations": 1, "revenue": 950_000, "growth": 0.04},
                ],
            },
            {"id": "3-local", "name": "FreshFood Local", "type": "Banner", "locations": 10, "revenue": 4_500_000, "growth": 0.06},
        ],
    },
    {
        "id": "4",
        "name": "ValueMart Stores",
        "type": "Discount Store",
        "locations": 67,
        "contact": "Lisa Brown",
        "email": "lisa@valuemart.com",
        "revenue": 9_200_000,
        "growth": 0.18,
    },
]

CATALOGUE: List[Tuple[str, str, str, float]] = [
    ("Premium Coffee Blend", "BEV-COF", "Beverages", 12.99),
    ("Organic Green Tea", "BEV-TEA", "Beverages", 8.49),
    ("Sparkling Water", "BEV-WAT", "Beverages", 1.29),
    ("Chocolate Chip Cookies", "SNK-COO", "Snacks", 4.99),
    ("Sea Salt Crisps", "SNK-CRI", "Snacks", 2.49),
    ("Natural Yogurt", "DAI-YOG", "Dairy", 3.49),
    ("Aged Cheddar", "DAI-CHE", "Dairy", 6.99),
    ("Shampoo Pro Care", "PER-SHA", "Personal Care", 7.99),
    ("Mint Toothpaste", "PER-TOO", "Personal Care", 2.99),
    ("All-Purpose Cleaner", "HOM-CLE", "Home Care", 5.49),
    ("Laundry Pods", "HOM-LAU", "Home Care", 11.49),
]
VARIANTS = ["Regular", "Family Pack"]
REGIONS = ["North", "South", "East", "West"]


def analytics_rows() -> Tuple[Row, ...]:
    return build_forest(ANALYTICS_RECORDS)


def customer_rows() -> Tuple[Row, ...]:
    return build_forest(CUSTOMER_RECORDS)


def product_frame(seed: int = 42) -> pd.DataFrame:
    """Flat product table: one row per SKU plus one child row per region."""
    rng = np.random.default_rng(seed)
    launch_start = pd.Timestamp("2021-01-01")

    records: List[Dict[str, Any]] = []
    for idx, ((name, sku_prefix, category, price), variant) in enumerate(
        (item, variant) for item in CATALOGUE for variant in VARIANTS
    ):
        sku = f"{sku_prefix}-{idx + 1:03d}"
        family = variant == "Family Pack"
        stock = int(rng.integers(200, 2500))
        records.append({
            "id": sku,
            "parent_id": None,
            "name": f"{name} ({variant})" if family else name,
            "sku": sku,
            "category": category,
            "price": round(price * (2.6 if family else 1.0), 2),
            "stock": stock,
            "growth": round(float(rng.normal(0.12, 0.06)), 4),
            "launch_date": (launch_start + pd.Timedelta(days=int(rng.integers(0, 1200)))).date(),
        })
        shares = rng.dirichlet(np.ones(len(REGIONS)))
        for region, share in zip(REGIONS, shares):
            records.append({
                "id": f"{sku}-{region.lower()}",
                "parent_id": sku,
                "name": f"{region} region",
                "sku": sku,
                "category": category,
                "price": None,
                "stock": int(round(stock * share)),
                "growth": round(float(rng.normal(0.12, 0.08)), 4),
                "launch_date": None,
            })
    return pd.DataFrame.from_records(records)


def product_rows(seed: int = 42) -> Tuple[Row, ...]:
    return build_forest_from_frame(product_frame(seed))


@st.cache_resource(show_spinner=False)
def load_analytics() -> Tuple[Row, ...]:
    return analytics_rows()


@st.cache_resource(show_spinner=False)
def load_customers() -> Tuple[Row, ...]:
    return customer_rows()


@st.cache_resource(show_spinner=False)
def load_products(seed: int = 42) -> Tuple[Row, ...]:
    return product_rows(seed)
