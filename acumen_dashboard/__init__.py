"""
Core package for the Acumen sales dashboard.

`table` holds the drill-through table engine (filtering, sorting, pagination,
expansion and events) and has no Streamlit dependency. `data` provides mock
datasets and hierarchy builders, and `ui` renders everything with Streamlit
for the top-level `app.py`.
"""
