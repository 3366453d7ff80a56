"""
src/callbacks/inventory.py
───────────────────────────
Inventory table filtering.
"""
from __future__ import annotations

import pandas as pd
from dash import Input, Output, html

from src.analytics.risk_engine import round_half_up
from src.data.simulator import to_dataframe
from src.data.store import get_store

BORDER = "#30363d"
MUTED = "#8b949e"

_COLUMNS = [
    ("id", "ID"),
    ("name", "Device Name"),
    ("device_type", "Type"),
    ("location", "Location"),
    ("device_age_years", "Age (Years)"),
    ("runtime_hours", "Runtime (Hours)"),
    ("temperature", "Temperature"),
    ("category", "Risk"),
    ("last_update", "Last Update"),
]


def _format(column: str, value) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return "-"
    if column == "device_age_years":
        return f"{value:.1f}"
    if column == "runtime_hours":
        return str(round_half_up(value))
    if column == "temperature":
        return f"{value:.1f}°C"
    if column == "last_update":
        return pd.to_datetime(value).strftime("%H:%M:%S")
    return str(value)


def build_inventory_table(df: pd.DataFrame) -> html.Div:
    if df.empty:
        return html.Div(
            "No devices match the selected filters.",
            style={"color": MUTED, "padding": "20px", "textAlign": "center"},
        )

    rows = [
        html.Tr(
            [html.Td(_format(col, row[col]), style={"fontSize": ".78rem"}) for col, _ in _COLUMNS],
            style={"borderBottom": f"1px solid {BORDER}"},
        )
        for _, row in df.iterrows()
    ]
    return html.Div(
        html.Table(
            [
                html.Thead(
                    html.Tr(
                        [html.Th(label) for _, label in _COLUMNS],
                        style={"color": MUTED, "fontSize": ".68rem", "textTransform": "uppercase"},
                    )
                ),
                html.Tbody(rows),
            ],
            style={"width": "100%", "borderCollapse": "collapse", "fontSize": ".82rem"},
        ),
        style={"overflowX": "auto"},
    )


def register(app) -> None:

    @app.callback(
        Output("inventory-table", "children"),
        [
            Input("inventory-search", "value"),
            Input("inventory-filter-type", "value"),
            Input("inventory-filter-location", "value"),
            Input("interval-live", "n_intervals"),
        ],
    )
    def update_inventory(search: str | None, device_type: str | None, location: str | None, n_intervals: int):
        devices = get_store().filter_devices(search or "", device_type, location)
        return build_inventory_table(to_dataframe(devices))
