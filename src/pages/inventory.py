"""
src/pages/inventory.py
───────────────────────
Device inventory with free-text search and type / location filters.
"""

import dash_bootstrap_components as dbc
from dash import dcc, html

from config.devices import DEVICE_CATALOG

MUTED = "#8b949e"

_LABEL_STYLE = {"fontSize": ".72rem", "color": MUTED, "textTransform": "uppercase"}


def layout() -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    html.H2("Device Inventory", className="page-title"),
                    html.P("Identity and live telemetry of every monitored device", className="page-subtitle"),
                ],
                className="page-header",
            ),
            dbc.Row(
                [
                    dbc.Col(
                        [
                            html.Label("Search", style=_LABEL_STYLE),
                            dbc.Input(id="inventory-search", type="text", placeholder="Model or type…", debounce=True),
                        ],
                        md=4,
                    ),
                    dbc.Col(
                        [
                            html.Label("Type", style=_LABEL_STYLE),
                            dcc.Dropdown(
                                id="inventory-filter-type",
                                options=[{"label": t, "value": t} for t in DEVICE_CATALOG.device_types],
                                placeholder="All types",
                                className="dark-dropdown",
                            ),
                        ],
                        md=4,
                    ),
                    dbc.Col(
                        [
                            html.Label("Location", style=_LABEL_STYLE),
                            dcc.Dropdown(
                                id="inventory-filter-location",
                                options=[{"label": loc, "value": loc} for loc in DEVICE_CATALOG.locations],
                                placeholder="All locations",
                                className="dark-dropdown",
                            ),
                        ],
                        md=4,
                    ),
                ],
                className="g-3 mb-3",
            ),
            html.Div(html.Div(id="inventory-table"), className="chart-card"),
        ],
        style={"padding": "1.5rem"},
    )
