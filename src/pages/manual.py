"""
src/pages/manual.py
────────────────────
What-if analysis for a single device and on-demand batch analysis.
"""

import dash_bootstrap_components as dbc
from dash import html

from config.devices import DEVICE_CATALOG

MUTED = "#8b949e"

_LABEL_STYLE = {"fontSize": ".72rem", "color": MUTED, "textTransform": "uppercase"}


def _field(label: str, component) -> dbc.Col:
    return dbc.Col([html.Label(label, style=_LABEL_STYLE), component], md=6, className="mb-2")


def layout() -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    html.H2("Manual Analysis", className="page-title"),
                    html.P("Score an ad-hoc telemetry reading outside the live loop", className="page-subtitle"),
                ],
                className="page-header",
            ),
            dbc.Row(
                [
                    dbc.Col(
                        html.Div(
                            [
                                dbc.Row(
                                    [
                                        _field("Device Model", dbc.Select(
                                            id="manual-device-name",
                                            options=[
                                                {"label": f"{name} ({device_type})", "value": name}
                                                for name, device_type in DEVICE_CATALOG.models.items()
                                            ],
                                            value=DEVICE_CATALOG.names()[0],
                                        )),
                                        _field("Temperature (°C)", dbc.Input(id="manual-temp", type="number", value=30, step=0.1)),
                                        _field("Vibration", dbc.Input(id="manual-vibration", type="number", value=0.3, step=0.01)),
                                        _field("Error Logs", dbc.Input(id="manual-errors", type="number", value=5, step=1)),
                                        _field("Runtime Hours", dbc.Input(id="manual-runtime", type="number", value=5000, step=1)),
                                    ]
                                ),
                                dbc.Button("Analyze Device", id="manual-submit", n_clicks=0, color="primary", size="sm"),
                            ],
                            className="chart-card",
                        ),
                        md=6,
                    ),
                    dbc.Col(html.Div(html.Div(id="manual-results"), className="chart-card"), md=6),
                ],
                className="g-3 mb-4",
            ),
            html.Div(
                [
                    html.H2("Batch Analysis", className="page-title"),
                    html.P("Score every device in the fleet against its current telemetry", className="page-subtitle"),
                ],
                className="page-header",
                id="batch",
            ),
            dbc.Button("Run XGBoost Analysis", id="batch-run-btn", n_clicks=0, color="primary", size="sm", className="mb-3"),
            html.Div(html.Div(id="batch-results"), className="chart-card"),
        ],
        style={"padding": "1.5rem"},
    )
