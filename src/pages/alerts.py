"""
src/pages/alerts.py
────────────────────
Alert log page with dismiss and clear-all.
"""

import dash_bootstrap_components as dbc
from dash import html


def layout() -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    html.H2("System Alerts", className="page-title"),
                    html.P(
                        "Most recent 50 critical device alerts",
                        className="page-subtitle",
                    ),
                ],
                className="page-header",
            ),
            # ── Summary badges ─────────────────────────────────────────────────
            html.Div(id="alerts-summary-badges", className="mb-3"),
            dbc.Button("Clear All", id="clear-alerts-btn", n_clicks=0, color="secondary", size="sm", className="mb-3"),
            # ── Alert list ─────────────────────────────────────────────────────
            html.Div(
                html.Div(id="alerts-list"),
                className="chart-card",
            ),
        ],
        style={"padding": "1.5rem"},
    )
