"""
src/pages/overview.py
──────────────────────
Live fleet dashboard page.

Static structure; KPI, chart and device-grid data injected via callbacks.
"""

import dash_bootstrap_components as dbc
from dash import dcc, html

from config.settings import settings

MUTED = "#8b949e"


def layout() -> html.Div:
    return html.Div(
        [
            # ── Page header ───────────────────────────────────────────────────
            html.Div(
                [
                    html.H2("Fleet Dashboard", className="page-title"),
                    html.P(
                        "Live risk scoring of 24 medical devices across 5 facilities",
                        className="page-subtitle",
                    ),
                ],
                className="page-header",
            ),
            # ── Fleet KPI banner (dynamic) ────────────────────────────────────
            html.Div(id="overview-kpi-banner", className="mb-4"),
            # ── Stream controls + live metrics ────────────────────────────────
            dbc.Row(
                [
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Update Interval", className="chart-title"),
                                dcc.Slider(
                                    id="speed-slider",
                                    min=settings.MIN_INTERVAL_MS // 1000,
                                    max=settings.MAX_INTERVAL_MS // 1000,
                                    step=1,
                                    value=settings.UPDATE_INTERVAL_MS // 1000,
                                    marks=None,
                                    tooltip={"placement": "bottom", "always_visible": True},
                                ),
                                html.Div(id="speed-display", style={"fontSize": ".72rem", "color": MUTED}),
                            ],
                            className="chart-card",
                        ),
                        md=6,
                    ),
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Live Metrics", className="chart-title"),
                                html.Div(id="overview-live-metrics"),
                            ],
                            className="chart-card",
                        ),
                        md=6,
                    ),
                ],
                className="g-3 mb-3",
            ),
            # ── Charts row (dynamic) ──────────────────────────────────────────
            dbc.Row(
                [
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Risk Distribution", className="chart-title"),
                                dcc.Graph(id="overview-risk-chart", config={"displayModeBar": False}),
                            ],
                            className="chart-card",
                        ),
                        md=4,
                    ),
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Average Temperature", className="chart-title"),
                                dcc.Graph(id="overview-temperature-chart", config={"displayModeBar": False}),
                            ],
                            className="chart-card",
                        ),
                        md=4,
                    ),
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Live Temperature Stream", className="chart-title"),
                                dcc.Graph(id="overview-stream-chart", config={"displayModeBar": False}),
                                html.Div(id="overview-stream-stats"),
                            ],
                            className="chart-card",
                        ),
                        md=4,
                    ),
                ],
                className="g-3 mb-3",
            ),
            # ── Device grid (dynamic) ─────────────────────────────────────────
            html.Div(id="overview-device-grid"),
        ],
        style={"padding": "1.5rem"},
    )
