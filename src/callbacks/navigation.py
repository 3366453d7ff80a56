"""
src/callbacks/navigation.py — Page routing and live dashboard callbacks.
"""
from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import Input, Output, State, html

from config.alerts import CATEGORY_COLORS
from src.data.models import FleetSummary
from src.data.store import get_store
from src.data.streaming import get_stream
from src.layout.components.charts import risk_distribution_figure, temperature_figure
from src.layout.components.kpi_card import kpi_card
from src.layout.components.risk_badge import device_card

MUTED = "#8b949e"


def kpi_banner(summary: FleetSummary | None, total_devices: int) -> dbc.Row:
    """Total / Low / Medium / High cards; deltas shown once a summary exists."""
    low = summary.low_count if summary else 0
    medium = summary.medium_count if summary else 0
    high = summary.high_count if summary else 0

    return dbc.Row(
        [
            dbc.Col(kpi_card("Total Devices", str(total_devices), "#58a6ff"), xs=6, md=3),
            dbc.Col(kpi_card("Low Risk", str(low), CATEGORY_COLORS["Low"],
                             change=summary.low_change if summary else None, higher_is_worse=False), xs=6, md=3),
            dbc.Col(kpi_card("Medium Risk", str(medium), CATEGORY_COLORS["Medium"],
                             change=summary.medium_change if summary else None), xs=6, md=3),
            dbc.Col(kpi_card("High Risk", str(high), CATEGORY_COLORS["High"],
                             change=summary.high_change if summary else None,
                             border_color=CATEGORY_COLORS["High"] if high else "#30363d"), xs=6, md=3),
        ],
        className="g-3",
    )


def _metric_line(label: str, value: str) -> html.Div:
    return html.Div(
        [html.Span(label, style={"color": MUTED}), html.Span(value, style={"fontWeight": "700"})],
        style={"display": "flex", "justifyContent": "space-between", "fontSize": ".8rem"},
    )


def register(app) -> None:
    """Register navigation + dashboard page callbacks."""

    # ── Page routing ──────────────────────────────────────────────────────────
    from src.pages import alerts, inventory, manual, overview

    @app.callback(
        Output("page-content", "children"),
        Input("url", "pathname"),
    )
    def display_page(pathname: str):
        routes = {
            "/": overview.layout,
            "/batch": manual.layout,
            "/manual": manual.layout,
            "/inventory": inventory.layout,
            "/alerts": alerts.layout,
        }
        return routes.get(pathname, overview.layout)()

    # ── Navbar collapse ───────────────────────────────────────────────────────
    @app.callback(
        Output("navbar-collapse", "is_open"),
        Input("navbar-toggler", "n_clicks"),
        State("navbar-collapse", "is_open"),
        prevent_initial_call=True,
    )
    def toggle_navbar(n_clicks: int, is_open: bool) -> bool:
        return not is_open

    # ── Dashboard ─────────────────────────────────────────────────────────────
    @app.callback(
        [
            Output("overview-kpi-banner", "children"),
            Output("overview-risk-chart", "figure"),
            Output("overview-temperature-chart", "figure"),
            Output("overview-stream-chart", "figure"),
            Output("overview-stream-stats", "children"),
            Output("overview-live-metrics", "children"),
            Output("overview-device-grid", "children"),
        ],
        Input("interval-live", "n_intervals"),
    )
    def update_overview(n_intervals: int):
        store = get_store()
        stream = get_stream()
        devices = store.devices()

        banner = kpi_banner(store.summary, len(devices))
        risk_fig = risk_distribution_figure(store.summary)
        temp_fig = temperature_figure(list(store.temperature_history))
        samples = list(store.stream_samples)
        stream_fig = temperature_figure(samples, name="Live Temperature", color=CATEGORY_COLORS["Medium"], fill=False)

        stats = store.stream_stats()
        if stats is None:
            stats_view = html.P("No streaming data available", style={"color": MUTED, "fontSize": ".8rem"})
        else:
            stats_view = html.Div([
                _metric_line("Data Points", str(stats["data_points"])),
                _metric_line("Avg Temperature", f"{stats['avg']:.1f}°C"),
                _metric_line("Max Temperature", f"{stats['max']:.1f}°C"),
                _metric_line("Min Temperature", f"{stats['min']:.1f}°C"),
            ])

        running = stream is not None and stream.is_running
        live_metrics = html.Div([
            _metric_line("Updates / minute", str(stream.updates_per_minute) if stream else "0"),
            _metric_line("Update Interval", f"{stream.interval_ms / 1000:.0f}s" if stream else "-"),
            _metric_line("Updates Count", str(stream.update_count) if stream else str(store.update_count)),
            _metric_line("Data Rate", "Real-time" if running else "Stopped"),
            _metric_line("Connection", "Active" if running else "Disconnected"),
        ])

        grid = dbc.Row([dbc.Col(device_card(d), xs=12, md=6, lg=3) for d in devices], className="g-3")

        return banner, risk_fig, temp_fig, stream_fig, stats_view, live_metrics, grid
