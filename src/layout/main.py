"""
src/layout/main.py
───────────────────
Main application layout composition.

Contains:
  - dcc.Location for routing
  - dcc.Store for the last-seen notification sequence (popups)
  - dcc.Interval for live UI refresh (cadence follows the stream)
  - dcc.Download for the JSON export
  - device detail modal (shared by every page)
  - Navbar + page content container
"""
from dash import html, dcc

from config.settings import settings
from src.layout.components.device_detail import device_detail_modal
from src.layout.navbar import create_navbar


def create_layout() -> html.Div:
    """Assemble the root application layout."""
    return html.Div(
        [
            # ── Client-side state stores ──────────────────────────────────────
            dcc.Store(id="store-seen-notifications", data=0),

            # ── Routing ───────────────────────────────────────────────────────
            dcc.Location(id="url", refresh=False),

            # ── Live update interval ──────────────────────────────────────────
            dcc.Interval(
                id="interval-live",
                interval=settings.UPDATE_INTERVAL_MS,
                n_intervals=0,
            ),

            # ── Export download target ────────────────────────────────────────
            dcc.Download(id="export-download"),

            # ── Device detail modal ───────────────────────────────────────────
            device_detail_modal(),

            # ── Navigation bar ────────────────────────────────────────────────
            create_navbar(),

            # ── Failure notice + popup alerts ─────────────────────────────────
            html.Div(id="stream-error-notice"),
            html.Div(
                id="popup-alert-container",
                style={"position": "fixed", "top": "70px", "right": "16px", "zIndex": 1050, "width": "340px"},
            ),

            # ── Page content ──────────────────────────────────────────────────
            html.Div(
                id="page-content",
                style={"minHeight": "calc(100vh - 60px)"},
            ),

            # ── Footer ────────────────────────────────────────────────────────
            html.Footer(
                [
                    html.Span("Medical Device Risk Monitor"),
                    html.Span(" · "),
                    html.Span("Rule-based risk scoring (XGBoost v2.1.0 label)"),
                    html.Span(" · "),
                    html.Span("Simulated telemetry"),
                ],
                style={
                    "textAlign": "center",
                    "padding": ".7rem",
                    "fontSize": ".72rem",
                    "color": "#8b949e",
                    "borderTop": "1px solid #30363d",
                    "marginTop": "2rem",
                },
            ),
        ],
        style={"backgroundColor": "#0d1117", "minHeight": "100vh", "color": "#c9d1d9"},
    )
