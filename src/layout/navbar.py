"""
src/layout/navbar.py
─────────────────────
Navigation bar with page links, live indicator and stream controls.
"""

import dash_bootstrap_components as dbc
from dash import html

from config.settings import settings

NAV_BG = "#0d1117"
BORDER = "#30363d"
ACCENT = "#58a6ff"


def create_navbar() -> dbc.Navbar:
    return dbc.Navbar(
        dbc.Container(
            [
                # Brand
                dbc.NavbarBrand(
                    [
                        html.Span("✚", style={"marginRight": "8px", "fontSize": "1.1rem"}),
                        html.Span(
                            "Device Risk Monitor", style={"fontWeight": "700", "letterSpacing": ".04em"}
                        ),
                        html.Span(
                            "● LIVE",
                            id="live-indicator",
                            style={"marginLeft": "10px", "fontSize": ".68rem", "color": "#da3633"},
                        ),
                    ],
                    href="/",
                    style={"color": ACCENT, "textDecoration": "none"},
                ),
                dbc.NavbarToggler(id="navbar-toggler", n_clicks=0),
                dbc.Collapse(
                    dbc.Nav(
                        [
                            dbc.NavItem(dbc.NavLink("Dashboard", href="/", active="exact")),
                            dbc.NavItem(dbc.NavLink("Batch", href="/batch", active="exact")),
                            dbc.NavItem(dbc.NavLink("Manual", href="/manual", active="exact")),
                            dbc.NavItem(dbc.NavLink("Inventory", href="/inventory", active="exact")),
                            dbc.NavItem(dbc.NavLink("Alerts", href="/alerts", active="exact")),
                            # Stream controls
                            dbc.NavItem(
                                html.Div(
                                    [
                                        html.Button(
                                            "Pause Live" if settings.AUTOSTART_STREAM else "Start Live",
                                            id="toggle-stream-btn",
                                            n_clicks=0,
                                            style=_nav_btn_style(True),
                                        ),
                                        html.Button(
                                            "🔊" if settings.SOUND_ENABLED else "🔇",
                                            id="sound-toggle-btn",
                                            n_clicks=0,
                                            style=_nav_btn_style(False),
                                        ),
                                        html.Button(
                                            "Export",
                                            id="export-btn",
                                            n_clicks=0,
                                            style=_nav_btn_style(False),
                                        ),
                                    ],
                                    style={
                                        "display": "flex",
                                        "gap": "4px",
                                        "alignItems": "center",
                                        "marginLeft": "12px",
                                    },
                                )
                            ),
                        ],
                        className="ms-auto",
                        navbar=True,
                    ),
                    id="navbar-collapse",
                    navbar=True,
                    is_open=False,
                ),
            ],
            fluid=True,
        ),
        color=NAV_BG,
        dark=True,
        sticky="top",
        style={"borderBottom": f"1px solid {BORDER}", "padding": ".5rem 1rem"},
    )


def _nav_btn_style(primary: bool) -> dict:
    return {
        "background": "rgba(88,166,255,0.15)" if primary else "transparent",
        "border": "1px solid #30363d",
        "color": "#58a6ff" if primary else "#8b949e",
        "borderRadius": "4px",
        "fontSize": ".72rem",
        "fontWeight": "700",
        "padding": "2px 8px",
        "cursor": "pointer",
    }
