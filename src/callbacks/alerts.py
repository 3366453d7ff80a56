"""
src/callbacks/alerts.py
────────────────────────
Alert log page callbacks: list, counts, dismiss and clear.
"""
from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import ALL, Input, Output, ctx, html

from config.alerts import SEVERITY_COLORS, SEVERITY_LABELS
from src.data.models import Alert
from src.data.store import get_store

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"


def _alert_item(alert: Alert) -> html.Div:
    color = SEVERITY_COLORS.get(alert.severity, MUTED)
    return html.Div(
        [
            html.Div(
                [
                    html.Div(alert.title, style={"fontWeight": "700", "color": color, "fontSize": ".85rem"}),
                    html.Div(alert.message, style={"fontSize": ".8rem"}),
                    html.Div(
                        f"{alert.timestamp.strftime('%d/%m %H:%M:%S')} - {alert.location}",
                        style={"fontSize": ".7rem", "color": MUTED},
                    ),
                ]
            ),
            html.Button(
                "×",
                id={"type": "dismiss-alert-btn", "index": alert.id},
                n_clicks=0,
                style={"background": "transparent", "border": "none", "color": MUTED, "fontSize": "1.2rem", "cursor": "pointer"},
            ),
        ],
        style={
            "display": "flex",
            "justifyContent": "space-between",
            "borderLeft": f"3px solid {color}",
            "borderBottom": f"1px solid {BORDER}",
            "padding": "8px 12px",
        },
    )


def build_alert_list(alerts: list[Alert]) -> html.Div:
    if not alerts:
        return html.P("No system alerts at this time.", style={"color": MUTED, "textAlign": "center", "padding": "20px"})
    return html.Div([_alert_item(a) for a in alerts])


def _count_badge(label: str, count: int, color: str) -> dbc.Col:
    return dbc.Col(
        html.Div(
            [
                html.Div(str(count), style={"fontSize": "1.4rem", "fontWeight": "700", "color": color}),
                html.Div(label, style={"fontSize": ".65rem", "color": MUTED, "textTransform": "uppercase"}),
            ],
            style={"backgroundColor": CARD_BG, "border": f"1px solid {BORDER}", "borderRadius": "8px", "padding": "10px 16px"},
        ),
        xs=6, md=3,
    )


def register(app) -> None:

    @app.callback(
        [
            Output("alerts-list", "children"),
            Output("alerts-summary-badges", "children"),
        ],
        [
            Input("interval-live", "n_intervals"),
            Input({"type": "dismiss-alert-btn", "index": ALL}, "n_clicks"),
            Input("clear-alerts-btn", "n_clicks"),
        ],
    )
    def update_alerts(n_intervals: int, dismiss_clicks: list, clear_clicks: int):
        store = get_store()
        trigger = ctx.triggered_id

        if trigger == "clear-alerts-btn" and clear_clicks:
            store.clear_alerts()
        elif isinstance(trigger, dict) and trigger.get("type") == "dismiss-alert-btn":
            if any(dismiss_clicks or []):
                store.dismiss_alert(trigger["index"])

        badges = dbc.Row(
            [
                _count_badge("Active Alerts", store.alerts.active_count, SEVERITY_COLORS["warning"]),
                _count_badge(SEVERITY_LABELS["critical"], store.alerts.critical_count, SEVERITY_COLORS["critical"]),
            ],
            className="g-2",
        )
        return build_alert_list(store.alert_list()), badges
