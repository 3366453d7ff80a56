"""
src/layout/components/risk_badge.py
────────────────────────────────────
Risk category badge and device card.
"""
from dash import html

from config.alerts import CATEGORY_COLORS
from src.analytics.risk_engine import round_half_up
from src.data.models import Device
from src.layout.components.kpi_card import mini_kpi

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"


def risk_badge(category: str | None) -> html.Span:
    label = category or "Low"
    color = CATEGORY_COLORS.get(label, MUTED)
    return html.Span(
        label,
        style={
            "fontSize": ".65rem",
            "fontWeight": "700",
            "color": color,
            "border": f"1px solid {color}",
            "borderRadius": "4px",
            "padding": "1px 7px",
            "whiteSpace": "nowrap",
        },
    )


def device_card(device: Device) -> html.Div:
    prediction = device.prediction
    category = prediction.category.value if prediction else None
    confidence = f"{round(prediction.confidence * 100)}%" if prediction else "0%"
    border = CATEGORY_COLORS.get(category, BORDER) if category == "High" else BORDER
    t = device.telemetry

    return html.Div(
        [
            html.Div(
                [
                    html.Div(
                        [
                            html.Div(device.name, style={"fontWeight": "700", "fontSize": ".9rem"}),
                            html.Div(device.device_type, style={"fontSize": ".68rem", "color": MUTED}),
                        ]
                    ),
                    risk_badge(category),
                ],
                style={"display": "flex", "justifyContent": "space-between", "marginBottom": "10px"},
            ),
            html.Div(
                [
                    mini_kpi("Temperature", f"{t.temperature:.1f}°C"),
                    mini_kpi("Vibration", f"{t.vibration:.2f}"),
                    mini_kpi("Runtime", f"{round_half_up(t.runtime_hours)}h"),
                    mini_kpi("Confidence", confidence),
                ],
                style={"display": "grid", "gridTemplateColumns": "1fr 1fr", "gap": "8px"},
            ),
        ],
        id={"type": "device-card", "index": device.id},
        n_clicks=0,
        style={
            "backgroundColor": CARD_BG,
            "border": f"1px solid {border}",
            "borderRadius": "8px",
            "padding": "14px",
            "cursor": "pointer",
        },
    )
