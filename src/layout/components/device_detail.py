"""
src/layout/components/device_detail.py
───────────────────────────────────────
Device detail modal: full telemetry snapshot plus the live prediction and
every risk factor behind it. Opened from a device card or a batch row.
"""
import dash_bootstrap_components as dbc
from dash import html

from config.alerts import CATEGORY_COLORS
from src.analytics.risk_engine import round_half_up
from src.data.models import Device
from src.layout.components.risk_badge import risk_badge

BORDER = "#30363d"
MUTED = "#8b949e"


def _row(label: str, value, color: str = "#c9d1d9") -> html.Div:
    return html.Div(
        [html.Span(label, style={"color": MUTED}), html.Span(value, style={"fontWeight": "700", "color": color})],
        style={"display": "flex", "justifyContent": "space-between", "fontSize": ".8rem", "marginBottom": "4px"},
    )


def _section(title: str, rows: list) -> html.Div:
    return html.Div(
        [html.H6(title, style={"fontSize": ".72rem", "color": MUTED, "textTransform": "uppercase"}), *rows],
        style={"borderBottom": f"1px solid {BORDER}", "paddingBottom": "8px", "marginBottom": "10px"},
    )


def device_detail_body(device: Device) -> html.Div:
    t = device.telemetry
    prediction = device.prediction

    info = _section("Device Information", [
        _row("Type", device.device_type),
        _row("Location", device.location),
        _row("Age", f"{t.device_age_years:.1f} years"),
        _row("Repairs", str(t.repair_count)),
        _row("Last Update", device.last_update.strftime("%H:%M:%S")),
    ])
    telemetry = _section("Live Telemetry", [
        _row("Temperature", f"{t.temperature:.1f}°C"),
        _row("Vibration", f"{t.vibration:.2f}"),
        _row("Error Logs", str(t.error_log_count)),
        _row("Runtime", f"{round_half_up(t.runtime_hours)} hours"),
        _row("Pressure", f"{t.pressure:.0f} units"),
        _row("Current Draw", f"{t.current_draw_amps:.1f}A"),
    ])

    if prediction is None:
        assessment = html.P("Awaiting first live update.", style={"color": MUTED, "fontSize": ".8rem"})
    else:
        category = prediction.category.value
        assessment = html.Div([
            _row("Risk Level", category, CATEGORY_COLORS.get(category, MUTED)),
            _row("Confidence", f"{round(prediction.confidence * 100)}%"),
            _row("Risk Score", f"{prediction.score * 100:.1f}%"),
            _row("Model", prediction.model_version),
            html.Strong("Risk Factors:", style={"fontSize": ".8rem"}),
            html.Ul([html.Li(f) for f in prediction.factors], style={"fontSize": ".8rem", "paddingLeft": "20px"}),
        ])

    return html.Div([info, telemetry, _section("Risk Assessment", [assessment])])


def device_detail_title(device: Device) -> html.Div:
    category = device.prediction.category.value if device.prediction else None
    return html.Div(
        [html.Span(device.name, style={"marginRight": "10px"}), risk_badge(category)],
        style={"display": "flex", "alignItems": "center"},
    )


def device_detail_modal() -> dbc.Modal:
    return dbc.Modal(
        [
            dbc.ModalHeader(dbc.ModalTitle(id="device-detail-title")),
            dbc.ModalBody(id="device-detail-body"),
            dbc.ModalFooter(dbc.Button("Close", id="device-detail-close", n_clicks=0, color="secondary", size="sm")),
        ],
        id="device-detail-modal",
        is_open=False,
        centered=True,
    )
