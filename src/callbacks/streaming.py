"""
src/callbacks/streaming.py
───────────────────────────
Live-stream controls: start/pause, cadence, sound, export, popup
notifications and the tick-failure notice.
"""
from __future__ import annotations

import logging
from datetime import datetime

import dash_bootstrap_components as dbc
from dash import Input, Output, State, html, no_update

from config.alerts import CRITICAL_ALERT_MESSAGE, CRITICAL_ALERT_TITLE
from src.data.export import build_snapshot, export_filename, export_json
from src.data.models import Device
from src.data.store import get_store
from src.data.streaming import get_stream

logger = logging.getLogger(__name__)


def popup_toast(device: Device, timestamp: datetime | None = None) -> dbc.Toast:
    """Rising-edge popup for `device`, built from its current state."""
    prediction = device.prediction
    body = [
        html.Strong(CRITICAL_ALERT_MESSAGE.format(name=device.name)),
        html.Br(), f"{device.name} - {device.device_type}",
        html.Br(), f"Location: {device.location}",
        html.Br(), f"Risk Level: {prediction.category.value if prediction else 'High'}",
        html.Br(), f"Temperature: {device.telemetry.temperature:.1f}°C",
        html.Br(), f"Vibration: {device.telemetry.vibration:.2f}",
        html.Br(), html.Strong("Action Required: Immediate Inspection"),
    ]
    header = f"🚨 {CRITICAL_ALERT_TITLE}"
    if timestamp is not None:
        header += f" · {timestamp:%H:%M:%S}"

    return dbc.Toast(
        body,
        header=header,
        icon="danger",
        dismissable=True,
        duration=10_000,
        is_open=True,
        style={"marginBottom": "8px"},
    )


def register(app) -> None:

    @app.callback(
        [
            Output("toggle-stream-btn", "children"),
            Output("live-indicator", "style"),
        ],
        Input("toggle-stream-btn", "n_clicks"),
    )
    def toggle_stream(n_clicks: int):
        stream = get_stream()
        running = stream is not None and stream.is_running
        if n_clicks and stream is not None:
            running = stream.toggle()
        style = {"marginLeft": "10px", "fontSize": ".68rem", "color": "#da3633",
                 "display": "inline" if running else "none"}
        return ("Pause Live" if running else "Start Live"), style

    @app.callback(
        [
            Output("interval-live", "interval"),
            Output("speed-display", "children"),
        ],
        Input("speed-slider", "value"),
        prevent_initial_call=True,
    )
    def change_speed(seconds: int):
        stream = get_stream()
        interval_ms = int(seconds) * 1000
        if stream is not None:
            stream.set_interval(interval_ms)
        return interval_ms, f"{seconds}s"

    @app.callback(
        Output("sound-toggle-btn", "children"),
        Input("sound-toggle-btn", "n_clicks"),
        prevent_initial_call=True,
    )
    def toggle_sound(n_clicks: int) -> str:
        store = get_store()
        store.sound_enabled = not store.sound_enabled
        logger.info("Sound alerts %s", "enabled" if store.sound_enabled else "disabled")
        return "🔊" if store.sound_enabled else "🔇"

    @app.callback(
        Output("export-download", "data"),
        Input("export-btn", "n_clicks"),
        prevent_initial_call=True,
    )
    def export_data(n_clicks: int):
        snapshot = build_snapshot(get_store(), get_stream())
        logger.info("Exported %d devices and %d alerts", len(snapshot.devices), len(snapshot.alerts))
        return {"content": export_json(snapshot), "filename": export_filename(snapshot.timestamp)}

    @app.callback(
        [
            Output("popup-alert-container", "children"),
            Output("store-seen-notifications", "data"),
        ],
        Input("interval-live", "n_intervals"),
        [
            State("store-seen-notifications", "data"),
            State("popup-alert-container", "children"),
        ],
    )
    def show_popups(n_intervals: int, seen_seq: int | None, current):
        store = get_store()
        if not n_intervals:
            # First render: earlier rising edges count as seen
            return [], store.last_notification_seq
        fresh = store.notifications_since(seen_seq or 0)
        if not fresh:
            return no_update, no_update
        toasts = [popup_toast(store.get_device(n.device_id), n.timestamp) for n in reversed(fresh)]
        return (toasts + list(current or []))[:5], fresh[-1].seq

    @app.callback(
        Output("stream-error-notice", "children"),
        Input("interval-live", "n_intervals"),
    )
    def show_error_notice(n_intervals: int):
        stream = get_stream()
        if stream is None or stream.last_error is None:
            return no_update
        message = stream.last_error
        stream.clear_error()
        return dbc.Alert(message, color="danger", dismissable=True, duration=8_000, className="m-2")
