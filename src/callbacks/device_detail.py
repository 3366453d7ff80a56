"""
src/callbacks/device_detail.py
───────────────────────────────
Opens the device detail modal from a device card or a batch analysis row.
"""
from __future__ import annotations

import logging

from dash import ALL, Input, Output, State, ctx, no_update

from src.data.errors import UnknownDeviceError
from src.data.store import get_store
from src.layout.components.device_detail import device_detail_body, device_detail_title

logger = logging.getLogger(__name__)

_OPENERS = ("device-card", "batch-row")


def register(app) -> None:

    @app.callback(
        [
            Output("device-detail-modal", "is_open"),
            Output("device-detail-title", "children"),
            Output("device-detail-body", "children"),
        ],
        [
            Input({"type": "device-card", "index": ALL}, "n_clicks"),
            Input({"type": "batch-row", "index": ALL}, "n_clicks"),
            Input("device-detail-close", "n_clicks"),
        ],
        State("device-detail-modal", "is_open"),
        prevent_initial_call=True,
    )
    def toggle_device_detail(card_clicks: list, row_clicks: list, close_clicks: int, is_open: bool):
        trigger = ctx.triggered_id

        if trigger == "device-detail-close":
            return False, no_update, no_update

        # Re-rendered cards arrive with n_clicks=0; only real clicks open the modal
        if not isinstance(trigger, dict) or trigger.get("type") not in _OPENERS:
            return no_update, no_update, no_update
        if not any(t["value"] for t in ctx.triggered):
            return no_update, no_update, no_update

        try:
            device = get_store().get_device(trigger["index"])
        except UnknownDeviceError as exc:
            logger.warning("Device detail unavailable: %s", exc)
            return no_update, no_update, no_update
        return True, device_detail_title(device), device_detail_body(device)
