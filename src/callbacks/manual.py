"""
src/callbacks/manual.py
────────────────────────
Manual what-if evaluation and batch analysis callbacks.
"""
from __future__ import annotations

import logging

import pandas as pd
from dash import Input, Output, State, html

from config.alerts import CATEGORY_COLORS
from src.analytics.risk_engine import evaluate_manual, score_fleet
from src.data.errors import ManualInputError
from src.data.models import Prediction
from src.data.simulator import make_rng
from src.data.store import get_store

logger = logging.getLogger(__name__)

BORDER = "#30363d"
MUTED = "#8b949e"

# Synthesized manual fields (repairs, pressure, current) vary per request
_manual_rng = make_rng(None)


def _result_item(label: str, value, color: str = "#c9d1d9") -> html.Div:
    return html.Div(
        [html.Span(label, style={"color": MUTED}), html.Span(value, style={"fontWeight": "700", "color": color})],
        style={"display": "flex", "justifyContent": "space-between", "marginBottom": "6px"},
    )


def render_prediction(prediction: Prediction) -> html.Div:
    category = prediction.category.value
    return html.Div(
        [
            _result_item("Risk Level:", category, CATEGORY_COLORS.get(category, MUTED)),
            _result_item("Confidence:", f"{round(prediction.confidence * 100)}%"),
            _result_item("Risk Score:", f"{prediction.score * 100:.1f}%"),
            _result_item("Model:", prediction.model_version),
            html.Div(
                [
                    html.Strong("Risk Factors:"),
                    html.Ul([html.Li(f) for f in prediction.factors], style={"margin": "8px 0", "paddingLeft": "20px"}),
                ],
                style={"marginTop": "16px"},
            ),
        ]
    )


def build_batch_table(df: pd.DataFrame) -> html.Table:
    headers = ["Device", "Type", "Location", "Risk Level", "Confidence", "Key Factors"]
    rows = [
        html.Tr(
            [
                html.Td(row["name"]),
                html.Td(row["device_type"]),
                html.Td(row["location"]),
                html.Td(html.Span(row["category"], style={"color": CATEGORY_COLORS.get(row["category"], MUTED), "fontWeight": "700"})),
                html.Td(f"{round(row['confidence'] * 100)}%"),
                html.Td(row["key_factors"], style={"color": MUTED, "fontSize": ".72rem"}),
            ],
            id={"type": "batch-row", "index": int(row["id"])},
            n_clicks=0,
            style={"borderBottom": f"1px solid {BORDER}", "fontSize": ".78rem", "cursor": "pointer"},
        )
        for _, row in df.iterrows()
    ]
    return html.Table(
        [
            html.Thead(html.Tr([html.Th(h) for h in headers],
                               style={"color": MUTED, "fontSize": ".68rem", "textTransform": "uppercase"})),
            html.Tbody(rows),
        ],
        style={"width": "100%", "borderCollapse": "collapse"},
    )


def register(app) -> None:

    @app.callback(
        Output("manual-results", "children"),
        Input("manual-submit", "n_clicks"),
        [
            State("manual-device-name", "value"),
            State("manual-temp", "value"),
            State("manual-vibration", "value"),
            State("manual-errors", "value"),
            State("manual-runtime", "value"),
        ],
        prevent_initial_call=True,
    )
    def run_manual(n_clicks, name, temperature, vibration, errors, runtime):
        raw = {
            "name": name,
            "temperature": temperature,
            "vibration": vibration,
            "error_log_count": errors,
            "runtime_hours": runtime,
        }
        try:
            prediction = evaluate_manual(raw, _manual_rng)
        except ManualInputError as exc:
            logger.info("Manual prediction rejected: %s", exc.message)
            return html.Div(f"Error analyzing device: {exc.message}", style={"color": "#da3633"})
        return render_prediction(prediction)

    @app.callback(
        Output("batch-results", "children"),
        Input("batch-run-btn", "n_clicks"),
        prevent_initial_call=True,
    )
    def run_batch(n_clicks: int):
        df = score_fleet(get_store().devices())
        logger.info("Batch analysis completed for %d devices", len(df))
        return build_batch_table(df)
