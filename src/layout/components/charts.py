"""
src/layout/components/charts.py
────────────────────────────────
Plotly figures for the live dashboard.
"""
from __future__ import annotations

from datetime import datetime

import plotly.graph_objects as go

from config.alerts import CATEGORY_COLORS
from src.data.models import FleetSummary

CARD_BG = "#161b22"
GRID_CLR = "#30363d"
MUTED = "#8b949e"
PLOTLY_TMPL = "plotly_dark"


def _base_layout(height: int = 260) -> dict:
    return {
        "template": PLOTLY_TMPL,
        "paper_bgcolor": CARD_BG,
        "plot_bgcolor": CARD_BG,
        "margin": {"l": 10, "r": 10, "t": 20, "b": 10},
        "font": {"color": "#c9d1d9", "size": 11},
        "legend": {"bgcolor": "rgba(0,0,0,0)", "font": {"size": 10}, "orientation": "h"},
        "height": height,
        "transition": {"duration": 0},
    }


def risk_distribution_figure(summary: FleetSummary | None) -> go.Figure:
    """Doughnut of Low / Medium / High device counts."""
    counts = [0, 0, 0]
    if summary is not None:
        counts = [summary.low_count, summary.medium_count, summary.high_count]

    fig = go.Figure(go.Pie(
        labels=["Low Risk", "Medium Risk", "High Risk"],
        values=counts,
        hole=0.55,
        sort=False,
        marker={"colors": [CATEGORY_COLORS["Low"], CATEGORY_COLORS["Medium"], CATEGORY_COLORS["High"]]},
        textinfo="value",
    ))
    fig.update_layout(**_base_layout())
    return fig


def temperature_figure(
    points: list[tuple[datetime, float]],
    name: str = "Average Temperature",
    color: str = CATEGORY_COLORS["Low"],
    fill: bool = True,
) -> go.Figure:
    fig = go.Figure()
    fig.add_scatter(
        x=[ts for ts, _ in points],
        y=[value for _, value in points],
        mode="lines+markers",
        line={"color": color, "width": 2, "shape": "spline"},
        marker={"size": 3},
        fill="tozeroy" if fill else None,
        name=name,
        hovertemplate="%{x|%H:%M:%S}<br>%{y:.1f}°C<extra></extra>",
    )
    layout = _base_layout()
    layout["xaxis"] = {"gridcolor": GRID_CLR, "showticklabels": False}
    layout["yaxis"] = {"gridcolor": GRID_CLR, "title": {"text": "Temperature (°C)", "font": {"size": 10, "color": MUTED}}}
    if fill:
        values = [value for _, value in points]
        if values:
            layout["yaxis"]["range"] = [min(values) - 1.0, max(values) + 1.0]
    fig.update_layout(**layout)
    return fig
