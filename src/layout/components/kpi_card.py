"""
src/layout/components/kpi_card.py
──────────────────────────────────
Fleet KPI card with a "change since last tick" badge.
"""
from dash import html

CARD_BG = "#161b22"
MUTED = "#8b949e"
UP = "#da3633"
DOWN = "#2ea44f"


def change_badge(change: int, higher_is_worse: bool = True) -> html.Span:
    """Signed delta (+2 / -1 / +0); colored by whether the move is good or bad."""
    text = f"+{change}" if change >= 0 else str(change)
    if change == 0:
        color = MUTED
    elif (change > 0) == higher_is_worse:
        color = UP
    else:
        color = DOWN
    return html.Span(text, className="stat-change", style={"fontSize": ".72rem", "fontWeight": "600", "color": color})


def kpi_card(
    label: str,
    value: str,
    color: str = "#c9d1d9",
    change: int | None = None,
    higher_is_worse: bool = True,
    border_color: str = "#30363d",
) -> html.Div:
    """
    Compact KPI metric card.

    Args:
        label: Metric name (shown above value)
        value: Formatted value string
        color: Value text color (reflects risk category)
        change: Delta since the previous aggregation; omitted when None
        higher_is_worse: Whether a positive delta is shown as a deterioration
        border_color: Card border color
    """
    value_row = [html.Span(value, style={"fontSize": "1.4rem", "fontWeight": "700", "color": color, "lineHeight": "1.2"})]
    if change is not None:
        value_row.append(html.Span(" "))
        value_row.append(change_badge(change, higher_is_worse))

    return html.Div(
        [
            html.Div(label, style={"fontSize": ".68rem", "color": MUTED, "textTransform": "uppercase", "letterSpacing": ".06em"}),
            html.Div(value_row, style={"marginTop": "2px"}),
        ],
        style={
            "backgroundColor": CARD_BG,
            "border": f"1px solid {border_color}",
            "borderRadius": "8px",
            "padding": "14px 16px",
            "minWidth": "120px",
        },
    )


def mini_kpi(label: str, value: str, color: str = "#c9d1d9") -> html.Div:
    """Inline metric used inside device cards."""
    return html.Div([
        html.Div(label, style={"fontSize": ".62rem", "color": MUTED, "textTransform": "uppercase"}),
        html.Div(value, style={"fontSize": ".85rem", "fontWeight": "700", "color": color}),
    ])
