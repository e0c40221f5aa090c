"""
src/layout/components/level_gauge.py
─────────────────────────────────────
Fill-level gauge using Plotly indicator chart.
"""
from __future__ import annotations

import plotly.graph_objects as go
from dash import dcc

from src.analytics.thresholds import LOW_LEVEL_MARGIN, STATUS_COLORS

CARD_BG = "#161b22"


def level_gauge(
    fraction: float,
    label: str,
    critical_threshold: float,
    height: int = 200,
) -> dcc.Graph:
    """
    Plotly gauge for a source's fill level.

    Args:
        fraction: current_level / capacity, 0–1
        label: Title shown above the gauge
        critical_threshold: Critical level fraction, drawn as a red marker
        height: Figure height in px
    """
    pct = fraction * 100
    critical_pct = critical_threshold * 100
    low_pct = min(100.0, (critical_threshold + LOW_LEVEL_MARGIN) * 100)

    if pct <= critical_pct:
        color = STATUS_COLORS["critical"]
    elif pct <= low_pct:
        color = STATUS_COLORS["low"]
    else:
        color = STATUS_COLORS["ok"]

    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=pct,
        number={"suffix": "%", "valueformat": ".1f", "font": {"color": color, "size": 28}},
        title={"text": label, "font": {"color": "#8b949e", "size": 12}},
        gauge={
            "axis": {
                "range": [0, 100],
                "tickwidth": 1,
                "tickcolor": "#30363d",
                "tickfont": {"color": "#8b949e", "size": 9},
            },
            "bar": {"color": color, "thickness": 0.25},
            "bgcolor": "rgba(0,0,0,0)",
            "borderwidth": 0,
            "steps": [
                {"range": [0, critical_pct], "color": "rgba(218,54,51,0.15)"},
                {"range": [critical_pct, low_pct], "color": "rgba(232,160,32,0.10)"},
                {"range": [low_pct, 100], "color": "rgba(46,164,79,0.10)"},
            ],
            "threshold": {
                "line": {"color": "#da3633", "width": 2},
                "thickness": 0.75,
                "value": critical_pct,
            },
        },
    ))

    fig.update_layout(
        paper_bgcolor=CARD_BG,
        plot_bgcolor=CARD_BG,
        margin=dict(l=20, r=20, t=40, b=20),
        height=height,
        font=dict(color="#c9d1d9"),
    )

    return dcc.Graph(
        figure=fig,
        config={"displayModeBar": False},
        style={"height": f"{height}px"},
    )
