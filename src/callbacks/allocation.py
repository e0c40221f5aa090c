"""
src/callbacks/allocation.py
────────────────────────────
Allocation page callbacks: parse the request text, run the selected
strategy against the chosen source and chart the result.
"""
from __future__ import annotations

import math

import plotly.graph_objects as go
from dash import Input, Output, State, html

from src.analytics.allocation import AllocationError, to_dataframe
from src.services.water_system import WaterManagementSystem
from src.utils.logger import get_logger

logger = get_logger(__name__)

CARD_BG = "#161b22"
GRID_CLR = "#30363d"
MUTED = "#8b949e"
PLOTLY_TMPL = "plotly_dark"


def parse_requests(text: str | None) -> dict[str, float]:
    """
    Parse "recipient=demand" lines into a request mapping.

    Blank lines and lines starting with '#' are skipped. A repeated
    recipient keeps its last demand.

    Raises:
        AllocationError: malformed line or non-numeric demand
    """
    requests: dict[str, float] = {}
    for lineno, raw in enumerate((text or "").splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        recipient, sep, demand = line.partition("=")
        recipient = recipient.strip()
        if not sep or not recipient:
            raise AllocationError(f"line {lineno}: expected 'recipient=demand', got {line!r}")
        try:
            requests[recipient] = float(demand)
        except ValueError as exc:
            raise AllocationError(f"line {lineno}: demand {demand.strip()!r} is not a number") from exc
    return requests


def _allocation_fig(df) -> go.Figure:
    fig = go.Figure()
    fig.add_bar(x=df["recipient"], y=df["demand"], name="Demand", marker_color="#30363d")
    fig.add_bar(x=df["recipient"], y=df["granted"].fillna(0), name="Granted", marker_color="#58a6ff")
    fig.update_layout(
        template=PLOTLY_TMPL,
        paper_bgcolor=CARD_BG,
        plot_bgcolor=CARD_BG,
        barmode="group",
        margin={"l": 10, "r": 10, "t": 30, "b": 10},
        font={"color": "#c9d1d9", "size": 11},
        yaxis={"gridcolor": GRID_CLR, "title": "m³"},
        legend={"bgcolor": "rgba(0,0,0,0)", "font": {"size": 10}},
        height=280,
    )
    return fig


def _table(df) -> html.Table:
    rows = [
        html.Tr([
            html.Td(row["recipient"], style={"color": "#58a6ff"}),
            html.Td(f"{row['demand']:,.2f}"),
            html.Td("not reached" if math.isnan(row["granted"]) else f"{row['granted']:,.2f}",
                    style={"color": MUTED if math.isnan(row["granted"]) else "#c9d1d9"}),
        ])
        for _, row in df.iterrows()
    ]
    return html.Table(
        [html.Thead(html.Tr([html.Th(h) for h in ["Recipient", "Demand", "Granted"]],
                             style={"color": MUTED, "fontSize": ".65rem", "textTransform": "uppercase"})),
         html.Tbody(rows)],
        style={"width": "100%", "borderCollapse": "collapse", "fontSize": ".8rem"},
    )


def register(app, system: WaterManagementSystem) -> None:

    @app.callback(
        [
            Output("allocation-summary", "children"),
            Output("allocation-chart", "figure"),
            Output("allocation-table", "children"),
            Output("allocation-error", "children"),
        ],
        Input("allocation-run-btn", "n_clicks"),
        [
            State("allocation-source", "value"),
            State("allocation-strategy", "value"),
            State("allocation-requests", "value"),
        ],
        prevent_initial_call=True,
    )
    def run_allocation(n_clicks: int, source_id, strategy: str, text: str):
        empty = go.Figure(layout={"paper_bgcolor": CARD_BG, "plot_bgcolor": CARD_BG, "height": 280})
        try:
            requests = parse_requests(text)
            result = system.allocate(source_id, requests, strategy)
        except AllocationError as exc:
            logger.warning("Allocation rejected: %s", exc)
            return "", empty, None, str(exc)

        source = system.repository.get(source_id)
        available = source.current_level if source is not None else 0.0
        granted = sum(result.values())
        summary = html.Div(
            f"{strategy.capitalize()} split of {available:,.1f} m³: "
            f"{granted:,.1f} m³ granted to {len(result)} of {len(requests)} recipients",
            style={"fontSize": ".8rem", "color": MUTED},
        )

        df = to_dataframe(requests, result)
        return summary, _allocation_fig(df), _table(df), ""
