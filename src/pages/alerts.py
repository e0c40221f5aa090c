"""
src/pages/alerts.py
────────────────────
Alert history page with kind and source filters.
"""

import dash_bootstrap_components as dbc
from dash import dcc, html

MUTED = "#8b949e"

_KIND_OPTIONS = [
    {"label": "All", "value": "all"},
    {"label": "Error", "value": "error"},
    {"label": "Warning", "value": "warning"},
    {"label": "Info", "value": "info"},
]

_LABEL_STYLE = {"fontSize": ".72rem", "color": MUTED, "textTransform": "uppercase"}


def layout(source_options: list[dict]) -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    html.H2("Alerts", className="page-title"),
                    html.P(
                        "Critical levels, quality degradation and system notices",
                        className="page-subtitle",
                    ),
                ],
                className="page-header",
            ),
            # ── Summary badges ─────────────────────────────────────────────────
            html.Div(id="alerts-summary-badges", className="mb-3"),
            # ── Filter row ─────────────────────────────────────────────────────
            dbc.Row(
                [
                    dbc.Col(
                        [
                            html.Label("Kind", style=_LABEL_STYLE),
                            dcc.Dropdown(
                                id="alerts-filter-kind",
                                options=_KIND_OPTIONS,
                                value="all",
                                clearable=False,
                                style={"fontSize": ".85rem"},
                                className="dark-dropdown",
                            ),
                        ],
                        md=3,
                    ),
                    dbc.Col(
                        [
                            html.Label("Source", style=_LABEL_STYLE),
                            dcc.Dropdown(
                                id="alerts-filter-source",
                                options=[{"label": "All", "value": "all"}, *source_options],
                                value="all",
                                clearable=False,
                                style={"fontSize": ".85rem"},
                                className="dark-dropdown",
                            ),
                        ],
                        md=3,
                    ),
                    dbc.Col(
                        html.Button(
                            "Clear history",
                            id="alerts-clear-btn",
                            n_clicks=0,
                            style={
                                "marginTop": "22px",
                                "fontSize": ".75rem",
                                "color": MUTED,
                                "background": "transparent",
                                "border": "1px solid #30363d",
                                "borderRadius": "4px",
                                "padding": "4px 10px",
                            },
                        ),
                        md=3,
                    ),
                ],
                className="g-3 mb-3",
            ),
            # ── Alert table ────────────────────────────────────────────────────
            html.Div(
                html.Div(id="alerts-table"),
                className="chart-card",
            ),
        ],
        style={"padding": "1.5rem"},
    )
