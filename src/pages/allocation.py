"""
src/pages/allocation.py
────────────────────────
Allocation page: split one source's water among recipients.
"""

import dash_bootstrap_components as dbc
from dash import dcc, html

MUTED = "#8b949e"

_STRATEGY_OPTIONS = [
    {"label": "Equitable: equal shares", "value": "equitable"},
    {"label": "Fair: proportional to need, 10% floor", "value": "fair"},
    {"label": "Priority: highest value first", "value": "priority"},
]

_EXAMPLE_REQUESTS = "farm=60\ntown=50\nindustry=10"

_LABEL_STYLE = {"fontSize": ".72rem", "color": MUTED, "textTransform": "uppercase"}


def layout(source_options: list[dict]) -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    html.H2("Allocation", className="page-title"),
                    html.P(
                        "Distribute a source's current level among recipients",
                        className="page-subtitle",
                    ),
                ],
                className="page-header",
            ),
            dbc.Row(
                [
                    # ── Inputs ─────────────────────────────────────────────────
                    dbc.Col(
                        html.Div(
                            [
                                html.Label("Source", style=_LABEL_STYLE),
                                dcc.Dropdown(
                                    id="allocation-source",
                                    options=source_options,
                                    value=source_options[0]["value"] if source_options else None,
                                    clearable=False,
                                    className="dark-dropdown mb-3",
                                ),
                                html.Label("Strategy", style=_LABEL_STYLE),
                                dbc.RadioItems(
                                    id="allocation-strategy",
                                    options=_STRATEGY_OPTIONS,
                                    value="equitable",
                                    className="mb-3",
                                    labelStyle={"fontSize": ".82rem"},
                                ),
                                html.Label("Requests (recipient=demand, one per line)", style=_LABEL_STYLE),
                                dcc.Textarea(
                                    id="allocation-requests",
                                    value=_EXAMPLE_REQUESTS,
                                    style={"width": "100%", "height": "140px", "fontFamily": "monospace"},
                                ),
                                html.Button(
                                    "Allocate",
                                    id="allocation-run-btn",
                                    n_clicks=0,
                                    className="mt-2",
                                    style={
                                        "fontSize": ".8rem",
                                        "fontWeight": "700",
                                        "color": "#58a6ff",
                                        "background": "transparent",
                                        "border": "1px solid #58a6ff",
                                        "borderRadius": "4px",
                                        "padding": "4px 14px",
                                    },
                                ),
                                html.Div(id="allocation-error", style={"color": "#da3633", "fontSize": ".78rem", "marginTop": "8px"}),
                            ],
                            className="chart-card",
                        ),
                        md=4,
                    ),
                    # ── Results ────────────────────────────────────────────────
                    dbc.Col(
                        html.Div(
                            [
                                html.Div(id="allocation-summary", className="mb-2"),
                                dcc.Graph(id="allocation-chart", config={"displayModeBar": False}),
                                html.Div(id="allocation-table"),
                            ],
                            className="chart-card",
                        ),
                        md=8,
                    ),
                ],
                className="g-3",
            ),
        ],
        style={"padding": "1.5rem"},
    )
