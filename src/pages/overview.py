"""
src/pages/overview.py
──────────────────────
Overview page: network KPIs, level gauges, source cards, projected
levels, recent alerts.

Static structure; dynamic data injected via callbacks.
"""

import dash_bootstrap_components as dbc
from dash import dcc, html


def layout() -> html.Div:
    return html.Div(
        [
            # ── Page header ───────────────────────────────────────────────────
            html.Div(
                [
                    html.H2("Overview", className="page-title"),
                    html.P(
                        "Level and quality of every monitored water source",
                        className="page-subtitle",
                    ),
                ],
                className="page-header",
            ),
            # ── KPI banner (dynamic) ──────────────────────────────────────────
            html.Div(id="overview-kpi-banner", className="mb-4"),
            # ── Level gauges row (dynamic) ────────────────────────────────────
            html.Div(id="overview-gauges", className="mb-3"),
            # ── Source status cards row (dynamic) ─────────────────────────────
            html.Div(id="overview-status-cards", className="mb-3"),
            # ── Projected levels + recent alerts ──────────────────────────────
            dbc.Row(
                [
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Projected Levels", className="chart-title"),
                                dcc.Graph(id="overview-projection", config={"displayModeBar": False}),
                            ],
                            className="chart-card",
                        ),
                        md=12,
                    ),
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Recent Alerts", className="chart-title"),
                                html.Div(id="overview-alerts-table"),
                            ],
                            className="chart-card",
                        ),
                        md=12,
                    ),
                ],
                className="g-3",
            ),
        ],
        style={"padding": "1.5rem"},
    )
