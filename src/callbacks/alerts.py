"""
src/callbacks/alerts.py
────────────────────────
Alert history page callbacks.
"""
from __future__ import annotations

import dash_bootstrap_components as dbc
import pandas as pd
from dash import Input, Output, ctx, html

from config.alerts import KIND_COLORS, KIND_LABELS, KIND_ORDER, MAX_ALERTS_DISPLAY
from src.layout.components.alert_badge import alert_badge
from src.services.water_system import WaterManagementSystem

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"


def filter_alerts(df: pd.DataFrame, kind_filter: str, source_filter) -> pd.DataFrame:
    """Apply the page filters and sort by kind, then newest first."""
    if df.empty:
        return df
    if kind_filter != "all":
        df = df[df["kind"] == kind_filter]
    if source_filter != "all":
        df = df[df["source_id"] == source_filter]

    order = {k.value: v for k, v in KIND_ORDER.items()}
    df = df.assign(_kind_order=df["kind"].map(order).fillna(0))
    return df.sort_values(["_kind_order", "timestamp"], ascending=[False, False]).drop(columns="_kind_order")


def _build_table(df: pd.DataFrame) -> html.Div:
    if df.empty:
        return html.Div(
            "No alerts for the selected filters.",
            style={"color": MUTED, "padding": "20px", "textAlign": "center"},
        )

    rows = []
    for _, row in df.iterrows():
        source = "-" if pd.isna(row["source_id"]) else f"#{int(row['source_id'])}"
        rows.append(
            html.Tr(
                [
                    html.Td(
                        pd.to_datetime(row["timestamp"]).strftime("%d/%m %H:%M:%S"),
                        style={"color": MUTED, "fontSize": ".78rem"},
                    ),
                    html.Td(html.Span(source, style={"color": "#58a6ff", "fontSize": ".82rem", "fontWeight": "600"})),
                    html.Td(alert_badge(row["kind"])),
                    html.Td(row["type"], style={"fontSize": ".78rem", "color": "#c9d1d9"}),
                    html.Td(row["message"], style={"fontSize": ".72rem", "color": MUTED}),
                ],
                style={"borderBottom": f"1px solid {BORDER}"},
            )
        )

    return html.Div(
        html.Table(
            [
                html.Thead(
                    html.Tr(
                        [html.Th(h) for h in ["Time", "Source", "Kind", "Type", "Message"]],
                        style={"color": MUTED, "fontSize": ".68rem", "textTransform": "uppercase"},
                    )
                ),
                html.Tbody(rows),
            ],
            style={"width": "100%", "borderCollapse": "collapse", "fontSize": ".82rem"},
        ),
        style={"overflowX": "auto"},
    )


def register(app, system: WaterManagementSystem) -> None:

    @app.callback(
        [
            Output("alerts-table", "children"),
            Output("alerts-summary-badges", "children"),
        ],
        [
            Input("interval-live", "n_intervals"),
            Input("alerts-filter-kind", "value"),
            Input("alerts-filter-source", "value"),
            Input("alerts-clear-btn", "n_clicks"),
        ],
    )
    def update_alerts_table(n_intervals: int, kind_filter: str, source_filter, n_clear: int):
        if ctx.triggered_id == "alerts-clear-btn":
            system.alert_log.clear()

        df = filter_alerts(system.alert_log.to_dataframe(), kind_filter, source_filter).head(MAX_ALERTS_DISPLAY)

        badges = dbc.Row(
            [
                dbc.Col(
                    html.Div(
                        [
                            html.Div(
                                str(system.alert_log.count(kind)),
                                style={"fontSize": "1.4rem", "fontWeight": "700", "color": KIND_COLORS.get(kind, MUTED)},
                            ),
                            html.Div(KIND_LABELS.get(kind, kind), style={"fontSize": ".65rem", "color": MUTED, "textTransform": "uppercase"}),
                        ],
                        style={"backgroundColor": CARD_BG, "border": f"1px solid {BORDER}", "borderRadius": "8px", "padding": "10px 16px"},
                    ),
                    xs=4, md=2,
                )
                for kind in ["error", "warning", "info"]
            ],
            className="g-2",
        )

        return _build_table(df), badges
