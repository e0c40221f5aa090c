"""
src/callbacks/navigation.py: routing, simulation controls and overview page callbacks.
"""
from __future__ import annotations

import dash_bootstrap_components as dbc
import plotly.graph_objects as go
from dash import Input, Output, State, ctx, html

from config.alerts import KIND_COLORS
from config.settings import settings
from config.sources import KIND_LABELS
from src.analytics.thresholds import evaluate_level, get_level_color
from src.data.models import WaterSource
from src.data.simulator import make_rng, simulate_series
from src.layout.components.alert_badge import alert_badge
from src.layout.components.level_gauge import level_gauge
from src.layout.components.source_card import kpi_card, source_card
from src.reports.generator import UnsupportedFormatError
from src.services.water_system import WaterManagementSystem
from src.utils.logger import get_logger

logger = get_logger(__name__)

CARD_BG = "#161b22"
GRID_CLR = "#30363d"
MUTED = "#8b949e"
PLOTLY_TMPL = "plotly_dark"

PROJECTION_STEPS = 24


def source_options(system: WaterManagementSystem) -> list[dict]:
    """Dropdown options for every registered source."""
    return [
        {"label": f"{KIND_LABELS.get(s.kind.value, s.kind.value)} #{s.id} ({s.location})", "value": s.id}
        for s in system.repository.list()
    ]


def projection_figure(sources: list[WaterSource], critical_threshold: float, steps: int = PROJECTION_STEPS) -> go.Figure:
    """Projected fill % per source over the next `steps` ticks; sources are not modified."""
    rng = make_rng()
    fig = go.Figure()
    for source in sources:
        df = simulate_series(source, steps, rng, settings.DRIFT_MODE, settings.QUALITY_CHANGE_PROBABILITY)
        fig.add_scatter(
            x=df["step"], y=df["fraction"] * 100,
            mode="lines",
            name=f"{KIND_LABELS.get(source.kind.value, source.kind.value)} #{source.id}",
            hovertemplate="tick %{x}<br>%{y:.1f}%<extra></extra>",
        )
    fig.add_hline(y=critical_threshold * 100, line_dash="dash", line_color="#da3633", line_width=1,
                  annotation_text="Critical", annotation_font_color="#da3633", annotation_font_size=9)
    fig.update_layout(
        template=PLOTLY_TMPL,
        paper_bgcolor=CARD_BG,
        plot_bgcolor=CARD_BG,
        margin={"l": 10, "r": 10, "t": 30, "b": 10},
        font={"color": "#c9d1d9", "size": 11},
        xaxis={"gridcolor": GRID_CLR, "title": "tick"},
        yaxis={"gridcolor": GRID_CLR, "title": "fill %", "range": [0, 100]},
        legend={"bgcolor": "rgba(0,0,0,0)", "font": {"size": 10}},
        height=260,
    )
    return fig


def _notice(message: str, color: str) -> html.Div:
    return html.Div(
        message,
        style={
            "color": color,
            "fontSize": ".78rem",
            "padding": "6px 24px",
            "borderBottom": "1px solid #30363d",
        },
    )


def register(app, system: WaterManagementSystem) -> None:
    """Register navigation, simulation control and overview callbacks."""

    # ── Page routing ──────────────────────────────────────────────────────────
    from src.pages import alerts, allocation, overview

    @app.callback(
        Output("page-content", "children"),
        Input("url", "pathname"),
    )
    def display_page(pathname: str):
        if pathname == "/allocation":
            return allocation.layout(source_options(system))
        if pathname == "/alerts":
            return alerts.layout(source_options(system))
        return overview.layout()

    # ── Navbar collapse ───────────────────────────────────────────────────────
    @app.callback(
        Output("navbar-collapse", "is_open"),
        Input("navbar-toggler", "n_clicks"),
        State("navbar-collapse", "is_open"),
        prevent_initial_call=True,
    )
    def toggle_navbar(n_clicks: int, is_open: bool) -> bool:
        return not is_open

    # ── Simulation start / stop and report export ─────────────────────────────
    @app.callback(
        Output("system-notice", "children"),
        Input("sim-start-btn", "n_clicks"),
        Input("sim-stop-btn", "n_clicks"),
        Input("export-btn", "n_clicks"),
        prevent_initial_call=True,
    )
    def control_system(n_start: int, n_stop: int, n_export: int):
        if ctx.triggered_id == "sim-start-btn":
            if system.start():
                return _notice("Simulation started.", KIND_COLORS["info"])
            return _notice("Simulation is already running.", MUTED)

        if ctx.triggered_id == "sim-stop-btn":
            if system.stop():
                return _notice("Simulation stopped.", KIND_COLORS["info"])
            return _notice("Simulation is not running.", MUTED)

        try:
            path = system.export_report("EXCEL")
        except (UnsupportedFormatError, OSError) as exc:
            logger.exception("Report export failed")
            return _notice(f"Report export failed: {exc}", KIND_COLORS["error"])
        return _notice(f"Report exported to {path}", KIND_COLORS["info"])

    # ── Overview: KPIs, gauges, cards, recent alerts ──────────────────────────
    @app.callback(
        [
            Output("overview-kpi-banner", "children"),
            Output("overview-gauges", "children"),
            Output("overview-status-cards", "children"),
            Output("overview-alerts-table", "children"),
            Output("overview-projection", "figure"),
        ],
        Input("interval-live", "n_intervals"),
    )
    def update_overview(n_intervals: int):
        config = system.config
        sources = system.repository.list()

        gauges = []
        status_cards = []
        critical_count = 0
        for source in sources:
            fraction = source.level_fraction()
            if evaluate_level(fraction, config) == "critical":
                critical_count += 1
            color = get_level_color(fraction, config)
            active = len(system.alert_log.recent(source_id=source.id))
            label = f"{KIND_LABELS.get(source.kind.value, source.kind.value)} #{source.id}"

            gauges.append(
                dbc.Col(
                    html.Div(
                        level_gauge(fraction, label, config.critical_water_level_threshold, height=180),
                        className="chart-card",
                    ),
                    md=4,
                )
            )
            status_cards.append(dbc.Col(source_card(source, color, active), md=4))

        available = system.total_available_water()
        total_alerts = len(system.alert_log)
        running = system.is_running

        kpi_banner = dbc.Row(
            [
                dbc.Col(kpi_card("Available Water", f"{available:,.0f} m³", "#58a6ff"), xs=6, md=3),
                dbc.Col(kpi_card("Sources Monitored", str(len(sources)), "#58a6ff"), xs=6, md=3),
                dbc.Col(
                    kpi_card(
                        "Critical Sources",
                        str(critical_count),
                        "#da3633" if critical_count else "#2ea44f",
                        sub_label=f"≤ {config.critical_water_level_threshold:.0%} full",
                    ),
                    xs=6, md=3,
                ),
                dbc.Col(
                    kpi_card(
                        "Alerts",
                        str(total_alerts),
                        "#e8a020" if total_alerts else "#2ea44f",
                        sub_label="simulation running" if running else "simulation stopped",
                    ),
                    xs=6, md=3,
                ),
            ],
            className="g-3",
        )

        recent = system.alert_log.recent(limit=8)
        if not recent:
            alerts_table = html.Div("No recent alerts.", style={"color": MUTED, "padding": "12px"})
        else:
            rows = [
                html.Tr([
                    html.Td(alert.timestamp.strftime("%d/%m %H:%M:%S"), style={"fontSize": ".72rem", "color": MUTED}),
                    html.Td(alert_badge(alert.kind.value)),
                    html.Td(alert.message, style={"fontSize": ".72rem"}),
                ])
                for alert in recent
            ]
            alerts_table = html.Table(
                [html.Thead(html.Tr([html.Th(h) for h in ["Time", "Kind", "Message"]],
                                     style={"color": MUTED, "fontSize": ".65rem", "textTransform": "uppercase"})),
                 html.Tbody(rows)],
                style={"width": "100%", "borderCollapse": "collapse", "fontSize": ".8rem"},
            )

        return (
            kpi_banner,
            dbc.Row(gauges, className="g-3"),
            dbc.Row(status_cards, className="g-3"),
            alerts_table,
            projection_figure(sources, config.critical_water_level_threshold),
        )
