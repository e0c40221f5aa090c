"""
src/layout/main.py
───────────────────
Main application layout composition.

Contains:
  - dcc.Location for routing
  - dcc.Interval for live updates
  - Navbar (with simulation controls) + page content container
  - Notice area for simulation/export feedback
"""
from dash import dcc, html

from config.settings import settings
from src.layout.navbar import create_navbar


def create_layout() -> html.Div:
    """Assemble the root application layout."""
    return html.Div(
        [
            # ── Routing ───────────────────────────────────────────────────────
            dcc.Location(id="url", refresh=False),

            # ── Live update interval ──────────────────────────────────────────
            dcc.Interval(
                id="interval-live",
                interval=settings.UPDATE_INTERVAL_MS,
                n_intervals=0,
            ),

            # ── Navigation bar ────────────────────────────────────────────────
            create_navbar(),

            # ── Simulation / export notices ───────────────────────────────────
            html.Div(
                id="system-notice",
                style={"padding": "0 1.5rem", "fontSize": ".78rem", "color": "#8b949e"},
            ),

            # ── Page content ──────────────────────────────────────────────────
            html.Div(
                id="page-content",
                style={"minHeight": "calc(100vh - 60px)"},
            ),

            # ── Footer ────────────────────────────────────────────────────────
            html.Footer(
                [
                    html.Span("Aqua Monitor"),
                    html.Span(" · "),
                    html.Span("Water source allocation & monitoring"),
                    html.Span(" · "),
                    html.Span("Simulated levels"),
                ],
                style={
                    "textAlign": "center",
                    "padding": ".7rem",
                    "fontSize": ".72rem",
                    "color": "#8b949e",
                    "borderTop": "1px solid #30363d",
                    "marginTop": "2rem",
                },
            ),
        ],
        style={"backgroundColor": "#0d1117", "minHeight": "100vh", "color": "#c9d1d9"},
    )
