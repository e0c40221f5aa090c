"""
src/layout/navbar.py
─────────────────────
Navigation bar with page links, simulation controls and report export.
"""

import dash_bootstrap_components as dbc
from dash import html

NAV_BG = "#0d1117"
BORDER = "#30363d"
ACCENT = "#58a6ff"


def create_navbar() -> dbc.Navbar:
    return dbc.Navbar(
        dbc.Container(
            [
                # Brand
                dbc.NavbarBrand(
                    [
                        html.Span("💧", style={"marginRight": "8px", "fontSize": "1.1rem"}),
                        html.Span(
                            "Aqua Monitor", style={"fontWeight": "700", "letterSpacing": ".04em"}
                        ),
                    ],
                    href="/",
                    style={"color": ACCENT, "textDecoration": "none"},
                ),
                dbc.NavbarToggler(id="navbar-toggler", n_clicks=0),
                dbc.Collapse(
                    dbc.Nav(
                        [
                            dbc.NavItem(
                                dbc.NavLink("Overview", href="/", id="nav-overview", active="exact")
                            ),
                            dbc.NavItem(
                                dbc.NavLink(
                                    "Allocation", href="/allocation", id="nav-allocation", active="exact"
                                )
                            ),
                            dbc.NavItem(
                                dbc.NavLink(
                                    "Alerts", href="/alerts", id="nav-alerts", active="exact"
                                )
                            ),
                            # Simulation + export controls
                            dbc.NavItem(
                                html.Div(
                                    [
                                        html.Button(
                                            "▶ Simulate",
                                            id="sim-start-btn",
                                            n_clicks=0,
                                            style=_control_btn_style("#2ea44f"),
                                        ),
                                        html.Button(
                                            "■ Stop",
                                            id="sim-stop-btn",
                                            n_clicks=0,
                                            style=_control_btn_style("#da3633"),
                                        ),
                                        html.Button(
                                            "⤓ Excel",
                                            id="export-btn",
                                            n_clicks=0,
                                            style=_control_btn_style(ACCENT),
                                        ),
                                    ],
                                    style={
                                        "display": "flex",
                                        "gap": "4px",
                                        "alignItems": "center",
                                        "marginLeft": "12px",
                                    },
                                )
                            ),
                        ],
                        className="ms-auto",
                        navbar=True,
                    ),
                    id="navbar-collapse",
                    navbar=True,
                    is_open=False,
                ),
            ],
            fluid=True,
        ),
        color=NAV_BG,
        dark=True,
        sticky="top",
        style={"borderBottom": f"1px solid {BORDER}", "padding": ".5rem 1rem"},
    )


def _control_btn_style(color: str) -> dict:
    return {
        "background": "transparent",
        "border": f"1px solid {color}",
        "color": color,
        "borderRadius": "4px",
        "fontSize": ".72rem",
        "fontWeight": "700",
        "padding": "2px 8px",
        "cursor": "pointer",
    }
