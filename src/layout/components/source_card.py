"""
src/layout/components/source_card.py
──────────────────────────────────────
KPI and per-source status cards.
"""
from dash import html

from config.sources import KIND_LABELS, QUALITY_COLORS
from src.data.models import WaterSource

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"


def kpi_card(
    label: str,
    value: str,
    color: str = "#c9d1d9",
    sub_label: str = "",
    border_color: str = BORDER,
) -> html.Div:
    """Compact metric card: label above, value below, optional sub-label."""
    children = [
        html.Div(label, style={"fontSize": ".68rem", "color": MUTED, "textTransform": "uppercase", "letterSpacing": ".06em"}),
        html.Div(value, style={"fontSize": "1.4rem", "fontWeight": "700", "color": color, "lineHeight": "1.2", "marginTop": "2px"}),
    ]
    if sub_label:
        children.append(html.Div(sub_label, style={"fontSize": ".68rem", "color": MUTED, "marginTop": "2px"}))

    return html.Div(
        children,
        style={
            "backgroundColor": CARD_BG,
            "border": f"1px solid {border_color}",
            "borderRadius": "8px",
            "padding": "14px 16px",
            "minWidth": "120px",
        },
    )


def _field(label: str, value: str, color: str = "#c9d1d9") -> html.Div:
    return html.Div([
        html.Div(label, style={"fontSize": ".65rem", "color": MUTED}),
        html.Div(value, style={"fontSize": ".95rem", "fontWeight": "700", "color": color}),
    ])


def source_card(source: WaterSource, level_color: str, active_alerts: int) -> html.Div:
    """Status card for one source; the border lights up when it has alerts."""
    quality = source.quality.value
    border = level_color if active_alerts > 0 else BORDER

    return html.Div(
        [
            html.Div(
                [
                    html.Span(source.location, style={"fontWeight": "700", "color": "#58a6ff", "fontSize": ".95rem"}),
                    html.Span(
                        f"{KIND_LABELS.get(source.kind.value, source.kind.value)} #{source.id}",
                        style={"fontSize": ".68rem", "color": MUTED, "marginLeft": "8px"},
                    ),
                ],
                style={"marginBottom": "10px"},
            ),
            html.Div(
                [
                    _field("Level", f"{source.current_level:,.1f} m³", level_color),
                    _field("Capacity", f"{source.capacity:,.0f} m³"),
                    _field("Quality", quality.upper(), QUALITY_COLORS.get(quality, MUTED)),
                    _field("Alerts", str(active_alerts), "#e8a020" if active_alerts else "#2ea44f"),
                ],
                style={"display": "grid", "gridTemplateColumns": "1fr 1fr", "gap": "8px"},
            ),
        ],
        style={
            "backgroundColor": CARD_BG,
            "border": f"1px solid {border}",
            "borderRadius": "8px",
            "padding": "14px",
        },
    )
