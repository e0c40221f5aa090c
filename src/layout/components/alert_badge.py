"""
src/layout/components/alert_badge.py
──────────────────────────────────────
Alert kind badge.
"""

from dash import html

from config.alerts import KIND_COLORS, KIND_LABELS

MUTED = "#8b949e"


def _badge(label: str, color: str) -> html.Span:
    return html.Span(
        label,
        style={
            "fontSize": ".65rem",
            "fontWeight": "700",
            "color": color,
            "border": f"1px solid {color}",
            "borderRadius": "4px",
            "padding": "1px 7px",
            "whiteSpace": "nowrap",
        },
    )


def alert_badge(kind: str) -> html.Span:
    """Inline alert kind badge with color-coded border."""
    return _badge(KIND_LABELS.get(kind, kind.capitalize()), KIND_COLORS.get(kind, MUTED))
