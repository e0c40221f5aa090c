"""
config/alerts.py
────────────────
Alert kinds and display configuration.
"""

from enum import Enum


class AlertKind(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


KIND_COLORS: dict[str, str] = {
    AlertKind.INFO: "#58a6ff",
    AlertKind.WARNING: "#e8a020",
    AlertKind.ERROR: "#da3633",
}

KIND_LABELS: dict[str, str] = {
    AlertKind.INFO: "Info",
    AlertKind.WARNING: "Warning",
    AlertKind.ERROR: "Error",
}

# Ordering for sorting (higher = more severe)
KIND_ORDER: dict[str, int] = {
    AlertKind.ERROR: 3,
    AlertKind.WARNING: 2,
    AlertKind.INFO: 1,
}

MAX_ALERTS_DISPLAY = 100
