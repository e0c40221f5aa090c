"""
src/analytics/thresholds.py
────────────────────────────
Monitoring thresholds and their evaluation.

Provides:
  - Configuration: validated critical-level and contamination thresholds
  - Level evaluation against the critical threshold (boundary inclusive)
  - Quality degradation test on the GOOD > FAIR > POOR scale
  - Contamination grading of a degradation alert
  - Status colors for dashboard rendering
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from config.alerts import AlertKind
from config.settings import settings
from config.sources import CONTAMINATION_INDEX
from src.data.models import WaterQuality

# Level band just above the critical threshold shown as "low" on the dashboard
LOW_LEVEL_MARGIN = 0.10


class Configuration(BaseModel):
    """
    Threshold configuration, both values fractions in [0, 1].

    Assignments are re-validated, so an out-of-range value is rejected
    whether it arrives through the constructor or a later update.
    """
    model_config = ConfigDict(validate_assignment=True, validate_default=True)

    critical_water_level_threshold: float = Field(
        default=settings.CRITICAL_LEVEL_THRESHOLD, ge=0.0, le=1.0,
    )
    contamination_threshold: float = Field(
        default=settings.CONTAMINATION_THRESHOLD, ge=0.0, le=1.0,
    )

    def set_critical_water_level_threshold(self, threshold: float) -> None:
        self.critical_water_level_threshold = threshold

    def set_contamination_threshold(self, threshold: float) -> None:
        self.contamination_threshold = threshold


def is_critical_level(fraction: float, config: Configuration) -> bool:
    """True when `fraction` is at or below the critical threshold."""
    return fraction <= config.critical_water_level_threshold


def is_degradation(previous: WaterQuality | str, new: WaterQuality | str) -> bool:
    """True only when `new` ranks strictly below `previous`."""
    return WaterQuality(new).is_worse_than(previous)


def contamination_index(quality: WaterQuality | str) -> float:
    return CONTAMINATION_INDEX[WaterQuality(quality).value]


def contamination_kind(quality: WaterQuality | str, config: Configuration) -> AlertKind:
    """ERROR once the quality's contamination index reaches the threshold."""
    if contamination_index(quality) >= config.contamination_threshold:
        return AlertKind.ERROR
    return AlertKind.WARNING


def evaluate_level(fraction: float, config: Configuration) -> str:
    """
    Classify a level fraction.

    Returns: "critical" | "low" | "ok"
    """
    if is_critical_level(fraction, config):
        return "critical"
    if fraction <= config.critical_water_level_threshold + LOW_LEVEL_MARGIN:
        return "low"
    return "ok"


# ── Chart helpers ─────────────────────────────────────────────────────────────

STATUS_COLORS = {
    "ok": "#2ea44f",
    "low": "#e8a020",
    "critical": "#da3633",
}


def get_level_color(fraction: float, config: Configuration) -> str:
    return STATUS_COLORS[evaluate_level(fraction, config)]
