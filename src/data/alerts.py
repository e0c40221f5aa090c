"""
src/data/alerts.py
──────────────────
Immutable alert value objects emitted by the level/quality monitor.

  Alert               message · kind · timestamp (set once at creation)
  ├─ CriticalLevelAlert   level fraction at or below the critical threshold
  ├─ ContaminationAlert   quality moved down the GOOD > FAIR > POOR scale
  └─ SystemAlert          operational notices (simulation started/stopped)
"""
from __future__ import annotations

import uuid
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from config.alerts import AlertKind
from config.sources import KIND_LABELS
from src.data.models import WaterQuality, WaterSource


def _now() -> datetime:
    return datetime.now(tz=UTC)


def _source_label(source: WaterSource) -> str:
    return f"{KIND_LABELS.get(source.kind.value, source.kind.value)} #{source.id} ({source.location})"


class Alert(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    message: str
    kind: AlertKind
    timestamp: datetime = Field(default_factory=_now)
    source_id: int | None = None

    def __str__(self) -> str:
        return f"[{self.kind.name}] {self.message} - {self.timestamp.isoformat()}"


class CriticalLevelAlert(Alert):
    kind: AlertKind = AlertKind.WARNING
    level: float        # fraction of capacity
    threshold: float    # configured critical fraction

    @classmethod
    def for_source(cls, source: WaterSource, level: float, threshold: float) -> CriticalLevelAlert:
        return cls(
            message=(
                f"Critical water level at {_source_label(source)}: "
                f"{level * 100:.1f}% (threshold {threshold * 100:.1f}%)"
            ),
            level=level,
            threshold=threshold,
            source_id=source.id,
        )


class ContaminationAlert(Alert):
    kind: AlertKind = AlertKind.WARNING
    quality: WaterQuality
    previous_quality: WaterQuality

    @classmethod
    def for_source(
        cls,
        source: WaterSource,
        quality: WaterQuality,
        previous_quality: WaterQuality,
        kind: AlertKind = AlertKind.WARNING,
    ) -> ContaminationAlert:
        return cls(
            message=(
                f"Water quality degraded at {_source_label(source)}: "
                f"{previous_quality.name} → {quality.name}"
            ),
            kind=kind,
            quality=quality,
            previous_quality=previous_quality,
            source_id=source.id,
        )


class SystemAlert(Alert):
    pass
