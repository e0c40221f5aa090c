"""
src/monitoring/observers.py
───────────────────────────
Observer capabilities and stock observers.

An observer may implement either capability, both, or neither:
  LevelObserver.on_level_change(source, current_level)
  AlertObserver.on_alert(alert)

The monitor checks each capability independently at delivery time.
"""
from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Protocol, runtime_checkable

import pandas as pd

from config.alerts import AlertKind
from config.settings import settings
from src.data.alerts import Alert
from src.data.models import WaterSource
from src.utils.logger import get_logger

logger = get_logger(__name__)


@runtime_checkable
class LevelObserver(Protocol):
    def on_level_change(self, source: WaterSource, current_level: float) -> None:
        ...


@runtime_checkable
class AlertObserver(Protocol):
    def on_alert(self, alert: Alert) -> None:
        ...


class AlertLog:
    """
    Bounded, thread-safe alert history shared by all monitors.

    Oldest alerts are dropped once `maxlen` is reached. Listings are
    newest first.
    """

    def __init__(self, maxlen: int = settings.MAX_ALERTS_KEPT):
        self._alerts: deque[Alert] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def on_alert(self, alert: Alert) -> None:
        with self._lock:
            self._alerts.append(alert)

    def recent(
        self,
        limit: int | None = None,
        kind: AlertKind | str | None = None,
        source_id: int | None = None,
    ) -> list[Alert]:
        with self._lock:
            alerts = list(reversed(self._alerts))
        if kind is not None:
            kind = AlertKind(kind)
            alerts = [a for a in alerts if a.kind is kind]
        if source_id is not None:
            alerts = [a for a in alerts if a.source_id == source_id]
        return alerts[:limit] if limit is not None else alerts

    def count(self, kind: AlertKind | str | None = None) -> int:
        return len(self.recent(kind=kind))

    def clear(self) -> None:
        with self._lock:
            self._alerts.clear()

    def to_dataframe(self) -> pd.DataFrame:
        """Alerts as a frame, newest first; subtype payload columns are NaN where absent."""
        columns = ["id", "timestamp", "kind", "source_id", "type", "message"]
        rows = [
            {**a.model_dump(mode="json"), "kind": a.kind.value, "type": type(a).__name__}
            for a in self.recent()
        ]
        if not rows:
            return pd.DataFrame(columns=columns)
        df = pd.DataFrame(rows)
        df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True)
        return df

    def __len__(self) -> int:
        with self._lock:
            return len(self._alerts)


_KIND_LOG_LEVELS = {
    AlertKind.INFO: logging.INFO,
    AlertKind.WARNING: logging.WARNING,
    AlertKind.ERROR: logging.ERROR,
}


class LoggingObserver:
    """Writes every level change and alert to the application log."""

    def __init__(self, log: logging.Logger | None = None):
        self._log = log or logger

    def on_level_change(self, source: WaterSource, current_level: float) -> None:
        self._log.debug(
            "Source %s level %.2f / %.2f (%.1f%%)",
            source.id, current_level, source.capacity, current_level / source.capacity * 100,
        )

    def on_alert(self, alert: Alert) -> None:
        self._log.log(_KIND_LOG_LEVELS.get(alert.kind, logging.INFO), "%s", alert.message)
