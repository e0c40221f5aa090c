"""
src/monitoring/monitor.py
─────────────────────────
Level/quality monitor for one water source at a time.

  check_level()          critical-level alert when level/capacity ≤ threshold
  notify_level_change()  (source, level) to every level observer
  apply_quality(q)       assign a quality; alert only on a strictly worse rank
  tick()                 one simulated step: drift → check → maybe new quality
                         → level notification

A detached monitor (no source) treats every operation as a no-op.
Delivery is synchronous over a copy of the registry; an observer that
raises is logged and skipped, the rest still receive the event.
"""
from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

import numpy as np

from config.settings import settings
from src.analytics.thresholds import (
    Configuration,
    contamination_kind,
    is_critical_level,
    is_degradation,
)
from src.data.alerts import Alert, ContaminationAlert, CriticalLevelAlert
from src.data.models import WaterQuality, WaterSource
from src.data.simulator import DriftMode, make_rng, simulate_tick
from src.monitoring.observers import AlertObserver, LevelObserver
from src.utils.logger import get_logger

logger = get_logger(__name__)


class WaterLevelMonitor:

    def __init__(
        self,
        config: Configuration | None = None,
        source: WaterSource | None = None,
        rng: np.random.Generator | None = None,
        drift_mode: DriftMode | str = settings.DRIFT_MODE,
        quality_change_probability: float = settings.QUALITY_CHANGE_PROBABILITY,
    ):
        self._config = config if config is not None else Configuration()
        self._source = source
        self._observers: list[Any] = []
        self._registry_lock = threading.Lock()
        self._tick_lock = threading.RLock()
        self._rng = rng if rng is not None else make_rng()
        self._drift_mode = DriftMode(drift_mode)
        self._quality_change_probability = quality_change_probability

    # ── Source & configuration ────────────────────────────────────────────────

    @property
    def source(self) -> WaterSource | None:
        return self._source

    def set_source(self, source: WaterSource | None) -> None:
        self._source = source

    def get_source(self) -> WaterSource | None:
        return self._source

    @property
    def config(self) -> Configuration:
        return self._config

    def set_config(self, config: Configuration) -> None:
        if not isinstance(config, Configuration):
            raise TypeError(f"expected Configuration, got {type(config).__name__}")
        self._config = config

    # ── Observer registry ─────────────────────────────────────────────────────

    def register_observer(self, observer: Any) -> None:
        if observer is None:
            raise ValueError("observer must not be None")
        with self._registry_lock:
            self._observers.append(observer)

    def remove_observer(self, observer: Any) -> None:
        """Drop one registration of `observer`; unknown observers are ignored."""
        with self._registry_lock:
            for i, registered in enumerate(self._observers):
                if registered is observer:
                    del self._observers[i]
                    return

    @property
    def observers(self) -> tuple[Any, ...]:
        with self._registry_lock:
            return tuple(self._observers)

    # ── Delivery ──────────────────────────────────────────────────────────────

    def _safe_call(self, observer: Any, callback: Callable[..., None], *args: Any) -> None:
        try:
            callback(*args)
        except Exception:
            logger.exception("Observer %r failed in %s", observer, callback.__name__)

    def publish(self, alert: Alert) -> None:
        """Deliver `alert` to every alert-capable observer."""
        for observer in self.observers:
            if isinstance(observer, AlertObserver):
                self._safe_call(observer, observer.on_alert, alert)

    def notify_level_change(self) -> None:
        source = self._source
        if source is None:
            return
        level = source.current_level
        for observer in self.observers:
            if isinstance(observer, LevelObserver):
                self._safe_call(observer, observer.on_level_change, source, level)

    # ── Checks ────────────────────────────────────────────────────────────────

    def check_level(self) -> CriticalLevelAlert | None:
        source = self._source
        if source is None:
            return None

        fraction = source.level_fraction()
        threshold = self._config.critical_water_level_threshold
        if not is_critical_level(fraction, self._config):
            return None

        alert = CriticalLevelAlert.for_source(source, fraction, threshold)
        logger.info("Critical level on source %s: %.1f%% <= %.1f%%", source.id, fraction * 100, threshold * 100)
        self.publish(alert)
        return alert

    def _check_degradation(
        self,
        source: WaterSource,
        previous: WaterQuality,
        quality: WaterQuality,
    ) -> ContaminationAlert | None:
        if not is_degradation(previous, quality):
            return None
        alert = ContaminationAlert.for_source(
            source, quality, previous, kind=contamination_kind(quality, self._config),
        )
        logger.info("Quality degraded on source %s: %s -> %s", source.id, previous.name, quality.name)
        self.publish(alert)
        return alert

    def apply_quality(self, quality: WaterQuality | str) -> ContaminationAlert | None:
        source = self._source
        if source is None:
            return None
        quality = WaterQuality(quality)
        previous = source.update_quality(quality)
        return self._check_degradation(source, previous, quality)

    def check_quality_change(self, previous: WaterQuality | str) -> ContaminationAlert | None:
        """Run the degradation rule for a quality already written to the source."""
        source = self._source
        if source is None:
            return None
        return self._check_degradation(source, WaterQuality(previous), source.quality)

    # ── Simulation ────────────────────────────────────────────────────────────

    def tick(self) -> list[Alert]:
        """
        Advance the attached source by one simulated step.

        Returns:
            Alerts emitted during the step (possibly empty)
        """
        source = self._source
        if source is None:
            return []

        alerts: list[Alert] = []
        with self._tick_lock:
            with source.locked():
                outcome = simulate_tick(
                    source.current_level,
                    source.capacity,
                    source.quality,
                    self._rng,
                    self._drift_mode,
                    self._quality_change_probability,
                )
                source.set_current_level(outcome.level)
                previous = source.quality
                if outcome.quality is not outcome.previous_quality:
                    previous = source.update_quality(outcome.quality)

            critical = self.check_level()
            if critical is not None:
                alerts.append(critical)

            degraded = self._check_degradation(source, previous, outcome.quality)
            if degraded is not None:
                alerts.append(degraded)

            self.notify_level_change()
        return alerts
