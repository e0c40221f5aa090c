"""
src/services/water_system.py
────────────────────────────
Coordinates the repository, one monitor per source, the shared alert
log, allocation, reports, the simulation driver and users.
"""
from __future__ import annotations

import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import numpy as np

from config.alerts import AlertKind
from config.settings import settings
from src.analytics.allocation import AllocationResult, AllocationStrategy, WaterDistributor, distribute
from src.analytics.thresholds import Configuration
from src.data.alerts import Alert, SystemAlert
from src.data.models import User, WaterQuality, WaterSource
from src.data.simulator import DriftMode, make_rng
from src.data.store import SourceNotFoundError, WaterSourceRepository
from src.monitoring.driver import SimulationDriver
from src.monitoring.monitor import WaterLevelMonitor
from src.monitoring.observers import AlertLog, LoggingObserver
from src.reports.generator import HistoricalReportGenerator
from src.utils.logger import get_logger

logger = get_logger(__name__)


class WaterManagementSystem:

    def __init__(
        self,
        repository: WaterSourceRepository | None = None,
        config: Configuration | None = None,
        alert_log: AlertLog | None = None,
        report_generator: HistoricalReportGenerator | None = None,
        distributor: WaterDistributor | None = None,
        rng: np.random.Generator | None = None,
        drift_mode: DriftMode | str = settings.DRIFT_MODE,
        quality_change_probability: float = settings.QUALITY_CHANGE_PROBABILITY,
        interval_s: float = settings.TICK_INTERVAL_S,
    ):
        self.repository = repository if repository is not None else WaterSourceRepository()
        self.config = config if config is not None else Configuration()
        self.alert_log = alert_log if alert_log is not None else AlertLog()
        self.report_generator = report_generator or HistoricalReportGenerator(self.repository)
        self.distributor = distributor or WaterDistributor()

        self._rng = rng if rng is not None else make_rng()
        self._drift_mode = DriftMode(drift_mode)
        self._quality_change_probability = quality_change_probability

        self._lock = threading.RLock()
        self._monitors: dict[int, WaterLevelMonitor] = {}
        self._observers: list[Any] = [self.alert_log, LoggingObserver()]
        self._system_monitor = self._new_monitor(None)
        self._users: dict[int, User] = {}

        self.driver = SimulationDriver(self.monitors, interval_s=interval_s)

        for source_id in self.repository.ids():
            self._attach(self.repository.get(source_id))

    # ── Monitors ──────────────────────────────────────────────────────────────

    def _new_monitor(self, source: WaterSource | None) -> WaterLevelMonitor:
        monitor = WaterLevelMonitor(
            config=self.config,
            source=source,
            rng=make_rng(int(self._rng.integers(0, 2**32))),
            drift_mode=self._drift_mode,
            quality_change_probability=self._quality_change_probability,
        )
        for observer in self._observers:
            monitor.register_observer(observer)
        return monitor

    def _attach(self, source: WaterSource) -> WaterLevelMonitor:
        with self._lock:
            monitor = self._monitors.get(source.id)
            if monitor is None:
                monitor = self._new_monitor(source)
                self._monitors[source.id] = monitor
            else:
                monitor.set_source(source)
            return monitor

    def monitors(self) -> list[WaterLevelMonitor]:
        with self._lock:
            return list(self._monitors.values())

    def monitor_for(self, source_id: int) -> WaterLevelMonitor | None:
        with self._lock:
            return self._monitors.get(source_id)

    def register_observer(self, observer: Any) -> None:
        """Subscribe `observer` to every current and future monitor."""
        with self._lock:
            self._observers.append(observer)
            for monitor in [self._system_monitor, *self._monitors.values()]:
                monitor.register_observer(observer)

    def remove_observer(self, observer: Any) -> None:
        with self._lock:
            if any(o is observer for o in self._observers):
                self._observers = [o for o in self._observers if o is not observer]
            for monitor in [self._system_monitor, *self._monitors.values()]:
                monitor.remove_observer(observer)

    def publish_system_alert(self, message: str, kind: AlertKind = AlertKind.INFO) -> SystemAlert:
        alert = SystemAlert(message=message, kind=kind)
        self._system_monitor.publish(alert)
        return alert

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    @property
    def is_running(self) -> bool:
        return self.driver.is_running

    def start(self) -> bool:
        started = self.driver.start()
        if started:
            self.publish_system_alert("Water level simulation started")
        return started

    def stop(self) -> bool:
        stopped = self.driver.stop()
        if stopped:
            self.publish_system_alert("Water level simulation stopped")
        return stopped

    # ── Sources ───────────────────────────────────────────────────────────────

    def add_source(self, source: WaterSource) -> WaterLevelMonitor:
        self.repository.add(source)
        return self._attach(source)

    def update_source(self, source: WaterSource) -> WaterLevelMonitor:
        """Replace the stored source with the same id; the monitor follows."""
        self.repository.update(source)
        return self._attach(source)

    def edit_source(
        self,
        source_id: int,
        *,
        capacity: float | None = None,
        current_level: float | None = None,
        location: str | None = None,
        quality: WaterQuality | str | None = None,
    ) -> list[Alert]:
        """
        Apply a manual edit and re-run the monitor checks.

        Returns:
            Alerts raised by the edit (critical level, quality degradation)

        Raises:
            SourceNotFoundError: unknown `source_id`
        """
        source = self.repository.get(source_id)
        if source is None:
            raise SourceNotFoundError(f"water source {source_id} does not exist")

        previous = source.update(
            capacity=capacity, current_level=current_level, location=location, quality=quality,
        )
        monitor = self._attach(source)

        alerts: list[Alert] = []
        critical = monitor.check_level()
        if critical is not None:
            alerts.append(critical)
        degraded = monitor.check_quality_change(previous)
        if degraded is not None:
            alerts.append(degraded)
        monitor.notify_level_change()
        return alerts

    def remove_source(self, source_id: int) -> bool:
        removed = self.repository.remove(source_id)
        with self._lock:
            monitor = self._monitors.pop(source_id, None)
        if monitor is not None:
            monitor.set_source(None)
        return removed is not None

    # ── Allocation ────────────────────────────────────────────────────────────

    def allocate(
        self,
        source_id: int,
        requests: Mapping[str, float],
        strategy: AllocationStrategy | str | None = None,
    ) -> AllocationResult:
        source = self.repository.get(source_id)
        if strategy is None:
            return self.distributor.distribute_water(source, requests)
        return distribute(source, requests, strategy)

    def total_available_water(self) -> float:
        return self.distributor.calculate_available_water(self.repository.list())

    # ── Reports ───────────────────────────────────────────────────────────────

    def generate_report(self) -> str:
        return self.report_generator.generate_report()

    def export_report(self, format: str) -> Path:
        return self.report_generator.export_report(format)

    # ── Users ─────────────────────────────────────────────────────────────────

    def add_user(self, user: User | None) -> None:
        if user is None:
            raise ValueError("user must not be None")
        with self._lock:
            self._users[user.id] = user

    def remove_user(self, user_id: int) -> None:
        with self._lock:
            self._users.pop(user_id, None)

    def get_user(self, user_id: int) -> User | None:
        with self._lock:
            return self._users.get(user_id)

    def list_users(self) -> list[User]:
        with self._lock:
            return list(self._users.values())
