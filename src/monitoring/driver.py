"""
src/monitoring/driver.py
────────────────────────
Background ticker that advances every monitor at a fixed interval.

Stopping sets an event and joins the thread: a pass already running
finishes, and no further pass starts.
"""
from __future__ import annotations

import threading
from collections.abc import Callable, Iterable

from config.settings import settings
from src.data.alerts import Alert
from src.monitoring.monitor import WaterLevelMonitor
from src.utils.logger import get_logger

logger = get_logger(__name__)


class SimulationDriver:

    def __init__(
        self,
        monitors: Callable[[], Iterable[WaterLevelMonitor]],
        interval_s: float = settings.TICK_INTERVAL_S,
    ):
        if interval_s <= 0:
            raise ValueError(f"interval_s must be > 0, got {interval_s}")
        self._monitors = monitors
        self._interval_s = interval_s
        self._lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()
        self.passes_completed = 0

    @property
    def interval_s(self) -> float:
        return self._interval_s

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._thread is not None and self._thread.is_alive()

    def start(self) -> bool:
        """Start ticking; returns False if already running."""
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                return False
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._run,
                args=(self._stop_event,),
                name="simulation-driver",
                daemon=True,
            )
            self._thread.start()
        logger.info("Simulation driver started (every %.1fs)", self._interval_s)
        return True

    def stop(self, timeout: float | None = None) -> bool:
        """Stop after the current pass; returns False if it was not running."""
        with self._lock:
            thread = self._thread
            if thread is None:
                return False
            self._stop_event.set()
            self._thread = None
        if thread is not threading.current_thread():
            thread.join(timeout)
        logger.info("Simulation driver stopped after %d passes", self.passes_completed)
        return True

    def run_once(self) -> list[Alert]:
        """Tick every monitor once; a failing monitor does not block the others."""
        alerts: list[Alert] = []
        for monitor in list(self._monitors()):
            try:
                alerts.extend(monitor.tick())
            except Exception:
                logger.exception("Tick failed for monitor of source %s", getattr(monitor.source, "id", None))
        self.passes_completed += 1
        return alerts

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._interval_s):
            self.run_once()
