"""
src/data/store.py
─────────────────
In-memory water source repository.

Provides:
  - WaterSourceRepository : add / update / remove / get / list by source id
  - seed_sample_sources() : load the sample sources from config
  - to_dataframe()        : tabular snapshot for reports and the dashboard

Thread safety: every mutator goes through one re-entrant lock. `get()`
returns the live source (monitors mutate it under its own lock);
`list()` and `to_dataframe()` return detached snapshots.
"""
from __future__ import annotations

import threading

import pandas as pd

from config.sources import SAMPLE_SOURCES
from src.data.models import WaterSource
from src.utils.logger import get_logger

logger = get_logger(__name__)


class SourceNotFoundError(LookupError):
    """Raised when updating a source id the repository does not hold."""


class WaterSourceRepository:

    def __init__(self) -> None:
        self._sources: dict[int, WaterSource] = {}
        self._lock = threading.RLock()

    def add(self, source: WaterSource | None) -> None:
        if source is None:
            raise ValueError("water source must not be None")
        with self._lock:
            self._sources[source.id] = source

    def update(self, source: WaterSource | None) -> None:
        if source is None:
            raise ValueError("water source must not be None")
        with self._lock:
            if source.id not in self._sources:
                raise SourceNotFoundError(f"water source {source.id} does not exist")
            self._sources[source.id] = source

    def remove(self, source_id: int) -> WaterSource | None:
        """Remove and return the source, or None if it was not present."""
        with self._lock:
            return self._sources.pop(source_id, None)

    def get(self, source_id: int) -> WaterSource | None:
        with self._lock:
            return self._sources.get(source_id)

    def list(self) -> list[WaterSource]:
        """Snapshots of every source in insertion order."""
        with self._lock:
            sources = list(self._sources.values())
        return [s.snapshot() for s in sources]

    def ids(self) -> list[int]:
        with self._lock:
            return list(self._sources)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sources)

    def __contains__(self, source_id: object) -> bool:
        with self._lock:
            return source_id in self._sources

    def seed_sample_sources(self, force_reseed: bool = False) -> int:
        """
        Load the configured sample sources if the repository is empty.

        Returns:
            Number of sources added
        """
        with self._lock:
            if self._sources and not force_reseed:
                return 0
            self._sources.clear()
            for seed in SAMPLE_SOURCES:
                self.add(WaterSource(
                    id=seed.id,
                    kind=seed.kind,
                    capacity=seed.capacity,
                    location=seed.location,
                    quality=seed.quality,
                ))
            logger.info("Seeded %d sample water sources", len(SAMPLE_SOURCES))
            return len(SAMPLE_SOURCES)

    def to_dataframe(self) -> pd.DataFrame:
        """Snapshot as a frame: one row per source, insertion order."""
        columns = ["id", "kind", "location", "capacity", "current_level", "fill_pct", "quality"]
        rows = [
            {
                "id": s.id,
                "kind": s.kind.value,
                "location": s.location,
                "capacity": s.capacity,
                "current_level": s.current_level,
                "fill_pct": round(s.current_level / s.capacity * 100, 2),
                "quality": s.quality.value,
            }
            for s in self.list()
        ]
        return pd.DataFrame(rows, columns=columns)

