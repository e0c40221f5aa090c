"""
src/data/simulator.py
─────────────────────
Simulated level drift and quality changes for water sources.

Each tick:
  1. Perturbs the level by a uniform amount in a symmetric band
       absolute  ±10 m³
       relative  ±5% of capacity
     and clamps into [0, capacity]
  2. With a small probability (5% by default) redraws the quality
     uniformly from GOOD / FAIR / POOR

Design:
  - Pure functions over plain values; the caller owns the mutation
  - Randomness comes only from an injected numpy Generator, so a seeded
    generator makes every run reproducible
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np
import pandas as pd

from config.settings import settings
from config.sources import ABSOLUTE_DRIFT_UNITS, RELATIVE_DRIFT_FRACTION
from src.data.models import WaterQuality, WaterSource, clamp_level

QUALITY_SCALE: tuple[WaterQuality, ...] = (WaterQuality.GOOD, WaterQuality.FAIR, WaterQuality.POOR)


class DriftMode(str, Enum):
    ABSOLUTE = "absolute"
    RELATIVE = "relative"


@dataclass(frozen=True)
class TickOutcome:
    level: float
    quality: WaterQuality
    previous_quality: WaterQuality

    @property
    def degraded(self) -> bool:
        return self.quality.is_worse_than(self.previous_quality)


def make_rng(seed: int | None = settings.SIMULATION_SEED) -> np.random.Generator:
    return np.random.default_rng(seed)


def drift_band(capacity: float, mode: DriftMode | str = DriftMode.RELATIVE) -> float:
    """Half-width of the perturbation band for one tick."""
    if DriftMode(mode) is DriftMode.ABSOLUTE:
        return ABSOLUTE_DRIFT_UNITS
    return capacity * RELATIVE_DRIFT_FRACTION


def drift_amount(capacity: float, rng: np.random.Generator, mode: DriftMode | str = DriftMode.RELATIVE) -> float:
    half = drift_band(capacity, mode)
    return float(rng.uniform(-half, half))


def draw_quality(
    current: WaterQuality,
    rng: np.random.Generator,
    probability: float = settings.QUALITY_CHANGE_PROBABILITY,
) -> WaterQuality:
    """Return a uniformly redrawn quality with `probability`, else `current`."""
    if rng.random() >= probability:
        return current
    return QUALITY_SCALE[int(rng.integers(0, len(QUALITY_SCALE)))]


def simulate_tick(
    level: float,
    capacity: float,
    quality: WaterQuality,
    rng: np.random.Generator,
    mode: DriftMode | str = DriftMode.RELATIVE,
    quality_change_probability: float = settings.QUALITY_CHANGE_PROBABILITY,
) -> TickOutcome:
    """Compute one tick's new level and quality without touching any source."""
    new_level = clamp_level(level + drift_amount(capacity, rng, mode), capacity)
    new_quality = draw_quality(quality, rng, quality_change_probability)
    return TickOutcome(level=new_level, quality=new_quality, previous_quality=quality)


def simulate_series(
    source: WaterSource,
    steps: int,
    rng: np.random.Generator,
    mode: DriftMode | str = DriftMode.RELATIVE,
    quality_change_probability: float = settings.QUALITY_CHANGE_PROBABILITY,
) -> pd.DataFrame:
    """
    Project `steps` ticks forward from a snapshot of `source`.

    The source itself is not modified. Returns one row per tick with
    columns: step, level, fraction, quality, degraded.
    """
    snap = source.snapshot()
    level, quality = snap.current_level, snap.quality
    rows = []
    for step in range(1, steps + 1):
        outcome = simulate_tick(level, snap.capacity, quality, rng, mode, quality_change_probability)
        rows.append({
            "step": step,
            "level": outcome.level,
            "fraction": outcome.level / snap.capacity,
            "quality": outcome.quality.value,
            "degraded": outcome.degraded,
        })
        level, quality = outcome.level, outcome.quality
    return pd.DataFrame(rows, columns=["step", "level", "fraction", "quality", "degraded"])
