"""
src/analytics/allocation.py
────────────────────────────
Allocation engine: split a source's available water among recipients.

Strategies (caller selects one; each is a pure function of the
`available` volume and a copy of the request mapping):

  equitable  every recipient gets available / n; demands ignored
  fair       share ∝ demand, floored at 10% of available per recipient.
             The floor can push the total above `available`; that
             oversubscription is kept as-is, not renormalized.
  priority   greedy: highest demand first, each granted
             min(remaining, demand) until the water runs out; recipients
             never reached are absent from the result

`available` is read once from the source at call entry and the request
mapping is copied, so a concurrent level change cannot affect a call
already in progress.
"""
from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Mapping
from enum import Enum

import numpy as np
import pandas as pd

from config.sources import FAIR_FLOOR_FRACTION
from src.data.models import WaterSource
from src.utils.logger import get_logger

logger = get_logger(__name__)

AllocationResult = dict[str, float]
StrategyFn = Callable[[float, dict[str, float]], AllocationResult]


class AllocationError(ValueError):
    """Raised when an allocation call receives invalid arguments."""


class AllocationStrategy(str, Enum):
    EQUITABLE = "equitable"
    FAIR = "fair"
    PRIORITY = "priority"


# ── Strategies ────────────────────────────────────────────────────────────────

def equitable_split(available: float, requests: dict[str, float]) -> AllocationResult:
    share = available / len(requests)
    return {recipient: share for recipient in requests}


def fair_split(available: float, requests: dict[str, float]) -> AllocationResult:
    if available <= 0:
        return {}

    recipients = list(requests)
    demands = np.array([requests[r] for r in recipients], dtype=float)
    total = float(demands.sum())

    if total > 0:
        raw = available * (demands / total)
    else:
        raw = np.zeros_like(demands)
    shares = np.maximum(raw, available * FAIR_FLOOR_FRACTION)

    return {r: float(s) for r, s in zip(recipients, shares, strict=True)}


def priority_split(available: float, requests: dict[str, float]) -> AllocationResult:
    # Ties on demand fall back to the recipient key so the order is total.
    ordered = sorted(requests.items(), key=lambda item: (-item[1], str(item[0])))

    result: AllocationResult = {}
    remaining = available
    for recipient, demand in ordered:
        granted = min(remaining, demand)
        result[recipient] = granted
        remaining -= granted
        if remaining <= 0:
            break
    return result


STRATEGIES: dict[AllocationStrategy, StrategyFn] = {
    AllocationStrategy.EQUITABLE: equitable_split,
    AllocationStrategy.FAIR: fair_split,
    AllocationStrategy.PRIORITY: priority_split,
}


# ── Public API ────────────────────────────────────────────────────────────────

def _snapshot_requests(requests: Mapping[str, float] | None) -> dict[str, float]:
    if requests is None or len(requests) == 0:
        raise AllocationError("allocation requests must not be empty")

    snapshot: dict[str, float] = {}
    for recipient, demand in dict(requests).items():
        try:
            value = float(demand)
        except (TypeError, ValueError) as exc:
            raise AllocationError(f"demand for {recipient!r} is not a number: {demand!r}") from exc
        if not math.isfinite(value) or value < 0:
            raise AllocationError(f"demand for {recipient!r} must be a finite value >= 0, got {value}")
        snapshot[recipient] = value
    return snapshot


def distribute(
    source: WaterSource | None,
    requests: Mapping[str, float] | None,
    strategy: AllocationStrategy | str = AllocationStrategy.EQUITABLE,
) -> AllocationResult:
    """
    Allocate `source`'s current level among `requests`.

    Args:
        source: Source whose current level is the available volume
        requests: recipient → demand (amount, or priority for "priority")
        strategy: One of AllocationStrategy

    Returns:
        recipient → granted amount

    Raises:
        AllocationError: missing source, empty requests or a bad demand
    """
    if source is None:
        raise AllocationError("water source must not be None")
    try:
        strategy = AllocationStrategy(strategy)
    except ValueError as exc:
        raise AllocationError(f"unknown allocation strategy: {strategy!r}") from exc

    available = float(source.current_level)
    snapshot = _snapshot_requests(requests)

    result = STRATEGIES[strategy](available, snapshot)
    logger.debug(
        "Allocated source %s (%.2f available) to %d recipients with %s: total %.2f",
        source.id, available, len(snapshot), strategy.value, sum(result.values()),
    )
    return result


def calculate_available_water(sources: Iterable[WaterSource]) -> float:
    """Total current level across `sources`."""
    return float(sum(s.current_level for s in sources))


def to_dataframe(requests: Mapping[str, float], result: Mapping[str, float]) -> pd.DataFrame:
    """
    Tabulate a request against its allocation.

    Recipients absent from `result` (not reached by a priority split) get a
    NaN `granted` value so "not granted" stays distinct from a zero grant.
    """
    rows = [
        {"recipient": r, "demand": float(d), "granted": result.get(r, np.nan)}
        for r, d in requests.items()
    ]
    return pd.DataFrame(rows, columns=["recipient", "demand", "granted"])


class WaterDistributor:
    """Holds the caller-selected strategy; equitable until changed."""

    def __init__(self, strategy: AllocationStrategy | str = AllocationStrategy.EQUITABLE):
        self._strategy = AllocationStrategy.EQUITABLE
        self.set_strategy(strategy)

    @property
    def strategy(self) -> AllocationStrategy:
        return self._strategy

    def set_strategy(self, strategy: AllocationStrategy | str | None) -> None:
        if strategy is None:
            raise AllocationError("allocation strategy must not be None")
        try:
            self._strategy = AllocationStrategy(strategy)
        except ValueError as exc:
            raise AllocationError(f"unknown allocation strategy: {strategy!r}") from exc

    def distribute_water(
        self,
        source: WaterSource | None,
        requests: Mapping[str, float] | None,
    ) -> AllocationResult:
        return distribute(source, requests, self._strategy)

    @staticmethod
    def calculate_available_water(sources: Iterable[WaterSource]) -> float:
        return calculate_available_water(sources)
