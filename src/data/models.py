"""
src/data/models.py
──────────────────
Pydantic v2 data models for water sources, the quality scale, and users.

WaterSource is the only mutable entity. Its level always stays within
[0, capacity]: every write, plain attribute assignment included, is
validated and clamped, and every mutator holds the source's own
re-entrant lock so concurrent readers never observe a half-applied edit.
"""
from __future__ import annotations

import math
import threading
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationInfo,
    field_validator,
    model_validator,
)

from config.sources import QUALITY_RANK

INITIAL_FILL_FRACTION = 0.5


class SourceKind(str, Enum):
    RIVER = "river"
    WELL = "well"

    @classmethod
    def _missing_(cls, value: object) -> SourceKind | None:
        if isinstance(value, str):
            return cls.__members__.get(value.upper())
        return None


class WaterQuality(str, Enum):
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"

    @classmethod
    def _missing_(cls, value: object) -> WaterQuality | None:
        if isinstance(value, str):
            return cls.__members__.get(value.upper())
        return None

    @property
    def rank(self) -> int:
        """Position on the scale; higher is better."""
        return QUALITY_RANK[self.value]

    def is_worse_than(self, other: WaterQuality | str) -> bool:
        return self.rank < WaterQuality(other).rank


def clamp_level(level: float, capacity: float) -> float:
    return float(min(max(level, 0.0), capacity))


def _require_finite_level(level: float) -> float:
    try:
        level = float(level)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"current_level must be a number, got {level!r}") from exc
    if not math.isfinite(level):
        raise ValueError(f"current_level must be finite, got {level}")
    return level


def _require_positive_capacity(capacity: float) -> float:
    capacity = float(capacity)
    if not capacity > 0.0 or math.isinf(capacity):
        raise ValueError(f"capacity must be a positive finite number, got {capacity}")
    return capacity


def _require_location(location: str) -> str:
    if location is None or not str(location).strip():
        raise ValueError("location must not be empty")
    return str(location)


class WaterSource(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(frozen=True)
    kind: SourceKind = Field(frozen=True)
    capacity: float = Field(gt=0.0)
    location: str = Field(min_length=1)
    quality: WaterQuality = WaterQuality.GOOD
    current_level: float | None = Field(default=None, validate_default=True)

    _lock: Any = PrivateAttr(default_factory=threading.RLock)

    @field_validator("capacity")
    @classmethod
    def _finite_capacity(cls, v: float) -> float:
        return _require_positive_capacity(v)

    @field_validator("location")
    @classmethod
    def _location_not_blank(cls, v: str) -> str:
        return _require_location(v)

    @field_validator("current_level")
    @classmethod
    def _clamped_level(cls, v: float | None, info: ValidationInfo) -> float | None:
        if v is not None:
            v = _require_finite_level(v)
        capacity = info.data.get("capacity")
        if capacity is None:
            return v
        if v is None:
            return capacity * INITIAL_FILL_FRACTION
        return clamp_level(v, capacity)

    @model_validator(mode="after")
    def _level_within_capacity(self) -> WaterSource:
        # Shrinking capacity re-clamps; the nested assignment is validated too.
        if self.current_level is not None and self.current_level > self.capacity:
            self.current_level = self.capacity
        return self

    # ── Mutators (all clamp, all atomic) ─────────────────────────────────────

    def set_current_level(self, level: float) -> float:
        level = _require_finite_level(level)
        with self._lock:
            self.current_level = level
            return self.current_level

    def set_capacity(self, capacity: float) -> None:
        capacity = _require_positive_capacity(capacity)
        with self._lock:
            self.capacity = capacity

    def set_location(self, location: str) -> None:
        location = _require_location(location)
        with self._lock:
            self.location = location

    def update_quality(self, quality: WaterQuality | str) -> WaterQuality:
        """Assign a new quality and return the previous one."""
        quality = WaterQuality(quality)
        with self._lock:
            previous = self.quality
            self.quality = quality
            return previous

    def update(
        self,
        *,
        capacity: float | None = None,
        current_level: float | None = None,
        location: str | None = None,
        quality: WaterQuality | str | None = None,
    ) -> WaterQuality:
        """
        Apply a manual edit atomically.

        Every argument is validated before anything changes, so a rejected
        edit leaves the source untouched. Capacity is applied before the
        level so the level clamps against the new capacity.

        Returns:
            The quality held before the edit.
        """
        new_capacity = _require_positive_capacity(capacity) if capacity is not None else None
        new_level = _require_finite_level(current_level) if current_level is not None else None
        new_location = _require_location(location) if location is not None else None
        new_quality = WaterQuality(quality) if quality is not None else None

        with self._lock:
            previous = self.quality
            if new_capacity is not None:
                self.set_capacity(new_capacity)
            if new_level is not None:
                self.current_level = new_level
            if new_location is not None:
                self.location = new_location
            if new_quality is not None:
                self.quality = new_quality
            return previous

    def locked(self) -> Any:
        """The source's re-entrant lock, for multi-step read-modify-write."""
        return self._lock

    # ── Readers ──────────────────────────────────────────────────────────────

    def level_fraction(self) -> float:
        """Current level as a fraction of capacity."""
        with self._lock:
            return self.current_level / self.capacity

    def snapshot(self) -> WaterSource:
        """Detached copy with its own lock."""
        with self._lock:
            return type(self).model_validate(self.model_dump())


class Role(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("role name must not be empty")
        return v


class User(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(frozen=True)
    name: str = Field(min_length=1)
    role: Role

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("user name must not be empty")
        return v
