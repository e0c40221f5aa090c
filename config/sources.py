"""
config/sources.py
─────────────────
Water source definitions, quality scale display and drift constants.

Quality scale (best → worst):
  GOOD > FAIR > POOR

Contamination index per quality (compared against the configured
contamination threshold to grade degradation alerts):
  GOOD 0.0 · FAIR 0.5 · POOR 1.0
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class SourceSeed:
    """Sample source loaded into a fresh repository."""
    id: int
    kind: str           # "river" | "well"
    capacity: float     # m³
    location: str
    quality: str        # "good" | "fair" | "poor"


# ── Sample sources ────────────────────────────────────────────────────────────
SAMPLE_SOURCES: tuple[SourceSeed, ...] = (
    SourceSeed(id=1, kind="river", capacity=1_000.0, location="North River", quality="good"),
    SourceSeed(id=2, kind="well", capacity=500.0, location="South Well", quality="good"),
    SourceSeed(id=3, kind="river", capacity=2_000.0, location="East River", quality="fair"),
)

# ── Quality scale ─────────────────────────────────────────────────────────────
QUALITY_RANK: dict[str, int] = {
    "good": 3,
    "fair": 2,
    "poor": 1,
}

CONTAMINATION_INDEX: dict[str, float] = {
    "good": 0.0,
    "fair": 0.5,
    "poor": 1.0,
}

QUALITY_COLORS: dict[str, str] = {
    "good": "#2ea44f",
    "fair": "#e8a020",
    "poor": "#da3633",
}

KIND_LABELS: dict[str, str] = {
    "river": "River",
    "well": "Well",
}

# ── Drift simulation ──────────────────────────────────────────────────────────
ABSOLUTE_DRIFT_UNITS = 10.0      # ± m³ per tick
RELATIVE_DRIFT_FRACTION = 0.05   # ± share of capacity per tick

# ── Allocation ────────────────────────────────────────────────────────────────
FAIR_FLOOR_FRACTION = 0.10       # minimum share of available water per recipient
