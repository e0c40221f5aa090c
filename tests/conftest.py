"""
tests/conftest.py
─────────────────
Shared pytest fixtures for the Aqua Monitor test suite.
"""
import os
from datetime import datetime

import numpy as np
import pytest

os.environ.setdefault("SIMULATION_SEED", "42")
os.environ.setdefault("LOG_LEVEL", "WARNING")


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 6, 1, 12, 0, 0)


@pytest.fixture
def config():
    from src.analytics.thresholds import Configuration
    return Configuration(critical_water_level_threshold=0.2, contamination_threshold=0.8)


@pytest.fixture
def river():
    from src.data.models import WaterSource
    return WaterSource(id=1, kind="river", capacity=1000.0, location="North River")


@pytest.fixture
def well():
    from src.data.models import WaterSource
    return WaterSource(id=2, kind="well", capacity=500.0, location="South Well", quality="fair")


@pytest.fixture
def repository():
    from src.data.store import WaterSourceRepository
    repo = WaterSourceRepository()
    repo.seed_sample_sources()
    return repo


# ── Observer doubles ──────────────────────────────────────────────────────────

class LevelRecorder:
    def __init__(self):
        self.levels = []

    def on_level_change(self, source, current_level):
        self.levels.append((source.id, current_level))


class AlertRecorder:
    def __init__(self):
        self.alerts = []

    def on_alert(self, alert):
        self.alerts.append(alert)


class FullRecorder(LevelRecorder, AlertRecorder):
    def __init__(self):
        LevelRecorder.__init__(self)
        AlertRecorder.__init__(self)


class FailingObserver:
    def on_level_change(self, source, current_level):
        raise RuntimeError("level observer failure")

    def on_alert(self, alert):
        raise RuntimeError("alert observer failure")


class ScriptedRng:
    """Stands in for np.random.Generator with fixed draws."""

    def __init__(self, drift=0.0, roll=0.0, index=0):
        self.drift = drift
        self.roll = roll
        self.index = index

    def uniform(self, low, high):
        return self.drift

    def random(self):
        return self.roll

    def integers(self, low, high):
        return self.index


@pytest.fixture
def level_recorder():
    return LevelRecorder()


@pytest.fixture
def alert_recorder():
    return AlertRecorder()


@pytest.fixture
def full_recorder():
    return FullRecorder()


@pytest.fixture
def failing_observer():
    return FailingObserver()


@pytest.fixture
def scripted_rng():
    return ScriptedRng
