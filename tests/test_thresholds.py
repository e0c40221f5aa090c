"""
tests/test_thresholds.py
─────────────────────────
Tests for threshold configuration and evaluation.
"""
import pytest
from pydantic import ValidationError

from config.alerts import AlertKind
from src.analytics.thresholds import (
    STATUS_COLORS,
    Configuration,
    contamination_kind,
    evaluate_level,
    get_level_color,
    is_critical_level,
    is_degradation,
)
from src.data.models import WaterQuality


class TestConfiguration:
    def test_defaults(self):
        config = Configuration()
        assert config.critical_water_level_threshold == pytest.approx(0.2)
        assert config.contamination_threshold == pytest.approx(0.8)

    @pytest.mark.parametrize("value", [-0.01, 1.01])
    def test_constructor_rejects_out_of_range(self, value):
        with pytest.raises(ValidationError):
            Configuration(critical_water_level_threshold=value)
        with pytest.raises(ValidationError):
            Configuration(contamination_threshold=value)

    def test_setters_validate(self, config):
        config.set_critical_water_level_threshold(0.35)
        assert config.critical_water_level_threshold == 0.35
        with pytest.raises(ValidationError):
            config.set_contamination_threshold(2.0)
        assert config.contamination_threshold == 0.8

    def test_bounds_are_inclusive(self):
        config = Configuration(critical_water_level_threshold=0.0, contamination_threshold=1.0)
        assert config.critical_water_level_threshold == 0.0


class TestLevelEvaluation:
    def test_boundary_is_critical(self, config):
        assert is_critical_level(0.2, config)
        assert not is_critical_level(0.2001, config)

    def test_zero_threshold_only_triggers_when_empty(self):
        config = Configuration(critical_water_level_threshold=0.0)
        assert is_critical_level(0.0, config)
        assert not is_critical_level(0.01, config)

    @pytest.mark.parametrize(
        "fraction,expected",
        [(0.05, "critical"), (0.2, "critical"), (0.25, "low"), (0.3, "low"), (0.8, "ok")],
    )
    def test_evaluate_level(self, config, fraction, expected):
        assert evaluate_level(fraction, config) == expected

    def test_level_color(self, config):
        assert get_level_color(0.1, config) == STATUS_COLORS["critical"]
        assert get_level_color(0.9, config) == STATUS_COLORS["ok"]


class TestQuality:
    @pytest.mark.parametrize(
        "previous,new,expected",
        [
            ("good", "fair", True),
            ("good", "poor", True),
            ("fair", "poor", True),
            ("poor", "good", False),
            ("fair", "fair", False),
            ("fair", "good", False),
        ],
    )
    def test_is_degradation(self, previous, new, expected):
        assert is_degradation(previous, new) is expected

    def test_contamination_kind(self, config):
        assert contamination_kind(WaterQuality.POOR, config) is AlertKind.ERROR
        assert contamination_kind(WaterQuality.FAIR, config) is AlertKind.WARNING

    def test_contamination_threshold_moves_grade(self):
        config = Configuration(contamination_threshold=0.5)
        assert contamination_kind("fair", config) is AlertKind.ERROR
