"""
tests/test_monitor.py
──────────────────────
Tests for the level/quality monitor and its observers.
"""
import threading

import numpy as np
import pytest

from config.alerts import AlertKind
from src.data.alerts import ContaminationAlert, CriticalLevelAlert, SystemAlert
from src.data.models import WaterQuality, WaterSource
from src.monitoring.monitor import WaterLevelMonitor
from src.monitoring.observers import AlertLog, AlertObserver, LevelObserver


@pytest.fixture
def monitor(config, river):
    return WaterLevelMonitor(config=config, source=river, rng=np.random.default_rng(7))


class TestRegistry:
    def test_none_observer_rejected(self, monitor):
        with pytest.raises(ValueError):
            monitor.register_observer(None)

    def test_duplicate_registration_delivers_twice(self, monitor, alert_recorder):
        monitor.register_observer(alert_recorder)
        monitor.register_observer(alert_recorder)
        monitor.source.set_current_level(100.0)
        monitor.check_level()
        assert len(alert_recorder.alerts) == 2

    def test_remove_drops_one_registration(self, monitor, alert_recorder):
        monitor.register_observer(alert_recorder)
        monitor.register_observer(alert_recorder)
        monitor.remove_observer(alert_recorder)
        assert len(monitor.observers) == 1

    def test_remove_unknown_is_noop(self, monitor, alert_recorder):
        monitor.remove_observer(alert_recorder)
        assert monitor.observers == ()

    def test_capabilities_are_independent(self, level_recorder, alert_recorder, full_recorder):
        assert isinstance(level_recorder, LevelObserver)
        assert not isinstance(level_recorder, AlertObserver)
        assert isinstance(alert_recorder, AlertObserver)
        assert not isinstance(alert_recorder, LevelObserver)
        assert isinstance(full_recorder, LevelObserver) and isinstance(full_recorder, AlertObserver)


class TestCheckLevel:
    def test_at_threshold_alerts(self, monitor, alert_recorder):
        monitor.register_observer(alert_recorder)
        monitor.source.set_current_level(200.0)
        alert = monitor.check_level()
        assert isinstance(alert, CriticalLevelAlert)
        assert alert.level == pytest.approx(0.2)
        assert alert.threshold == pytest.approx(0.2)
        assert alert_recorder.alerts == [alert]

    def test_above_threshold_is_silent(self, monitor, alert_recorder):
        monitor.register_observer(alert_recorder)
        monitor.source.set_current_level(201.0)
        assert monitor.check_level() is None
        assert alert_recorder.alerts == []

    def test_level_observers_do_not_get_alerts(self, monitor, level_recorder):
        monitor.register_observer(level_recorder)
        monitor.source.set_current_level(0.0)
        monitor.check_level()
        assert level_recorder.levels == []

    def test_uses_current_configuration(self, monitor):
        monitor.source.set_current_level(300.0)
        assert monitor.check_level() is None
        monitor.config.set_critical_water_level_threshold(0.3)
        assert monitor.check_level() is not None

    def test_set_config_type_checked(self, monitor):
        with pytest.raises(TypeError):
            monitor.set_config({"critical_water_level_threshold": 0.1})


class TestQuality:
    @pytest.mark.parametrize(
        "start,new,kind",
        [
            ("good", "fair", AlertKind.WARNING),
            ("good", "poor", AlertKind.ERROR),
            ("fair", "poor", AlertKind.ERROR),
        ],
    )
    def test_degradation_alerts(self, monitor, alert_recorder, start, new, kind):
        monitor.source.update_quality(start)
        monitor.register_observer(alert_recorder)
        alert = monitor.apply_quality(new)
        assert isinstance(alert, ContaminationAlert)
        assert alert.kind is kind
        assert alert.previous_quality is WaterQuality(start)
        assert alert.quality is WaterQuality(new)
        assert alert_recorder.alerts == [alert]

    @pytest.mark.parametrize("start,new", [("poor", "good"), ("fair", "fair"), ("fair", "good")])
    def test_no_alert_without_degradation(self, monitor, alert_recorder, start, new):
        monitor.source.update_quality(start)
        monitor.register_observer(alert_recorder)
        assert monitor.apply_quality(new) is None
        assert monitor.source.quality is WaterQuality(new)
        assert alert_recorder.alerts == []

    def test_check_quality_change_for_prior_edit(self, monitor):
        monitor.source.update_quality("poor")
        alert = monitor.check_quality_change("good")
        assert alert is not None
        assert alert.previous_quality is WaterQuality.GOOD


class TestDelivery:
    def test_failing_observer_is_isolated(self, monitor, failing_observer, full_recorder):
        monitor.register_observer(failing_observer)
        monitor.register_observer(full_recorder)
        monitor.source.set_current_level(50.0)
        monitor.check_level()
        monitor.notify_level_change()
        assert len(full_recorder.alerts) == 1
        assert full_recorder.levels == [(1, 50.0)]

    def test_level_notification_carries_current_level(self, monitor, level_recorder):
        monitor.register_observer(level_recorder)
        monitor.source.set_current_level(640.0)
        monitor.notify_level_change()
        assert level_recorder.levels == [(1, 640.0)]

    def test_publish_reaches_alert_log(self, monitor):
        log = AlertLog()
        monitor.register_observer(log)
        monitor.publish(SystemAlert(message="hello", kind=AlertKind.INFO))
        assert len(log) == 1

    def test_self_removal_during_delivery(self, monitor, alert_recorder):
        class OneShot:
            def __init__(self):
                self.alerts = []

            def on_alert(self, alert):
                self.alerts.append(alert)
                monitor.remove_observer(self)

        one_shot = OneShot()
        monitor.register_observer(one_shot)
        monitor.register_observer(alert_recorder)
        monitor.source.set_current_level(0.0)

        monitor.check_level()
        assert len(one_shot.alerts) == 1
        assert len(alert_recorder.alerts) == 1

        monitor.check_level()
        assert len(one_shot.alerts) == 1
        assert len(alert_recorder.alerts) == 2

    def test_registration_during_delivery_applies_next_round(self, monitor, alert_recorder):
        class Recruiter:
            def on_alert(self, alert):
                monitor.register_observer(alert_recorder)
                monitor.remove_observer(self)

        monitor.register_observer(Recruiter())
        monitor.source.set_current_level(0.0)

        monitor.check_level()
        assert alert_recorder.alerts == []
        assert monitor.observers == (alert_recorder,)

        alert = monitor.check_level()
        assert alert_recorder.alerts == [alert]


class TestDetached:
    def test_every_operation_is_a_noop(self, config, full_recorder):
        monitor = WaterLevelMonitor(config=config)
        monitor.register_observer(full_recorder)
        assert monitor.check_level() is None
        assert monitor.apply_quality("poor") is None
        assert monitor.tick() == []
        monitor.notify_level_change()
        assert full_recorder.alerts == []
        assert full_recorder.levels == []

    def test_set_source_attaches(self, config, river):
        monitor = WaterLevelMonitor(config=config)
        monitor.set_source(river)
        assert monitor.get_source() is river


class TestTick:
    def test_level_stays_within_bounds(self, config):
        source = WaterSource(id=5, kind="well", capacity=100.0, location="W", current_level=1.0)
        monitor = WaterLevelMonitor(config=config, source=source, rng=np.random.default_rng(3))
        for _ in range(500):
            monitor.tick()
            assert 0.0 <= source.current_level <= source.capacity

    def test_low_level_raises_critical_alert(self, config, full_recorder):
        source = WaterSource(id=5, kind="well", capacity=100.0, location="W", current_level=0.0)
        monitor = WaterLevelMonitor(
            config=config, source=source, rng=np.random.default_rng(3), quality_change_probability=0.0,
        )
        monitor.register_observer(full_recorder)
        alerts = monitor.tick()
        assert [type(a) for a in alerts] == [CriticalLevelAlert]
        assert full_recorder.levels == [(5, source.current_level)]

    def test_zero_probability_keeps_quality(self, config, river):
        monitor = WaterLevelMonitor(
            config=config, source=river, rng=np.random.default_rng(3), quality_change_probability=0.0,
        )
        for _ in range(50):
            monitor.tick()
        assert river.quality is WaterQuality.GOOD

    def test_quality_redraw_to_poor_alerts(self, config, river, alert_recorder, scripted_rng):
        monitor = WaterLevelMonitor(
            config=config, source=river, rng=scripted_rng(drift=0.0, roll=0.0, index=2),
            quality_change_probability=1.0,
        )
        monitor.register_observer(alert_recorder)
        alerts = monitor.tick()
        assert river.quality is WaterQuality.POOR
        assert len(alerts) == 1
        assert isinstance(alerts[0], ContaminationAlert)
        assert alerts[0].kind is AlertKind.ERROR
        assert alert_recorder.alerts == alerts

    def test_quality_improvement_is_silent(self, config, well, scripted_rng):
        well.update_quality("poor")
        monitor = WaterLevelMonitor(
            config=config, source=well, rng=scripted_rng(roll=0.0, index=0), quality_change_probability=1.0,
        )
        assert monitor.tick() == []
        assert well.quality is WaterQuality.GOOD

    def test_manual_quality_edit_during_tick_is_applied_after_it(self, config, river, scripted_rng):
        seen_by_editor = []
        editor = threading.Thread(target=lambda: seen_by_editor.append(river.update_quality("fair")))

        class EditingRng(scripted_rng):
            def integers(self, low, high):
                editor.start()
                return super().integers(low, high)

        monitor = WaterLevelMonitor(
            config=config, source=river, rng=EditingRng(roll=0.0, index=2), quality_change_probability=1.0,
        )
        alerts = monitor.tick()
        editor.join(timeout=5.0)

        assert [a.quality for a in alerts] == [WaterQuality.POOR]
        assert seen_by_editor == [WaterQuality.POOR]
        assert river.quality is WaterQuality.FAIR

    def test_seeded_runs_are_reproducible(self, config):
        def run(seed):
            source = WaterSource(id=1, kind="river", capacity=1000.0, location="R")
            monitor = WaterLevelMonitor(config=config, source=source, rng=np.random.default_rng(seed),
                                        quality_change_probability=0.5)
            for _ in range(20):
                monitor.tick()
            return source.current_level, source.quality

        assert run(11) == run(11)


class TestAlertLog:
    def test_recent_is_newest_first_and_filterable(self, river):
        log = AlertLog()
        first = CriticalLevelAlert.for_source(river, 0.1, 0.2)
        second = SystemAlert(message="started", kind=AlertKind.INFO)
        log.on_alert(first)
        log.on_alert(second)
        assert log.recent() == [second, first]
        assert log.recent(kind="warning") == [first]
        assert log.recent(source_id=1) == [first]
        assert log.count(AlertKind.INFO) == 1

    def test_bounded(self):
        log = AlertLog(maxlen=3)
        for i in range(5):
            log.on_alert(SystemAlert(message=str(i), kind=AlertKind.INFO))
        assert len(log) == 3
        assert [a.message for a in log.recent()] == ["4", "3", "2"]

    def test_to_dataframe(self, river):
        log = AlertLog()
        assert log.to_dataframe().empty
        log.on_alert(CriticalLevelAlert.for_source(river, 0.1, 0.2))
        df = log.to_dataframe()
        assert df.loc[0, "kind"] == "warning"
        assert df.loc[0, "type"] == "CriticalLevelAlert"
        assert df.loc[0, "source_id"] == 1

    def test_clear(self):
        log = AlertLog()
        log.on_alert(SystemAlert(message="x", kind=AlertKind.INFO))
        log.clear()
        assert len(log) == 0
