"""
tests/test_alerting.py
───────────────────────
Tests for the alert condition, the per-device edge-trigger latch and the alert log.
"""
import logging
import uuid

import pytest

from config.alerts import AlertSeverity
from src.analytics.alerting import (
    AlertLog,
    build_alert,
    play_alert_sound,
    should_alert,
    update_latch,
)
from src.analytics.risk_engine import predict
from src.data.models import Alert, AlertLatch, Prediction, RiskCategory


def low_prediction() -> Prediction:
    return Prediction(category=RiskCategory.LOW, confidence=0.9, score=0.1, factors=["ok"])


def high_prediction() -> Prediction:
    return Prediction(category=RiskCategory.HIGH, confidence=0.9, score=0.9, factors=["bad"])


def make_alert(now, message="Alaris GH requires immediate inspection", title="CRITICAL DEVICE ALERT"):
    return Alert(
        id=str(uuid.uuid4()),
        timestamp=now,
        severity=AlertSeverity.CRITICAL.value,
        title=title,
        message=message,
        location="Hospital A - ICU",
    )


class TestShouldAlert:
    def test_quiet_when_nominal(self, nominal_telemetry):
        assert not should_alert(nominal_telemetry, low_prediction())

    def test_high_category_alone_triggers(self, nominal_telemetry):
        assert should_alert(nominal_telemetry, high_prediction())

    @pytest.mark.parametrize(
        "field,value,expected",
        [
            ("temperature", 38.0, False),
            ("temperature", 38.1, True),
            ("vibration", 0.8, False),
            ("vibration", 0.81, True),
            ("error_log_count", 20, False),
            ("error_log_count", 21, True),
        ],
    )
    def test_thresholds_are_strict(self, nominal_telemetry, field, value, expected):
        t = nominal_telemetry.model_copy(update={field: value})
        assert should_alert(t, low_prediction()) is expected


class TestUpdateLatch:
    def test_continuous_condition_notifies_once(self, make_device, hot_telemetry):
        device = make_device(hot_telemetry)
        fired = [update_latch(device, predict(device.telemetry, device.device_type)) for _ in range(5)]
        assert fired == [True, False, False, False, False]
        assert device.alert_state == AlertLatch.ALERTED

    def test_rearms_after_quiet_tick(self, make_device, hot_telemetry, nominal_telemetry):
        device = make_device()
        sequence = [hot_telemetry, nominal_telemetry, hot_telemetry]
        fired = []
        for telemetry in sequence:
            device.telemetry = telemetry
            fired.append(update_latch(device, predict(telemetry, device.device_type)))
        assert fired == [True, False, True]

    def test_falling_edge_is_silent(self, make_device):
        device = make_device()
        device.alert_state = AlertLatch.ALERTED
        assert update_latch(device, low_prediction()) is False
        assert device.alert_state == AlertLatch.QUIET

    def test_quiet_stays_quiet(self, make_device):
        device = make_device()
        assert update_latch(device, low_prediction()) is False
        assert device.alert_state == AlertLatch.QUIET


class TestBuildAlert:
    def test_fields(self, make_device, now):
        alert = build_alert(make_device(name="Lifepak 20", device_type="Defibrillator", device_id=14), now)
        assert alert.title == "CRITICAL DEVICE ALERT"
        assert alert.message == "Lifepak 20 requires immediate inspection"
        assert alert.severity == "critical"
        assert alert.device_id == 14
        assert alert.timestamp == now

    def test_unique_ids(self, make_device, now):
        device = make_device()
        assert build_alert(device, now).id != build_alert(device, now).id


class TestAlertLog:
    def test_newest_first(self, now):
        log = AlertLog()
        first, second = make_alert(now, "a"), make_alert(now, "b")
        log.add(first)
        log.add(second)
        assert [a.message for a in log] == ["b", "a"]

    def test_duplicate_dropped(self, now):
        log = AlertLog()
        assert log.add(make_alert(now)) is True
        assert log.add(make_alert(now)) is False
        assert len(log) == 1

    def test_same_message_different_title_kept(self, now):
        log = AlertLog()
        log.add(make_alert(now))
        assert log.add(make_alert(now, title="OTHER")) is True

    def test_capacity_evicts_oldest(self, now):
        log = AlertLog(capacity=50)
        for i in range(55):
            log.add(make_alert(now, f"device {i}"))
        assert len(log) == 50
        messages = [a.message for a in log]
        assert messages[0] == "device 54"
        assert messages[-1] == "device 5"

    def test_dismiss_allows_relogging(self, now):
        log = AlertLog()
        alert = make_alert(now)
        log.add(alert)
        assert log.dismiss(alert.id) is True
        assert log.dismiss(alert.id) is False
        assert log.add(make_alert(now)) is True

    def test_clear_and_counts(self, now):
        log = AlertLog()
        log.add(make_alert(now, "x"))
        info = make_alert(now, "y")
        info.severity = AlertSeverity.INFO.value
        log.add(info)
        assert log.active_count == 2
        assert log.critical_count == 1
        log.clear()
        assert log.active_count == 0

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            AlertLog(capacity=0)


class TestAlertSound:
    def test_failure_is_swallowed(self, caplog):
        def broken():
            raise RuntimeError("no audio device")

        with caplog.at_level(logging.WARNING):
            assert play_alert_sound(broken) is False
        assert "no audio device" in caplog.text

    def test_success(self):
        calls = []
        assert play_alert_sound(lambda: calls.append(1)) is True
        assert calls == [1]
