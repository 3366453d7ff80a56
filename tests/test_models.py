"""
tests/test_models.py
─────────────────────
Tests for Pydantic v2 data models.
"""
import pytest
from pydantic import ValidationError

from src.data.models import (
    AlertLatch,
    FleetSummary,
    ManualInput,
    Prediction,
    RiskCategory,
    Telemetry,
)


class TestTelemetry:
    def test_valid_telemetry(self, nominal_telemetry):
        assert nominal_telemetry.temperature == 28.0
        assert nominal_telemetry.error_log_count == 4

    @pytest.mark.parametrize(
        "field,value",
        [
            ("temperature", 14.9),
            ("temperature", 45.1),
            ("vibration", -0.01),
            ("vibration", 1.21),
            ("error_log_count", 51),
            ("pressure", 49.0),
            ("pressure", 251.0),
            ("current_draw_amps", 0.5),
            ("current_draw_amps", 15.5),
        ],
    )
    def test_out_of_range_rejected(self, nominal_telemetry, field, value):
        data = nominal_telemetry.model_dump()
        data[field] = value
        with pytest.raises(ValidationError):
            Telemetry(**data)

    def test_model_dump(self, nominal_telemetry):
        data = nominal_telemetry.model_dump()
        assert set(data) == {
            "temperature", "vibration", "error_log_count", "runtime_hours",
            "device_age_years", "repair_count", "pressure", "current_draw_amps",
        }


class TestPrediction:
    def test_factors_must_not_be_empty(self):
        with pytest.raises(ValidationError):
            Prediction(category=RiskCategory.LOW, confidence=0.9, score=0.1, factors=[])

    def test_confidence_bounds(self):
        with pytest.raises(ValidationError):
            Prediction(category=RiskCategory.LOW, confidence=0.5, score=0.1, factors=["x"])

    def test_model_version_label(self):
        p = Prediction(category=RiskCategory.HIGH, confidence=0.9, score=0.8, factors=["x"])
        assert p.model_version == "XGBoost v2.1.0"


class TestRiskCategory:
    def test_ordering_by_severity(self):
        assert RiskCategory.LOW < RiskCategory.MEDIUM < RiskCategory.HIGH
        assert max([RiskCategory.MEDIUM, RiskCategory.HIGH, RiskCategory.LOW]) == RiskCategory.HIGH
        assert sorted([RiskCategory.HIGH, RiskCategory.LOW, RiskCategory.MEDIUM]) == [
            RiskCategory.LOW, RiskCategory.MEDIUM, RiskCategory.HIGH,
        ]

    def test_values(self):
        assert RiskCategory("High") == RiskCategory.HIGH


class TestDevice:
    def test_latch_defaults_quiet(self, make_device):
        device = make_device()
        assert device.alert_state == AlertLatch.QUIET
        assert device.prediction is None


class TestManualInput:
    def test_valid(self):
        m = ManualInput(name="Hamilton G5", temperature=30, vibration=0.2, error_log_count=3, runtime_hours=1200)
        assert m.temperature == 30.0

    def test_non_numeric_rejected(self):
        with pytest.raises(ValidationError):
            ManualInput(name="Hamilton G5", temperature="hot", vibration=0.2, error_log_count=3, runtime_hours=1)


class TestFleetSummary:
    def test_defaults(self, now):
        s = FleetSummary(timestamp=now)
        assert s.total == 0
        assert s.high_change == 0
