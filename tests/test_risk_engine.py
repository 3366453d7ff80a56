"""
tests/test_risk_engine.py
──────────────────────────
Tests for feature normalization, rule evaluation, scoring and manual evaluation.
"""
import numpy as np
import pytest

from config.devices import (
    ANESTHESIA_MACHINE,
    CT_SCANNER,
    DEFIBRILLATOR,
    DEVICE_TYPES,
    DIALYSIS_MACHINE,
    INFUSION_PUMP,
    PATIENT_VENTILATOR,
)
from src.analytics.alerting import should_alert
from src.analytics.risk_engine import (
    NOMINAL_FACTOR,
    Features,
    categorize,
    combine,
    compute_confidence,
    device_specific_rule,
    evaluate_manual,
    normalize_features,
    operational_stress_rule,
    predict,
    round_half_up,
    rule_increments,
    score_fleet,
    temp_vibration_rule,
)
from src.data.errors import ManualInputError
from src.data.models import RiskCategory
from src.data.simulator import create_fleet, initialize_telemetry


def features(**overrides) -> Features:
    base = dict(temp=0.0, vibration=0.0, error=0.0, runtime=0.0,
                age=0.0, repair=0.0, pressure=0.0, current=0.0)
    base.update(overrides)
    return Features(**base)


class TestNormalizeFeatures:
    def test_minimum_telemetry(self, minimum_telemetry):
        f = normalize_features(minimum_telemetry)
        assert f.temp == 0.0       # below 20 °C clips to 0
        assert f.pressure == 0.0
        assert f.current == pytest.approx(1 / 15)

    def test_values_in_unit_interval(self, rng):
        for device_type in DEVICE_TYPES:
            for _ in range(20):
                f = normalize_features(initialize_telemetry(device_type, rng))
                assert all(0.0 <= v <= 1.0 for v in f.values())

    def test_saturation(self, nominal_telemetry):
        t = nominal_telemetry.model_copy(update={"runtime_hours": 50_000.0, "repair_count": 30})
        f = normalize_features(t)
        assert f.runtime == 1.0
        assert f.repair == 1.0


class TestCategorize:
    @pytest.mark.parametrize(
        "score,expected",
        [
            (0.0, RiskCategory.LOW),
            (0.3499, RiskCategory.LOW),
            (0.35, RiskCategory.MEDIUM),
            (0.6499, RiskCategory.MEDIUM),
            (0.65, RiskCategory.HIGH),
            (1.0, RiskCategory.HIGH),
        ],
    )
    def test_boundaries(self, score, expected):
        assert categorize(score) == expected


class TestCombine:
    def test_scaled_sum(self):
        assert combine([0.28]) == pytest.approx(0.224)
        assert combine([0.12, 0.16]) == pytest.approx(0.224)

    def test_capped_at_one(self):
        assert combine([0.32] * 8) == 1.0

    def test_empty(self):
        assert combine([]) == 0.0


class TestRules:
    def test_temp_vibration_tiers(self):
        assert temp_vibration_rule(features(temp=1.0, vibration=0.7)) == 0.28
        assert temp_vibration_rule(features(temp=0.5, vibration=0.7)) == 0.12
        assert temp_vibration_rule(features(temp=0.5, vibration=0.5)) == 0.0

    def test_operational_stress_uses_cube_root(self):
        # (0.5)^(1/3) ≈ 0.794 > 0.7
        assert operational_stress_rule(features(runtime=1.0, error=1.0, age=0.5)) == 0.32
        # (0.125)^(1/3) = 0.5
        assert operational_stress_rule(features(runtime=0.5, error=0.5, age=0.5)) == 0.16
        assert operational_stress_rule(features(runtime=0.2, error=0.2, age=0.2)) == 0.0

    @pytest.mark.parametrize(
        "device_type,triggering,increment",
        [
            (PATIENT_VENTILATOR, dict(temp=0.61), 0.24),
            (PATIENT_VENTILATOR, dict(error=0.51), 0.24),
            (DIALYSIS_MACHINE, dict(pressure=0.71, runtime=0.61), 0.21),
            (DEFIBRILLATOR, dict(current=0.81), 0.26),
            (DEFIBRILLATOR, dict(repair=0.61), 0.26),
            (CT_SCANNER, dict(current=0.71, temp=0.51), 0.23),
            (ANESTHESIA_MACHINE, dict(error=0.61), 0.20),
            (ANESTHESIA_MACHINE, dict(temp=0.51, age=0.71), 0.20),
        ],
    )
    def test_device_specific_fires(self, device_type, triggering, increment):
        assert device_specific_rule(features(**triggering), device_type) == increment
        assert device_specific_rule(features(), device_type) == 0.0

    def test_dialysis_needs_both_conditions(self):
        assert device_specific_rule(features(pressure=0.9), DIALYSIS_MACHINE) == 0.0

    def test_default_device_rule_scales_errors(self):
        assert device_specific_rule(features(error=0.8), INFUSION_PUMP) == pytest.approx(0.12)

    def test_eight_increments(self, nominal_telemetry):
        incs = rule_increments(normalize_features(nominal_telemetry), INFUSION_PUMP)
        assert len(incs) == 8
        assert all(i >= 0 for i in incs)


class TestConfidence:
    def test_uniform_features_capped(self):
        assert compute_confidence(features()) == pytest.approx(0.95)

    def test_spread_lowers_confidence(self):
        f = features(temp=1.0, vibration=1.0, error=1.0, runtime=1.0)
        # population std of four 0s and four 1s is 0.5
        assert compute_confidence(f) == pytest.approx(0.8 + 0.5 * 0.15)


class TestPredict:
    def test_high_risk_scenario(self, hot_telemetry):
        for device_type in (PATIENT_VENTILATOR, INFUSION_PUMP):
            p = predict(hot_telemetry, device_type)
            assert p.category == RiskCategory.HIGH
            assert should_alert(hot_telemetry, p)
            assert p.factors == [
                "High temperature (40.0°C)",
                "Excessive vibration (0.90)",
                "Frequent errors (25 logs)",
            ]

    def test_three_hot_readings_on_nominal_device(self, nominal_telemetry):
        # Temperature, vibration and errors alone reach Medium, not High; the
        # threshold check still raises an alert.
        t = nominal_telemetry.model_copy(update={"temperature": 40.0, "vibration": 0.9, "error_log_count": 25})
        p = predict(t, INFUSION_PUMP)
        assert p.category == RiskCategory.MEDIUM
        assert p.score == pytest.approx(0.452)
        assert should_alert(t, p)

    def test_all_minimum_is_low(self, minimum_telemetry):
        for device_type in DEVICE_TYPES:
            p = predict(minimum_telemetry, device_type)
            assert p.category == RiskCategory.LOW
            assert p.score == 0.0
            assert p.factors == [NOMINAL_FACTOR]
            assert not should_alert(minimum_telemetry, p)

    def test_nominal_is_low(self, nominal_telemetry):
        p = predict(nominal_telemetry, INFUSION_PUMP)
        assert p.category == RiskCategory.LOW
        assert p.factors == [NOMINAL_FACTOR]

    def test_deterministic(self, hot_telemetry):
        assert predict(hot_telemetry, CT_SCANNER) == predict(hot_telemetry, CT_SCANNER)

    def test_output_ranges(self, rng):
        for device_type in DEVICE_TYPES:
            for _ in range(30):
                p = predict(initialize_telemetry(device_type, rng), device_type)
                assert 0.0 <= p.score <= 1.0
                assert 0.65 <= p.confidence <= 0.95
                assert p.factors
                assert p.model_version == "XGBoost v2.1.0"

    def test_runtime_factor_rounds_half_up(self, nominal_telemetry):
        t = nominal_telemetry.model_copy(update={"runtime_hours": 8_500.5})
        assert "Extended runtime (8501 hours)" in predict(t, INFUSION_PUMP).factors

    def test_extended_factor_formats(self, nominal_telemetry):
        t = nominal_telemetry.model_copy(update={
            "runtime_hours": 9_000.4,
            "device_age_years": 5.0,
            "repair_count": 7,
            "pressure": 220.0,
            "current_draw_amps": 12.0,
        })
        factors = predict(t, INFUSION_PUMP).factors
        assert "Extended runtime (9000 hours)" in factors
        assert "Device aging (5.0 years)" in factors
        assert "Multiple repairs (7 repairs)" in factors
        assert "High pressure (220 units)" in factors
        assert "High power draw (12.0A)" in factors


class TestRoundHalfUp:
    @pytest.mark.parametrize("value,expected", [(8_500.5, 8_501), (2.5, 3), (0.5, 1), (2.4, 2), (7.0, 7)])
    def test_halves_round_up(self, value, expected):
        assert round_half_up(value) == expected


class TestScoreFleet:
    def test_one_row_per_device(self, rng):
        df = score_fleet(create_fleet(rng))
        assert len(df) == 24
        assert set(df["category"]) <= {"Low", "Medium", "High"}
        assert df["score"].between(0, 1).all()


class TestEvaluateManual:
    def _raw(self, **overrides):
        raw = {"name": "Hamilton G5", "temperature": 30, "vibration": 0.3,
               "error_log_count": 5, "runtime_hours": 2_000}
        raw.update(overrides)
        return raw

    def test_valid_input(self, rng):
        p = evaluate_manual(self._raw(), rng)
        assert p.category in RiskCategory
        assert 0.65 <= p.confidence <= 0.95

    def test_reproducible_with_same_seed(self):
        a = evaluate_manual(self._raw(), np.random.default_rng(3))
        b = evaluate_manual(self._raw(), np.random.default_rng(3))
        assert a == b

    def test_hot_manual_input_is_high(self, rng):
        p = evaluate_manual(self._raw(temperature=44, vibration=1.1, error_log_count=40, runtime_hours=9_000), rng)
        assert p.category == RiskCategory.HIGH

    def test_unknown_model(self, rng):
        with pytest.raises(ManualInputError) as exc_info:
            evaluate_manual(self._raw(name="Acme 3000"), rng)
        assert exc_info.value.field == "name"
        assert "Acme 3000" in exc_info.value.message

    def test_non_numeric_temperature(self, rng):
        with pytest.raises(ManualInputError) as exc_info:
            evaluate_manual(self._raw(temperature="warm"), rng)
        assert exc_info.value.field == "temperature"

    def test_out_of_range(self, rng):
        with pytest.raises(ManualInputError):
            evaluate_manual(self._raw(vibration=2.5), rng)

    def test_is_value_error(self, rng):
        with pytest.raises(ValueError):
            evaluate_manual(self._raw(error_log_count=-1), rng)
