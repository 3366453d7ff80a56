"""
src/analytics/risk_engine.py
────────────────────────────
Rule-based device risk scoring ("XGBoost v2.1.0" is a display label only:
there is no trained model behind it).

Pipeline:
  1. Normalize 8 raw telemetry fields into [0, 1]
  2. Evaluate 8 weighted rules on composite quantities → additive increments
  3. score = min(Σ increments × LEARNING_RATE × RULE_COUNT, 1.0)
  4. Category: score ≥ 0.65 → High, ≥ 0.35 → Medium, else Low
  5. Confidence = clamp(0.8 + (1 − σ(features)) × 0.15, 0.65, 0.95)
  6. Factors: one sentence per feature above its disclosure threshold

The engine is a pure function of (telemetry, device type); all randomness
lives in the simulator.
"""

from __future__ import annotations

import math
from dataclasses import astuple, dataclass
from typing import Any, Callable

import numpy as np
import pandas as pd
from pydantic import ValidationError

from config.devices import (
    ANESTHESIA_MACHINE,
    CT_SCANNER,
    DEFIBRILLATOR,
    DEVICE_CATALOG,
    DIALYSIS_MACHINE,
    PATIENT_VENTILATOR,
    DeviceCatalog,
)
from src.data.errors import ManualInputError
from src.data.models import Device, ManualInput, Prediction, RiskCategory, Telemetry

LEARNING_RATE = 0.1
RULE_COUNT = 8

HIGH_THRESHOLD = 0.65
MEDIUM_THRESHOLD = 0.35

CONFIDENCE_BASE = 0.8
CONFIDENCE_SPREAD = 0.15
CONFIDENCE_MIN = 0.65
CONFIDENCE_MAX = 0.95

NOMINAL_FACTOR = "All parameters within normal ranges"


@dataclass(frozen=True)
class Features:
    """Telemetry mapped into [0, 1]."""
    temp: float
    vibration: float
    error: float
    runtime: float
    age: float
    repair: float
    pressure: float
    current: float

    def values(self) -> tuple[float, ...]:
        return astuple(self)


def _clip01(x: float) -> float:
    return min(max(x, 0.0), 1.0)


def normalize_features(t: Telemetry) -> Features:
    return Features(
        temp=_clip01((t.temperature - 20.0) / 25.0),
        vibration=min(t.vibration / 1.2, 1.0),
        error=min(t.error_log_count / 30.0, 1.0),
        runtime=min(t.runtime_hours / 10_000.0, 1.0),
        age=min(t.device_age_years / 6.0, 1.0),
        repair=min(t.repair_count / 10.0, 1.0),
        pressure=_clip01((t.pressure - 50.0) / 200.0),
        current=min(t.current_draw_amps / 15.0, 1.0),
    )


# ── Rules ─────────────────────────────────────────────────────────────────────

def temp_vibration_rule(f: Features) -> float:
    interaction = f.temp * f.vibration
    if interaction > 0.6:
        return 0.28
    if interaction > 0.3:
        return 0.12
    return 0.0


def operational_stress_rule(f: Features) -> float:
    stress = (f.runtime * f.error * f.age) ** (1.0 / 3.0)
    if stress > 0.7:
        return 0.32
    if stress > 0.4:
        return 0.16
    return 0.0


def maintenance_rule(f: Features) -> float:
    risk = f.repair * (1.0 + f.age)
    if risk > 0.8:
        return 0.25
    if risk > 0.4:
        return 0.10
    return 0.0


def power_rule(f: Features) -> float:
    risk = f.current * (1.0 + 0.5 * f.temp)
    if risk > 0.9:
        return 0.22
    if risk > 0.6:
        return 0.11
    return 0.0


def pressure_integrity_rule(f: Features) -> float:
    if f.pressure > 0.85 and f.vibration > 0.4:
        return 0.26
    if f.pressure > 0.7:
        return 0.08
    return 0.0


# device type → (condition, increment); types not listed use error × 0.15
DEVICE_RULES: dict[str, tuple[Callable[[Features], bool], float]] = {
    PATIENT_VENTILATOR: (lambda f: f.temp > 0.6 or f.error > 0.5, 0.24),
    DIALYSIS_MACHINE: (lambda f: f.pressure > 0.7 and f.runtime > 0.6, 0.21),
    DEFIBRILLATOR: (lambda f: f.current > 0.8 or f.repair > 0.6, 0.26),
    CT_SCANNER: (lambda f: f.current > 0.7 and f.temp > 0.5, 0.23),
    ANESTHESIA_MACHINE: (lambda f: f.error > 0.6 or (f.temp > 0.5 and f.age > 0.7), 0.20),
}


def device_specific_rule(f: Features, device_type: str) -> float:
    rule = DEVICE_RULES.get(device_type)
    if rule is None:
        return f.error * 0.15
    condition, increment = rule
    return increment if condition(f) else 0.0


def environmental_rule(f: Features) -> float:
    factor = math.sqrt(f.temp * f.vibration * f.pressure)
    return 0.19 if factor > 0.6 else 0.0


def aging_rule(f: Features) -> float:
    pattern = f.age * f.runtime * (1.0 + f.repair)
    if pattern > 0.8:
        return 0.27
    if pattern > 0.5:
        return 0.13
    return 0.0


def rule_increments(f: Features, device_type: str) -> list[float]:
    """All 8 rule contributions, in evaluation order."""
    return [
        temp_vibration_rule(f),
        operational_stress_rule(f),
        maintenance_rule(f),
        power_rule(f),
        pressure_integrity_rule(f),
        device_specific_rule(f, device_type),
        environmental_rule(f),
        aging_rule(f),
    ]


# ── Outputs ───────────────────────────────────────────────────────────────────

def combine(increments: list[float]) -> float:
    """Scale the raw sum by the fixed ensemble constant, capped at 1.0."""
    raw = 0.0
    for inc in increments:
        raw += inc
    return min(raw * LEARNING_RATE * RULE_COUNT, 1.0)


def categorize(score: float) -> RiskCategory:
    if score >= HIGH_THRESHOLD:
        return RiskCategory.HIGH
    if score >= MEDIUM_THRESHOLD:
        return RiskCategory.MEDIUM
    return RiskCategory.LOW


def compute_confidence(f: Features) -> float:
    # Population standard deviation over the 8 normalized features
    spread = float(np.std(f.values()))
    confidence = CONFIDENCE_BASE + (1.0 - spread) * CONFIDENCE_SPREAD
    return min(max(confidence, CONFIDENCE_MIN), CONFIDENCE_MAX)


def round_half_up(value: float) -> int:
    """Nearest integer, halves rounded up."""
    return math.floor(value + 0.5)


def risk_factors(t: Telemetry, f: Features) -> list[str]:
    factors: list[str] = []
    if f.temp > 0.7:
        factors.append(f"High temperature ({t.temperature:.1f}°C)")
    if f.vibration > 0.6:
        factors.append(f"Excessive vibration ({t.vibration:.2f})")
    if f.error > 0.5:
        factors.append(f"Frequent errors ({t.error_log_count} logs)")
    if f.runtime > 0.8:
        factors.append(f"Extended runtime ({round_half_up(t.runtime_hours)} hours)")
    if f.age > 0.7:
        factors.append(f"Device aging ({t.device_age_years:.1f} years)")
    if f.repair > 0.6:
        factors.append(f"Multiple repairs ({t.repair_count} repairs)")
    if f.pressure > 0.8:
        factors.append(f"High pressure ({t.pressure:.0f} units)")
    if f.current > 0.7:
        factors.append(f"High power draw ({t.current_draw_amps:.1f}A)")
    if not factors:
        factors.append(NOMINAL_FACTOR)
    return factors


def predict(telemetry: Telemetry, device_type: str) -> Prediction:
    """Score one telemetry snapshot for a device of `device_type`."""
    features = normalize_features(telemetry)
    score = combine(rule_increments(features, device_type))
    return Prediction(
        category=categorize(score),
        confidence=compute_confidence(features),
        score=score,
        factors=risk_factors(telemetry, features),
    )


def score_device(device: Device) -> Prediction:
    return predict(device.telemetry, device.device_type)


def score_fleet(devices: list[Device]) -> pd.DataFrame:
    """Batch analysis: one row per device with its current prediction."""
    rows = []
    for device in devices:
        prediction = score_device(device)
        rows.append({
            "id": device.id,
            "name": device.name,
            "device_type": device.device_type,
            "location": device.location,
            "category": prediction.category.value,
            "confidence": prediction.confidence,
            "score": prediction.score,
            "key_factors": ", ".join(prediction.factors[:2]),
        })
    return pd.DataFrame(rows)


# ── Manual what-if evaluation ─────────────────────────────────────────────────

MANUAL_DEVICE_AGE_YEARS = 2.5


def _validation_message(exc: ValidationError) -> tuple[str, str | None]:
    first = exc.errors()[0]
    field = str(first["loc"][0]) if first.get("loc") else None
    label = field.replace("_", " ") if field else "input"
    return f"Invalid {label}: {first['msg']}", field


def evaluate_manual(
    raw: dict[str, Any],
    rng: np.random.Generator,
    catalog: DeviceCatalog = DEVICE_CATALOG,
) -> Prediction:
    """
    Evaluate an operator-entered telemetry tuple outside the live loop.

    Age is fixed; repairs, pressure and current draw are synthesized from
    `rng`. Raises ManualInputError on malformed values or unknown models.
    """
    try:
        manual = ManualInput.model_validate(raw)
    except ValidationError as exc:
        message, field = _validation_message(exc)
        raise ManualInputError(message, field=field) from exc

    device_type = catalog.type_of(manual.name)
    if device_type is None:
        raise ManualInputError(f"Unknown device model: {manual.name}", field="name")

    telemetry = Telemetry(
        temperature=manual.temperature,
        vibration=manual.vibration,
        error_log_count=manual.error_log_count,
        runtime_hours=manual.runtime_hours,
        device_age_years=MANUAL_DEVICE_AGE_YEARS,
        repair_count=int(rng.integers(0, 5)),
        pressure=float(100.0 + rng.random() * 50.0),
        current_draw_amps=float(4.0 + rng.random() * 4.0),
    )
    return predict(telemetry, device_type)
