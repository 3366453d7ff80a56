"""
src/data/simulator.py
─────────────────────
Synthetic telemetry generator for the medical device fleet.

Generates:
  - A plausible starting state per device, adjusted by device type
  - Small random-walk perturbations on every tick

Design:
  - All randomness comes from an injected numpy Generator (seedable), so
    scenarios are reproducible in tests and demos
  - Not a physical model: only bounded, plausible next-states
  - Every bounded field is clamped to its declared range after each call
"""
from __future__ import annotations

from datetime import UTC, datetime

import numpy as np
import pandas as pd

from config.devices import (
    BASE_PROFILE,
    DEVICE_CATALOG,
    ERROR_LOG_MAX_INCREMENT,
    PATIENT_VENTILATOR,
    PERTURB_HALF_WIDTH,
    RUNTIME_INCREMENT_HOURS,
    TELEMETRY_RANGES,
    TYPE_PROFILES,
    VENTILATOR_MAX_TEMPERATURE,
    DeviceCatalog,
)
from config.settings import settings
from src.data.models import AlertLatch, Device, Telemetry

_INTEGER_FIELDS = ("error_log_count", "repair_count")


def make_rng(seed: int | None = settings.SIMULATION_SEED) -> np.random.Generator:
    """Build the simulation's random source. A negative or None seed is unseeded."""
    if seed is None or seed < 0:
        return np.random.default_rng()
    return np.random.default_rng(seed)


def clamp_telemetry(values: dict) -> dict:
    """Clamp every bounded field to its declared range (returns a new dict)."""
    clamped = dict(values)
    for name, bounds in TELEMETRY_RANGES.items():
        if name in clamped:
            clamped[name] = bounds.clamp(clamped[name])
    for name in _INTEGER_FIELDS:
        if name in clamped:
            clamped[name] = int(clamped[name])
    return clamped


def _draw(profile: tuple[float, float], rng: np.random.Generator) -> float:
    offset, span = profile
    return float(offset + rng.random() * span)


def initialize_telemetry(device_type: str, rng: np.random.Generator) -> Telemetry:
    """
    Draw a plausible starting state for a device of `device_type`.

    Base ranges apply to every type; ventilators, dialysis machines,
    CT scanners and defibrillators override some of them.
    """
    values = {name: _draw(profile, rng) for name, profile in BASE_PROFILE.items()}
    values["error_log_count"] = int(np.floor(values["error_log_count"]))
    values["repair_count"] = int(np.floor(values["repair_count"]))

    if device_type == PATIENT_VENTILATOR:
        values["temperature"] = min(values["temperature"], VENTILATOR_MAX_TEMPERATURE)

    for name, profile in TYPE_PROFILES.get(device_type, {}).items():
        values[name] = _draw(profile, rng)

    return Telemetry(**clamp_telemetry(values))


def perturb(telemetry: Telemetry, rng: np.random.Generator) -> Telemetry:
    """
    Apply one tick of independent random deltas and clamp.

    Age and repair count never change after creation; runtime always
    advances by half an hour.
    """
    values = telemetry.model_dump()

    for name, half_width in PERTURB_HALF_WIDTH.items():
        values[name] += (rng.random() - 0.5) * 2.0 * half_width

    values["error_log_count"] += int(rng.integers(0, ERROR_LOG_MAX_INCREMENT + 1))
    values["runtime_hours"] += RUNTIME_INCREMENT_HOURS

    return Telemetry(**clamp_telemetry(values))


def create_fleet(
    rng: np.random.Generator,
    catalog: DeviceCatalog = DEVICE_CATALOG,
    now: datetime | None = None,
) -> list[Device]:
    """One device per catalog model, ids 1..N in catalog order."""
    now = now or datetime.now(tz=UTC)
    devices: list[Device] = []

    for index, (name, device_type) in enumerate(catalog.models.items(), start=1):
        location = catalog.locations[int(rng.integers(0, len(catalog.locations)))]
        devices.append(Device(
            id=index,
            name=name,
            device_type=device_type,
            location=location,
            telemetry=initialize_telemetry(device_type, rng),
            alert_state=AlertLatch.QUIET,
            last_update=now,
        ))

    return devices


def to_dataframe(devices: list[Device]) -> pd.DataFrame:
    """Flatten devices (identity + telemetry + latest prediction) into a DataFrame."""
    rows = []
    for device in devices:
        row = {
            "id": device.id,
            "name": device.name,
            "device_type": device.device_type,
            "location": device.location,
            **device.telemetry.model_dump(),
            "last_update": device.last_update,
            "category": device.prediction.category.value if device.prediction else None,
            "confidence": device.prediction.confidence if device.prediction else None,
            "score": device.prediction.score if device.prediction else None,
        }
        rows.append(row)
    return pd.DataFrame(rows)
