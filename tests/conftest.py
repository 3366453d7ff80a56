"""
tests/conftest.py
─────────────────
Shared pytest fixtures for the device risk monitor test suite.
"""
import os
import pytest
import numpy as np
from datetime import datetime, timezone

# Deterministic, silent configuration for tests
os.environ.setdefault("SIMULATION_SEED", "42")
os.environ.setdefault("SOUND_ENABLED", "false")
os.environ.setdefault("AUTOSTART_STREAM", "false")


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def nominal_telemetry():
    from src.data.models import Telemetry
    return Telemetry(
        temperature=28.0,
        vibration=0.3,
        error_log_count=4,
        runtime_hours=3_000.0,
        device_age_years=2.0,
        repair_count=1,
        pressure=120.0,
        current_draw_amps=5.0,
    )


@pytest.fixture
def minimum_telemetry():
    """Every field at the bottom of its range."""
    from src.data.models import Telemetry
    return Telemetry(
        temperature=15.0,
        vibration=0.0,
        error_log_count=0,
        runtime_hours=0.0,
        device_age_years=0.0,
        repair_count=0,
        pressure=50.0,
        current_draw_amps=1.0,
    )


@pytest.fixture
def hot_telemetry():
    """Overheating, vibrating, error-prone device."""
    from src.data.models import Telemetry
    return Telemetry(
        temperature=40.0,
        vibration=0.9,
        error_log_count=25,
        runtime_hours=7_000.0,
        device_age_years=4.0,
        repair_count=4,
        pressure=150.0,
        current_draw_amps=7.5,
    )


@pytest.fixture
def make_device(now, nominal_telemetry):
    from src.data.models import Device

    def _make(telemetry=None, device_type="Infusion Pump", name="Alaris GH", device_id=1):
        return Device(
            id=device_id,
            name=name,
            device_type=device_type,
            location="Hospital A - ICU",
            telemetry=telemetry or nominal_telemetry,
            last_update=now,
        )

    return _make
