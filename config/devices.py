"""
config/devices.py
─────────────────
Device catalog, facility locations and declared telemetry ranges.

Catalog: 24 device models across 8 device categories. The name → type
mapping is built once at import time and exposed read-only through
`DEVICE_CATALOG`; components receive the catalog object rather than
reaching for module globals.

Telemetry ranges are the hard clamping bounds applied by the simulator
after every mutation.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class TelemetryRange:
    """Inclusive clamping bounds for one telemetry field."""
    low: float
    high: float

    def clamp(self, value: float) -> float:
        return min(max(value, self.low), self.high)

    def contains(self, value: float) -> bool:
        return self.low <= value <= self.high


@dataclass(frozen=True)
class DeviceCatalog:
    models: Mapping[str, str]   # model name → device type
    locations: tuple[str, ...]
    device_types: tuple[str, ...] = field(default=())

    def type_of(self, name: str) -> str | None:
        return self.models.get(name)

    def names(self) -> list[str]:
        return list(self.models.keys())

    def __len__(self) -> int:
        return len(self.models)


# ── Device types ──────────────────────────────────────────────────────────────
INFUSION_PUMP = "Infusion Pump"
DIALYSIS_MACHINE = "Dialysis Machine"
ANESTHESIA_MACHINE = "Anesthesia Machine"
PATIENT_VENTILATOR = "Patient Ventilator"
DEFIBRILLATOR = "Defibrillator"
ULTRASOUND_MACHINE = "Ultrasound Machine"
CT_SCANNER = "CT Scanner"
ECG_MONITOR = "ECG Monitor"

DEVICE_TYPES: tuple[str, ...] = (
    ANESTHESIA_MACHINE,
    CT_SCANNER,
    DEFIBRILLATOR,
    DIALYSIS_MACHINE,
    ECG_MONITOR,
    INFUSION_PUMP,
    PATIENT_VENTILATOR,
    ULTRASOUND_MACHINE,
)

# ── Model catalog (order defines device ids 1..24) ────────────────────────────
_DEVICE_MODELS: dict[str, str] = {
    "Alaris GH": INFUSION_PUMP,
    "Baxter Flo-Gard": INFUSION_PUMP,
    "Smiths Medfusion": INFUSION_PUMP,
    "Baxter AK 96": DIALYSIS_MACHINE,
    "Fresenius 4008": DIALYSIS_MACHINE,
    "NxStage System One": DIALYSIS_MACHINE,
    "Datex Ohmeda S5": ANESTHESIA_MACHINE,
    "Drager Fabius Trio": ANESTHESIA_MACHINE,
    "GE Aisys": ANESTHESIA_MACHINE,
    "Drager V500": PATIENT_VENTILATOR,
    "Hamilton G5": PATIENT_VENTILATOR,
    "Puritan Bennett 980": PATIENT_VENTILATOR,
    "HeartStart FRx": DEFIBRILLATOR,
    "Lifepak 20": DEFIBRILLATOR,
    "Philips HeartStart": DEFIBRILLATOR,
    "Zoll R Series": DEFIBRILLATOR,
    "GE Logiq E9": ULTRASOUND_MACHINE,
    "Philips EPIQ": ULTRASOUND_MACHINE,
    "Siemens Acuson": ULTRASOUND_MACHINE,
    "Siemens S2000": ULTRASOUND_MACHINE,
    "GE Revolution": CT_SCANNER,
    "Philips Ingenuity": CT_SCANNER,
    "GE MAC 2000": ECG_MONITOR,
    "Philips PageWriter": ECG_MONITOR,
}

LOCATIONS: tuple[str, ...] = (
    "Hospital A - ICU",
    "Hospital A - Emergency",
    "Hospital B - Nephrology",
    "Hospital B - Cardiology",
    "Hospital C - Surgery",
)

DEVICE_CATALOG = DeviceCatalog(
    models=MappingProxyType(dict(_DEVICE_MODELS)),
    locations=LOCATIONS,
    device_types=DEVICE_TYPES,
)

# ── Declared telemetry ranges ─────────────────────────────────────────────────
TELEMETRY_RANGES: Mapping[str, TelemetryRange] = MappingProxyType({
    "temperature": TelemetryRange(15.0, 45.0),       # °C
    "vibration": TelemetryRange(0.0, 1.2),
    "error_log_count": TelemetryRange(0, 50),
    "pressure": TelemetryRange(50.0, 250.0),
    "current_draw_amps": TelemetryRange(1.0, 15.0),  # A
})

# ── Initial-state profiles: field → (offset, span) for offset + U(0,1)·span ──
BASE_PROFILE: Mapping[str, tuple[float, float]] = MappingProxyType({
    "temperature": (20.0, 25.0),
    "vibration": (0.0, 1.2),
    "error_log_count": (0.0, 30.0),
    "runtime_hours": (1_000.0, 8_000.0),
    "device_age_years": (0.5, 5.0),
    "repair_count": (0.0, 8.0),
    "pressure": (80.0, 100.0),
    "current_draw_amps": (3.0, 8.0),
})

TYPE_PROFILES: Mapping[str, Mapping[str, tuple[float, float]]] = MappingProxyType({
    PATIENT_VENTILATOR: MappingProxyType({
        "pressure": (100.0, 50.0),
    }),
    DIALYSIS_MACHINE: MappingProxyType({
        "pressure": (120.0, 80.0),
        "current_draw_amps": (6.0, 5.0),
    }),
    CT_SCANNER: MappingProxyType({
        "current_draw_amps": (8.0, 7.0),
        "temperature": (25.0, 15.0),
    }),
    DEFIBRILLATOR: MappingProxyType({
        "current_draw_amps": (2.0, 12.0),
        "vibration": (0.0, 0.4),
    }),
})

# Ventilators run cooler: initial temperature is capped rather than re-drawn
VENTILATOR_MAX_TEMPERATURE = 35.0

# ── Per-tick perturbation ─────────────────────────────────────────────────────
# Symmetric fields move by (U(0,1) - 0.5) · 2 · half_width
PERTURB_HALF_WIDTH: Mapping[str, float] = MappingProxyType({
    "temperature": 1.0,
    "vibration": 0.05,
    "pressure": 2.5,
    "current_draw_amps": 0.25,
})
ERROR_LOG_MAX_INCREMENT = 2
RUNTIME_INCREMENT_HOURS = 0.5
