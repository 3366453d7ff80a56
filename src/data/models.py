"""
src/data/models.py
──────────────────
Pydantic v2 data models for device telemetry, risk predictions, alerts,
fleet summaries and export snapshots.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class RiskCategory(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def rank(self) -> int:
        return _CATEGORY_RANK[self]

    # Ordered by severity, not alphabetically
    def __lt__(self, other):  # type: ignore[override]
        if not isinstance(other, RiskCategory):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):  # type: ignore[override]
        if not isinstance(other, RiskCategory):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):  # type: ignore[override]
        if not isinstance(other, RiskCategory):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):  # type: ignore[override]
        if not isinstance(other, RiskCategory):
            return NotImplemented
        return self.rank >= other.rank


_CATEGORY_RANK = {RiskCategory.LOW: 0, RiskCategory.MEDIUM: 1, RiskCategory.HIGH: 2}


class AlertLatch(str, Enum):
    """Per-device edge-trigger state for the alerting rule."""
    QUIET = "quiet"
    ALERTED = "alerted"


class Telemetry(BaseModel):
    temperature: float = Field(ge=15.0, le=45.0)
    vibration: float = Field(ge=0.0, le=1.2)
    error_log_count: int = Field(ge=0, le=50)
    runtime_hours: float = Field(ge=0.0)
    device_age_years: float = Field(ge=0.0)
    repair_count: int = Field(ge=0)
    pressure: float = Field(ge=50.0, le=250.0)
    current_draw_amps: float = Field(ge=1.0, le=15.0)


class Prediction(BaseModel):
    category: RiskCategory
    confidence: float = Field(ge=0.65, le=0.95)
    score: float = Field(ge=0.0, le=1.0)
    factors: list[str] = Field(min_length=1)
    model_version: str = "XGBoost v2.1.0"


class Device(BaseModel):
    id: int
    name: str
    device_type: str
    location: str
    telemetry: Telemetry
    alert_state: AlertLatch = AlertLatch.QUIET
    last_update: datetime
    prediction: Prediction | None = None


class Alert(BaseModel):
    id: str
    timestamp: datetime
    severity: str
    title: str
    message: str
    location: str
    device_id: int | None = None


class FleetSummary(BaseModel):
    timestamp: datetime
    total: int = 0
    low_count: int = 0
    medium_count: int = 0
    high_count: int = 0
    low_change: int = 0
    medium_change: int = 0
    high_change: int = 0


class ManualInput(BaseModel):
    """Ad-hoc what-if telemetry entered by an operator."""
    name: str = Field(min_length=1)
    temperature: float = Field(ge=15.0, le=45.0)
    vibration: float = Field(ge=0.0, le=1.2)
    error_log_count: int = Field(ge=0, le=50)
    runtime_hours: float = Field(ge=0.0, le=100_000.0)


class StreamConfig(BaseModel):
    is_streaming: bool
    update_interval_ms: int
    update_count: int


class SystemInfo(BaseModel):
    total_devices: int
    active_alerts: int
    critical_alerts: int


class ExportSnapshot(BaseModel):
    timestamp: datetime
    devices: list[Device]
    alerts: list[Alert]
    stream_config: StreamConfig
    fleet_summary: FleetSummary | None = None
    system_info: SystemInfo
