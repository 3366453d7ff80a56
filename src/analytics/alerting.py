"""
src/analytics/alerting.py
─────────────────────────
Edge-triggered "needs immediate attention" rule and the rolling alert log.

Per-device latch (AlertLatch):
  QUIET   → ALERTED  when should_alert() becomes true   → one notification
  ALERTED → QUIET    when should_alert() becomes false  → silent, re-arms
No notification is re-fired while the condition stays true.
"""
from __future__ import annotations

import logging
import sys
import uuid
from collections.abc import Callable, Iterator
from datetime import UTC, datetime

from config.alerts import (
    ALERT_ERROR_LOGS,
    ALERT_TEMPERATURE_C,
    ALERT_VIBRATION,
    CRITICAL_ALERT_MESSAGE,
    CRITICAL_ALERT_TITLE,
    AlertSeverity,
)
from config.settings import settings
from src.data.models import Alert, AlertLatch, Device, Prediction, RiskCategory, Telemetry

logger = logging.getLogger(__name__)


def should_alert(telemetry: Telemetry, prediction: Prediction) -> bool:
    return (
        prediction.category == RiskCategory.HIGH
        or telemetry.temperature > ALERT_TEMPERATURE_C
        or telemetry.vibration > ALERT_VIBRATION
        or telemetry.error_log_count > ALERT_ERROR_LOGS
    )


def update_latch(device: Device, prediction: Prediction) -> bool:
    """
    Advance the device's alert latch. Returns True only on the rising edge
    (the tick where a notification must be sent).
    """
    active = should_alert(device.telemetry, prediction)

    if active and device.alert_state == AlertLatch.QUIET:
        device.alert_state = AlertLatch.ALERTED
        return True
    if not active and device.alert_state == AlertLatch.ALERTED:
        device.alert_state = AlertLatch.QUIET
    return False


def build_alert(device: Device, now: datetime | None = None) -> Alert:
    return Alert(
        id=str(uuid.uuid4()),
        timestamp=now or datetime.now(tz=UTC),
        severity=AlertSeverity.CRITICAL.value,
        title=CRITICAL_ALERT_TITLE,
        message=CRITICAL_ALERT_MESSAGE.format(name=device.name),
        location=device.location,
        device_id=device.id,
    )


class AlertLog:
    """
    Bounded newest-first alert log.

    An alert whose (title, message) matches an entry still in the log is
    dropped; once that entry is dismissed or evicted the pair may be logged
    again.
    """

    def __init__(self, capacity: int = settings.ALERT_LOG_CAPACITY):
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._alerts: list[Alert] = []

    def add(self, alert: Alert) -> bool:
        """Insert `alert`; returns False if it duplicated an active entry."""
        key = (alert.title, alert.message)
        if any((a.title, a.message) == key for a in self._alerts):
            return False
        self._alerts.insert(0, alert)
        del self._alerts[self.capacity:]
        return True

    def dismiss(self, alert_id: str) -> bool:
        before = len(self._alerts)
        self._alerts = [a for a in self._alerts if a.id != alert_id]
        return len(self._alerts) < before

    def clear(self) -> None:
        self._alerts = []

    @property
    def active_count(self) -> int:
        return len(self._alerts)

    @property
    def critical_count(self) -> int:
        return sum(1 for a in self._alerts if a.severity == AlertSeverity.CRITICAL.value)

    def to_list(self) -> list[Alert]:
        return list(self._alerts)

    def __iter__(self) -> Iterator[Alert]:
        return iter(list(self._alerts))

    def __len__(self) -> int:
        return len(self._alerts)


# ── Audible cue ───────────────────────────────────────────────────────────────

def _terminal_bell() -> None:
    if not sys.stdout or not sys.stdout.isatty():
        raise OSError("no terminal available for audio alert")
    sys.stdout.write("\a")
    sys.stdout.flush()


def play_alert_sound(player: Callable[[], None] | None = None) -> bool:
    """Play an alert cue. Failures are logged and never propagate."""
    try:
        (player or _terminal_bell)()
    except Exception as exc:
        logger.warning("Audio alert not available: %s", exc)
        return False
    return True
