"""
src/data/store.py
─────────────────
In-memory fleet store and tick pipeline.

Provides:
  - FleetStore.run_tick()   : simulate → score → alert → aggregate, all devices
  - FleetStore.get_device() : device lookup by id
  - FleetStore.filter_devices() : inventory search
  - alert log access (dismiss / clear)
  - notifications_since() : rising-edge notifications for popups
  - initialize_store() / get_store() : process-wide instance for the Dash app

Thread safety: every public method holds a re-entrant lock, so a tick and a
UI read never interleave.
"""
from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import UTC, datetime

import numpy as np

from config.devices import DEVICE_CATALOG, DeviceCatalog
from config.settings import settings
from src.analytics.alerting import AlertLog, build_alert, play_alert_sound, update_latch
from src.analytics.fleet import aggregate, average_temperature, stream_statistics
from src.analytics.risk_engine import score_device
from src.data.errors import UnknownDeviceError
from src.data.models import Alert, Device, FleetSummary
from src.data.simulator import create_fleet, make_rng, perturb

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    """One rising edge of a device's alert latch (drives popups)."""
    seq: int
    device_id: int
    timestamp: datetime


@dataclass
class TickResult:
    """Everything one tick hands to the presentation layer."""
    timestamp: datetime
    devices: list[Device]
    new_alerts: list[Alert] = field(default_factory=list)
    notified_device_ids: list[int] = field(default_factory=list)
    summary: FleetSummary | None = None


class FleetStore:

    def __init__(
        self,
        rng: np.random.Generator,
        catalog: DeviceCatalog = DEVICE_CATALOG,
        alert_capacity: int = settings.ALERT_LOG_CAPACITY,
        sound_enabled: bool = settings.SOUND_ENABLED,
        history_points: int = settings.TEMPERATURE_HISTORY_POINTS,
        sample_points: int = settings.STREAM_SAMPLE_POINTS,
    ):
        self._lock = threading.RLock()
        self._rng = rng
        self.catalog = catalog
        self._devices: dict[int, Device] = {d.id: d for d in create_fleet(rng, catalog)}
        self.alerts = AlertLog(capacity=alert_capacity)
        self.sound_enabled = sound_enabled
        self.summary: FleetSummary | None = None
        self.update_count = 0
        # (timestamp, fleet average temperature) per tick
        self.temperature_history: deque[tuple[datetime, float]] = deque(maxlen=history_points)
        # (timestamp, temperature of one randomly sampled device) per tick
        self.stream_samples: deque[tuple[datetime, float]] = deque(maxlen=sample_points)
        # rising-edge notifications, independent of alert log dedup
        self.notifications: deque[Notification] = deque(maxlen=alert_capacity)
        self._notification_seq = 0

    # ── Tick ──────────────────────────────────────────────────────────────────

    def run_tick(self, now: datetime | None = None) -> TickResult:
        now = now or datetime.now(tz=UTC)
        with self._lock:
            devices = self.devices()
            result = TickResult(timestamp=now, devices=devices)

            for device in devices:
                device.telemetry = perturb(device.telemetry, self._rng)
                device.last_update = now

            for device in devices:
                device.prediction = score_device(device)

            for device in devices:
                if update_latch(device, device.prediction):
                    result.notified_device_ids.append(device.id)
                    self._notification_seq += 1
                    self.notifications.append(Notification(self._notification_seq, device.id, now))
                    alert = build_alert(device, now)
                    if self.alerts.add(alert):
                        result.new_alerts.append(alert)
                        logger.info("Alert raised: %s (%s)", alert.message, alert.location)
                    if self.sound_enabled:
                        play_alert_sound()

            self.summary = aggregate((d.prediction for d in devices), self.summary, now)
            result.summary = self.summary

            avg = average_temperature(devices)
            if avg is not None:
                self.temperature_history.append((now, round(avg, 1)))
                sampled = devices[int(self._rng.integers(0, len(devices)))]
                self.stream_samples.append((now, round(sampled.telemetry.temperature, 1)))

            self.update_count += 1
            return result

    # ── Devices ───────────────────────────────────────────────────────────────

    def devices(self) -> list[Device]:
        with self._lock:
            return [self._devices[k] for k in sorted(self._devices)]

    def get_device(self, device_id: int) -> Device:
        with self._lock:
            try:
                return self._devices[device_id]
            except KeyError:
                raise UnknownDeviceError(device_id) from None

    def filter_devices(
        self,
        search: str = "",
        device_type: str | None = None,
        location: str | None = None,
    ) -> list[Device]:
        """Case-insensitive search on model name or type, plus exact type/location filters."""
        term = (search or "").strip().lower()
        result = []
        for device in self.devices():
            if term and term not in device.name.lower() and term not in device.device_type.lower():
                continue
            if device_type and device.device_type != device_type:
                continue
            if location and device.location != location:
                continue
            result.append(device)
        return result

    # ── Alerts ────────────────────────────────────────────────────────────────

    def alert_list(self) -> list[Alert]:
        with self._lock:
            return self.alerts.to_list()

    def dismiss_alert(self, alert_id: str) -> bool:
        with self._lock:
            return self.alerts.dismiss(alert_id)

    def clear_alerts(self) -> None:
        with self._lock:
            self.alerts.clear()
        logger.info("All alerts cleared")

    # ── Notifications ─────────────────────────────────────────────────────────

    @property
    def last_notification_seq(self) -> int:
        with self._lock:
            return self._notification_seq

    def notifications_since(self, seq: int) -> list[Notification]:
        """Rising edges newer than `seq`, oldest first."""
        with self._lock:
            return [n for n in self.notifications if n.seq > seq]

    # ── Streaming stats ───────────────────────────────────────────────────────

    def stream_stats(self) -> dict | None:
        with self._lock:
            return stream_statistics(t for _, t in self.stream_samples)


# ── Process-wide instance ─────────────────────────────────────────────────────

_STORE: FleetStore | None = None
_store_lock = threading.Lock()


def initialize_store(seed: int | None = settings.SIMULATION_SEED, force: bool = False) -> FleetStore:
    """Create the fleet once (idempotent unless `force`)."""
    global _STORE
    with _store_lock:
        if _STORE is None or force:
            _STORE = FleetStore(rng=make_rng(seed))
            logger.info("Generated %d medical devices", len(_STORE.devices()))
        return _STORE


def get_store() -> FleetStore:
    return _STORE if _STORE is not None else initialize_store()
