"""
src/data/export.py
──────────────────
Timestamped JSON snapshot of the live system: devices, alerts, stream
configuration and fleet summary.
"""
from __future__ import annotations

import logging
from datetime import UTC, datetime

from src.data.models import ExportSnapshot, StreamConfig, SystemInfo
from src.data.store import FleetStore
from src.data.streaming import LiveStream

logger = logging.getLogger(__name__)


def build_snapshot(
    store: FleetStore,
    stream: LiveStream | None = None,
    now: datetime | None = None,
) -> ExportSnapshot:
    devices = [d.model_copy(deep=True) for d in store.devices()]
    alerts = store.alert_list()

    if stream is not None:
        config = StreamConfig(
            is_streaming=stream.is_running,
            update_interval_ms=stream.interval_ms,
            update_count=stream.update_count,
        )
    else:
        config = StreamConfig(is_streaming=False, update_interval_ms=0, update_count=store.update_count)

    return ExportSnapshot(
        timestamp=now or datetime.now(tz=UTC),
        devices=devices,
        alerts=alerts,
        stream_config=config,
        fleet_summary=store.summary,
        system_info=SystemInfo(
            total_devices=len(devices),
            active_alerts=store.alerts.active_count,
            critical_alerts=store.alerts.critical_count,
        ),
    )


def export_json(snapshot: ExportSnapshot) -> str:
    return snapshot.model_dump_json(indent=2)


def export_filename(now: datetime | None = None) -> str:
    now = now or datetime.now(tz=UTC)
    return f"medical-devices-live-export-{now.date().isoformat()}.json"
