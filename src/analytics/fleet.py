"""
src/analytics/fleet.py
──────────────────────
Fleet-level aggregation of per-device predictions.

aggregate() partitions predictions by risk category and reports the change
in each count since the previous aggregation (for "since last tick" badges).
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from datetime import UTC, datetime

from src.data.models import Device, FleetSummary, Prediction, RiskCategory


def aggregate(
    predictions: Iterable[Prediction],
    previous: FleetSummary | None = None,
    now: datetime | None = None,
) -> FleetSummary:
    """Count predictions per category; deltas are 0 when there is no previous summary."""
    counts: Counter[RiskCategory] = Counter(p.category for p in predictions)
    low = counts[RiskCategory.LOW]
    medium = counts[RiskCategory.MEDIUM]
    high = counts[RiskCategory.HIGH]

    base = previous or FleetSummary(
        timestamp=now or datetime.now(tz=UTC),
        low_count=low,
        medium_count=medium,
        high_count=high,
    )

    return FleetSummary(
        timestamp=now or datetime.now(tz=UTC),
        total=low + medium + high,
        low_count=low,
        medium_count=medium,
        high_count=high,
        low_change=low - base.low_count,
        medium_change=medium - base.medium_count,
        high_change=high - base.high_count,
    )


def average_temperature(devices: list[Device]) -> float | None:
    if not devices:
        return None
    return sum(d.telemetry.temperature for d in devices) / len(devices)


def stream_statistics(samples: Iterable[float]) -> dict | None:
    """Summary of the sampled live-temperature stream, None when empty."""
    values = list(samples)
    if not values:
        return None
    return {
        "data_points": len(values),
        "avg": round(sum(values) / len(values), 1),
        "max": round(max(values), 1),
        "min": round(min(values), 1),
    }
