"""
tests/test_fleet.py
────────────────────
Tests for fleet aggregation and stream statistics.
"""
from src.analytics.fleet import aggregate, average_temperature, stream_statistics
from src.data.models import Prediction, RiskCategory


def predictions(low: int, medium: int, high: int) -> list[Prediction]:
    out = []
    for category, n, score in ((RiskCategory.LOW, low, 0.1), (RiskCategory.MEDIUM, medium, 0.5),
                               (RiskCategory.HIGH, high, 0.9)):
        out += [Prediction(category=category, confidence=0.9, score=score, factors=["f"])] * n
    return out


class TestAggregate:
    def test_counts(self, now):
        s = aggregate(predictions(10, 9, 5), now=now)
        assert (s.low_count, s.medium_count, s.high_count, s.total) == (10, 9, 5, 24)
        assert s.timestamp == now

    def test_first_aggregation_has_no_change(self, now):
        s = aggregate(predictions(10, 9, 5), now=now)
        assert (s.low_change, s.medium_change, s.high_change) == (0, 0, 0)

    def test_changes_since_previous(self, now):
        previous = aggregate(predictions(10, 9, 5), now=now)
        s = aggregate(predictions(8, 9, 7), previous, now)
        assert (s.low_change, s.medium_change, s.high_change) == (-2, 0, 2)
        assert s.total == 24

    def test_empty(self, now):
        s = aggregate([], now=now)
        assert s.total == 0

    def test_accepts_generator(self, now):
        s = aggregate((p for p in predictions(1, 1, 1)), now=now)
        assert s.total == 3


class TestAverageTemperature:
    def test_mean(self, make_device, nominal_telemetry):
        hot = nominal_telemetry.model_copy(update={"temperature": 38.0})
        devices = [make_device(nominal_telemetry), make_device(hot, device_id=2)]
        assert average_temperature(devices) == 33.0

    def test_empty(self):
        assert average_temperature([]) is None


class TestStreamStatistics:
    def test_summary(self):
        stats = stream_statistics([30.0, 31.26, 29.5])
        assert stats == {"data_points": 3, "avg": 30.3, "max": 31.3, "min": 29.5}

    def test_empty(self):
        assert stream_statistics([]) is None
