"""Tests for replaying a recorded sample stream through the engine."""
import pytest

from fittrack.tracking.models import ActivityType, LocationSample, TrackingStats
from fittrack.tracking.replay import ReplayClock, replay_samples

T0 = 1_700_000_000_000  # arbitrary epoch ms


def _pt(lat: float, lon: float, t_ms: int, **kwargs) -> LocationSample:
    return LocationSample(latitude=lat, longitude=lon, timestamp_ms=t_ms, **kwargs)


class TestReplayClock:
    def test_reports_current_time(self):
        clock = ReplayClock(1000)
        assert clock() == 1000

    def test_advances(self):
        clock = ReplayClock(1000)
        clock.advance_to(5000)
        assert clock() == 5000

    def test_never_moves_backwards(self):
        clock = ReplayClock(5000)
        clock.advance_to(3000)
        assert clock() == 5000


class TestReplaySamples:
    def test_empty_stream_gives_zeroed_stats(self):
        stats, path = replay_samples([])
        assert stats == TrackingStats.zero()
        assert path == []

    def test_duration_spans_first_to_last_sample(self):
        samples = [_pt(0, 0, T0), _pt(0, 0.01, T0 + 60_000)]
        stats, _ = replay_samples(samples, ActivityType.RUN)
        assert stats.duration_sec == 60
        assert stats.distance_km == pytest.approx(1.11, abs=0.01)
        assert stats.calories_kcal == 67

    def test_path_returned_in_order(self):
        samples = [_pt(0, 0, T0), _pt(0, 0.001, T0 + 1000), _pt(0, 0.002, T0 + 2000)]
        _, path = replay_samples(samples)
        assert path == samples

    def test_accepts_generator(self):
        stats, path = replay_samples(_pt(0, i * 0.001, T0 + i * 1000) for i in range(5))
        assert len(path) == 5
        assert stats.duration_sec == 4

    def test_activity_type_sets_calorie_rate(self):
        samples = [_pt(0, 0, T0), _pt(0, 0.09, T0 + 1_800_000)]  # ≈10.01 km
        run, _ = replay_samples(samples, "run")
        bike, _ = replay_samples(samples, "bike")
        assert run.calories_kcal == 2 * bike.calories_kcal

    def test_out_of_order_timestamp_does_not_shrink_duration(self):
        samples = [_pt(0, 0, T0), _pt(0, 0.01, T0 + 10_000), _pt(0, 0.02, T0 + 5_000)]
        stats, _ = replay_samples(samples)
        assert stats.duration_sec == 10

    def test_max_speed_from_samples(self):
        samples = [_pt(0, 0, T0, speed_ms=3.0), _pt(0, 0.01, T0 + 60_000, speed_ms=4.5)]
        stats, _ = replay_samples(samples)
        assert stats.max_speed_kmh == pytest.approx(16.2)
