"""
Replay a recorded sample stream through the tracking engine.

The engine measures duration against its clock, so a replay drives a
ReplayClock that follows the samples' own timestamps: the session starts at
the first fix and ends at the last one.
"""
from typing import Iterable, List, Tuple, Union

from fittrack.tracking.engine import TrackingEngine
from fittrack.tracking.models import ActivityType, LocationSample, TrackingStats


class ReplayClock:
    """Clock that only moves forward, to the latest time it was advanced to (epoch ms)."""

    def __init__(self, now_ms: int = 0) -> None:
        self.now_ms = now_ms

    def advance_to(self, now_ms: int) -> None:
        # Out-of-order fixes never wind the clock back
        self.now_ms = max(self.now_ms, now_ms)

    def __call__(self) -> int:
        return self.now_ms


def replay_samples(
    samples: Iterable[LocationSample],
    activity_type: Union[ActivityType, str] = ActivityType.RUN,
) -> Tuple[TrackingStats, List[LocationSample]]:
    """
    Push a finished sample sequence through a fresh engine.

    Args:
        samples: fixes in the order they should be delivered
        activity_type: used for the calorie rate only

    Returns:
        (final stats, path captured just before stop). An empty input yields
        zeroed stats and an empty path.
    """
    samples = list(samples)
    if not samples:
        return TrackingStats.zero(), []

    clock = ReplayClock(samples[0].timestamp_ms)
    engine = TrackingEngine(clock=clock)
    engine.start()
    for sample in samples:
        clock.advance_to(sample.timestamp_ms)
        engine.add_sample(sample)

    path = engine.get_tracking_data()
    return engine.stop(activity_type), path
