"""
Live activity-tracking engine.

A location source pushes LocationSample values in one at a time via
add_sample(); a display loop polls get_current_stats(); stop() hands back the
final TrackingStats and drops the session.

State machine:
  Idle   --start()-------> Active
  Active --add_sample()--> Active   (distance accumulated)
  Active --stop()--------> Idle     (final stats returned, session discarded)

Tolerated calls, not errors:
  add_sample() while Idle  → ignored (late callbacks after a stop)
  stop() while Idle        → zeroed stats (callers stop defensively)
  start() while Active     → AlreadyTrackingError, current session untouched

Every sample is trusted as-is: no accuracy filter, no minimum distance or time
gate, no reordering by timestamp. Distance is summed pairwise in call order.

The engine is synchronous and not thread-safe. Hosts serialize access
(single writer, any number of readers within one thread or event-loop tick).
"""
import logging
import math
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

from fittrack.tracking.geo import haversine_km
from fittrack.tracking.models import (
    ActivityType,
    LocationSample,
    TrackingStats,
    calorie_rate_for,
)

logger = logging.getLogger(__name__)

_MS_TO_KMH = 3.6


# ── Exceptions ────────────────────────────────────────────────────────────────

class AlreadyTrackingError(RuntimeError):
    """Raised when start() is called while a session is already active."""


# ── Session state ─────────────────────────────────────────────────────────────

@dataclass
class TrackingSession:
    """Mutable state of one workout, owned exclusively by the engine."""

    started_at_ms: int
    samples: List[LocationSample] = field(default_factory=list)
    last_sample: Optional[LocationSample] = None
    distance_km: float = 0.0


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ── Engine ────────────────────────────────────────────────────────────────────

class TrackingEngine:
    """
    Owns at most one TrackingSession at a time.

    Usage:
        engine = TrackingEngine()
        engine.start()
        engine.add_sample(LocationSample(latitude=..., longitude=..., timestamp_ms=...))
        live = engine.get_current_stats("run")
        path = engine.get_tracking_data()   # grab before stop() if you need it
        final = engine.stop("run")

    Args:
        clock: zero-argument callable returning epoch milliseconds. Defaults to
               the wall clock; tests and replays inject their own.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None) -> None:
        self._clock = clock or _wall_clock_ms
        self._session: Optional[TrackingSession] = None

    @property
    def is_tracking(self) -> bool:
        return self._session is not None

    @property
    def total_distance_km(self) -> float:
        return self._session.distance_km if self._session else 0.0

    def start(self) -> None:
        """Begin a new session. Raises AlreadyTrackingError if one is active."""
        if self._session is not None:
            raise AlreadyTrackingError("A tracking session is already active")
        self._session = TrackingSession(started_at_ms=self._clock())
        logger.debug("Tracking started at %d", self._session.started_at_ms)

    def add_sample(self, sample: LocationSample) -> None:
        """Append a sample and accumulate distance from the previous one."""
        session = self._session
        if session is None:
            return

        session.samples.append(sample)
        if session.last_sample is not None:
            session.distance_km += haversine_km(
                session.last_sample.latitude,
                session.last_sample.longitude,
                sample.latitude,
                sample.longitude,
            )
        # Replaced even when the fix did not move
        session.last_sample = sample

    def get_current_stats(
        self, activity_type: Union[ActivityType, str] = ActivityType.RUN
    ) -> TrackingStats:
        """Snapshot of the active session, or zeroed stats when idle."""
        if self._session is None:
            return TrackingStats.zero()
        return self._compute_stats(self._session, activity_type)

    def stop(self, activity_type: Union[ActivityType, str] = ActivityType.RUN) -> TrackingStats:
        """
        Finalize the session and return its stats.

        The session (path included) is discarded; call get_tracking_data()
        first if the path is needed.
        """
        session = self._session
        if session is None:
            return TrackingStats.zero()

        stats = self._compute_stats(session, activity_type)
        self._session = None
        logger.debug(
            "Tracking stopped: %.3f km in %ds over %d samples",
            stats.distance_km,
            stats.duration_sec,
            len(session.samples),
        )
        return stats

    def get_tracking_data(self) -> List[LocationSample]:
        """Copy of the current session's ordered sample history."""
        if self._session is None:
            return []
        return list(self._session.samples)

    def _compute_stats(
        self, session: TrackingSession, activity_type: Union[ActivityType, str]
    ) -> TrackingStats:
        elapsed_ms = max(0, self._clock() - session.started_at_ms)
        duration_sec = elapsed_ms // 1000
        distance_km = session.distance_km

        # Zero distance or zero elapsed time must yield 0, never NaN/inf
        if distance_km > 0 and duration_sec > 0:
            pace = (duration_sec / 60) / distance_km
            avg_speed = distance_km / (duration_sec / 3600)
        else:
            pace = 0.0
            avg_speed = 0.0

        speeds = [s.speed_ms for s in session.samples if s.speed_ms is not None and s.speed_ms > 0]
        max_speed = max(speeds) * _MS_TO_KMH if speeds else 0.0

        return TrackingStats(
            distance_km=distance_km,
            duration_sec=duration_sec,
            pace_min_per_km=pace,
            calories_kcal=_round_half_up(distance_km * calorie_rate_for(activity_type)),
            avg_speed_kmh=avg_speed,
            max_speed_kmh=max_speed,
        )
