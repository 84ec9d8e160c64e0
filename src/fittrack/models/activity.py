"""Activity data models: finished workouts and their recorded GPS path."""
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Union

from sqlmodel import Field, Relationship, SQLModel

from fittrack.tracking.models import ActivityType, LocationSample, TrackingStats


class Activity(SQLModel, table=True):
    """One row per finished tracking session."""

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(default=1, index=True)
    activity_type: str  # "run", "bike", "walk"
    recorded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), index=True)  # UTC, tz-aware

    distance_km: float
    duration_sec: int
    pace_min_per_km: float = 0.0
    calories_kcal: int = 0
    avg_speed_kmh: float = 0.0
    max_speed_kmh: float = 0.0

    # Relationship
    path: List["ActivityPathPoint"] = Relationship(back_populates="activity")


class ActivityPathPoint(SQLModel, table=True):
    """
    One row per accepted sample, in the order the engine received it.
    Only the fields needed to redraw the route are kept.
    """

    id: Optional[int] = Field(default=None, primary_key=True)
    activity_id: int = Field(foreign_key="activity.id", index=True)

    seq: int  # position in the received sample stream
    latitude: float
    longitude: float
    timestamp_ms: int

    # Relationship
    activity: Optional[Activity] = Relationship(back_populates="path")


def build_activity(
    stats: TrackingStats,
    path: Sequence[LocationSample],
    activity_type: Union[ActivityType, str],
    user_id: int = 1,
    recorded_at: Optional[datetime] = None,
) -> Activity:
    """
    Build an unsaved Activity (with path points attached) from a session's
    final stats and the path captured before stop().
    """
    type_key = activity_type.value if isinstance(activity_type, ActivityType) else str(activity_type)
    activity = Activity(
        user_id=user_id,
        activity_type=type_key,
        distance_km=stats.distance_km,
        duration_sec=stats.duration_sec,
        pace_min_per_km=stats.pace_min_per_km,
        calories_kcal=stats.calories_kcal,
        avg_speed_kmh=stats.avg_speed_kmh,
        max_speed_kmh=stats.max_speed_kmh,
    )
    if recorded_at is not None:
        # Naive datetimes are taken as UTC; the store rejects naive values
        if recorded_at.tzinfo is None:
            recorded_at = recorded_at.replace(tzinfo=timezone.utc)
        activity.recorded_at = recorded_at
    activity.path = [
        ActivityPathPoint(
            seq=i,
            latitude=sample.latitude,
            longitude=sample.longitude,
            timestamp_ms=sample.timestamp_ms,
        )
        for i, sample in enumerate(path)
    ]
    return activity
