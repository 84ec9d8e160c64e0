"""Request/response bodies for the tracking routes."""
from typing import Optional

from pydantic import BaseModel, Field

from fittrack.tracking.models import ActivityType, LocationSample, TrackingStats


class SampleIn(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    timestamp_ms: int
    accuracy_m: Optional[float] = None
    speed_ms: Optional[float] = None
    altitude_m: Optional[float] = None

    def to_sample(self) -> LocationSample:
        return LocationSample(**self.model_dump())


class SamplesAccepted(BaseModel):
    accepted: int
    tracking: bool


class StatsOut(BaseModel):
    distance_km: float
    duration_sec: int
    pace_min_per_km: float
    calories_kcal: int
    avg_speed_kmh: float
    max_speed_kmh: float

    @classmethod
    def from_stats(cls, stats: TrackingStats) -> "StatsOut":
        return cls(**stats.as_dict())


class StopRequest(BaseModel):
    activity_type: ActivityType = ActivityType.RUN
    save: bool = False


class StopResponse(BaseModel):
    stats: StatsOut
    activity_id: Optional[int] = None  # set when the activity was saved
