"""
In-memory tracking types: GPS samples, activity types and stats snapshots.

Plain dataclasses with no DB dependencies, the same split the analysis layer
keeps. The storable record lives in fittrack.models.activity.
"""
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union


class ActivityType(str, Enum):
    RUN = "run"
    BIKE = "bike"
    WALK = "walk"


# kcal burned per km for a ~70 kg person
CALORIE_RATES_KCAL_PER_KM: Dict[str, int] = {
    ActivityType.RUN.value: 60,
    ActivityType.BIKE.value: 30,
    ActivityType.WALK.value: 40,
}
DEFAULT_CALORIE_RATE = 50


def calorie_rate_for(activity_type: Union[ActivityType, str]) -> int:
    """Calorie rate in kcal/km; unrecognized types get DEFAULT_CALORIE_RATE."""
    key = activity_type.value if isinstance(activity_type, ActivityType) else str(activity_type)
    return CALORIE_RATES_KCAL_PER_KM.get(key, DEFAULT_CALORIE_RATE)


@dataclass(frozen=True)
class LocationSample:
    """
    One GPS fix as reported by the location source.
    Optional fields are whatever the device happened to provide.
    """

    latitude: float                     # degrees, [-90, 90]
    longitude: float                    # degrees, [-180, 180]
    timestamp_ms: int                   # epoch milliseconds
    accuracy_m: Optional[float] = None  # horizontal uncertainty
    speed_ms: Optional[float] = None    # instantaneous, from the source
    altitude_m: Optional[float] = None  # carried through, never used


@dataclass(frozen=True)
class TrackingStats:
    """Immutable snapshot of a session's running or final numbers."""

    distance_km: float = 0.0
    duration_sec: int = 0
    pace_min_per_km: float = 0.0
    calories_kcal: int = 0
    avg_speed_kmh: float = 0.0
    max_speed_kmh: float = 0.0

    @classmethod
    def zero(cls) -> "TrackingStats":
        return cls()

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
