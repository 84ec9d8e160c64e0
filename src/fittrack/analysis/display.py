"""
Display formatting for tracking stats.

A zero pace or speed means "not enough data yet", not "standing still at
zero pace", so both render as a placeholder instead of a literal 0.
"""
from typing import Union

from fittrack.tracking.models import ActivityType, TrackingStats

PLACEHOLDER = "--"


def format_distance_km(distance_km: float) -> str:
    """Two decimals, e.g. 1.11."""
    return f"{distance_km:.2f}"


def format_duration(duration_sec: int) -> str:
    """
    Format elapsed seconds as "m:ss", or "h:mm:ss" from one hour up.

    Args:
        duration_sec: elapsed whole seconds (negative values clamp to 0)

    Returns:
        Formatted string like "4:05" or "1:02:09"
    """
    total = max(0, int(duration_sec))
    hours, rem = divmod(total, 3600)
    minutes, seconds = divmod(rem, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def format_pace(pace_min_per_km: float) -> str:
    """
    Format a pace in decimal minutes per km as "m:ss/km".

    Returns PLACEHOLDER when the pace is 0.
    """
    if pace_min_per_km <= 0:
        return PLACEHOLDER
    total_seconds = int(round(pace_min_per_km * 60))
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes}:{seconds:02d}/km"


def format_speed(speed_kmh: float) -> str:
    """One decimal in km/h, e.g. "66.7 km/h"; PLACEHOLDER when 0."""
    if speed_kmh <= 0:
        return PLACEHOLDER
    return f"{speed_kmh:.1f} km/h"


def format_summary(stats: TrackingStats, activity_type: Union[ActivityType, str]) -> str:
    """Multi-line workout summary shown after stopping."""
    label = activity_type.value if isinstance(activity_type, ActivityType) else str(activity_type)
    lines = [
        f"Activity: {label}",
        f"Distance: {format_distance_km(stats.distance_km)} km",
        f"Duration: {format_duration(stats.duration_sec)}",
        f"Pace: {format_pace(stats.pace_min_per_km)}",
        f"Avg speed: {format_speed(stats.avg_speed_kmh)}",
        f"Max speed: {format_speed(stats.max_speed_kmh)}",
        f"Calories: {stats.calories_kcal} kcal",
    ]
    return "\n".join(lines)
