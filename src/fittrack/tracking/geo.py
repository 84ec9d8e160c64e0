"""Great-circle distance on a spherical Earth."""
import math

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Compute the haversine distance in kilometers between two lat/lon points.

    Spherical model, roughly 0.5% off an ellipsoid. Calorie and pace figures
    downstream are derived from this exact formula, so keep it as is.

    Args:
        lat1: latitude of the first point, degrees
        lon1: longitude of the first point, degrees
        lat2: latitude of the second point, degrees
        lon2: longitude of the second point, degrees

    Returns:
        Distance in kilometers.
    """
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c
