"""Great-circle distance helpers"""

import math
from typing import Optional

EARTH_RADIUS_MILES = 3959
EARTH_RADIUS_KM = 6371


def to_radians(degrees: float) -> float:
    return degrees * math.pi / 180


def haversine_distance(
    lat1: Optional[float],
    lon1: Optional[float],
    lat2: Optional[float],
    lon2: Optional[float],
    radius: float = EARTH_RADIUS_MILES,
) -> float:
    """
    Haversine distance between two coordinates, in miles by default.

    Returns infinity when any coordinate is missing, so entities without a
    location never fall inside a finite search radius.
    """
    if lat1 is None or lon1 is None or lat2 is None or lon2 is None:
        return math.inf

    d_lat = to_radians(lat2 - lat1)
    d_lon = to_radians(lon2 - lon1)
    lat1_rad = to_radians(lat1)
    lat2_rad = to_radians(lat2)

    a = math.sin(d_lat / 2) ** 2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(d_lon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return radius * c
