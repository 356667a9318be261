"""Great-circle distance helpers"""
from math import atan2, cos, radians, sin, sqrt

EARTH_RADIUS_MILES = 3959


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Haversine distance in miles between two coordinates.

    Callers must check that all four values are present; None or non-degree
    input is not guarded here.
    """
    d_lat = radians(lat2 - lat1)
    d_lon = radians(lon2 - lon1)
    a = (
        sin(d_lat / 2) ** 2
        + cos(radians(lat1)) * cos(radians(lat2)) * sin(d_lon / 2) ** 2
    )
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def city_from_coordinates(lat: float, lon: float) -> str:
    """Placeholder area label until reverse geocoding exists."""
    return f"Area {lat:.1f}, {lon:.1f}"
