"""
Geographic helpers: coordinate validation, extraction and haversine distance.

Locations reach us in several shapes: Firestore GeoPoint objects (with
`latitude`/`longitude` attributes), plain dicts written by scripts, or the
`{lat, lng}` dicts the dashboard stores for hotspot snapshots.
"""

from numbers import Real
from typing import Any, Optional, Tuple
import math

EARTH_RADIUS_METERS = 6371000.0

LatLng = Tuple[float, float]


def haversine_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points on a spherical Earth, in meters."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a coordinate
    return isinstance(value, Real) and not isinstance(value, bool)


def is_valid_coordinate(latitude: Any, longitude: Any) -> bool:
    if not (_is_number(latitude) and _is_number(longitude)):
        return False
    if math.isnan(latitude) or math.isnan(longitude):
        return False
    return -90 <= latitude <= 90 and -180 <= longitude <= 180


def extract_lat_lng(location: Any) -> Optional[LatLng]:
    """
    Pull a valid (lat, lng) pair out of a stored location, or None.

    Accepts GeoPoint-like objects, {latitude, longitude} and {lat, lng}
    dicts, and 2-item sequences.
    """
    if location is None:
        return None

    if isinstance(location, dict):
        lat = location.get("latitude", location.get("lat"))
        lng = location.get("longitude", location.get("lng"))
    elif isinstance(location, (tuple, list)):
        if len(location) != 2:
            return None
        lat, lng = location
    else:
        lat = getattr(location, "latitude", None)
        lng = getattr(location, "longitude", None)

    if not is_valid_coordinate(lat, lng):
        return None
    return float(lat), float(lng)


def format_geo_point(location: Any) -> str:
    """Human-readable location for alert lists, e.g. "19.0760° N, 72.8777° E"."""
    point = extract_lat_lng(location)
    if point is None:
        return "Location not specified"
    return f"{point[0]:.4f}° N, {point[1]:.4f}° E"
