"""
Concentration-center locator.

Finds where incident or alert reports cluster most densely:

- every point is tried as a candidate center
- its density is the number of points within `radius` meters (itself included)
- the densest candidate wins; ties keep the earliest candidate
- if the winner has at least one neighbour, the centroid of its
  neighbourhood is returned, otherwise the first point is returned as-is

Pure and deterministic. O(n^2) in the number of points, so callers keep the
input to tens or low hundreds of points and pass only validated coordinates.
"""

from typing import List, Optional, Sequence

from safevoice.utils.geo import LatLng, haversine_meters

DEFAULT_RADIUS_METERS = 1000.0


def _neighbours(center: LatLng, coordinates: Sequence[LatLng], radius: float) -> List[LatLng]:
    return [
        point for point in coordinates
        if haversine_meters(center[0], center[1], point[0], point[1]) <= radius
    ]


def find_concentration_center(
    coordinates: Sequence[LatLng],
    radius: float = DEFAULT_RADIUS_METERS,
) -> Optional[LatLng]:
    """
    Return the centroid of the densest neighbourhood in `coordinates`.

    Args:
        coordinates: Ordered (lat, lng) pairs, already validated
        radius: Neighbourhood radius in meters (inclusive)

    Returns:
        (lat, lng) of the concentration center, or None for empty input
    """
    if not coordinates:
        return None

    max_density = 0
    concentration_center = coordinates[0]

    for candidate in coordinates:
        nearby_count = len(_neighbours(candidate, coordinates, radius))
        # Strictly greater: the first candidate reaching a density keeps it
        if nearby_count > max_density:
            max_density = nearby_count
            concentration_center = candidate

    if max_density > 1:
        nearby_points = _neighbours(concentration_center, coordinates, radius)
        centroid_lat = sum(point[0] for point in nearby_points) / len(nearby_points)
        centroid_lng = sum(point[1] for point in nearby_points) / len(nearby_points)
        return centroid_lat, centroid_lng

    return concentration_center
