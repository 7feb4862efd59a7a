import math

import pytest
from firebase_admin import firestore

from safevoice.utils.geo import (
    extract_lat_lng,
    format_geo_point,
    haversine_meters,
    is_valid_coordinate,
)


def test_haversine_zero_for_same_point():
    assert haversine_meters(19.076, 72.8777, 19.076, 72.8777) == 0


def test_haversine_one_degree_of_latitude():
    assert haversine_meters(0, 0, 1, 0) == pytest.approx(111194.93, rel=1e-6)


def test_haversine_is_symmetric():
    there = haversine_meters(19.076, 72.8777, 40.7128, -74.006)
    back = haversine_meters(40.7128, -74.006, 19.076, 72.8777)
    assert there == pytest.approx(back)


@pytest.mark.parametrize(
    "location",
    [
        {"latitude": 19.076, "longitude": 72.8777},
        {"lat": 19.076, "lng": 72.8777},
        (19.076, 72.8777),
        [19.076, 72.8777],
        firestore.GeoPoint(19.076, 72.8777),
    ],
)
def test_extract_lat_lng_accepts_stored_shapes(location):
    assert extract_lat_lng(location) == (19.076, 72.8777)


def test_extract_lat_lng_converts_ints_to_floats():
    point = extract_lat_lng({"latitude": 10, "longitude": 20})
    assert point == (10.0, 20.0)
    assert isinstance(point[0], float)


@pytest.mark.parametrize(
    "location",
    [
        None,
        {},
        {"latitude": "19.07", "longitude": 72.8},
        {"latitude": True, "longitude": 72.8},
        {"latitude": math.nan, "longitude": 72.8},
        {"latitude": 91, "longitude": 0},
        {"latitude": 0, "longitude": -181},
        (1.0, 2.0, 3.0),
        "19.07, 72.87",
    ],
)
def test_extract_lat_lng_rejects_invalid(location):
    assert extract_lat_lng(location) is None


def test_coordinate_range_edges_are_valid():
    assert is_valid_coordinate(90, 180)
    assert is_valid_coordinate(-90, -180)


def test_format_geo_point():
    assert format_geo_point({"latitude": 19.076, "longitude": 72.8777}) == "19.0760° N, 72.8777° E"
    assert format_geo_point(None) == "Location not specified"
