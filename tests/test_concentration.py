import pytest

from safevoice.services.concentration import find_concentration_center
from safevoice.utils.geo import haversine_meters

MUMBAI_CLUSTER = [
    (19.0760, 72.8777),
    (19.0761, 72.8778),
    (19.0762, 72.8779),
]
NEW_YORK = (40.7128, -74.0060)


def test_empty_input_has_no_center():
    assert find_concentration_center([]) is None
    assert find_concentration_center([], radius=500) is None


def test_single_point_is_its_own_center():
    assert find_concentration_center([(12.5, 77.25)], radius=500) == (12.5, 77.25)


def test_dense_cluster_wins_over_outlier():
    center = find_concentration_center(MUMBAI_CLUSTER + [NEW_YORK], radius=500)

    assert center[0] == pytest.approx(19.0761, abs=1e-9)
    assert center[1] == pytest.approx(72.8778, abs=1e-9)


def test_two_nearby_points_beat_an_isolated_one():
    center = find_concentration_center([(19.0760, 72.8777), (19.0762, 72.8779), NEW_YORK], radius=500)

    assert center == pytest.approx((19.0761, 72.8778), abs=1e-9)


def test_outlier_first_does_not_win():
    center = find_concentration_center([NEW_YORK] + MUMBAI_CLUSTER, radius=500)

    assert center == pytest.approx((19.0761, 72.8778), abs=1e-9)


def test_all_isolated_returns_first_point_unchanged():
    points = [(0.0, 0.0), (10.0, 10.0), (-20.0, 45.0)]

    assert find_concentration_center(points, radius=500) == (0.0, 0.0)


def test_equal_clusters_keep_the_earliest():
    first = [(0.0, 0.0), (0.0, 0.001)]
    second = [(10.0, 10.0), (10.0, 10.001)]

    center = find_concentration_center(first + second, radius=500)

    assert center == pytest.approx((0.0, 0.0005), abs=1e-12)


def test_radius_covering_the_globe_returns_overall_centroid():
    points = MUMBAI_CLUSTER + [NEW_YORK]

    center = find_concentration_center(points, radius=21_000_000)

    expected_lat = sum(p[0] for p in points) / len(points)
    expected_lng = sum(p[1] for p in points) / len(points)
    assert center == pytest.approx((expected_lat, expected_lng))


def test_radius_boundary_is_inclusive():
    a, b = (19.0, 72.0), (19.01, 72.0)
    distance = haversine_meters(a[0], a[1], b[0], b[1])

    assert find_concentration_center([a, b], radius=distance) == pytest.approx((19.005, 72.0))
    assert find_concentration_center([a, b], radius=distance - 1) == a


def test_center_lies_within_bounding_box_of_input():
    points = [(19.07 + i * 0.0004, 72.87 + (i % 3) * 0.0005) for i in range(12)]

    lat, lng = find_concentration_center(points, radius=300)

    assert min(p[0] for p in points) <= lat <= max(p[0] for p in points)
    assert min(p[1] for p in points) <= lng <= max(p[1] for p in points)


def test_same_input_gives_same_output():
    points = MUMBAI_CLUSTER + [NEW_YORK, (19.5, 73.0)]

    assert find_concentration_center(points, 750) == find_concentration_center(list(points), 750)


def test_input_is_not_modified():
    points = MUMBAI_CLUSTER + [NEW_YORK]
    before = list(points)

    find_concentration_center(points, radius=500)

    assert points == before
