import math

import pytest

from marketplace.shared.geo import EARTH_RADIUS_KM, haversine_distance


def test_new_york_to_london_in_miles():
    distance = haversine_distance(40.7128, -74.0060, 51.5074, -0.1278)

    assert distance == pytest.approx(3461, rel=0.01)


def test_kilometres_with_earth_radius_km():
    distance = haversine_distance(40.7128, -74.0060, 51.5074, -0.1278, radius=EARTH_RADIUS_KM)

    assert distance == pytest.approx(5570, rel=0.01)


def test_same_point_is_zero():
    assert haversine_distance(35.6762, 139.6503, 35.6762, 139.6503) == 0


def test_symmetric():
    a = haversine_distance(21.3069, -157.8583, 22.3193, 114.1694)
    b = haversine_distance(22.3193, 114.1694, 21.3069, -157.8583)

    assert a == pytest.approx(b)


@pytest.mark.parametrize(
    "coords",
    [
        (40.7128, -74.0060, None, None),
        (40.7128, -74.0060, 51.5, None),
        (None, -74.0060, 51.5, -0.12),
    ],
)
def test_missing_coordinate_is_infinitely_far(coords):
    distance = haversine_distance(*coords)

    assert math.isinf(distance)
    assert not distance <= 10_000
