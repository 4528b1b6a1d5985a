import math

import pytest

from xiny.spatial.distance import EARTH_RADIUS_M, haversine_m, step_distance_m


def test_same_point_is_zero():
    assert haversine_m(52.52, 13.40, 52.52, 13.40) == 0.0


def test_one_degree_of_latitude():
    expected = EARTH_RADIUS_M * math.pi / 180
    assert haversine_m(0.0, 0.0, 1.0, 0.0) == pytest.approx(expected)


def test_symmetric():
    a = haversine_m(48.8566, 2.3522, 51.5074, -0.1278)
    b = haversine_m(51.5074, -0.1278, 48.8566, 2.3522)
    assert a == pytest.approx(b)


def test_paris_london():
    # roughly 343.5 km
    d = haversine_m(48.8566, 2.3522, 51.5074, -0.1278)
    assert 340_000 < d < 347_000


def test_antipodes_is_half_circumference():
    d = haversine_m(0.0, 0.0, 0.0, 180.0)
    assert d == pytest.approx(EARTH_RADIUS_M * math.pi)


def test_step_distance_is_whole_meters():
    d = step_distance_m(0.0, 0.0, 0.0, 0.001)
    assert isinstance(d, int)
    assert d == round(haversine_m(0.0, 0.0, 0.0, 0.001))
