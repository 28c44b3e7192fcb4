import math

import pytest

from activity_attendance.core.constants import EARTH_RADIUS_METERS
from activity_attendance.locations.geo import distance_meters


def test_distance_to_itself_is_zero():
    assert distance_meters(10.97549, 106.68699, 10.97549, 106.68699) == 0


def test_distance_is_symmetric():
    a = (10.97549, 106.68699)
    b = (21.02851, 105.80481)

    assert distance_meters(*a, *b) == pytest.approx(distance_meters(*b, *a))


def test_one_degree_of_latitude():
    expected = EARTH_RADIUS_METERS * math.pi / 180

    assert distance_meters(10.0, 106.0, 11.0, 106.0) == pytest.approx(expected, rel=1e-9)
