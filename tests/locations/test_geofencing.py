import math

import pytest

from activity_attendance.core.constants import EARTH_RADIUS_METERS
from activity_attendance.locations.validator import NO_REQUIREMENT_MESSAGE, validate_location
from activity_attendance.participants.model import Coordinate

HALL_LAT, HALL_LNG = 10.97549, 106.68699


def _north_of_hall(meters: float) -> Coordinate:
    return Coordinate(lat=HALL_LAT + math.degrees(meters / EARTH_RADIUS_METERS), lng=HALL_LNG)


def test_250m_from_a_200m_geofence_is_invalid(single_day_activity):
    slot = single_day_activity.find_slot("Buổi Sáng")

    result = validate_location(single_day_activity, _north_of_hall(250), slot)

    assert result.valid is False
    assert result.distance_meters == pytest.approx(250, abs=0.01)
    assert "250m" in result.message
    assert "200m" in result.message


def test_inside_radius_is_valid(single_day_activity):
    slot = single_day_activity.find_slot("Buổi Sáng")

    result = validate_location(single_day_activity, _north_of_hall(199), slot)

    assert result.valid is True
    assert result.message is None


def test_just_inside_the_radius_is_valid(single_day_activity):
    slot = single_day_activity.find_slot("Buổi Sáng")

    result = validate_location(single_day_activity, _north_of_hall(199.999), slot)

    assert result.valid is True


def test_no_location_configured_means_no_requirement(no_location_activity):
    result = validate_location(no_location_activity, Coordinate(lat=0.0, lng=0.0))

    assert result.valid is True
    assert result.message == NO_REQUIREMENT_MESSAGE


def test_unmatched_slot_evaluates_all_candidates(multi_day_activity):
    evening = multi_day_activity.find_slot("Buổi Tối")

    inside = validate_location(multi_day_activity, _north_of_hall(10), evening, 1)
    outside = validate_location(multi_day_activity, _north_of_hall(500), evening, 1)

    assert inside.valid is True
    assert outside.valid is False
    assert outside.distance_meters == pytest.approx(500, abs=0.01)
    assert "Buổi Sáng" in outside.message


def test_without_slot_nearest_candidate_is_reported(multi_day_activity):
    result = validate_location(multi_day_activity, _north_of_hall(300))

    assert result.valid is False
    assert result.geofence.address == "Hội trường A"
