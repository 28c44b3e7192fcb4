import pytest

from activity_attendance.activities.notes import find_notes_geofence, has_notes_geofence, parse_slot_times
from activity_attendance.core.exceptions import InvalidLocationDataError

NOTES = "\n".join(
    [
        "Buổi Sáng (07:30-11:30) - Địa điểm map: Hội trường A (10.97549, 106.68699) - Bán kính: 100m",
        "Buổi Chiều (14:28-17:00) - Địa điểm map: Sân B (10.98, 106.69)",
    ]
)


def test_slot_times_override_is_read_per_slot():
    assert parse_slot_times(NOTES, "Buổi Sáng") == ("07:30", "11:30")
    assert parse_slot_times(NOTES, "Buổi Chiều") == ("14:28", "17:00")
    assert parse_slot_times(NOTES, "Buổi Tối") is None
    assert parse_slot_times("", "Buổi Sáng") is None


def test_slot_specific_geofence_is_preferred():
    geofence = find_notes_geofence(NOTES, "Buổi Sáng", 2)

    assert geofence.lat == pytest.approx(10.97549)
    assert geofence.lng == pytest.approx(106.68699)
    assert geofence.radius_meters == 100
    assert geofence.address == "Hội trường A"
    assert geofence.label == "Ngày 2 - Buổi Sáng"


def test_missing_radius_defaults_to_200m():
    geofence = find_notes_geofence(NOTES, "Buổi Chiều", 2)

    assert geofence.radius_meters == 200


def test_falls_back_to_any_geofence_in_the_notes():
    geofence = find_notes_geofence(NOTES, "Buổi Tối", 2)

    # Last geofence mentioned in the notes.
    assert geofence.address == "Sân B"
    assert geofence.label == "Ngày 2"


def test_english_pattern_is_recognised():
    notes = "Morning - Location: Main gate (10.5, 106.5) - Radius: 50m"

    assert has_notes_geofence(notes)
    geofence = find_notes_geofence(notes, "Morning", 1)
    assert geofence.radius_meters == 50


def test_notes_without_geofence():
    assert not has_notes_geofence("Buổi Sáng (07:30-11:30) - Tập trung tại cổng")
    assert find_notes_geofence("Buổi Sáng (07:30-11:30)", "Buổi Sáng", 1) is None


def test_bad_numbers_in_notes_name_the_day():
    notes = "Buổi Sáng - Địa điểm map: Hội trường (abc, 106.68)"

    with pytest.raises(InvalidLocationDataError) as exc:
        find_notes_geofence(notes, "Buổi Sáng", 4)

    assert exc.value.source == "ghi chú Ngày 4"


def test_out_of_range_latitude_is_rejected():
    notes = "Buổi Sáng - Địa điểm map: Hội trường (95.0, 106.68)"

    with pytest.raises(InvalidLocationDataError):
        find_notes_geofence(notes, "Buổi Sáng", 1)
