from datetime import date, time

import pytest

from activity_attendance.activities.model import Activity, TimeSlotTemplate
from activity_attendance.core.enums import ActivityKind
from activity_attendance.core.exceptions import ConfigurationError, InvalidSlotTimeError


def test_multi_day_without_templates_uses_default_slots(multi_day_activity):
    names = [s.name for s in multi_day_activity.active_slots()]

    assert names == ["Buổi Sáng", "Buổi Chiều", "Buổi Tối"]


def test_inactive_slots_are_skipped(single_day_activity):
    assert [s.name for s in single_day_activity.active_slots()] == ["Buổi Sáng", "Buổi Chiều"]


def test_day_notes_override_slot_times(multi_day_activity):
    morning = multi_day_activity.find_slot("Buổi Sáng")

    day_2 = multi_day_activity.slot_for_day(morning, 2)
    day_1 = multi_day_activity.slot_for_day(morning, 1)

    assert (day_2.start_time, day_2.end_time) == ("07:30", "11:30")
    assert (day_1.start_time, day_1.end_time) == ("08:00", "11:30")


def test_occurrences_cover_every_day_and_slot(multi_day_activity):
    all_occ = multi_day_activity.occurrences()
    day_2 = multi_day_activity.occurrences(2)

    assert len(all_occ) == 9
    assert [o.day_number for o in day_2] == [2, 2, 2]
    assert day_2[1].slot.start_time == "14:00"
    assert day_2[0].date == date(2025, 7, 2)


def test_date_for_unknown_day_is_a_configuration_error(multi_day_activity):
    with pytest.raises(ConfigurationError):
        multi_day_activity.date_for(9)
    with pytest.raises(ConfigurationError):
        multi_day_activity.date_for(None)


def test_malformed_slot_time_raises():
    slot = TimeSlotTemplate(name="Buổi Sáng", start_time="8h", end_time="10:00")

    with pytest.raises(InvalidSlotTimeError):
        slot.start()
    assert slot.end() == time(10, 0)


def test_location_requirement(single_day_activity, multi_day_activity, no_location_activity):
    assert single_day_activity.has_location_requirement()
    assert multi_day_activity.has_location_requirement()
    assert not no_location_activity.has_location_requirement()


def test_single_day_without_date_cannot_be_evaluated():
    activity = Activity(activity_id="x", name="x", kind=ActivityKind.SINGLE_DAY)

    with pytest.raises(ConfigurationError):
        activity.date_for()
