from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from activity_attendance.activities.mapper import map_activity, map_participant
from activity_attendance.core.enums import ActivityKind, CheckInType, RecordStatus, SlotSemantic
from activity_attendance.core.exceptions import InvalidLocationDataError, ValidationError


def _activity_doc(**overrides):
    doc = {
        "_id": "65f0c0ffee",
        "name": "Mùa hè xanh",
        "type": "multiple_days",
        "schedule": [
            {"day": 1, "date": "2025-07-01T00:00:00.000Z", "activities": ""},
            {"day": 2, "date": "2025-07-02", "activities": "Buổi Sáng (07:30-11:30)"},
        ],
        "timeSlots": [
            {"id": "morning", "name": "Buổi Sáng", "startTime": "08:00", "endTime": "11:30", "isActive": True},
            {"id": "evening", "name": "Buổi Tối", "startTime": "18:00", "endTime": "21:00", "isActive": False},
        ],
        "multiTimeLocations": [
            {
                "id": "m1",
                "timeSlot": "morning",
                "location": {"lat": 10.97549, "lng": 106.68699, "address": "Hội trường A"},
                "radius": 200,
            }
        ],
    }
    doc.update(overrides)
    return doc


def test_maps_multi_day_activity():
    activity = map_activity(_activity_doc())

    assert activity.activity_id == "65f0c0ffee"
    assert activity.kind == ActivityKind.MULTIPLE_DAYS
    assert [d.date for d in activity.schedule] == [date(2025, 7, 1), date(2025, 7, 2)]
    assert [s.name for s in activity.active_slots()] == ["Buổi Sáng"]
    assert activity.slot_geofences[SlotSemantic.MORNING].radius_meters == 200
    assert activity.geofence is None


def test_maps_single_day_activity_with_whole_geofence():
    activity = map_activity(
        {
            "id": "a1",
            "name": "Hiến máu",
            "type": "single_day",
            "date": "10/03/2025",
            "timeSlots": [{"name": "Buổi Sáng", "startTime": "08:00", "endTime": "10:00"}],
            "locationData": {"lat": "10.97", "lng": "106.68", "address": "Hội trường", "radius": 100},
        }
    )

    assert activity.kind == ActivityKind.SINGLE_DAY
    assert activity.date == date(2025, 3, 10)
    assert activity.geofence.lat == pytest.approx(10.97)
    assert activity.geofence.radius_meters == 100


def test_bad_coordinates_name_their_source():
    doc = _activity_doc()
    doc["multiTimeLocations"][0]["location"]["lat"] = "không rõ"

    with pytest.raises(InvalidLocationDataError) as exc:
        map_activity(doc)

    assert exc.value.source == "multiTimeLocations[0]"


def test_missing_radius_is_not_defaulted():
    with pytest.raises(InvalidLocationDataError) as exc:
        map_activity(_activity_doc(locationData={"lat": 10.9, "lng": 106.6}))

    assert exc.value.source == "locationData"


def test_maps_participant_with_records():
    participant = map_participant(
        {
            "userId": {"_id": "u1", "name": "Nguyễn Văn A", "email": "a@example.com"},
            "role": "Thành Viên",
            "registeredDaySlots": [{"day": 2, "slot": "afternoon"}],
            "attendances": [
                {
                    "_id": "r1",
                    "timeSlot": "Ngày 2 - Buổi Chiều",
                    "checkInType": "start",
                    "checkInTime": "2025-07-02T14:05:00",
                    "location": {"lat": 10.98, "lng": 106.69},
                    "dayNumber": 2,
                    "status": "approved",
                    "verifiedBy": {"_id": "o1", "name": "Officer B"},
                    "verificationNote": "Tự động duyệt: Đúng vị trí, đúng thời gian, có ảnh",
                    "photoUrl": "https://cdn.example.com/p.jpg",
                }
            ],
        }
    )

    assert participant.participant_id == "u1"
    assert participant.name == "Nguyễn Văn A"
    assert participant.role == "Thành Viên"
    assert participant.registrations[0].semantic == SlotSemantic.AFTERNOON
    record = participant.records[0]
    assert record.check_in_type == CheckInType.START
    assert record.status == RecordStatus.APPROVED
    assert record.verifier.name == "Officer B"
    assert record.note.startswith("Tự động duyệt")
    assert record.has_photo


def test_unknown_check_in_type_is_rejected():
    with pytest.raises(ValidationError):
        map_participant(
            {
                "userId": "u1",
                "attendances": [{"timeSlot": "Buổi Sáng", "checkInType": "middle", "checkInTime": "2025-03-10T08:00:00"}],
            }
        )


HCM = ZoneInfo("Asia/Ho_Chi_Minh")


def test_utc_midnight_dates_are_read_in_the_activity_zone():
    doc = _activity_doc(
        schedule=[{"day": 1, "date": "2025-06-30T17:00:00.000Z", "activities": ""}],
    )

    assert map_activity(doc, zone=HCM).schedule[0].date == date(2025, 7, 1)
    assert map_activity(doc).schedule[0].date == date(2025, 6, 30)


def test_utc_check_in_times_are_moved_into_the_activity_zone():
    participant = map_participant(
        {
            "userId": "u1",
            "attendances": [
                {
                    "timeSlot": "Buổi Sáng",
                    "checkInType": "start",
                    "checkInTime": "2025-03-10T01:05:00.000Z",
                    "status": "approved",
                    "slotDate": "2025-03-09T17:00:00.000Z",
                }
            ],
        },
        zone=HCM,
    )

    record = participant.records[0]
    assert record.check_in_time == datetime(2025, 3, 10, 8, 5, tzinfo=HCM)
    assert record.check_in_time.utcoffset().total_seconds() == 7 * 3600
    assert record.slot_date == date(2025, 3, 10)
