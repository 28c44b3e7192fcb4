import math
from datetime import datetime

import pytest

from activity_attendance.attendance.model import CheckInAttempt
from activity_attendance.attendance.service import AttendanceService
from activity_attendance.core.constants import EARTH_RADIUS_METERS
from activity_attendance.core.enums import (
    AttendanceQuality,
    CheckInType,
    RecordStatus,
    ThresholdBucket,
    TimeVerdict,
)
from activity_attendance.core.exceptions import ValidationError
from activity_attendance.participants.model import AttendanceRecord, Coordinate, Participant, Registration
from activity_attendance.thresholds.model import DEFAULT_THRESHOLDS

YARD = Coordinate(lat=10.98, lng=106.69)


def _north_of(point: Coordinate, meters: float) -> Coordinate:
    return Coordinate(lat=point.lat + math.degrees(meters / EARTH_RADIUS_METERS), lng=point.lng)


def test_evaluate_uses_day_overrides_and_notes_geofence(multi_day_activity):
    attempt = CheckInAttempt(
        slot_name="Buổi Chiều",
        check_in_type=CheckInType.START,
        at=datetime(2025, 7, 2, 14, 20),
        location=_north_of(YARD, 40),
        day_number=2,
        photo_ref="p.jpg",
    )

    evaluation = AttendanceService().evaluate_check_in(multi_day_activity, attempt)

    # Day 2 afternoon starts at 14:00 per the notes, not the default 13:00.
    assert evaluation.time.verdict == TimeVerdict.LATE
    assert evaluation.location.valid
    assert evaluation.decision.status == RecordStatus.PENDING


def test_evaluate_reads_day_from_label(multi_day_activity):
    attempt = CheckInAttempt(
        slot_name="Ngày 2 - Buổi Chiều",
        check_in_type=CheckInType.END,
        at=datetime(2025, 7, 2, 17, 0),
        location=YARD,
        photo_ref="p.jpg",
    )

    evaluation = AttendanceService().evaluate_check_in(multi_day_activity, attempt)

    assert evaluation.day_number == 2
    assert evaluation.decision.status == RecordStatus.APPROVED


def test_evaluate_rejects_far_submission(single_day_activity):
    attempt = CheckInAttempt(
        slot_name="Buổi Sáng",
        check_in_type=CheckInType.START,
        at=datetime(2025, 3, 10, 8, 0),
        location=Coordinate(lat=10.99, lng=106.68699),
        photo_ref="p.jpg",
    )

    evaluation = AttendanceService().evaluate_check_in(single_day_activity, attempt)

    assert evaluation.decision.status == RecordStatus.REJECTED
    assert evaluation.decision.reason == evaluation.location.message


def test_evaluate_without_location_on_free_activity(no_location_activity):
    attempt = CheckInAttempt(
        slot_name="Buổi Sáng",
        check_in_type=CheckInType.START,
        at=datetime(2025, 3, 10, 8, 0),
        photo_ref="p.jpg",
    )

    evaluation = AttendanceService().evaluate_check_in(no_location_activity, attempt)

    assert evaluation.decision.status == RecordStatus.APPROVED


def test_unknown_slot_or_missing_day_is_a_validation_error(single_day_activity, multi_day_activity):
    service = AttendanceService()
    unknown = CheckInAttempt(slot_name="Ca đêm", check_in_type=CheckInType.START, at=datetime(2025, 3, 10, 8, 0))
    no_day = CheckInAttempt(slot_name="Buổi Sáng", check_in_type=CheckInType.START, at=datetime(2025, 7, 1, 8, 0))

    with pytest.raises(ValidationError):
        service.evaluate_check_in(single_day_activity, unknown)
    with pytest.raises(ValidationError):
        service.evaluate_check_in(multi_day_activity, no_day)


def test_activity_summary(multi_day_activity):
    done = Participant(
        participant_id="p1",
        name="Phạm D",
        registrations=(Registration(slot_name="afternoon", day_number=2),),
        records=(
            AttendanceRecord(
                slot_label="Ngày 2 - Buổi Chiều",
                check_in_type=CheckInType.START,
                check_in_time=datetime(2025, 7, 2, 14, 0),
                status=RecordStatus.APPROVED,
                location=YARD,
                day_number=2,
                photo_ref="p.jpg",
            ),
            AttendanceRecord(
                slot_label="Ngày 2 - Buổi Chiều",
                check_in_type=CheckInType.END,
                check_in_time=datetime(2025, 7, 2, 17, 5),
                status=RecordStatus.APPROVED,
                location=YARD,
                day_number=2,
                photo_ref="p.jpg",
            ),
        ),
    )
    absent = Participant(
        participant_id="p2",
        name="Hoàng E",
        registrations=(Registration(slot_name="morning", day_number=1),),
    )

    summary = AttendanceService().activity_summary(multi_day_activity, [done, absent], DEFAULT_THRESHOLDS)

    first, second = summary.participants
    assert first.quality == AttendanceQuality.PERFECT
    assert first.completion.percentage == 100
    assert first.bucket == ThresholdBucket.FULL
    assert first.sessions.completed == 1
    assert [(d.day_number, d.completion.total) for d in first.days] == [(2, 2)]
    assert first.records[0]["verifiedBy"] == "Hệ thống tự động"
    assert second.quality == AttendanceQuality.NOT_CHECKED_IN
    assert second.bucket == ThresholdBucket.INSUFFICIENT
    assert summary.bucket_totals == {"full": 1, "incomplete": 0, "insufficient": 1}
    assert summary.stats.perfect == 1
    assert summary.to_dict()["thresholds"]["full"] == {"min": 80, "max": 100}
