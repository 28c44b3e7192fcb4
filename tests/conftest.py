from __future__ import annotations

from datetime import date

import pytest

from activity_attendance.activities.geofence import Geofence
from activity_attendance.activities.model import Activity, ScheduleDay, TimeSlotTemplate
from activity_attendance.core.enums import ActivityKind, SlotSemantic

HALL = Geofence(lat=10.97549, lng=106.68699, radius_meters=200, address="Hội trường A")

DAY_2_NOTES = "\n".join(
    [
        "Buổi Sáng (07:30-11:30) - Tập trung tại cổng chính",
        "Buổi Chiều (14:00-17:00) - Địa điểm map: Sân B (10.98, 106.69) - Bán kính: 150m",
    ]
)


@pytest.fixture
def single_day_activity() -> Activity:
    return Activity(
        activity_id="act-single",
        name="Hiến máu nhân đạo",
        kind=ActivityKind.SINGLE_DAY,
        date=date(2025, 3, 10),
        time_slots=(
            TimeSlotTemplate(name="Buổi Sáng", start_time="08:00", end_time="10:00"),
            TimeSlotTemplate(name="Buổi Chiều", start_time="13:00", end_time="17:00"),
            TimeSlotTemplate(name="Buổi Tối", start_time="18:00", end_time="21:00", active=False),
        ),
        geofence=HALL,
    )


@pytest.fixture
def multi_day_activity() -> Activity:
    # No slot templates: the default morning/afternoon/evening slots apply.
    return Activity(
        activity_id="act-multi",
        name="Mùa hè xanh",
        kind=ActivityKind.MULTIPLE_DAYS,
        schedule=(
            ScheduleDay(day_number=1, date=date(2025, 7, 1)),
            ScheduleDay(day_number=2, date=date(2025, 7, 2), notes=DAY_2_NOTES),
            ScheduleDay(day_number=3, date=date(2025, 7, 3)),
        ),
        slot_geofences={SlotSemantic.MORNING: HALL},
    )


@pytest.fixture
def no_location_activity() -> Activity:
    return Activity(
        activity_id="act-free",
        name="Hội thảo trực tuyến",
        kind=ActivityKind.SINGLE_DAY,
        date=date(2025, 3, 10),
        time_slots=(TimeSlotTemplate(name="Buổi Sáng", start_time="08:00", end_time="10:00"),),
    )
