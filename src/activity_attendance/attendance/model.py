from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..activities.model import TimeSlotTemplate
from ..core.enums import CheckInType, RecordStatus, SlotTimeStatus, TimeVerdict
from ..locations.validator import LocationCheck
from ..participants.model import AttendanceRecord, Coordinate
from ..timing.windows import TimeCheck
from .strategies.base import SubmissionDecision

UNKNOWN_SLOT_MESSAGE = "Không tìm thấy thông tin thời gian cho buổi này"
NO_LOCATION_MESSAGE = "Bản ghi không có dữ liệu vị trí"


@dataclass(frozen=True)
class SlotAttendance:
    """Trạng thái điểm danh của một (buổi, ngày, loại điểm danh)."""

    slot: TimeSlotTemplate
    check_in_type: CheckInType
    day_number: Optional[int]
    date: date
    has_checked_in: bool
    time_status: SlotTimeStatus
    record: Optional[AttendanceRecord] = None

    @property
    def record_status(self) -> Optional[RecordStatus]:
        return self.record.status if self.record else None

    def to_dict(self) -> dict:
        return {
            "slot": self.slot.name,
            "checkInType": self.check_in_type.value,
            "dayNumber": self.day_number,
            "date": self.date.isoformat(),
            "hasCheckedIn": self.has_checked_in,
            "timeStatus": self.time_status.value,
            "status": self.record_status.value if self.record_status else None,
        }


@dataclass(frozen=True)
class RecordAssessment:
    """Location and time validity of an existing record."""

    record: AttendanceRecord
    location: LocationCheck
    time: Optional[TimeCheck]
    slot: Optional[TimeSlotTemplate] = None
    day_number: Optional[int] = None

    @property
    def location_valid(self) -> bool:
        return self.location.valid

    @property
    def time_valid(self) -> bool:
        return self.time is not None and self.time.valid

    @property
    def on_time(self) -> bool:
        return self.time is not None and self.time.verdict == TimeVerdict.ON_TIME

    @property
    def in_late_window(self) -> bool:
        return self.time is not None and self.time.verdict == TimeVerdict.LATE

    @property
    def time_message(self) -> Optional[str]:
        return self.time.message if self.time else UNKNOWN_SLOT_MESSAGE


@dataclass(frozen=True)
class CheckInAttempt:
    """Một lần điểm danh đang được gửi lên (chưa lưu)."""

    slot_name: str
    check_in_type: CheckInType
    at: datetime
    location: Optional[Coordinate] = None
    day_number: Optional[int] = None
    photo_ref: Optional[str] = None
    entered_by_officer: bool = False

    @property
    def has_photo(self) -> bool:
        return bool(self.photo_ref and self.photo_ref.strip())


@dataclass(frozen=True)
class CheckInEvaluation:
    slot: TimeSlotTemplate
    day_number: Optional[int]
    time: TimeCheck
    location: LocationCheck
    decision: SubmissionDecision

    def to_dict(self) -> dict:
        return {
            "slot": self.slot.name,
            "dayNumber": self.day_number,
            "time": self.time.to_dict(),
            "location": self.location.to_dict(),
            "status": self.decision.status.value,
            "note": self.decision.note,
            "reason": self.decision.reason,
        }
