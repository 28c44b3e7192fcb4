from __future__ import annotations

from enum import Enum


class ActivityKind(str, Enum):
    """Loại hoạt động: một ngày hoặc nhiều ngày."""

    SINGLE_DAY = "single_day"
    MULTIPLE_DAYS = "multiple_days"


class CheckInType(str, Enum):
    """Điểm danh đầu buổi / cuối buổi."""

    START = "start"
    END = "end"


class RecordStatus(str, Enum):
    """Trạng thái duyệt của một bản ghi điểm danh."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class SlotSemantic(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class TimeVerdict(str, Enum):
    """Vị trí của một thời điểm so với các cửa sổ điểm danh."""

    TOO_EARLY = "too_early"
    ON_TIME = "on_time"
    LATE = "late"
    TOO_LATE = "too_late"


class SlotPhase(str, Enum):
    """Slot-open state, independent of any check-in attempt."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    PAST = "past"


class SlotTimeStatus(str, Enum):
    """Per-record time badge: timing of an existing record, or slot phase when absent."""

    ON_TIME = "on_time"
    LATE = "late"
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    PAST = "past"


class AttendanceQuality(str, Enum):
    """Phân loại chất lượng điểm danh của một người tham gia."""

    PERFECT = "perfect"
    LATE_BUT_VALID = "late_but_valid"
    INVALID_LOCATION = "invalid_location"
    INVALID_TIME = "invalid_time"
    INVALID_BOTH = "invalid_both"
    NOT_CHECKED_IN = "not_checked_in"

    @property
    def is_invalid(self) -> bool:
        return self in (
            AttendanceQuality.INVALID_LOCATION,
            AttendanceQuality.INVALID_TIME,
            AttendanceQuality.INVALID_BOTH,
        )


class ThresholdBucket(str, Enum):
    """Threshold ranges, listed from highest to lowest."""

    FULL = "full"
    INCOMPLETE = "incomplete"
    INSUFFICIENT = "insufficient"


class ThresholdBound(str, Enum):
    MIN = "min"
    MAX = "max"
