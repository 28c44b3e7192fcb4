"""Check-in time windows.

Around a target time T (slot start for a start check-in, slot end for an end
check-in) the timeline is split into four non-overlapping windows::

    too early : t <  T - 15
    on time   : T - 15 <= t <= T + 15
    late      : T + 15 <  t <= T + 30
    too late  : t >  T + 30
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional

from ..activities.model import TimeSlotTemplate
from ..common.datetime_utils import combine, format_hhmm, minutes_between, to_zone
from ..core.constants import LATE_WINDOW_MINUTES, ON_TIME_TOLERANCE_MINUTES
from ..core.enums import CheckInType, SlotPhase, TimeVerdict


@dataclass(frozen=True)
class TimeWindowPolicy:
    on_time_minutes: int = ON_TIME_TOLERANCE_MINUTES
    late_minutes: int = LATE_WINDOW_MINUTES
    # Zone of the slot clock times; aware timestamps are moved into it before comparison.
    zone: Optional[tzinfo] = None


DEFAULT_POLICY = TimeWindowPolicy()


@dataclass(frozen=True)
class TimeCheck:
    verdict: TimeVerdict
    target: datetime
    # Minutes before (too early) or after (late / too late) the target; 0 when on time.
    minutes: int = 0
    message: Optional[str] = None

    @property
    def valid(self) -> bool:
        return self.verdict in (TimeVerdict.ON_TIME, TimeVerdict.LATE)

    @property
    def requires_review(self) -> bool:
        return self.verdict == TimeVerdict.LATE

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "verdict": self.verdict.value,
            "target": self.target.isoformat(),
            "minutes": self.minutes,
            "message": self.message,
        }


@dataclass(frozen=True)
class CheckInWindows:
    """Window bounds formatted for display."""

    target: str
    on_time_start: str
    on_time_end: str
    late_end: str

    def to_dict(self) -> dict:
        return {
            "target": self.target,
            "onTime": f"{self.on_time_start} - {self.on_time_end}",
            "late": f"{self.on_time_end} - {self.late_end}",
        }


def target_time(
    slot: TimeSlotTemplate, on_date: date, check_in_type: CheckInType, zone: Optional[tzinfo] = None
) -> datetime:
    at = slot.start() if check_in_type == CheckInType.START else slot.end()
    return combine(on_date, at, zone)


def check_in_windows(
    slot: TimeSlotTemplate,
    on_date: date,
    check_in_type: CheckInType,
    policy: TimeWindowPolicy = DEFAULT_POLICY,
) -> CheckInWindows:
    target = target_time(slot, on_date, check_in_type)
    return CheckInWindows(
        target=format_hhmm(target),
        on_time_start=format_hhmm(target - timedelta(minutes=policy.on_time_minutes)),
        on_time_end=format_hhmm(target + timedelta(minutes=policy.on_time_minutes)),
        late_end=format_hhmm(target + timedelta(minutes=policy.late_minutes)),
    )


def classify_check_in(
    slot: TimeSlotTemplate,
    on_date: date,
    check_in_type: CheckInType,
    at: datetime,
    policy: TimeWindowPolicy = DEFAULT_POLICY,
) -> TimeCheck:
    """Place a check-in timestamp into exactly one of the four windows."""

    at = to_zone(at, policy.zone)
    target = target_time(slot, on_date, check_in_type, at.tzinfo)
    on_time_start = target - timedelta(minutes=policy.on_time_minutes)
    on_time_end = target + timedelta(minutes=policy.on_time_minutes)
    late_end = target + timedelta(minutes=policy.late_minutes)

    if at < on_time_start:
        early = minutes_between(target, at)
        return TimeCheck(
            verdict=TimeVerdict.TOO_EARLY,
            target=target,
            minutes=early,
            message=f"Điểm danh sớm {early} phút so với thời gian quy định",
        )
    if at <= on_time_end:
        return TimeCheck(verdict=TimeVerdict.ON_TIME, target=target)

    late = minutes_between(at, target)
    if at <= late_end:
        return TimeCheck(
            verdict=TimeVerdict.LATE,
            target=target,
            minutes=late,
            message=f"Điểm danh muộn {late} phút so với thời gian quy định (trong cửa sổ trễ hợp lệ)",
        )
    return TimeCheck(
        verdict=TimeVerdict.TOO_LATE,
        target=target,
        minutes=late,
        message=(
            f"Điểm danh quá trễ {late} phút so với thời gian quy định "
            f"(quá {policy.late_minutes} phút sau giờ quy định)"
        ),
    )


def classify_slot_phase(
    slot: TimeSlotTemplate,
    on_date: date,
    check_in_type: CheckInType,
    now: datetime,
    policy: TimeWindowPolicy = DEFAULT_POLICY,
) -> SlotPhase:
    """Whether check-in for this slot has not opened yet, is open, or has closed."""

    now = to_zone(now, policy.zone)
    target = target_time(slot, on_date, check_in_type, now.tzinfo)
    if now < target - timedelta(minutes=policy.on_time_minutes):
        return SlotPhase.NOT_STARTED
    if now <= target + timedelta(minutes=policy.late_minutes):
        return SlotPhase.IN_PROGRESS
    return SlotPhase.PAST
