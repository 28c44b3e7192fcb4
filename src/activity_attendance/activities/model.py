from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, time
from typing import Dict, List, Optional, Tuple

from ..common.datetime_utils import parse_hhmm
from ..core.constants import DEFAULT_MULTI_DAY_SLOTS
from ..core.enums import ActivityKind, SlotSemantic
from ..core.exceptions import ConfigurationError
from .geofence import Geofence
from .notes import has_notes_geofence, parse_slot_times
from .slots import normalize_label, slot_semantic


@dataclass(frozen=True)
class TimeSlotTemplate:
    """Thực thể miền (domain): Buổi điểm danh trong ngày."""

    name: str
    start_time: str
    end_time: str
    active: bool = True
    slot_id: Optional[str] = None

    @property
    def semantic(self) -> Optional[SlotSemantic]:
        return slot_semantic(self.name) or slot_semantic(self.slot_id)

    def start(self) -> time:
        return parse_hhmm(self.start_time, f"Giờ bắt đầu của {self.name}")

    def end(self) -> time:
        return parse_hhmm(self.end_time, f"Giờ kết thúc của {self.name}")

    def with_times(self, start_time: str, end_time: str) -> "TimeSlotTemplate":
        return replace(self, start_time=start_time, end_time=end_time)


@dataclass(frozen=True)
class ScheduleDay:
    day_number: int
    date: date
    notes: str = ""


@dataclass(frozen=True)
class SlotOccurrence:
    """A slot on a concrete calendar day, with that day's time overrides applied."""

    slot: TimeSlotTemplate
    day_number: Optional[int]
    date: date


@dataclass(frozen=True)
class Activity:
    """Thực thể miền (domain): Hoạt động cần điểm danh."""

    activity_id: str
    name: str
    kind: ActivityKind
    date: Optional[date] = None
    schedule: Tuple[ScheduleDay, ...] = ()
    time_slots: Tuple[TimeSlotTemplate, ...] = ()
    geofence: Optional[Geofence] = None
    slot_geofences: Dict[SlotSemantic, Geofence] = field(default_factory=dict)

    @property
    def is_multi_day(self) -> bool:
        return self.kind == ActivityKind.MULTIPLE_DAYS

    def active_slots(self) -> List[TimeSlotTemplate]:
        slots = [s for s in self.time_slots if s.active]
        if not slots and self.is_multi_day:
            return [
                TimeSlotTemplate(name=name, start_time=start, end_time=end, slot_id=slot_id)
                for slot_id, name, start, end in DEFAULT_MULTI_DAY_SLOTS
            ]
        return slots

    def find_slot(self, name: str) -> Optional[TimeSlotTemplate]:
        wanted = normalize_label(name)
        for slot in self.active_slots():
            if normalize_label(slot.name) == wanted:
                return slot
        return None

    def day(self, day_number: Optional[int]) -> Optional[ScheduleDay]:
        for d in self.schedule:
            if d.day_number == day_number:
                return d
        return None

    def date_for(self, day_number: Optional[int] = None) -> date:
        if self.is_multi_day:
            if day_number is None:
                raise ConfigurationError("Hoạt động nhiều ngày cần chỉ rõ số ngày")
            d = self.day(day_number)
            if d is None:
                raise ConfigurationError(f"Không tìm thấy Ngày {day_number} trong lịch hoạt động")
            return d.date

        if self.date is None:
            raise ConfigurationError("Hoạt động chưa có ngày diễn ra")
        return self.date

    def slot_for_day(self, slot: TimeSlotTemplate, day_number: Optional[int]) -> TimeSlotTemplate:
        if not self.is_multi_day or day_number is None:
            return slot
        d = self.day(day_number)
        times = parse_slot_times(d.notes, slot.name) if d else None
        return slot.with_times(*times) if times else slot

    def occurrences(self, day_number: Optional[int] = None) -> List[SlotOccurrence]:
        """Every (active slot, day) pair in scope, in schedule order."""

        if not self.is_multi_day:
            on_date = self.date_for()
            return [SlotOccurrence(slot=s, day_number=None, date=on_date) for s in self.active_slots()]

        days = [d for d in self.schedule if day_number is None or d.day_number == day_number]
        return [
            SlotOccurrence(slot=self.slot_for_day(s, d.day_number), day_number=d.day_number, date=d.date)
            for d in days
            for s in self.active_slots()
        ]

    def has_location_requirement(self) -> bool:
        return (
            self.geofence is not None
            or bool(self.slot_geofences)
            or any(has_notes_geofence(d.notes) for d in self.schedule)
        )
