from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from ..activities.model import Activity, TimeSlotTemplate
from ..activities.slots import day_from_label
from ..core.enums import CheckInType
from ..participants.model import AttendanceRecord
from .factory import LabelMatcherFactory
from .strategies.base import LabelMatcher

logger = logging.getLogger(__name__)


def record_day(record: AttendanceRecord) -> Optional[int]:
    if record.day_number is not None:
        return record.day_number
    return day_from_label(record.slot_label)


class RecordMatcher:
    """Finds the records that belong to a (slot, day, check-in type).

    Matchers are tried in order; the first one with any hit decides. Among its
    hits the most recent record is authoritative.
    """

    def __init__(self, *, matchers: Optional[Sequence[LabelMatcher]] = None) -> None:
        self._matchers = tuple(matchers) if matchers is not None else LabelMatcherFactory().chain()

    def matching_records(
        self,
        activity: Activity,
        records: Iterable[AttendanceRecord],
        slot: TimeSlotTemplate,
        check_in_type: CheckInType,
        day_number: Optional[int] = None,
    ) -> List[AttendanceRecord]:
        candidates = [r for r in records if r.check_in_type == check_in_type]
        if activity.is_multi_day:
            # Undated records cannot be placed on a day of a multi-day activity.
            candidates = [r for r in candidates if day_number is not None and record_day(r) == day_number]

        for matcher in self._matchers:
            hits = [r for r in candidates if matcher.matches(label=r.slot_label, slot_name=slot.name)]
            if hits:
                if matcher.name != "exact":
                    logger.debug("Matched %d record(s) to %r via %s", len(hits), slot.name, matcher.name)
                return hits
        return []

    def find(
        self,
        activity: Activity,
        records: Iterable[AttendanceRecord],
        slot: TimeSlotTemplate,
        check_in_type: CheckInType,
        day_number: Optional[int] = None,
    ) -> Optional[AttendanceRecord]:
        hits = self.matching_records(activity, records, slot, check_in_type, day_number)
        if not hits:
            return None
        return max(hits, key=lambda r: r.check_in_time)
