"""Completion accounting over registered slots."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from ..activities.model import Activity, SlotOccurrence
from ..common.math_utils import percentage
from ..core.enums import CheckInType, RecordStatus
from ..matching.record_matcher import RecordMatcher
from ..participants.model import Participant
from ..registration.filter import has_registered_for_day, registered_occurrences

COUNTED_STATUSES = (RecordStatus.APPROVED, RecordStatus.PENDING)


@dataclass(frozen=True)
class CompletionResult:
    completed: int
    total: int

    @property
    def percentage(self) -> int:
        return percentage(self.completed, self.total)

    def to_dict(self) -> dict:
        return {"completed": self.completed, "total": self.total, "percentage": self.percentage}


@dataclass(frozen=True)
class SessionSummary:
    """Sessions with both check-ins counted, with only one, and all registered sessions."""

    completed: int
    partial: int
    total: int

    @property
    def fully_attended(self) -> bool:
        return self.total > 0 and self.completed == self.total

    def to_dict(self) -> dict:
        return {"completed": self.completed, "partial": self.partial, "total": self.total}


@dataclass(frozen=True)
class DaySummary:
    day_number: int
    date: date
    sessions: SessionSummary
    completion: CompletionResult

    def to_dict(self) -> dict:
        return {
            "dayNumber": self.day_number,
            "date": self.date.isoformat(),
            "sessions": self.sessions.to_dict(),
            "completion": self.completion.to_dict(),
        }


class CompletionCalculator:
    def __init__(self, *, matcher: Optional[RecordMatcher] = None):
        self._matcher = matcher or RecordMatcher()

    def _counted(
        self, activity: Activity, participant: Participant, occ: SlotOccurrence, check_in_type: CheckInType
    ) -> bool:
        record = self._matcher.find(activity, participant.records, occ.slot, check_in_type, occ.day_number)
        return record is not None and record.status in COUNTED_STATUSES

    def participant_completion(
        self, activity: Activity, participant: Participant, day_number: Optional[int] = None
    ) -> CompletionResult:
        occurrences = registered_occurrences(activity, participant, day_number)
        completed = sum(
            1
            for occ in occurrences
            for check_in_type in (CheckInType.START, CheckInType.END)
            if self._counted(activity, participant, occ, check_in_type)
        )
        return CompletionResult(completed=completed, total=2 * len(occurrences))

    def session_summary(
        self, activity: Activity, participant: Participant, day_number: Optional[int] = None
    ) -> SessionSummary:
        completed = partial = 0
        occurrences = registered_occurrences(activity, participant, day_number)
        for occ in occurrences:
            start = self._counted(activity, participant, occ, CheckInType.START)
            end = self._counted(activity, participant, occ, CheckInType.END)
            if start and end:
                completed += 1
            elif start or end:
                partial += 1
        return SessionSummary(completed=completed, partial=partial, total=len(occurrences))

    def daily_breakdown(self, activity: Activity, participant: Participant) -> List[DaySummary]:
        """Per-day figures for the days a participant registered for (empty for single-day)."""

        if not activity.is_multi_day:
            return []
        return [
            DaySummary(
                day_number=day.day_number,
                date=day.date,
                sessions=self.session_summary(activity, participant, day.day_number),
                completion=self.participant_completion(activity, participant, day.day_number),
            )
            for day in activity.schedule
            if has_registered_for_day(activity, participant, day.day_number)
        ]
