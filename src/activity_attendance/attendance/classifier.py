"""Per-record and per-participant attendance verdicts."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, Optional, Tuple

from ..activities.model import Activity, TimeSlotTemplate
from ..common.datetime_utils import now_local
from ..core.constants import AUTO_APPROVAL_MARKER, MANUAL_ENTRY_MARKERS, SYSTEM_VERIFIER_NAME
from ..core.enums import AttendanceQuality, CheckInType, RecordStatus, SlotPhase, SlotTimeStatus, TimeVerdict
from ..core.exceptions import LocationNotConfiguredError
from ..locations.validator import NO_REQUIREMENT_MESSAGE, LocationCheck, validate_location
from ..matching.record_matcher import RecordMatcher, record_day
from ..participants.model import AttendanceRecord, Participant
from ..timing.windows import DEFAULT_POLICY, TimeWindowPolicy, classify_check_in, classify_slot_phase
from .model import NO_LOCATION_MESSAGE, RecordAssessment, SlotAttendance

logger = logging.getLogger(__name__)

_PHASE_TO_STATUS = {
    SlotPhase.NOT_STARTED: SlotTimeStatus.NOT_STARTED,
    SlotPhase.IN_PROGRESS: SlotTimeStatus.IN_PROGRESS,
    SlotPhase.PAST: SlotTimeStatus.PAST,
}


@dataclass(frozen=True)
class ValidationStats:
    perfect: int = 0
    late_but_valid: int = 0
    invalid: int = 0

    def to_dict(self) -> dict:
        return {"perfect": self.perfect, "lateButValid": self.late_but_valid, "invalid": self.invalid}


def verifier_display_name(record: AttendanceRecord) -> str:
    if record.verifier and record.verifier.name:
        return record.verifier.name
    return SYSTEM_VERIFIER_NAME


class AttendanceClassifier:
    def __init__(self, *, matcher: Optional[RecordMatcher] = None, policy: TimeWindowPolicy = DEFAULT_POLICY):
        self._matcher = matcher or RecordMatcher()
        self._policy = policy

    @property
    def matcher(self) -> RecordMatcher:
        return self._matcher

    @property
    def policy(self) -> TimeWindowPolicy:
        return self._policy

    # ---- per (slot, day, type) ----

    def slot_attendance(
        self,
        activity: Activity,
        participant: Participant,
        slot: TimeSlotTemplate,
        check_in_type: CheckInType,
        day_number: Optional[int] = None,
        *,
        now: Optional[datetime] = None,
    ) -> SlotAttendance:
        on_date = activity.date_for(day_number)
        slot = activity.slot_for_day(slot, day_number)
        record = self._matcher.find(activity, participant.records, slot, check_in_type, day_number)

        if record is not None:
            check = classify_check_in(slot, on_date, check_in_type, record.check_in_time, self._policy)
            time_status = SlotTimeStatus.ON_TIME if check.verdict == TimeVerdict.ON_TIME else SlotTimeStatus.LATE
            return SlotAttendance(
                slot=slot,
                check_in_type=check_in_type,
                day_number=day_number,
                date=on_date,
                has_checked_in=True,
                time_status=time_status,
                record=record,
            )

        now = now or now_local(self._policy.zone)
        phase = classify_slot_phase(slot, on_date, check_in_type, now, self._policy)
        return SlotAttendance(
            slot=slot,
            check_in_type=check_in_type,
            day_number=day_number,
            date=on_date,
            has_checked_in=False,
            time_status=_PHASE_TO_STATUS[phase],
        )

    # ---- per record ----

    def slot_of_record(
        self, activity: Activity, record: AttendanceRecord
    ) -> Optional[Tuple[TimeSlotTemplate, Optional[int]]]:
        """The active slot (with day overrides applied) a stored record belongs to."""

        day_number = record_day(record) if activity.is_multi_day else None
        if activity.is_multi_day and activity.day(day_number) is None:
            return None

        for slot in activity.active_slots():
            if self._matcher.matching_records(activity, [record], slot, record.check_in_type, day_number):
                return activity.slot_for_day(slot, day_number), day_number
        return None

    def assess_record(self, activity: Activity, record: AttendanceRecord) -> RecordAssessment:
        found = self.slot_of_record(activity, record)
        slot, day_number = found if found else (None, record_day(record))

        if record.location is None:
            if activity.has_location_requirement():
                location = LocationCheck(valid=False, message=NO_LOCATION_MESSAGE)
            else:
                location = LocationCheck(valid=True, message=NO_REQUIREMENT_MESSAGE)
        else:
            try:
                location = validate_location(activity, record.location, slot, day_number)
            except LocationNotConfiguredError as e:
                # An unconfigured day invalidates this record only.
                logger.warning("Record %s: %s", record.record_id or record.slot_label, e)
                location = LocationCheck(valid=False, message=str(e))

        time = None
        if slot is not None:
            on_date = record.slot_date or activity.date_for(day_number)
            time = classify_check_in(slot, on_date, record.check_in_type, record.check_in_time, self._policy)

        return RecordAssessment(record=record, location=location, time=time, slot=slot, day_number=day_number)

    def is_manual_entry(
        self, activity: Activity, record: AttendanceRecord, assessment: Optional[RecordAssessment] = None
    ) -> bool:
        """Officer-entered rather than self check-in.

        Self check-ins need both a valid location and a photo, so an accepted
        record missing either was put there by an officer unless it carries
        the auto-approval marker.
        """

        note = (record.note or "").casefold()
        if any(marker.casefold() in note for marker in MANUAL_ENTRY_MARKERS):
            return True
        if record.status not in (RecordStatus.APPROVED, RecordStatus.PENDING):
            return False
        if AUTO_APPROVAL_MARKER.casefold() in note:
            return False

        assessment = assessment or self.assess_record(activity, record)
        return not assessment.location_valid or not record.has_photo

    # ---- per participant ----

    def classify_participant(self, activity: Activity, participant: Participant) -> AttendanceQuality:
        records = participant.records
        if not records:
            return AttendanceQuality.NOT_CHECKED_IN

        approved = [r for r in records if r.status == RecordStatus.APPROVED]
        pending = [self.assess_record(activity, r) for r in records if r.status == RecordStatus.PENDING]

        if approved:
            assessed = [self.assess_record(activity, r) for r in approved]
            if all(a.on_time and a.location_valid for a in assessed):
                return AttendanceQuality.PERFECT
            if any(a.location_valid and a.in_late_window for a in [*assessed, *pending]):
                return AttendanceQuality.LATE_BUT_VALID
            # Officer approval stands even when the record fails validation.
            return AttendanceQuality.PERFECT

        if any(r.status == RecordStatus.REJECTED for r in records):
            return AttendanceQuality.INVALID_LOCATION

        if not pending:
            return AttendanceQuality.NOT_CHECKED_IN

        bad_location = any(not a.location_valid for a in pending)
        bad_time = any(not a.time_valid for a in pending)
        late_valid = any(a.location_valid and a.in_late_window for a in pending)

        if bad_location and bad_time:
            return AttendanceQuality.INVALID_BOTH
        if bad_location:
            return AttendanceQuality.INVALID_LOCATION
        if late_valid:
            return AttendanceQuality.LATE_BUT_VALID
        if bad_time:
            return AttendanceQuality.INVALID_TIME
        return AttendanceQuality.LATE_BUT_VALID

    def has_manual_entries(self, activity: Activity, participant: Participant) -> bool:
        return any(self.is_manual_entry(activity, r) for r in participant.records)


def validation_stats(qualities: Iterable[AttendanceQuality]) -> ValidationStats:
    counts: Dict[AttendanceQuality, int] = Counter(qualities)
    return ValidationStats(
        perfect=counts[AttendanceQuality.PERFECT],
        late_but_valid=counts[AttendanceQuality.LATE_BUT_VALID],
        invalid=sum(n for q, n in counts.items() if q.is_invalid),
    )
