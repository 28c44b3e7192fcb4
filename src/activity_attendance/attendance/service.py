from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from ..activities.model import Activity, TimeSlotTemplate
from ..activities.slots import day_from_label, strip_day_prefix
from ..common.datetime_utils import format_minutes
from ..completion.calculator import CompletionCalculator, CompletionResult, DaySummary, SessionSummary
from ..core.enums import AttendanceQuality, ThresholdBucket
from ..core.exceptions import ValidationError
from ..locations.validator import NO_REQUIREMENT_MESSAGE, LocationCheck, validate_location
from ..missing.calculator import ManualCheckInPayload, MissingCheckIn, build_manual_payloads, missing_check_ins
from ..participants.model import Participant
from ..thresholds.model import ThresholdConfig
from ..thresholds.service import bucket_totals
from ..timing.windows import check_in_windows, classify_check_in
from .classifier import AttendanceClassifier, ValidationStats, validation_stats, verifier_display_name
from .factory import SubmissionStrategyFactory
from .model import NO_LOCATION_MESSAGE, CheckInAttempt, CheckInEvaluation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParticipantSummary:
    participant: Participant
    quality: AttendanceQuality
    has_manual_entries: bool
    completion: CompletionResult
    sessions: SessionSummary
    bucket: Optional[ThresholdBucket]
    days: Tuple[DaySummary, ...] = ()
    records: Tuple[dict, ...] = ()

    def to_dict(self) -> dict:
        return {
            "participantId": self.participant.participant_id,
            "name": self.participant.name,
            "email": self.participant.email,
            "role": self.participant.role,
            "quality": self.quality.value,
            "hasManualEntries": self.has_manual_entries,
            "completion": self.completion.to_dict(),
            "sessions": self.sessions.to_dict(),
            "bucket": self.bucket.value if self.bucket else None,
            "days": [d.to_dict() for d in self.days],
            "records": list(self.records),
        }


@dataclass(frozen=True)
class ActivitySummary:
    participants: Tuple[ParticipantSummary, ...]
    bucket_totals: dict
    stats: ValidationStats
    thresholds: ThresholdConfig

    def to_dict(self) -> dict:
        return {
            "participants": [p.to_dict() for p in self.participants],
            "bucketTotals": self.bucket_totals,
            "validationStats": self.stats.to_dict(),
            "thresholds": self.thresholds.to_dict(),
        }


class AttendanceService:
    def __init__(
        self,
        *,
        classifier: AttendanceClassifier | None = None,
        completion: CompletionCalculator | None = None,
        strategy_factory: SubmissionStrategyFactory | None = None,
    ):
        self._classifier = classifier or AttendanceClassifier()
        self._completion = completion or CompletionCalculator(matcher=self._classifier.matcher)
        self._factory = strategy_factory or SubmissionStrategyFactory()

    def _resolve_slot(self, activity: Activity, attempt: CheckInAttempt) -> Tuple[TimeSlotTemplate, Optional[int]]:
        slot = activity.find_slot(attempt.slot_name) or activity.find_slot(strip_day_prefix(attempt.slot_name))
        if slot is None:
            raise ValidationError(f"Không tìm thấy buổi '{attempt.slot_name}' trong hoạt động")

        day_number = None
        if activity.is_multi_day:
            day_number = attempt.day_number if attempt.day_number is not None else day_from_label(attempt.slot_name)
            if day_number is None:
                raise ValidationError("Hoạt động nhiều ngày cần chỉ rõ số ngày điểm danh")
        return activity.slot_for_day(slot, day_number), day_number

    def evaluate_check_in(self, activity: Activity, attempt: CheckInAttempt) -> CheckInEvaluation:
        """Time and location verdicts for a submitted check-in, plus its initial status."""

        slot, day_number = self._resolve_slot(activity, attempt)
        on_date = activity.date_for(day_number)
        time = classify_check_in(slot, on_date, attempt.check_in_type, attempt.at, self._classifier.policy)

        if attempt.location is not None:
            location = validate_location(activity, attempt.location, slot, day_number)
        elif activity.has_location_requirement():
            location = LocationCheck(valid=False, message=NO_LOCATION_MESSAGE)
        else:
            location = LocationCheck(valid=True, message=NO_REQUIREMENT_MESSAGE)

        strategy = self._factory.for_attempt(attempt=attempt, time=time, location=location)
        decision = strategy.decide(attempt=attempt, time=time, location=location)
        logger.debug(
            "Check-in %s/%s day=%s: time=%s location=%s -> %s",
            slot.name,
            attempt.check_in_type.value,
            day_number,
            time.verdict.value,
            location.valid,
            decision.status.value,
        )
        return CheckInEvaluation(slot=slot, day_number=day_number, time=time, location=location, decision=decision)

    def windows_for(self, activity: Activity, attempt: CheckInAttempt) -> dict:
        slot, day_number = self._resolve_slot(activity, attempt)
        windows = check_in_windows(slot, activity.date_for(day_number), attempt.check_in_type, self._classifier.policy)
        return windows.to_dict()

    def missing(
        self,
        activity: Activity,
        participant: Participant,
        *,
        day_number: Optional[int] = None,
        now: Optional[datetime] = None,
        note: Optional[str] = None,
    ) -> Tuple[List[MissingCheckIn], List[ManualCheckInPayload]]:
        entries = missing_check_ins(
            activity, participant, classifier=self._classifier, day_number=day_number, now=now
        )
        payloads = build_manual_payloads(activity, participant.participant_id, entries, note=note)
        return entries, payloads

    def _record_rows(self, activity: Activity, participant: Participant) -> Tuple[dict, ...]:
        rows = []
        for record in participant.records:
            assessment = self._classifier.assess_record(activity, record)
            rows.append(
                {
                    "id": record.record_id,
                    "slot": record.slot_label,
                    "dayNumber": assessment.day_number,
                    "checkInType": record.check_in_type.value,
                    "checkInTime": record.check_in_time.isoformat(),
                    "status": record.status.value,
                    "verifiedBy": verifier_display_name(record),
                    "isManual": self._classifier.is_manual_entry(activity, record, assessment),
                    "location": assessment.location.to_dict(),
                    "time": {
                        "valid": assessment.time_valid,
                        "verdict": assessment.time.verdict.value if assessment.time else None,
                        "message": assessment.time_message,
                        "offset": format_minutes(assessment.time.minutes) if assessment.time else None,
                    },
                }
            )
        return tuple(rows)

    def participant_summary(
        self, activity: Activity, participant: Participant, thresholds: ThresholdConfig
    ) -> ParticipantSummary:
        completion = self._completion.participant_completion(activity, participant)
        return ParticipantSummary(
            participant=participant,
            quality=self._classifier.classify_participant(activity, participant),
            has_manual_entries=self._classifier.has_manual_entries(activity, participant),
            completion=completion,
            sessions=self._completion.session_summary(activity, participant),
            bucket=thresholds.bucket_for(completion.percentage),
            days=tuple(self._completion.daily_breakdown(activity, participant)),
            records=self._record_rows(activity, participant),
        )

    def activity_summary(
        self, activity: Activity, participants: Sequence[Participant], thresholds: ThresholdConfig
    ) -> ActivitySummary:
        summaries = tuple(self.participant_summary(activity, p, thresholds) for p in participants)
        return ActivitySummary(
            participants=summaries,
            bucket_totals=bucket_totals(thresholds, (s.completion.percentage for s in summaries)),
            stats=validation_stats(s.quality for s in summaries),
            thresholds=thresholds,
        )
