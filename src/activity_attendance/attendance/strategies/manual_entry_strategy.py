from __future__ import annotations

from ...core.constants import MANUAL_ENTRY_NOTE
from ...core.enums import RecordStatus
from ...locations.validator import LocationCheck
from ...timing.windows import TimeCheck
from .base import SubmissionDecision, SubmissionStrategy


class ManualEntryStrategy(SubmissionStrategy):
    """Officer entered the check-in on the participant's behalf."""

    def decide(self, *, attempt, time: TimeCheck, location: LocationCheck) -> SubmissionDecision:
        return SubmissionDecision(status=RecordStatus.APPROVED, note=MANUAL_ENTRY_NOTE)
