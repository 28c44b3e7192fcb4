from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import TimeVerdict
from ..locations.validator import LocationCheck
from ..timing.windows import TimeCheck
from .model import CheckInAttempt
from .strategies.auto_approve_strategy import AutoApproveStrategy
from .strategies.base import SubmissionStrategy
from .strategies.manual_entry_strategy import ManualEntryStrategy
from .strategies.reject_strategy import RejectStrategy
from .strategies.review_strategy import ReviewStrategy


@dataclass
class SubmissionStrategyFactory:
    """Factory Pattern: choose the decision rule for a submitted check-in."""

    def for_attempt(self, *, attempt: CheckInAttempt, time: TimeCheck, location: LocationCheck) -> SubmissionStrategy:
        if attempt.entered_by_officer:
            return ManualEntryStrategy()
        if not location.valid or not time.valid:
            return RejectStrategy()

        if time.verdict == TimeVerdict.ON_TIME:
            return AutoApproveStrategy() if attempt.has_photo else ReviewStrategy()
        if attempt.has_photo:
            return ReviewStrategy()
        return RejectStrategy()
