from __future__ import annotations

from ...core.enums import RecordStatus
from ...locations.validator import LocationCheck
from ...timing.windows import TimeCheck
from .base import SubmissionDecision, SubmissionStrategy


class ReviewStrategy(SubmissionStrategy):
    """Acceptable but needs an officer: late window, or no photo."""

    def decide(self, *, attempt, time: TimeCheck, location: LocationCheck) -> SubmissionDecision:
        if time.requires_review:
            return SubmissionDecision(status=RecordStatus.PENDING, reason=time.message)
        return SubmissionDecision(status=RecordStatus.PENDING, reason="Chưa có ảnh điểm danh")
