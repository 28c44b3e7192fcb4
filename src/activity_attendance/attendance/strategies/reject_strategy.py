from __future__ import annotations

from ...core.enums import RecordStatus
from ...locations.validator import LocationCheck
from ...timing.windows import TimeCheck
from .base import SubmissionDecision, SubmissionStrategy


class RejectStrategy(SubmissionStrategy):
    """Wrong place, wrong time, or late without a photo."""

    def decide(self, *, attempt, time: TimeCheck, location: LocationCheck) -> SubmissionDecision:
        if not location.valid:
            return SubmissionDecision(status=RecordStatus.REJECTED, reason=location.message)
        if not time.valid:
            return SubmissionDecision(status=RecordStatus.REJECTED, reason=time.message)
        return SubmissionDecision(status=RecordStatus.REJECTED, reason="Điểm danh trễ cần có ảnh minh chứng")
