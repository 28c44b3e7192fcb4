from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ...core.enums import RecordStatus
from ...locations.validator import LocationCheck
from ...timing.windows import TimeCheck

if TYPE_CHECKING:
    from ..model import CheckInAttempt


@dataclass(frozen=True)
class SubmissionDecision:
    status: RecordStatus
    note: Optional[str] = None
    reason: Optional[str] = None


class SubmissionStrategy(ABC):
    """Strategy Pattern: decide the initial status of a submitted check-in."""

    @abstractmethod
    def decide(self, *, attempt: "CheckInAttempt", time: TimeCheck, location: LocationCheck) -> SubmissionDecision:
        raise NotImplementedError
