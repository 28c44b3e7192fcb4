from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol, Tuple

from ..core.exceptions import PersistenceFailure
from .calculator import ManualCheckInPayload

logger = logging.getLogger(__name__)


class CheckInGateway(Protocol):
    """Attendance store endpoint that accepts one check-in."""

    def submit(self, payload: ManualCheckInPayload) -> None:
        """Raise PersistenceFailure when the store refuses the check-in."""

        raise NotImplementedError


@dataclass(frozen=True)
class SubmissionOutcome:
    payload: ManualCheckInPayload
    success: bool
    message: Optional[str] = None


@dataclass(frozen=True)
class BatchResult:
    outcomes: Tuple[SubmissionOutcome, ...]

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.success)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def failures(self) -> List[SubmissionOutcome]:
        return [o for o in self.outcomes if not o.success]

    @property
    def summary(self) -> str:
        return f"{self.succeeded}/{self.total}"


class BatchSubmitter:
    """Submits payloads one by one; a failed item never stops the rest."""

    def __init__(self, gateway: CheckInGateway):
        self._gateway = gateway

    def submit_all(self, payloads: Iterable[ManualCheckInPayload]) -> BatchResult:
        outcomes: List[SubmissionOutcome] = []
        for payload in payloads:
            try:
                self._gateway.submit(payload)
            except PersistenceFailure as e:
                logger.warning(
                    "Manual check-in failed for %s (%s, %s): %s",
                    payload.participant_id,
                    payload.slot_label,
                    payload.check_in_type.value,
                    e,
                )
                outcomes.append(SubmissionOutcome(payload=payload, success=False, message=str(e)))
                continue
            outcomes.append(SubmissionOutcome(payload=payload, success=True))

        result = BatchResult(outcomes=tuple(outcomes))
        logger.info("Manual check-in batch: %s succeeded", result.summary)
        return result
