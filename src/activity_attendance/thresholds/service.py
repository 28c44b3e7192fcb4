from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, Iterable, Optional

from ..core.enums import ThresholdBucket
from ..core.exceptions import ValidationError
from .editor import apply_edit
from .migration import load_thresholds
from .model import DEFAULT_THRESHOLDS, ThresholdConfig, ThresholdEdit
from .repository import ThresholdRepository

logger = logging.getLogger(__name__)


class ThresholdService:
    def __init__(self, repository: ThresholdRepository):
        self._repository = repository

    def load(self, activity_id: str) -> ThresholdConfig:
        if not str(activity_id or "").strip():
            raise ValidationError("Mã hoạt động không hợp lệ")
        return load_thresholds(self._repository.get(activity_id))

    def edit(self, activity_id: str, edit: ThresholdEdit) -> ThresholdConfig:
        current = self.load(activity_id)
        updated = apply_edit(current, edit)
        self._repository.save(activity_id, updated.to_dict())
        logger.info(
            "Thresholds of activity %s: %s.%s=%s -> %s",
            activity_id,
            edit.bucket.value,
            edit.bound.value,
            edit.value,
            updated.to_dict(),
        )
        return updated

    def reset(self, activity_id: str) -> ThresholdConfig:
        self._repository.save(activity_id, DEFAULT_THRESHOLDS.to_dict())
        return DEFAULT_THRESHOLDS


def bucket_totals(config: ThresholdConfig, percentages: Iterable[int]) -> Dict[str, int]:
    """Participants per bucket; percentages inside a gap are not counted anywhere."""

    counts: Dict[Optional[ThresholdBucket], int] = Counter(config.bucket_for(p) for p in percentages)
    return {bucket.value: counts[bucket] for bucket in ThresholdBucket}
