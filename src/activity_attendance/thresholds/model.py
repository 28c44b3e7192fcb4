from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..core.enums import ThresholdBound, ThresholdBucket

# Bounds are handled as one ordered 6-tuple:
# insufficient.min, insufficient.max, incomplete.min, incomplete.max, full.min, full.max
BOUND_ORDER: Tuple[Tuple[ThresholdBucket, ThresholdBound], ...] = (
    (ThresholdBucket.INSUFFICIENT, ThresholdBound.MIN),
    (ThresholdBucket.INSUFFICIENT, ThresholdBound.MAX),
    (ThresholdBucket.INCOMPLETE, ThresholdBound.MIN),
    (ThresholdBucket.INCOMPLETE, ThresholdBound.MAX),
    (ThresholdBucket.FULL, ThresholdBound.MIN),
    (ThresholdBucket.FULL, ThresholdBound.MAX),
)


@dataclass(frozen=True)
class ThresholdRange:
    min: int
    max: int

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max}


@dataclass(frozen=True)
class ThresholdConfig:
    """Thực thể miền (domain): Ngưỡng phân loại mức độ hoàn thành.

    Always satisfies insufficient.max < incomplete.min <= incomplete.max < full.min <= full.max
    when produced by the editor. Gaps between ranges are allowed.
    """

    full: ThresholdRange
    incomplete: ThresholdRange
    insufficient: ThresholdRange

    def range_for(self, bucket: ThresholdBucket) -> ThresholdRange:
        return {
            ThresholdBucket.FULL: self.full,
            ThresholdBucket.INCOMPLETE: self.incomplete,
            ThresholdBucket.INSUFFICIENT: self.insufficient,
        }[bucket]

    def bounds(self) -> Tuple[int, ...]:
        return tuple(getattr(self.range_for(bucket), bound.value) for bucket, bound in BOUND_ORDER)

    @classmethod
    def from_bounds(cls, b) -> "ThresholdConfig":
        return cls(
            insufficient=ThresholdRange(min=b[0], max=b[1]),
            incomplete=ThresholdRange(min=b[2], max=b[3]),
            full=ThresholdRange(min=b[4], max=b[5]),
        )

    def is_consistent(self) -> bool:
        b = self.bounds()
        return all(0 <= v <= 100 for v in b) and b[0] <= b[1] < b[2] <= b[3] < b[4] <= b[5]

    def bucket_for(self, value: int) -> Optional[ThresholdBucket]:
        """First range, from the highest, containing the value; None inside a gap."""

        for bucket in ThresholdBucket:
            if self.range_for(bucket).contains(value):
                return bucket
        return None

    def to_dict(self) -> Dict[str, dict]:
        return {bucket.value: self.range_for(bucket).to_dict() for bucket in ThresholdBucket}


DEFAULT_THRESHOLDS = ThresholdConfig(
    full=ThresholdRange(min=80, max=100),
    incomplete=ThresholdRange(min=60, max=79),
    insufficient=ThresholdRange(min=0, max=59),
)


@dataclass(frozen=True)
class ThresholdEdit:
    bucket: ThresholdBucket
    bound: ThresholdBound
    value: int

    @property
    def index(self) -> int:
        return BOUND_ORDER.index((self.bucket, self.bound))
