"""Threshold editor as a pure reducer: (config, edit) -> config.

Every edit is accepted. The edited bound is clamped into the range where a
consistent configuration still exists, then neighbours are pushed up (above)
or down (below) until the ordering holds again.
"""

from __future__ import annotations

from typing import Any, List, Mapping

from ..common.math_utils import clamp, round_half_up
from ..common.validators import require_finite_number
from ..core.constants import PERCENT_MAX, PERCENT_MIN
from ..core.enums import ThresholdBound, ThresholdBucket
from ..core.exceptions import ValidationError
from .model import ThresholdConfig, ThresholdEdit

# Required distance between bound i-1 and bound i (strict between ranges, <= inside one).
_GAP = (0, 0, 1, 0, 1, 0)
# Feasible interval of each bound once the other five are free to move.
_LOWEST = (0, 0, 1, 1, 2, 2)
_HIGHEST = (98, 98, 99, 99, 100, 100)


def _clamped(b: List[int]) -> List[int]:
    return [clamp(v, max(PERCENT_MIN, lo), min(PERCENT_MAX, hi)) for v, lo, hi in zip(b, _LOWEST, _HIGHEST)]


def _push_up(b: List[int], start: int) -> None:
    for j in range(start + 1, len(b)):
        b[j] = max(b[j], b[j - 1] + _GAP[j])


def _push_down(b: List[int], start: int) -> None:
    for j in range(start - 1, -1, -1):
        b[j] = min(b[j], b[j + 1] - _GAP[j + 1])


def apply_edit(config: ThresholdConfig, edit: ThresholdEdit) -> ThresholdConfig:
    b = _clamped(list(config.bounds()))
    i = edit.index
    b[i] = clamp(edit.value, _LOWEST[i], _HIGHEST[i])
    _push_up(b, i)
    _push_down(b, i)
    return ThresholdConfig.from_bounds(b)


def normalize(config: ThresholdConfig) -> ThresholdConfig:
    """Repair an arbitrary (e.g. stored) configuration into a consistent one."""

    b = _clamped(list(config.bounds()))
    _push_up(b, 0)
    return ThresholdConfig.from_bounds(b)


def parse_edit(payload: Mapping[str, Any]) -> ThresholdEdit:
    try:
        bucket = ThresholdBucket(str(payload.get("range", "")).strip().lower())
        bound = ThresholdBound(str(payload.get("bound", "")).strip().lower())
    except ValueError:
        raise ValidationError("Tên ngưỡng không hợp lệ (range: full|incomplete|insufficient, bound: min|max)") from None

    value = round_half_up(require_finite_number(payload.get("value"), "Giá trị ngưỡng"))
    return ThresholdEdit(bucket=bucket, bound=bound, value=value)
