"""Reading stored threshold preferences.

Two stored shapes exist::

    {"full": {"min": 80, "max": 100}, "incomplete": {...}, "insufficient": {...}}
    {"full": 80, "incomplete": 60, "insufficient": 0}      # legacy: lower bounds only
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..common.math_utils import round_half_up
from ..common.validators import require_finite_number
from ..core.constants import PERCENT_MAX
from ..core.enums import ThresholdBucket
from ..core.exceptions import ValidationError
from .editor import normalize
from .model import DEFAULT_THRESHOLDS, ThresholdConfig, ThresholdRange

logger = logging.getLogger(__name__)


def _number(value: Any, name: str) -> int:
    return round_half_up(require_finite_number(value, name))


def is_legacy(payload: Mapping[str, Any]) -> bool:
    return all(not isinstance(payload.get(b.value), Mapping) for b in ThresholdBucket)


def _from_legacy(payload: Mapping[str, Any]) -> ThresholdConfig:
    full = _number(payload.get("full"), "full")
    incomplete = _number(payload.get("incomplete"), "incomplete")
    insufficient = _number(payload.get("insufficient", 0), "insufficient")
    return ThresholdConfig(
        full=ThresholdRange(min=full, max=PERCENT_MAX),
        incomplete=ThresholdRange(min=incomplete, max=full - 1),
        insufficient=ThresholdRange(min=insufficient, max=incomplete - 1),
    )


def _from_ranges(payload: Mapping[str, Any]) -> ThresholdConfig:
    ranges = {}
    for bucket in ThresholdBucket:
        default = DEFAULT_THRESHOLDS.range_for(bucket)
        raw = payload.get(bucket.value) or {}
        ranges[bucket.value] = ThresholdRange(
            min=_number(raw.get("min", default.min), f"{bucket.value}.min"),
            max=_number(raw.get("max", default.max), f"{bucket.value}.max"),
        )
    return ThresholdConfig(**ranges)


def load_thresholds(payload: Optional[Mapping[str, Any]]) -> ThresholdConfig:
    """Stored payload -> consistent config. Unreadable payloads fall back to defaults."""

    if not payload:
        return DEFAULT_THRESHOLDS
    try:
        if is_legacy(payload):
            logger.info("Migrating legacy single-number threshold preferences")
            config = _from_legacy(payload)
        else:
            config = _from_ranges(payload)
    except (ValidationError, AttributeError) as e:
        logger.warning("Ignoring malformed threshold preferences %r: %s", payload, e)
        return DEFAULT_THRESHOLDS

    repaired = normalize(config)
    if repaired != config:
        logger.info("Repaired stored threshold preferences %s -> %s", config.to_dict(), repaired.to_dict())
    return repaired
