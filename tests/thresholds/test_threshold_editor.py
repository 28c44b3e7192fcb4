import random

import pytest

from activity_attendance.core.enums import ThresholdBound, ThresholdBucket
from activity_attendance.core.exceptions import ValidationError
from activity_attendance.thresholds.editor import apply_edit, normalize, parse_edit
from activity_attendance.thresholds.model import (
    DEFAULT_THRESHOLDS,
    ThresholdConfig,
    ThresholdEdit,
    ThresholdRange,
)


def _edit(bucket, bound, value):
    return ThresholdEdit(bucket=ThresholdBucket(bucket), bound=ThresholdBound(bound), value=value)


def test_raising_incomplete_max_pushes_full_min_up():
    config = apply_edit(DEFAULT_THRESHOLDS, _edit("incomplete", "max", 85))

    assert config.incomplete == ThresholdRange(min=60, max=85)
    assert config.full == ThresholdRange(min=86, max=100)
    assert config.insufficient == ThresholdRange(min=0, max=59)


def test_lowering_full_min_pushes_incomplete_down():
    config = apply_edit(DEFAULT_THRESHOLDS, _edit("full", "min", 50))

    assert config.full == ThresholdRange(min=50, max=100)
    assert config.incomplete == ThresholdRange(min=49, max=49)
    assert config.insufficient == ThresholdRange(min=0, max=48)


def test_raising_insufficient_max_pushes_incomplete_up():
    config = apply_edit(DEFAULT_THRESHOLDS, _edit("insufficient", "max", 70))

    assert config.insufficient.max == 70
    assert config.incomplete == ThresholdRange(min=71, max=79)
    assert config.full == DEFAULT_THRESHOLDS.full


def test_lowering_incomplete_min_pushes_insufficient_down():
    config = apply_edit(DEFAULT_THRESHOLDS, _edit("incomplete", "min", 30))

    assert config.insufficient == ThresholdRange(min=0, max=29)
    assert config.incomplete == ThresholdRange(min=30, max=79)


def test_values_are_clamped():
    high = apply_edit(DEFAULT_THRESHOLDS, _edit("full", "max", 150))
    low = apply_edit(DEFAULT_THRESHOLDS, _edit("insufficient", "min", -20))
    squeezed = apply_edit(DEFAULT_THRESHOLDS, _edit("insufficient", "max", 100))

    assert high.full.max == 100
    assert low.insufficient.min == 0
    assert squeezed.bounds() == (0, 98, 99, 99, 100, 100)


def test_gaps_are_allowed():
    config = apply_edit(DEFAULT_THRESHOLDS, _edit("incomplete", "max", 70))

    assert config.incomplete.max == 70
    assert config.full.min == 80
    assert config.bucket_for(75) is None


def test_invariant_holds_after_random_edits():
    rng = random.Random(20250310)
    config = DEFAULT_THRESHOLDS
    for _ in range(500):
        config = apply_edit(
            config,
            _edit(rng.choice(list(ThresholdBucket)).value, rng.choice(list(ThresholdBound)).value, rng.randint(-20, 120)),
        )
        assert config.is_consistent(), config


def test_bucket_assignment_starts_from_the_highest_range():
    assert DEFAULT_THRESHOLDS.bucket_for(100) == ThresholdBucket.FULL
    assert DEFAULT_THRESHOLDS.bucket_for(80) == ThresholdBucket.FULL
    assert DEFAULT_THRESHOLDS.bucket_for(79) == ThresholdBucket.INCOMPLETE
    assert DEFAULT_THRESHOLDS.bucket_for(0) == ThresholdBucket.INSUFFICIENT


def test_normalize_repairs_overlaps():
    broken = ThresholdConfig(
        full=ThresholdRange(min=70, max=100),
        incomplete=ThresholdRange(min=60, max=90),
        insufficient=ThresholdRange(min=0, max=65),
    )

    repaired = normalize(broken)

    assert repaired.is_consistent()
    assert repaired.insufficient == ThresholdRange(min=0, max=65)
    assert repaired.incomplete == ThresholdRange(min=66, max=90)
    assert repaired.full == ThresholdRange(min=91, max=100)


def test_parse_edit():
    edit = parse_edit({"range": "Full", "bound": "min", "value": "85.5"})

    assert edit == ThresholdEdit(bucket=ThresholdBucket.FULL, bound=ThresholdBound.MIN, value=86)
    with pytest.raises(ValidationError):
        parse_edit({"range": "perfect", "bound": "min", "value": 1})
    with pytest.raises(ValidationError):
        parse_edit({"range": "full", "bound": "min", "value": "abc"})
