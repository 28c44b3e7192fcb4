import logging

from activity_attendance.thresholds.migration import is_legacy, load_thresholds
from activity_attendance.thresholds.model import DEFAULT_THRESHOLDS, ThresholdRange


def test_empty_payload_gives_defaults():
    assert load_thresholds(None) == DEFAULT_THRESHOLDS
    assert load_thresholds({}) == DEFAULT_THRESHOLDS


def test_legacy_lower_bounds_are_migrated():
    payload = {"full": 85, "incomplete": 50, "insufficient": 0}

    config = load_thresholds(payload)

    assert is_legacy(payload)
    assert config.full == ThresholdRange(min=85, max=100)
    assert config.incomplete == ThresholdRange(min=50, max=84)
    assert config.insufficient == ThresholdRange(min=0, max=49)


def test_range_payload_is_read_as_is():
    payload = {
        "full": {"min": 90, "max": 100},
        "incomplete": {"min": 50, "max": 80},
        "insufficient": {"min": 0, "max": 40},
    }

    config = load_thresholds(payload)

    assert not is_legacy(payload)
    assert config.to_dict() == payload


def test_missing_bounds_fall_back_per_field():
    config = load_thresholds({"full": {"min": 85}})

    assert config.full == ThresholdRange(min=85, max=100)
    assert config.incomplete == DEFAULT_THRESHOLDS.incomplete


def test_overlapping_payload_is_repaired(caplog):
    payload = {
        "full": {"min": 70, "max": 100},
        "incomplete": {"min": 60, "max": 90},
        "insufficient": {"min": 0, "max": 59},
    }

    with caplog.at_level(logging.INFO):
        config = load_thresholds(payload)

    assert config.is_consistent()
    assert config.full == ThresholdRange(min=91, max=100)
    assert "Repaired" in caplog.text


def test_malformed_payload_falls_back_to_defaults(caplog):
    with caplog.at_level(logging.WARNING):
        assert load_thresholds({"full": "abc", "incomplete": 60}) == DEFAULT_THRESHOLDS
        assert load_thresholds({"full": {"min": "x"}}) == DEFAULT_THRESHOLDS

    assert "malformed" in caplog.text
