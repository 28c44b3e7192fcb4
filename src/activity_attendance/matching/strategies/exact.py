from __future__ import annotations

from ...activities.slots import normalize_label
from .base import LabelMatcher


class ExactMatcher(LabelMatcher):
    """Label equals the slot name."""

    name = "exact"

    def matches(self, *, label: str, slot_name: str) -> bool:
        return normalize_label(label) == normalize_label(slot_name)
