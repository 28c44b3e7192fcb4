from __future__ import annotations

from ...activities.slots import normalize_label, strip_day_prefix
from .base import LabelMatcher


class DayQualifiedMatcher(LabelMatcher):
    """'Ngày 2 - Buổi Sáng' / 'Day 2 - Morning' matches 'Buổi Sáng' / 'Morning'.

    The day number itself is checked by the record matcher before any label strategy runs.
    """

    name = "day_qualified"

    def matches(self, *, label: str, slot_name: str) -> bool:
        stripped = strip_day_prefix(label)
        if normalize_label(stripped) == normalize_label(label):
            return False
        return normalize_label(stripped) == normalize_label(strip_day_prefix(slot_name))
