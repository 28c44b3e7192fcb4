from __future__ import annotations

from ...activities.slots import normalize_label, strip_day_prefix, strip_parentheses
from .base import LabelMatcher


class SubstringMatcher(LabelMatcher):
    """Last resort: one name contains the other."""

    name = "substring"

    def matches(self, *, label: str, slot_name: str) -> bool:
        a = normalize_label(strip_parentheses(strip_day_prefix(label)))
        b = normalize_label(strip_parentheses(slot_name))
        if not a or not b:
            return False
        return a in b or b in a
