from __future__ import annotations

from ...activities.slots import slot_semantic, strip_day_prefix, strip_parentheses
from .base import LabelMatcher


class SemanticMatcher(LabelMatcher):
    """Legacy labels: 'Buổi Sáng (08:00-11:30)' or 'morning' match any morning slot."""

    name = "semantic"

    def matches(self, *, label: str, slot_name: str) -> bool:
        label_semantic = slot_semantic(strip_parentheses(strip_day_prefix(label)))
        return label_semantic is not None and label_semantic == slot_semantic(slot_name)
