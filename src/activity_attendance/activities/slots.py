"""Slot naming helpers.

Slot names reach the engine in several shapes: "Buổi Sáng", "morning",
"Ngày 2 - Buổi Sáng", "Day 2 - Morning", "Buổi Sáng (08:00-11:30)".
"""

from __future__ import annotations

import re
import unicodedata
from typing import Optional

from ..core.enums import SlotSemantic

SEMANTIC_DISPLAY_NAMES = {
    SlotSemantic.MORNING: "Buổi Sáng",
    SlotSemantic.AFTERNOON: "Buổi Chiều",
    SlotSemantic.EVENING: "Buổi Tối",
}

_SEMANTIC_KEYWORDS = (
    (SlotSemantic.MORNING, ("sáng", "morning")),
    (SlotSemantic.AFTERNOON, ("chiều", "afternoon")),
    (SlotSemantic.EVENING, ("tối", "evening")),
)

_DAY_RE = re.compile(r"\b(?:ngày|day)\s*(\d+)", re.IGNORECASE)
_DAY_PREFIX_RE = re.compile(r"^\s*(?:ngày|day)\s*\d+\s*-\s*", re.IGNORECASE)
_PARENTHESES_RE = re.compile(r"\s*\([^)]*\)\s*")


def normalize_label(value: Optional[str]) -> str:
    return unicodedata.normalize("NFC", value or "").strip().casefold()


def slot_semantic(name: Optional[str]) -> Optional[SlotSemantic]:
    text = normalize_label(name)
    if not text:
        return None
    for semantic, keywords in _SEMANTIC_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return semantic
    return None


def slot_key(name: Optional[str]) -> str:
    """Comparison key: the semantic when one is recognisable, else the normalised name."""
    semantic = slot_semantic(name)
    return semantic.value if semantic else normalize_label(name)


def day_from_label(label: Optional[str]) -> Optional[int]:
    match = _DAY_RE.search(unicodedata.normalize("NFC", label or ""))
    return int(match.group(1)) if match else None


def strip_day_prefix(label: Optional[str]) -> str:
    return _DAY_PREFIX_RE.sub("", unicodedata.normalize("NFC", label or "")).strip()


def strip_parentheses(label: Optional[str]) -> str:
    return _PARENTHESES_RE.sub(" ", label or "").strip()


def day_qualified_label(day_number: Optional[int], slot_name: str) -> str:
    if day_number is None:
        return slot_name
    return f"Ngày {day_number} - {slot_name}"
