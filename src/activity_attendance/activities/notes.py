"""Parsing of the free-text notes attached to a multi-day schedule day.

Organisers write lines such as::

    Buổi Chiều (14:28-17:00) - Địa điểm map: Hội trường A (10.97549, 106.68699) - Bán kính: 200m

which carry both a per-day slot time override and a geofence.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Tuple

from ..common.validators import require_finite_number
from ..core.constants import DEFAULT_GEOFENCE_RADIUS_METERS
from ..core.exceptions import InvalidLocationDataError
from .geofence import Geofence
from .slots import normalize_label, slot_semantic

logger = logging.getLogger(__name__)

_SLOT_TIMES_RE = re.compile(
    r"^\s*(?P<name>[^(\n]+?)\s*\(\s*(?P<start>\d{1,2}:\d{2})\s*-\s*(?P<end>\d{1,2}:\d{2})\s*\)"
)

_GEOFENCE_RE = re.compile(
    r"(?:Địa điểm map|Location)\s*:\s*(?P<address>[^\n]*?)\s*"
    r"\(\s*(?P<lat>[^,()\n]+?)\s*,\s*(?P<lng>[^,()\n]+?)\s*\)"
    r"(?:[^\n]*?(?:Bán kính|Radius)\s*:\s*(?P<radius>[\d.]+)\s*m)?",
    re.IGNORECASE,
)


def _lines(notes: Optional[str]):
    return [line for line in (notes or "").splitlines() if line.strip()]


def _line_head(line: str) -> str:
    return line.split("(")[0].split(" - ")[0]


def _mentions_slot(line: str, slot_name: str) -> bool:
    if normalize_label(slot_name) and normalize_label(slot_name) in normalize_label(line):
        return True
    semantic = slot_semantic(slot_name)
    return semantic is not None and slot_semantic(_line_head(line)) == semantic


def parse_slot_times(notes: Optional[str], slot_name: str) -> Optional[Tuple[str, str]]:
    """Return (start, end) when the notes override this slot's times for the day."""

    semantic = slot_semantic(slot_name)
    for line in _lines(notes):
        match = _SLOT_TIMES_RE.match(line)
        if not match:
            continue
        name = match.group("name")
        if normalize_label(name) == normalize_label(slot_name) or (
            semantic is not None and slot_semantic(name) == semantic
        ):
            return match.group("start"), match.group("end")
    return None


def has_notes_geofence(notes: Optional[str]) -> bool:
    return bool(_GEOFENCE_RE.search(notes or ""))


def _to_geofence(match: re.Match, *, source: str, label: str) -> Geofence:
    lat = require_finite_number(
        match.group("lat"), f"Vĩ độ ({source})", error_cls=InvalidLocationDataError, source=source
    )
    lng = require_finite_number(
        match.group("lng"), f"Kinh độ ({source})", error_cls=InvalidLocationDataError, source=source
    )
    radius_text = match.group("radius")
    radius = (
        require_finite_number(
            radius_text,
            f"Bán kính ({source})",
            error_cls=InvalidLocationDataError,
            source=source,
        )
        if radius_text
        else float(DEFAULT_GEOFENCE_RADIUS_METERS)
    )
    return Geofence(
        lat=lat,
        lng=lng,
        radius_meters=radius,
        address=match.group("address").strip(" -"),
        label=label,
    ).checked(source)


def find_notes_geofence(notes: Optional[str], slot_name: str, day_number: int) -> Optional[Geofence]:
    """Slot-specific geofence from the notes, else the last geofence found anywhere in them."""

    source = f"ghi chú Ngày {day_number}"
    for line in _lines(notes):
        if not _mentions_slot(line, slot_name):
            continue
        match = _GEOFENCE_RE.search(line)
        if match:
            return _to_geofence(match, source=source, label=f"Ngày {day_number} - {slot_name}")

    matches = list(_GEOFENCE_RE.finditer(notes or ""))
    if not matches:
        return None
    logger.info("No geofence for %r in notes of day %s, using the day-level one", slot_name, day_number)
    return _to_geofence(matches[-1], source=source, label=f"Ngày {day_number}")
