"""Location resolution cascade.

For a (slot, day) pair the first source that applies wins:

1. multi-day notes pattern for the slot (or any pattern in that day's notes),
2. the per-semantic geofence map (morning/afternoon/evening),
3. the whole-activity geofence.

Nothing applying is a configuration error; there is no default location.
"""

from __future__ import annotations

from typing import List, Optional

from ..activities.geofence import Geofence
from ..activities.model import Activity, TimeSlotTemplate
from ..activities.notes import find_notes_geofence
from ..activities.slots import SEMANTIC_DISPLAY_NAMES
from ..core.exceptions import LocationNotConfiguredError


def resolve_geofence(activity: Activity, slot: TimeSlotTemplate, day_number: Optional[int] = None) -> Geofence:
    if activity.is_multi_day and day_number is not None:
        day = activity.day(day_number)
        if day is not None and day.notes:
            found = find_notes_geofence(day.notes, slot.name, day_number)
            if found is not None:
                return found

    semantic = slot.semantic
    if semantic is not None and semantic in activity.slot_geofences:
        source = f"vị trí theo buổi ({semantic.value})"
        return _labelled(activity.slot_geofences[semantic], SEMANTIC_DISPLAY_NAMES[semantic]).checked(source)

    if activity.geofence is not None:
        return _labelled(activity.geofence, "hoạt động").checked("vị trí hoạt động")

    where = f"Ngày {day_number} - {slot.name}" if day_number is not None else slot.name
    raise LocationNotConfiguredError(f"Chưa cấu hình vị trí điểm danh cho {where}")


def candidate_geofences(activity: Activity) -> List[Geofence]:
    """Geofences usable when a submission cannot be tied to a slot."""

    candidates = [
        _labelled(g, SEMANTIC_DISPLAY_NAMES[s]).checked(f"vị trí theo buổi ({s.value})")
        for s, g in activity.slot_geofences.items()
    ]
    if activity.geofence is not None:
        candidates.append(_labelled(activity.geofence, "hoạt động").checked("vị trí hoạt động"))
    return candidates


def _labelled(geofence: Geofence, label: str) -> Geofence:
    if geofence.label:
        return geofence
    return Geofence(
        lat=geofence.lat,
        lng=geofence.lng,
        radius_meters=geofence.radius_meters,
        address=geofence.address,
        label=label,
    )
