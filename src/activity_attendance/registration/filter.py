"""Which (slot, day) pairs apply to a participant.

Every aggregate (missing, completed, percentage totals) goes through this
filter; a slot the participant did not register for never counts.
"""

from __future__ import annotations

from typing import List, Optional

from ..activities.model import Activity, SlotOccurrence, TimeSlotTemplate
from ..activities.slots import slot_key
from ..participants.model import Participant, Registration


def _same_slot(registration: Registration, slot: TimeSlotTemplate) -> bool:
    return slot_key(registration.slot_name) == slot_key(slot.name)


def is_registered(
    activity: Activity,
    participant: Participant,
    slot: TimeSlotTemplate,
    day_number: Optional[int] = None,
) -> bool:
    registrations = participant.registrations

    if not activity.is_multi_day:
        # Older single-day activities carry no registrations: everyone attends everything.
        if not registrations:
            return True
        return any(_same_slot(r, slot) for r in registrations)

    if day_number is None:
        return False
    return any(r.day_number == day_number and _same_slot(r, slot) for r in registrations)


def has_registered_for_day(activity: Activity, participant: Participant, day_number: Optional[int]) -> bool:
    if not activity.is_multi_day:
        return True
    return any(r.day_number == day_number for r in participant.registrations)


def registered_occurrences(
    activity: Activity,
    participant: Participant,
    day_number: Optional[int] = None,
) -> List[SlotOccurrence]:
    """Slot occurrences in scope (one day, or the whole activity) that apply to the participant."""

    return [
        occ
        for occ in activity.occurrences(day_number)
        if is_registered(activity, participant, occ.slot, occ.day_number)
    ]
