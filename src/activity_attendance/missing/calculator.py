"""Outstanding check-ins for manual entry."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Iterable, List, Optional

from ..activities.model import Activity, TimeSlotTemplate
from ..activities.slots import day_qualified_label
from ..core.constants import CHECK_IN_TYPE_LABELS, MANUAL_ENTRY_NOTE
from ..core.enums import CheckInType
from ..locations.resolver import resolve_geofence
from ..participants.model import Coordinate, Participant
from ..attendance.classifier import AttendanceClassifier
from ..registration.filter import registered_occurrences
from ..timing.windows import target_time


@dataclass(frozen=True)
class MissingCheckIn:
    key: str
    label: str
    slot: TimeSlotTemplate
    check_in_type: CheckInType
    day_number: Optional[int]
    date: date
    zone: Optional[tzinfo] = None

    @property
    def target(self) -> datetime:
        return target_time(self.slot, self.date, self.check_in_type, self.zone)

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "label": self.label,
            "slot": self.slot.name,
            "checkInType": self.check_in_type.value,
            "dayNumber": self.day_number,
            "date": self.date.isoformat(),
            "target": self.target.isoformat(),
        }


@dataclass(frozen=True)
class ManualCheckInPayload:
    """Shape of one manual check-in as the attendance store accepts it."""

    participant_id: str
    slot_label: str
    check_in_type: CheckInType
    check_in_time: datetime
    location: Optional[Coordinate] = None
    day_number: Optional[int] = None
    slot_date: Optional[date] = None
    is_manual: bool = True
    note: str = MANUAL_ENTRY_NOTE

    def to_dict(self) -> dict:
        location = None
        if self.location is not None:
            location = {"lat": self.location.lat, "lng": self.location.lng, "address": self.location.address}
        return {
            "participantId": self.participant_id,
            "timeSlot": self.slot_label,
            "checkInType": self.check_in_type.value,
            "checkInTime": self.check_in_time.isoformat(),
            "location": location,
            "dayNumber": self.day_number,
            "slotDate": self.slot_date.isoformat() if self.slot_date else None,
            "isManualCheckIn": self.is_manual,
            "note": self.note,
        }


def missing_key(day_number: Optional[int], slot_name: str, check_in_type: CheckInType) -> str:
    return f"{day_number or 0}-{slot_name}-{check_in_type.value}"


def missing_label(day_number: Optional[int], slot_name: str, check_in_type: CheckInType) -> str:
    return f"{day_qualified_label(day_number, slot_name)} - {CHECK_IN_TYPE_LABELS[check_in_type.value]}"


def missing_check_ins(
    activity: Activity,
    participant: Participant,
    *,
    classifier: Optional[AttendanceClassifier] = None,
    day_number: Optional[int] = None,
    now: Optional[datetime] = None,
) -> List[MissingCheckIn]:
    """Every registered (slot, check-in type) in scope that has no matching record."""

    classifier = classifier or AttendanceClassifier()
    missing: List[MissingCheckIn] = []

    for occ in registered_occurrences(activity, participant, day_number):
        for check_in_type in (CheckInType.START, CheckInType.END):
            state = classifier.slot_attendance(
                activity, participant, occ.slot, check_in_type, occ.day_number, now=now
            )
            if state.has_checked_in:
                continue
            missing.append(
                MissingCheckIn(
                    key=missing_key(occ.day_number, occ.slot.name, check_in_type),
                    label=missing_label(occ.day_number, occ.slot.name, check_in_type),
                    slot=occ.slot,
                    check_in_type=check_in_type,
                    day_number=occ.day_number,
                    date=occ.date,
                    zone=classifier.policy.zone,
                )
            )
    return missing


def build_manual_payloads(
    activity: Activity,
    participant_id: str,
    entries: Iterable[MissingCheckIn],
    *,
    note: Optional[str] = None,
) -> List[ManualCheckInPayload]:
    """Payloads for the chosen missing entries.

    The location is the geofence centre that applies to the slot, or none when
    the activity has no location requirement.
    """

    payloads: List[ManualCheckInPayload] = []
    for entry in entries:
        location = None
        if activity.has_location_requirement():
            geofence = resolve_geofence(activity, entry.slot, entry.day_number)
            location = Coordinate(lat=geofence.lat, lng=geofence.lng, address=geofence.address or None)

        payloads.append(
            ManualCheckInPayload(
                participant_id=participant_id,
                slot_label=day_qualified_label(entry.day_number, entry.slot.name),
                check_in_type=entry.check_in_type,
                check_in_time=entry.target,
                location=location,
                day_number=entry.day_number,
                slot_date=entry.date if activity.is_multi_day else None,
                note=note or MANUAL_ENTRY_NOTE,
            )
        )
    return payloads
