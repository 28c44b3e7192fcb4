"""Build domain objects from the JSON documents served by the attendance store."""

from __future__ import annotations

from datetime import tzinfo
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..common.datetime_utils import parse_date, parse_timestamp
from ..common.validators import require_finite_number, require_int, require_non_empty
from ..core.enums import ActivityKind, CheckInType, RecordStatus, SlotSemantic
from ..core.exceptions import InvalidLocationDataError, ValidationError
from ..participants.model import AttendanceRecord, Coordinate, Participant, Registration, Verifier
from .geofence import Geofence
from .model import Activity, ScheduleDay, TimeSlotTemplate

_MULTI_DAY_KINDS = {"multiple_days", "multi_day", "multi-day", "multiple"}


def _identity(value: Any) -> Optional[str]:
    """Ids arrive either as plain strings or as populated documents."""

    if value is None:
        return None
    if isinstance(value, Mapping):
        value = value.get("_id") or value.get("id")
    text = str(value).strip() if value is not None else ""
    return text or None


def _coordinate_number(value: Any, name: str, source: str) -> float:
    return require_finite_number(value, f"{name} ({source})", error_cls=InvalidLocationDataError, source=source)


def map_geofence(raw: Mapping[str, Any], *, source: str, radius: Any = None) -> Geofence:
    location = raw.get("location") if isinstance(raw.get("location"), Mapping) else raw
    radius = raw.get("radius") if radius is None else radius
    if radius is None:
        raise InvalidLocationDataError(f"Thiếu bán kính ở {source}", source=source)
    return Geofence(
        lat=_coordinate_number(location.get("lat"), "Vĩ độ", source),
        lng=_coordinate_number(location.get("lng"), "Kinh độ", source),
        radius_meters=_coordinate_number(radius, "Bán kính", source),
        address=str(location.get("address") or ""),
    ).checked(source)


def map_time_slot(raw: Mapping[str, Any]) -> TimeSlotTemplate:
    name = require_non_empty(str(raw.get("name") or ""), "Tên buổi")
    return TimeSlotTemplate(
        name=name,
        start_time=str(raw.get("startTime") or ""),
        end_time=str(raw.get("endTime") or ""),
        active=bool(raw.get("isActive", True)),
        slot_id=_identity(raw.get("id")),
    )


def map_activity(raw: Mapping[str, Any], *, zone: Optional[tzinfo] = None) -> Activity:
    kind_text = str(raw.get("type") or raw.get("kind") or "").strip().lower()
    kind = ActivityKind.MULTIPLE_DAYS if kind_text in _MULTI_DAY_KINDS else ActivityKind.SINGLE_DAY

    schedule = tuple(
        ScheduleDay(
            day_number=require_int(d.get("day"), "Số ngày"),
            date=parse_date(d.get("date"), f"Ngày {d.get('day')}", zone),
            notes=str(d.get("activities") or d.get("notes") or ""),
        )
        for d in raw.get("schedule") or ()
    )

    geofence = None
    location_data = raw.get("locationData")
    if isinstance(location_data, Mapping) and (location_data.get("lat") is not None or location_data.get("lng") is not None):
        geofence = map_geofence(location_data, source="locationData")

    slot_geofences: Dict[SlotSemantic, Geofence] = {}
    for i, entry in enumerate(raw.get("multiTimeLocations") or ()):
        source = f"multiTimeLocations[{i}]"
        try:
            semantic = SlotSemantic(str(entry.get("timeSlot") or "").strip().lower())
        except ValueError:
            raise InvalidLocationDataError(
                f"Buổi không hợp lệ ở {source}: {entry.get('timeSlot')!r}", source=source
            ) from None
        slot_geofences[semantic] = map_geofence(entry, source=source)

    raw_date = raw.get("date")
    return Activity(
        activity_id=_identity(raw.get("_id") or raw.get("id")) or "",
        name=str(raw.get("name") or ""),
        kind=kind,
        date=parse_date(raw_date, "Ngày hoạt động", zone) if raw_date else None,
        schedule=schedule,
        time_slots=tuple(map_time_slot(s) for s in raw.get("timeSlots") or ()),
        geofence=geofence,
        slot_geofences=slot_geofences,
    )


def map_coordinate(raw: Optional[Mapping[str, Any]], *, source: str) -> Optional[Coordinate]:
    if not raw or (raw.get("lat") is None and raw.get("lng") is None):
        return None
    return Coordinate(
        lat=_coordinate_number(raw.get("lat"), "Vĩ độ", source),
        lng=_coordinate_number(raw.get("lng"), "Kinh độ", source),
        address=raw.get("address") or None,
    )


def _check_in_type(value: Any) -> CheckInType:
    try:
        return CheckInType(str(value or "").strip().lower())
    except ValueError:
        raise ValidationError(f"Loại điểm danh không hợp lệ: {value!r}") from None


def _record_status(value: Any) -> RecordStatus:
    try:
        return RecordStatus(str(value or "pending").strip().lower())
    except ValueError:
        raise ValidationError(f"Trạng thái điểm danh không hợp lệ: {value!r}") from None


def map_record(raw: Mapping[str, Any], *, zone: Optional[tzinfo] = None) -> AttendanceRecord:
    record_id = _identity(raw.get("_id") or raw.get("id"))
    source = f"điểm danh {record_id}" if record_id else "điểm danh"

    verifier = None
    verified_by = raw.get("verifiedBy")
    if verified_by or raw.get("verificationNote") or raw.get("verifiedByName"):
        name = raw.get("verifiedByName")
        if not name and isinstance(verified_by, Mapping):
            name = verified_by.get("name")
        verified_at = raw.get("verifiedAt")
        verifier = Verifier(
            identity=_identity(verified_by) or "",
            name=name or None,
            verified_at=parse_timestamp(verified_at, "Thời gian duyệt", zone) if verified_at else None,
            note=raw.get("verificationNote") or None,
        )

    day_number = raw.get("dayNumber")
    slot_date = raw.get("slotDate")
    return AttendanceRecord(
        slot_label=str(raw.get("timeSlot") or ""),
        check_in_type=_check_in_type(raw.get("checkInType")),
        check_in_time=parse_timestamp(raw.get("checkInTime"), "Thời gian điểm danh", zone),
        status=_record_status(raw.get("status")),
        location=map_coordinate(raw.get("location"), source=source),
        day_number=require_int(day_number, "Số ngày") if day_number is not None else None,
        slot_date=parse_date(slot_date, "Ngày của buổi", zone) if slot_date else None,
        verifier=verifier,
        rejection_reason=raw.get("cancelReason") or None,
        photo_ref=raw.get("photoUrl") or None,
        late_reason=raw.get("lateReason") or None,
        record_id=record_id,
    )


def map_participant(raw: Mapping[str, Any], *, zone: Optional[tzinfo] = None) -> Participant:
    user = raw.get("userId")
    name = raw.get("name") or (user.get("name") if isinstance(user, Mapping) else None) or ""
    email = raw.get("email") or (user.get("email") if isinstance(user, Mapping) else None) or ""

    registrations = tuple(
        Registration(
            slot_name=str(r.get("slot") or ""),
            day_number=require_int(r.get("day"), "Số ngày đăng ký") if r.get("day") is not None else None,
        )
        for r in raw.get("registeredDaySlots") or ()
    )

    extra = {"role": raw["role"]} if raw.get("role") else {}
    return Participant(
        participant_id=_identity(user) or _identity(raw.get("_id")) or "",
        name=str(name),
        email=str(email),
        registrations=registrations,
        records=tuple(map_record(a, zone=zone) for a in raw.get("attendances") or ()),
        **extra,
    )


def map_participants(raw: Iterable[Mapping[str, Any]], *, zone: Optional[tzinfo] = None) -> List[Participant]:
    return [map_participant(p, zone=zone) for p in raw]
