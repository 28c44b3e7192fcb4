from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple

from ..activities.slots import slot_semantic
from ..core.constants import DEFAULT_PARTICIPANT_ROLE
from ..core.enums import CheckInType, RecordStatus, SlotSemantic


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lng: float
    address: Optional[str] = None


@dataclass(frozen=True)
class Verifier:
    identity: str
    name: Optional[str] = None
    verified_at: Optional[datetime] = None
    note: Optional[str] = None


@dataclass(frozen=True)
class AttendanceRecord:
    """Thực thể miền (domain): Một lần điểm danh đầu/cuối buổi.

    Several records may exist for the same (day, slot, check-in type); all are kept
    for audit and the most recent one is authoritative.
    """

    slot_label: str
    check_in_type: CheckInType
    check_in_time: datetime
    status: RecordStatus
    location: Optional[Coordinate] = None
    day_number: Optional[int] = None
    slot_date: Optional[date] = None
    verifier: Optional[Verifier] = None
    rejection_reason: Optional[str] = None
    photo_ref: Optional[str] = None
    late_reason: Optional[str] = None
    record_id: Optional[str] = None

    @property
    def note(self) -> Optional[str]:
        return self.verifier.note if self.verifier else None

    @property
    def has_photo(self) -> bool:
        return bool(self.photo_ref and self.photo_ref.strip())


@dataclass(frozen=True)
class Registration:
    """Đăng ký tham gia một buổi (của một ngày, với hoạt động nhiều ngày)."""

    slot_name: str
    day_number: Optional[int] = None

    @property
    def semantic(self) -> Optional[SlotSemantic]:
        return slot_semantic(self.slot_name)


@dataclass(frozen=True)
class Participant:
    participant_id: str
    name: str
    email: str = ""
    role: str = DEFAULT_PARTICIPANT_ROLE
    registrations: Tuple[Registration, ...] = ()
    records: Tuple[AttendanceRecord, ...] = ()
