from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ConfigurationError, InvalidSlotTimeError, ValidationError
from .math_utils import round_half_up

_HHMM_RE = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")


def load_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """IANA zone the slot clock times are expressed in; blank keeps naive local time."""

    name = (name or "").strip()
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(f"TIMEZONE không hợp lệ: {name!r}") from e


def to_zone(value: datetime, zone: Optional[tzinfo] = None) -> datetime:
    """Move an aware timestamp into the given zone; naive values are already wall-clock."""

    if zone is None or value.tzinfo is None:
        return value
    return value.astimezone(zone)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_date(value: Union[str, date, datetime], field_name: str = "Ngày", zone: Optional[tzinfo] = None) -> date:
    """Parse a calendar date delivered as YYYY-MM-DD, DD/MM/YYYY or an ISO timestamp.

    A timestamp (e.g. local midnight stored as UTC) is read in the given zone.
    """

    if isinstance(value, datetime):
        return to_zone(value, zone).date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} không hợp lệ")

    text = value.strip()
    try:
        if "/" in text:
            return datetime.strptime(text, "%d/%m/%Y").date()
        if "T" in text:
            return parse_timestamp(text, field_name, zone).date()
        return parse_iso_date(text)
    except ValueError as e:
        raise ValidationError(f"{field_name} không hợp lệ: {value!r}") from e


def parse_timestamp(
    value: Union[str, datetime], field_name: str = "Thời gian", zone: Optional[tzinfo] = None
) -> datetime:
    if isinstance(value, datetime):
        return to_zone(value, zone)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} không hợp lệ")

    text = value.strip()
    # fromisoformat() before 3.11 does not accept the Z suffix.
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return to_zone(datetime.fromisoformat(text), zone)
    except ValueError as e:
        raise ValidationError(f"{field_name} không hợp lệ: {value!r}") from e


def parse_hhmm(value: Union[str, time], field_name: str) -> time:
    """Parse a slot clock time (H:MM or HH:MM)."""

    if isinstance(value, time):
        return value
    match = _HHMM_RE.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise InvalidSlotTimeError(f"{field_name} phải có định dạng HH:MM (nhận được {value!r})")
    return time(hour=int(match.group(1)), minute=int(match.group(2)))


def combine(on_date: date, at: time, zone: Optional[tzinfo] = None) -> datetime:
    return datetime.combine(on_date, at).replace(tzinfo=zone)


def minutes_between(later: datetime, earlier: datetime) -> int:
    """Whole minutes from earlier to later, rounded half up."""
    return round_half_up((later - earlier) / timedelta(minutes=1))


def format_hhmm(value: datetime) -> str:
    return value.strftime("%H:%M")


def format_minutes(minutes: int) -> str:
    """Render a duration as 'X giờ Y phút'."""

    minutes = abs(int(minutes))
    if minutes < 60:
        return f"{minutes} phút"
    hours, rest = divmod(minutes, 60)
    if rest == 0:
        return f"{hours} giờ"
    return f"{hours} giờ {rest} phút"


def now_local(zone: Optional[tzinfo] = None) -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(zone)
