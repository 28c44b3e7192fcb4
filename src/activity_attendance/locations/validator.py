from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ..activities.geofence import Geofence
from ..activities.model import Activity, TimeSlotTemplate
from ..core.exceptions import LocationNotConfiguredError
from ..participants.model import Coordinate
from .geo import distance_meters
from .resolver import candidate_geofences, resolve_geofence

logger = logging.getLogger(__name__)

NO_REQUIREMENT_MESSAGE = "Hoạt động không yêu cầu vị trí cụ thể"


@dataclass(frozen=True)
class LocationCheck:
    valid: bool
    distance_meters: Optional[float] = None
    message: Optional[str] = None
    geofence: Optional[Geofence] = None

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "distanceMeters": round(self.distance_meters, 1) if self.distance_meters is not None else None,
            "message": self.message,
        }


def check_against(coordinate: Coordinate, geofence: Geofence) -> LocationCheck:
    distance = distance_meters(coordinate.lat, coordinate.lng, geofence.lat, geofence.lng)
    if distance <= geofence.radius_meters:
        return LocationCheck(valid=True, distance_meters=distance, geofence=geofence)
    return LocationCheck(
        valid=False,
        distance_meters=distance,
        message=_too_far_message(distance, geofence),
        geofence=geofence,
    )


def check_against_any(coordinate: Coordinate, geofences: Iterable[Geofence]) -> LocationCheck:
    """Valid if inside any geofence; otherwise report the nearest one."""

    nearest: Optional[LocationCheck] = None
    for geofence in geofences:
        result = check_against(coordinate, geofence)
        if result.valid:
            return result
        if nearest is None or result.distance_meters < nearest.distance_meters:
            nearest = result
    if nearest is None:
        raise LocationNotConfiguredError("Không có vị trí điểm danh nào để so sánh")
    return nearest


def validate_location(
    activity: Activity,
    coordinate: Coordinate,
    slot: Optional[TimeSlotTemplate] = None,
    day_number: Optional[int] = None,
) -> LocationCheck:
    """Judge a submitted coordinate against the geofence that applies to (slot, day).

    An activity that defines no location at all imposes no requirement. Bad
    location data is never treated that way: it raises.
    """

    if not activity.has_location_requirement():
        return LocationCheck(valid=True, message=NO_REQUIREMENT_MESSAGE)

    if slot is not None:
        try:
            return check_against(coordinate, resolve_geofence(activity, slot, day_number))
        except LocationNotConfiguredError:
            candidates = candidate_geofences(activity)
            if not candidates:
                raise
            logger.info("No geofence matches slot %r, evaluating %d candidates", slot.name, len(candidates))
            return check_against_any(coordinate, candidates)

    return check_against_any(coordinate, candidate_geofences(activity))


def _too_far_message(distance: float, geofence: Geofence) -> str:
    where = geofence.label or "hoạt động"
    return (
        f"Bạn đang cách vị trí {where} {distance:.0f}m. "
        f"Vui lòng đến đúng vị trí (trong bán kính {geofence.radius_meters:.0f}m) để điểm danh."
    )
