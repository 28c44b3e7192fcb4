from __future__ import annotations

from datetime import tzinfo
from typing import Any, Dict, Optional

from flask import Flask, jsonify

from ..activities.mapper import map_activity, map_coordinate, map_participant, map_participants
from ..common.datetime_utils import parse_timestamp
from ..common.http import json_body, json_errors, require_field
from ..common.validators import require_int
from ..container import Container
from ..core.enums import CheckInType
from ..core.exceptions import ValidationError
from .model import CheckInAttempt


def _attempt_from_json(data: Dict[str, Any], zone: Optional[tzinfo] = None) -> CheckInAttempt:
    try:
        check_in_type = CheckInType(str(data.get("checkInType", "")).strip().lower())
    except ValueError:
        raise ValidationError("checkInType phải là 'start' hoặc 'end'") from None

    day_number = data.get("dayNumber")
    return CheckInAttempt(
        slot_name=str(require_field(data, "timeSlot")),
        check_in_type=check_in_type,
        at=parse_timestamp(require_field(data, "checkInTime"), "Thời gian điểm danh", zone),
        location=map_coordinate(data.get("location"), source="vị trí gửi lên"),
        day_number=require_int(day_number, "Số ngày") if day_number is not None else None,
        photo_ref=data.get("photoUrl") or None,
        entered_by_officer=bool(data.get("isManualCheckIn", False)),
    )


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service
    zone = container.zone

    @app.route("/api/attendance/evaluate", methods=["POST"], endpoint="api_attendance_evaluate")
    @json_errors
    def evaluate():
        data = json_body()
        activity = map_activity(require_field(data, "activity"), zone=zone)
        attempt = _attempt_from_json(require_field(data, "attempt"), zone)

        evaluation = service.evaluate_check_in(activity, attempt)
        return jsonify(
            {
                "success": True,
                "evaluation": evaluation.to_dict(),
                "windows": service.windows_for(activity, attempt),
            }
        )

    @app.route("/api/attendance/missing", methods=["POST"], endpoint="api_attendance_missing")
    @json_errors
    def missing():
        data = json_body()
        activity = map_activity(require_field(data, "activity"), zone=zone)
        participant = map_participant(require_field(data, "participant"), zone=zone)
        day_number = data.get("dayNumber")
        now = data.get("now")

        entries, payloads = service.missing(
            activity,
            participant,
            day_number=require_int(day_number, "Số ngày") if day_number is not None else None,
            now=parse_timestamp(now, "Thời điểm hiện tại", zone) if now else None,
            note=data.get("note") or None,
        )
        return jsonify(
            {
                "success": True,
                "missing": [e.to_dict() for e in entries],
                "payloads": [p.to_dict() for p in payloads],
            }
        )

    @app.route("/api/attendance/summary", methods=["POST"], endpoint="api_attendance_summary")
    @json_errors
    def summary():
        data = json_body()
        activity = map_activity(require_field(data, "activity"), zone=zone)
        participants = map_participants(data.get("participants") or [], zone=zone)
        thresholds = container.threshold_service.load(activity.activity_id)

        result = service.activity_summary(activity, participants, thresholds)
        return jsonify({"success": True, **result.to_dict()})
