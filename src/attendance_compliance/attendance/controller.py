from __future__ import annotations

import base64
import binascii
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date, truncate_to_millis
from ..common.web import admin_required, current_viewer, login_required
from ..container import Container
from ..core.enums import CheckType
from ..core.exceptions import InvalidInput
from ..locations.model import Coordinates
from .model import AttendanceRecord, CheckAttempt


def record_to_dict(r: AttendanceRecord) -> dict:
    return {
        "record_id": r.record_id,
        "user_id": r.user_id,
        "timestamp": r.timestamp.isoformat(timespec="milliseconds"),
        "type": r.type.value,
        "status": r.status.value,
        "is_late": r.is_late,
        "late_minutes": r.late_minutes,
        "work_hours": r.work_hours,
        "overtime_hours": r.overtime_hours,
        "latitude": r.latitude,
        "longitude": r.longitude,
        "session_flag": r.session_flag.value if r.session_flag else None,
        "note": r.note,
    }


def _optional_float(data: dict, key: str) -> Optional[float]:
    value = data.get(key)
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"{key} must be a number") from None


def register(app: Flask, container: Container) -> None:
    def _face_confidence(user_id: str, data: dict) -> Optional[float]:
        # Only the server-side recognizer scores a face; a posted confidence is ignored.
        image = data.get("face_image")
        if not image or container.face_recognizer is None:
            return None
        try:
            captured = base64.b64decode(image, validate=True)
        except (binascii.Error, ValueError):
            raise InvalidInput("face_image must be base64") from None
        return container.face_recognizer.match_confidence(user_id, captured)

    def _parse_day(value: Optional[str]):
        if not value:
            return now_local().date()
        try:
            return parse_iso_date(value)
        except ValueError:
            raise InvalidInput("date must be YYYY-MM-DD") from None

    @app.route("/api/attendance", methods=["POST"], endpoint="api_attendance_submit")
    @login_required
    def api_attendance_submit():
        """Submit a masuk/keluar check; the server clock stamps it."""
        user_id, _ = current_viewer()
        data = request.get_json(silent=True) or {}

        try:
            check_type = CheckType(str(data.get("type", "")).strip())
        except ValueError:
            raise InvalidInput("type must be masuk or keluar") from None
        if check_type == CheckType.ABSENT:
            raise InvalidInput("type must be masuk or keluar")

        latitude = _optional_float(data, "latitude")
        longitude = _optional_float(data, "longitude")
        coordinates = None
        if latitude is not None and longitude is not None:
            coordinates = Coordinates(latitude=latitude, longitude=longitude)

        attempt = CheckAttempt(
            user_id=user_id,
            occurred_at=truncate_to_millis(now_local()),
            type=check_type,
            coordinates=coordinates,
            face_confidence=_face_confidence(user_id, data),
        )
        record = container.attendance_service.submit(attempt)
        return jsonify({"success": True, "record": record_to_dict(record)}), 201

    @app.route("/api/attendance/next-type", methods=["GET"], endpoint="api_attendance_next_type")
    @login_required
    def api_attendance_next_type():
        user_id, _ = current_viewer()
        day = _parse_day(request.args.get("date"))
        next_type = container.attendance_service.next_check_type(user_id, day)
        return jsonify({"date": day.isoformat(), "next_type": next_type.value if next_type else None})

    @app.route("/api/admin/absences/sweep", methods=["POST"], endpoint="api_admin_absence_sweep")
    @admin_required
    def api_admin_absence_sweep():
        data = request.get_json(silent=True) or {}
        day = _parse_day(data.get("date"))
        created = container.attendance_service.sweep_absences(day)
        return jsonify({"success": True, "date": day.isoformat(), "marked": [record_to_dict(r) for r in created]})
