from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from types import ModuleType
from typing import Optional

from .attendance.classifier import AttendanceClassifier
from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import parse_clock
from .core.constants import (
    DEFAULT_FACE_MATCH_THRESHOLD,
    DEFAULT_LATE_GRACE_MINUTES,
    DEFAULT_STANDARD_HOURS,
    DEFAULT_WORK_DAYS,
)
from .core.exceptions import InvalidInput
from .database.connection import DBConfig, DatabaseConnection
from .face.recognizer import FaceRecognizer
from .locations.service import LocationService
from .reports.service import AttendanceReportService
from .shifts.model import ShiftPolicy
from .shifts.resolver import GlobalShiftResolver
from .timesheet.accountant import TimeAccountant
from .users.mysql_employee_repository import MySQLEmployeeDirectory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    attendance_repo: MySQLAttendanceRepository
    employees_repo: MySQLEmployeeDirectory

    attendance_service: AttendanceService
    location_service: LocationService
    report_service: AttendanceReportService
    face_recognizer: Optional[FaceRecognizer] = None


def shift_policy_from_settings(settings: ModuleType) -> Optional[ShiftPolicy]:
    start = getattr(settings, "SHIFT_START_TIME", None)
    if not start:
        return None
    end = getattr(settings, "SHIFT_END_TIME", None)
    return ShiftPolicy(
        start_time=parse_clock(start),
        end_time=parse_clock(end) if end else None,
        grace_minutes=int(getattr(settings, "SHIFT_GRACE_MINUTES", DEFAULT_LATE_GRACE_MINUTES)),
        standard_hours=float(getattr(settings, "SHIFT_STANDARD_HOURS", DEFAULT_STANDARD_HOURS)),
        break_minutes=int(getattr(settings, "SHIFT_BREAK_MINUTES", 0)),
        work_days=frozenset(getattr(settings, "SHIFT_WORK_DAYS", DEFAULT_WORK_DAYS)),
    )


def face_recognizer_from_settings(settings: ModuleType) -> Optional[FaceRecognizer]:
    """Instantiate the recognizer named by FACE_RECOGNIZER ("package.module:ClassName")."""
    path = str(getattr(settings, "FACE_RECOGNIZER", "") or "").strip()
    if not path:
        return None
    module_name, _, class_name = path.partition(":")
    if not module_name or not class_name:
        raise InvalidInput("FACE_RECOGNIZER must look like 'package.module:ClassName'")
    recognizer_cls = getattr(importlib.import_module(module_name), class_name)
    return recognizer_cls()


def build_container(*, settings: ModuleType, face_recognizer: Optional[FaceRecognizer] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(settings.DB_CONFIG))

    if face_recognizer is None:
        face_recognizer = face_recognizer_from_settings(settings)
    if face_recognizer is None and bool(getattr(settings, "FACE_VERIFICATION_ENABLED", True)):
        logger.warning("[attendance] face verification is on but no FACE_RECOGNIZER is set; every check will be wajah_tidak_valid")

    attendance_repo = MySQLAttendanceRepository(conn)
    employees_repo = MySQLEmployeeDirectory(conn)

    classifier = AttendanceClassifier(
        AttendanceStrategyFactory(
            face_threshold=float(getattr(settings, "FACE_MATCH_THRESHOLD", DEFAULT_FACE_MATCH_THRESHOLD)),
            face_verification=bool(getattr(settings, "FACE_VERIFICATION_ENABLED", True)),
        )
    )
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        GlobalShiftResolver(shift_policy_from_settings(settings)),
        classifier=classifier,
        accountant=TimeAccountant(),
        enforce_working_window=bool(getattr(settings, "ENFORCE_WORKING_WINDOW", False)),
    )

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        employees_repo=employees_repo,
        attendance_service=attendance_service,
        location_service=LocationService(attendance_repo),
        report_service=AttendanceReportService(attendance_repo, employees_repo),
        face_recognizer=face_recognizer,
    )
