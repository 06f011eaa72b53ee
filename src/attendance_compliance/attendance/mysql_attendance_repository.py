from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..common.datetime_utils import end_of_day, start_of_day
from ..core.enums import CheckType, SessionFlag, StatusCode
from ..core.exceptions import DuplicateSubmission
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_unique_violation
from ..locations.mysql_location_repository import MySQLOfficeLocationRepository
from .model import AttendanceRecord, RecordCriteria
from .repository import AttendanceRepository

_COLUMNS = """
    record_id, user_id, timestamp, type, status, is_late, late_minutes,
    work_hours, overtime_hours, latitude, longitude, session_flag, note
"""


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        user_id=str(r["user_id"]),
        timestamp=r["timestamp"],
        type=CheckType(r["type"]),
        status=StatusCode(r["status"]),
        is_late=bool(r.get("is_late")),
        late_minutes=int(r.get("late_minutes") or 0),
        work_hours=float(r.get("work_hours") or 0),
        overtime_hours=float(r.get("overtime_hours") or 0),
        latitude=float(r["latitude"]) if r.get("latitude") is not None else None,
        longitude=float(r["longitude"]) if r.get("longitude") is not None else None,
        session_flag=SessionFlag(r["session_flag"]) if r.get("session_flag") else None,
        note=r.get("note"),
    )


class MySQLAttendanceRepository(MySQLOfficeLocationRepository, AttendanceRepository):
    """attendance_records plus the office-location setting.

    The unique index on authoritative_key (NULL for anything but berhasil)
    is what makes concurrent duplicate submissions safe.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        super().__init__(conn_factory)
        self._conn_factory = conn_factory

    def insert_record(self, record: AttendanceRecord) -> AttendanceRecord:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        user_id, timestamp, work_date, type, status, is_late, late_minutes,
                        work_hours, overtime_hours, latitude, longitude, session_flag, note
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.user_id,
                        record.timestamp,
                        record.work_date,
                        record.type.value,
                        record.status.value,
                        int(record.is_late),
                        record.late_minutes,
                        record.work_hours,
                        record.overtime_hours,
                        record.latitude,
                        record.longitude,
                        record.session_flag.value if record.session_flag else None,
                        record.note,
                    ),
                )
                return replace(record, record_id=int(cur.lastrowid))
        except IntegrityError as exc:
            if not is_unique_violation(exc):
                raise
            existing = self.find_authoritative(record.user_id, record.work_date, record.type)
            if existing is None:
                raise
            raise DuplicateSubmission(existing) from exc

    def query_records(self, criteria: RecordCriteria) -> Sequence[AttendanceRecord]:
        clauses = ["1=1"]
        params: list[object] = []

        if criteria.employee_id is not None:
            clauses.append("user_id=%s")
            params.append(criteria.employee_id)
        if criteria.start_date is not None:
            clauses.append("timestamp >= %s")
            params.append(start_of_day(criteria.start_date))
        if criteria.end_date is not None:
            clauses.append("timestamp <= %s")
            params.append(end_of_day(criteria.end_date))
        if criteria.type is not None:
            clauses.append("type=%s")
            params.append(criteria.type.value)
        if criteria.status is not None:
            clauses.append("status=%s")
            params.append(criteria.status.value)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY timestamp DESC, record_id ASC
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def find_authoritative(self, user_id: str, day: date, check_type: CheckType) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND work_date=%s AND type=%s AND status=%s
                ORDER BY record_id ASC
                LIMIT 1
                """,
                (user_id, day, check_type.value, StatusCode.BERHASIL.value),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None
