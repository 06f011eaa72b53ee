from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Mapping, Optional

from ..common.datetime_utils import end_of_day, parse_iso_date, start_of_day
from ..core.enums import CheckType, SessionFlag, StatusCode
from ..core.exceptions import InvalidInput
from ..locations.model import Coordinates


@dataclass(frozen=True)
class CheckAttempt:
    """Raw check attempt as submitted; never persisted as-is."""

    user_id: str
    occurred_at: datetime
    type: CheckType
    coordinates: Optional[Coordinates] = None
    face_confidence: Optional[float] = None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one classified attendance event."""

    user_id: str
    timestamp: datetime
    type: CheckType
    status: StatusCode
    is_late: bool = False
    late_minutes: int = 0
    work_hours: float = 0.0
    overtime_hours: float = 0.0
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    session_flag: Optional[SessionFlag] = None
    note: Optional[str] = None
    record_id: Optional[int] = None

    def __post_init__(self) -> None:
        if self.is_late and self.type != CheckType.MASUK:
            raise InvalidInput("only a masuk record can be late")
        if self.late_minutes < 0 or self.work_hours < 0 or self.overtime_hours < 0:
            raise InvalidInput("time metrics must not be negative")
        if not self.is_late and self.late_minutes:
            raise InvalidInput("late_minutes must be 0 when not late")
        if self.type != CheckType.KELUAR and (self.work_hours or self.overtime_hours):
            raise InvalidInput("work and overtime hours belong to keluar records")

    @property
    def work_date(self) -> date:
        return self.timestamp.date()

    @property
    def is_authoritative(self) -> bool:
        """Counts toward the one-per-(user, day, type) rule."""
        return self.status == StatusCode.BERHASIL and self.type != CheckType.ABSENT

    @property
    def absence_key(self) -> tuple:
        return (self.user_id, self.timestamp, self.status, self.latitude, self.longitude)


def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def _parse_enum(enum_cls, value: Optional[str]):
    if _blank(value):
        return None
    try:
        return enum_cls(str(value).strip())
    except ValueError:
        return None


def _parse_date(value: Optional[str], field_name: str) -> Optional[date]:
    if _blank(value):
        return None
    try:
        return parse_iso_date(str(value).strip())
    except ValueError:
        raise InvalidInput(f"{field_name} must be YYYY-MM-DD") from None


@dataclass(frozen=True)
class RecordCriteria:
    """Optional record filter; a None field imposes no constraint."""

    employee_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    type: Optional[CheckType] = None
    status: Optional[StatusCode] = None

    @classmethod
    def from_query(cls, query: Mapping[str, Optional[str]]) -> "RecordCriteria":
        """Build criteria from string query parameters.

        Empty strings, the 'all' employee option and unknown type/status
        values all mean "no filter".
        """
        employee_id = query.get("employee_id") or query.get("employeeId")
        if _blank(employee_id) or str(employee_id).strip() == "all":
            employee_id = None
        return cls(
            employee_id=str(employee_id).strip() if employee_id is not None else None,
            start_date=_parse_date(query.get("start_date") or query.get("startDate"), "start_date"),
            end_date=_parse_date(query.get("end_date") or query.get("endDate"), "end_date"),
            type=_parse_enum(CheckType, query.get("type")),
            status=_parse_enum(StatusCode, query.get("status")),
        )

    def with_employee(self, employee_id: str) -> "RecordCriteria":
        return replace(self, employee_id=employee_id)

    def matches(self, record: AttendanceRecord) -> bool:
        if self.employee_id is not None and record.user_id != self.employee_id:
            return False
        if self.start_date is not None and record.timestamp < start_of_day(self.start_date):
            return False
        if self.end_date is not None and record.timestamp > end_of_day(self.end_date):
            return False
        if self.type is not None and record.type != self.type:
            return False
        if self.status is not None and record.status != self.status:
            return False
        return True
