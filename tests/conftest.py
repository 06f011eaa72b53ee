from __future__ import annotations

import math
from dataclasses import replace
from datetime import date, time
from typing import Dict, Iterable, List, Optional

import pytest

from attendance_compliance.attendance.classifier import AttendanceClassifier
from attendance_compliance.attendance.factory import AttendanceStrategyFactory
from attendance_compliance.attendance.model import AttendanceRecord, RecordCriteria
from attendance_compliance.attendance.service import AttendanceService
from attendance_compliance.core.enums import CheckType, Role, StatusCode
from attendance_compliance.core.exceptions import DuplicateSubmission
from attendance_compliance.locations.model import Coordinates, OfficeLocation
from attendance_compliance.shifts.model import ShiftPolicy
from attendance_compliance.shifts.resolver import GlobalShiftResolver
from attendance_compliance.timesheet.accountant import TimeAccountant
from attendance_compliance.users.model import Employee

OFFICE_LAT = -6.200000
OFFICE_LNG = 106.816666


def offset_north(lat: float, lng: float, meters: float) -> Coordinates:
    """Point `meters` due north of (lat, lng) on the haversine sphere."""
    return Coordinates(latitude=lat + math.degrees(meters / 6_371_000.0), longitude=lng)


class InMemoryAttendanceRepo:
    """Keeps the one-authoritative-record rule like the unique index does."""

    def __init__(self, office: Optional[OfficeLocation] = None):
        self.office = office
        self.records: List[AttendanceRecord] = []
        self._next_id = 1

    def get_office_location(self) -> Optional[OfficeLocation]:
        return self.office

    def upsert_office_location(self, location: OfficeLocation) -> None:
        self.office = location

    def insert_record(self, record: AttendanceRecord) -> AttendanceRecord:
        if record.is_authoritative:
            existing = self.find_authoritative(record.user_id, record.work_date, record.type)
            if existing is not None:
                raise DuplicateSubmission(existing)
        saved = replace(record, record_id=self._next_id)
        self._next_id += 1
        self.records.append(saved)
        return saved

    def query_records(self, criteria: RecordCriteria) -> List[AttendanceRecord]:
        rows = [r for r in self.records if criteria.matches(r)]
        return sorted(rows, key=lambda r: r.timestamp, reverse=True)

    def find_authoritative(self, user_id: str, day: date, check_type: CheckType) -> Optional[AttendanceRecord]:
        for r in self.records:
            if (
                r.user_id == user_id
                and r.work_date == day
                and r.type == check_type
                and r.status == StatusCode.BERHASIL
            ):
                return r
        return None


class InMemoryEmployeeDirectory:
    def __init__(self, employees: Iterable[Employee] = ()):
        self._by_id: Dict[str, Employee] = {e.user_id: e for e in employees}

    def list_active_employees(self) -> List[Employee]:
        return [e for e in self._by_id.values() if e.is_active]

    def get_many(self, user_ids: Iterable[str]) -> Dict[str, Employee]:
        return {uid: self._by_id[uid] for uid in set(user_ids) if uid in self._by_id}


@pytest.fixture
def office() -> OfficeLocation:
    return OfficeLocation(latitude=OFFICE_LAT, longitude=OFFICE_LNG, address="Jl. Sudirman 1, Jakarta", radius_meters=100)


@pytest.fixture
def inside(office) -> Coordinates:
    return offset_north(office.latitude, office.longitude, 95)


@pytest.fixture
def outside(office) -> Coordinates:
    return offset_north(office.latitude, office.longitude, 150)


@pytest.fixture
def shift() -> ShiftPolicy:
    return ShiftPolicy(start_time=time(8, 0), end_time=time(17, 0), grace_minutes=10, standard_hours=8.0)


@pytest.fixture
def employees() -> InMemoryEmployeeDirectory:
    return InMemoryEmployeeDirectory(
        [
            Employee("u1", "Budi Santoso", Role.KARYAWAN, employee_number="EMP-001", department="Finance"),
            Employee("u2", "Siti Aminah", Role.KARYAWAN, employee_number="EMP-002", department="IT"),
            Employee("boss", "Rina Kepala", Role.KEPALA, employee_number="EMP-010", department="IT"),
            Employee("root", "Admin", Role.ADMIN),
            Employee("gone", "Former Staff", Role.KARYAWAN, is_active=False),
        ]
    )


@pytest.fixture
def attendance_repo(office) -> InMemoryAttendanceRepo:
    return InMemoryAttendanceRepo(office)


@pytest.fixture
def classifier() -> AttendanceClassifier:
    return AttendanceClassifier(AttendanceStrategyFactory(face_threshold=0.8))


@pytest.fixture
def attendance_service(attendance_repo, employees, shift, classifier) -> AttendanceService:
    return AttendanceService(
        attendance_repo,
        employees,
        GlobalShiftResolver(shift),
        classifier=classifier,
        accountant=TimeAccountant(),
    )


@pytest.fixture
def north_of():
    return offset_north
