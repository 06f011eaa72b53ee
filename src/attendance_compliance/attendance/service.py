from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import List, Optional

from ..common.datetime_utils import now_local
from ..core.enums import CheckType, Role, SessionFlag, StatusCode
from ..core.exceptions import DuplicateSubmission, InconsistentSession, OutsideWorkingWindow
from ..shifts.resolver import ShiftResolver
from ..timesheet.accountant import SessionTotals, TimeAccountant
from ..users.repository import EmployeeDirectory
from .classifier import AttendanceClassifier
from .model import AttendanceRecord, CheckAttempt
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeDirectory,
        shifts: ShiftResolver,
        *,
        classifier: AttendanceClassifier,
        accountant: Optional[TimeAccountant] = None,
        enforce_working_window: bool = False,
    ):
        self._attendance = attendance
        self._employees = employees
        self._shifts = shifts
        self._classifier = classifier
        self._accountant = accountant or TimeAccountant()
        self._enforce_working_window = bool(enforce_working_window)

    def submit(self, attempt: CheckAttempt) -> AttendanceRecord:
        """Classify, account and persist one check attempt.

        Office location and shift are read once up front, so a configuration
        change made while this runs cannot alter the outcome. A duplicate of an
        already authoritative check returns the stored record.
        """
        day = attempt.occurred_at.date()
        office = self._attendance.get_office_location()
        shift = self._shifts.resolve_shift(attempt.user_id, day)

        if self._enforce_working_window and shift is not None and not shift.accepts_check(attempt.type, attempt.occurred_at):
            raise OutsideWorkingWindow(f"{attempt.type.value} is not accepted at {attempt.occurred_at:%H:%M}")

        record = self._classifier.classify(attempt, office, shift)

        if record.type == CheckType.KELUAR and record.status == StatusCode.BERHASIL:
            totals = self._close_session(record, shift)
            record = replace(
                record,
                work_hours=totals.work_hours,
                overtime_hours=totals.overtime_hours,
                session_flag=totals.flag,
            )

        try:
            saved = self._attendance.insert_record(record)
        except DuplicateSubmission as dup:
            logger.info(
                "[attendance] duplicate %s for user=%s on %s, returning record #%s",
                record.type.value,
                record.user_id,
                day,
                dup.existing.record_id,
            )
            return dup.existing

        logger.info(
            "[attendance] user=%s %s -> %s (late=%s)",
            saved.user_id,
            saved.type.value,
            saved.status.value,
            saved.late_minutes if saved.is_late else 0,
        )
        return saved

    def _close_session(self, keluar: AttendanceRecord, shift) -> SessionTotals:
        masuk = self._attendance.find_authoritative(keluar.user_id, keluar.work_date, CheckType.MASUK)
        if masuk is None:
            return self._accountant.close_orphan(keluar)
        try:
            return self._accountant.close_session(masuk, keluar, shift)
        except InconsistentSession as exc:
            # Kept for audit with zero hours; the flag surfaces it in reports.
            logger.warning("[attendance] %s", exc)
            return SessionTotals(flag=SessionFlag.INCONSISTENT_SESSION)

    def mark_absent(self, user_id: str, day: date) -> AttendanceRecord:
        shift = self._shifts.resolve_shift(user_id, day)
        record = self._classifier.mark_absent(user_id, day, shift)
        return self._attendance.insert_record(record)

    def sweep_absences(self, day: date, *, now: Optional[datetime] = None) -> List[AttendanceRecord]:
        """Mark active non-admin employees with no berhasil masuk on `day`.

        Employees whose shift has not reached its cutover yet, or for whom
        `day` is not a work day, are left alone.
        """
        now = now or now_local()
        created: List[AttendanceRecord] = []

        for employee in self._employees.list_active_employees():
            if employee.role == Role.ADMIN:
                continue
            shift = self._shifts.resolve_shift(employee.user_id, day)
            if shift is None or not shift.is_work_day(day) or now < shift.cutover(day):
                continue
            if self._attendance.find_authoritative(employee.user_id, day, CheckType.MASUK) is not None:
                continue
            created.append(self.mark_absent(employee.user_id, day))

        logger.info("[attendance] absence sweep for %s marked %s employee(s)", day, len(created))
        return created

    def next_check_type(self, user_id: str, day: date) -> Optional[CheckType]:
        """masuk until one is recorded, then keluar; None once both exist."""
        for check_type in (CheckType.MASUK, CheckType.KELUAR):
            if self._attendance.find_authoritative(user_id, day, check_type) is None:
                return check_type
        return None
