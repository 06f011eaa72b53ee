from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.enums import CheckType, SessionFlag, StatusCode
from ..core.exceptions import InconsistentSession, InvalidInput
from ..shifts.model import ShiftPolicy
from ..attendance.model import AttendanceRecord
from .calculator.base import WorkTimeCalculator
from .calculator.standard_calculator import StandardWorkTimeCalculator

logger = logging.getLogger(__name__)

HOURS_PRECISION = 2


@dataclass(frozen=True)
class SessionTotals:
    work_hours: float = 0.0
    overtime_hours: float = 0.0
    flag: Optional[SessionFlag] = None


class TimeAccountant:
    """Derives worked and overtime hours from a masuk/keluar pair."""

    def __init__(self, calculator: Optional[WorkTimeCalculator] = None):
        self._calculator = calculator or StandardWorkTimeCalculator()

    def close_session(self, masuk: AttendanceRecord, keluar: AttendanceRecord, shift: ShiftPolicy) -> SessionTotals:
        for record, expected in ((masuk, CheckType.MASUK), (keluar, CheckType.KELUAR)):
            if record.type != expected or record.status != StatusCode.BERHASIL:
                raise InvalidInput(f"session boundary must be a berhasil {expected.value} record")
        if masuk.user_id != keluar.user_id or masuk.work_date != keluar.work_date:
            raise InvalidInput("session boundaries must share user and day")
        if keluar.timestamp < masuk.timestamp:
            raise InconsistentSession(
                f"keluar {keluar.timestamp:%H:%M:%S} precedes masuk {masuk.timestamp:%H:%M:%S} "
                f"for user {keluar.user_id} on {keluar.work_date}"
            )

        work = round(self._calculator.worked_hours(masuk.timestamp, keluar.timestamp, shift), HOURS_PRECISION)
        overtime = round(max(0.0, work - shift.standard_hours), HOURS_PRECISION)
        return SessionTotals(work_hours=work, overtime_hours=overtime)

    def close_orphan(self, keluar: AttendanceRecord) -> SessionTotals:
        """keluar without a same-day berhasil masuk: zero hours, flagged."""
        logger.warning(
            "[timesheet] orphan close-out: user=%s date=%s has no berhasil masuk",
            keluar.user_id,
            keluar.work_date,
        )
        return SessionTotals(flag=SessionFlag.ORPHAN_CLOSE_OUT)
