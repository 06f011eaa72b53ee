from __future__ import annotations

from ...core.enums import StatusCode
from ...shifts.model import ShiftPolicy
from ..model import CheckAttempt
from .base import AttendanceStrategy, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    """No masuk recorded for a work day past its cutover."""

    def decide(self, attempt: CheckAttempt, shift: ShiftPolicy) -> StatusDecision:
        return StatusDecision(status=StatusCode.TIDAK_HADIR, note="absent: no masuk recorded")
