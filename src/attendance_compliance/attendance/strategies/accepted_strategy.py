from __future__ import annotations

from ...common.datetime_utils import minutes_between
from ...core.enums import CheckType, StatusCode
from ...shifts.model import ShiftPolicy
from ..model import CheckAttempt
from .base import AttendanceStrategy, StatusDecision


class AcceptedStrategy(AttendanceStrategy):
    """Face and location passed; a masuk is additionally judged for lateness."""

    def decide(self, attempt: CheckAttempt, shift: ShiftPolicy) -> StatusDecision:
        if attempt.type != CheckType.MASUK:
            return StatusDecision(status=StatusCode.BERHASIL)

        day = attempt.occurred_at.date()
        if attempt.occurred_at <= shift.late_threshold(day):
            return StatusDecision(status=StatusCode.BERHASIL, note="on time")

        late_minutes = max(0, minutes_between(shift.start_on(day), attempt.occurred_at))
        return StatusDecision(
            status=StatusCode.BERHASIL,
            is_late=True,
            late_minutes=late_minutes,
            note=f"late {late_minutes} min",
        )
