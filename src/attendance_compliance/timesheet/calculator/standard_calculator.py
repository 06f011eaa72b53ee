from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import hours_between
from ...shifts.model import ShiftPolicy
from .base import WorkTimeCalculator


class StandardWorkTimeCalculator(WorkTimeCalculator):
    """Standard rule: (out - in) - break_minutes, not below 0."""

    def worked_hours(self, check_in: datetime, check_out: datetime, shift: ShiftPolicy) -> float:
        hours = hours_between(check_in, check_out) - shift.break_minutes / 60
        return max(hours, 0.0)
