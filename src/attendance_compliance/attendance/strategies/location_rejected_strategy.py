from __future__ import annotations

from ...core.enums import StatusCode
from ...shifts.model import ShiftPolicy
from ..model import CheckAttempt
from .base import AttendanceStrategy, StatusDecision


class LocationRejectedStrategy(AttendanceStrategy):
    """Coordinates outside the office radius."""

    def decide(self, attempt: CheckAttempt, shift: ShiftPolicy) -> StatusDecision:
        return StatusDecision(status=StatusCode.LOKASI_TIDAK_VALID, note="outside office radius")
