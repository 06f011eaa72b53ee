from __future__ import annotations

from ...core.enums import StatusCode
from ...shifts.model import ShiftPolicy
from ..model import CheckAttempt
from .base import AttendanceStrategy, StatusDecision


class FaceRejectedStrategy(AttendanceStrategy):
    """Face confidence missing or below threshold."""

    def decide(self, attempt: CheckAttempt, shift: ShiftPolicy) -> StatusDecision:
        if attempt.face_confidence is None:
            note = "face not verified: no match available"
        else:
            note = f"face not verified: confidence {attempt.face_confidence:.2f}"
        return StatusDecision(status=StatusCode.WAJAH_TIDAK_VALID, note=note)
