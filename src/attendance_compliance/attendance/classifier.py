"""Turns a check attempt into a classified attendance record."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.validators import require_non_empty
from ..core.enums import CheckType
from ..core.exceptions import ConfigurationMissing, InvalidInput
from ..locations.model import OfficeLocation
from ..shifts.model import ShiftPolicy
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, CheckAttempt

logger = logging.getLogger(__name__)


class AttendanceClassifier:
    """Pure given its inputs: office and shift are passed in per call.

    Persisting the result is the caller's job (see AttendanceService).
    """

    def __init__(self, factory: AttendanceStrategyFactory):
        self._factory = factory

    def classify(
        self,
        attempt: CheckAttempt,
        office: Optional[OfficeLocation],
        shift: Optional[ShiftPolicy],
    ) -> AttendanceRecord:
        if office is None:
            raise ConfigurationMissing("office location is not configured")
        if shift is None:
            raise ConfigurationMissing("shift policy is not configured")
        require_non_empty(attempt.user_id, "user_id")
        if attempt.type not in (CheckType.MASUK, CheckType.KELUAR):
            raise InvalidInput("attempt type must be masuk or keluar")
        if attempt.occurred_at is None:
            raise InvalidInput("occurred_at is required")

        strategy = self._factory.for_attempt(attempt, office)
        decision = strategy.decide(attempt, shift)
        logger.debug(
            "[attendance] user=%s type=%s -> %s via %s",
            attempt.user_id,
            attempt.type.value,
            decision.status.value,
            type(strategy).__name__,
        )

        coords = attempt.coordinates
        return AttendanceRecord(
            user_id=attempt.user_id,
            timestamp=attempt.occurred_at,
            type=attempt.type,
            status=decision.status,
            is_late=decision.is_late,
            late_minutes=decision.late_minutes,
            latitude=coords.latitude if coords else None,
            longitude=coords.longitude if coords else None,
            note=decision.note,
        )

    def mark_absent(self, user_id: str, day: date, shift: Optional[ShiftPolicy]) -> AttendanceRecord:
        """Synthetic absence for a work day that passed its cutover without a masuk."""
        if shift is None:
            raise ConfigurationMissing("shift policy is not configured")
        require_non_empty(user_id, "user_id")

        cutover = shift.cutover(day)
        marker = CheckAttempt(user_id=user_id, occurred_at=cutover, type=CheckType.ABSENT)
        decision = self._factory.for_absence().decide(marker, shift)
        return AttendanceRecord(
            user_id=user_id,
            timestamp=cutover,
            type=CheckType.ABSENT,
            status=decision.status,
            note=decision.note,
        )
