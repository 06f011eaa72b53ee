from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import StatusCode
from ...shifts.model import ShiftPolicy
from ..model import CheckAttempt


@dataclass(frozen=True)
class StatusDecision:
    status: StatusCode
    is_late: bool = False
    late_minutes: int = 0
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how one outcome of a check is decided."""

    @abstractmethod
    def decide(self, attempt: CheckAttempt, shift: ShiftPolicy) -> StatusDecision:
        raise NotImplementedError
