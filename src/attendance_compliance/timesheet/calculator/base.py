from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ...shifts.model import ShiftPolicy


class WorkTimeCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked time)."""

    @abstractmethod
    def worked_hours(self, check_in: datetime, check_out: datetime, shift: ShiftPolicy) -> float:
        raise NotImplementedError
