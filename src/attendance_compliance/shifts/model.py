from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import FrozenSet, Optional

from ..core.constants import CHECK_WINDOW_EARLY_MINUTES, CHECK_WINDOW_LATE_MINUTES, DEFAULT_WORK_DAYS
from ..core.enums import CheckType
from ..core.exceptions import InvalidInput


@dataclass(frozen=True)
class ShiftPolicy:
    """Domain entity: the shift an attempt is judged against.

    Immutable; a policy change never touches records already classified.
    """

    start_time: time
    grace_minutes: int
    standard_hours: float
    end_time: Optional[time] = None
    break_minutes: int = 0
    work_days: FrozenSet[int] = field(default=DEFAULT_WORK_DAYS)

    def __post_init__(self) -> None:
        if self.grace_minutes is None or self.grace_minutes < 0:
            raise InvalidInput("grace_minutes must not be negative")
        if self.standard_hours is None or self.standard_hours <= 0:
            raise InvalidInput("standard_hours must be positive")
        if self.break_minutes is None or self.break_minutes < 0:
            raise InvalidInput("break_minutes must not be negative")
        if any(d not in range(7) for d in self.work_days):
            raise InvalidInput("work_days must be weekday numbers 0..6")

    def start_on(self, day: date) -> datetime:
        return datetime.combine(day, self.start_time)

    def late_threshold(self, day: date) -> datetime:
        """Last instant a masuk on `day` still counts as on time."""
        return self.start_on(day) + timedelta(minutes=self.grace_minutes)

    def end_on(self, day: date) -> Optional[datetime]:
        if self.end_time is None:
            return None
        end = datetime.combine(day, self.end_time)
        if self.end_time <= self.start_time:
            end += timedelta(days=1)
        return end

    def cutover(self, day: date) -> datetime:
        """Moment after which a missing masuk on `day` becomes an absence."""
        end = self.end_on(day)
        if end is not None:
            return end
        return datetime.combine(day + timedelta(days=1), time.min)

    def is_work_day(self, day: date) -> bool:
        return day.weekday() in self.work_days

    def accepts_check(self, check_type: CheckType, at: datetime) -> bool:
        """Whether `at` falls inside the window a check of this type may be made.

        masuk: start-30min .. end+30min; keluar: start .. end+30min.
        Without an end time every moment is accepted.
        """
        end = self.end_on(at.date())
        if end is None:
            return True
        start = self.start_on(at.date())
        if check_type == CheckType.MASUK:
            start -= timedelta(minutes=CHECK_WINDOW_EARLY_MINUTES)
        return start <= at <= end + timedelta(minutes=CHECK_WINDOW_LATE_MINUTES)
