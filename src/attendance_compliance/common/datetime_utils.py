from __future__ import annotations

from datetime import date, datetime, time

END_OF_DAY = time(23, 59, 59, 999000)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_clock(value: str) -> time:
    """Parse HH:MM (or HH:MM:SS) string into time."""
    fmt = "%H:%M:%S" if value.count(":") == 2 else "%H:%M"
    return datetime.strptime(value, fmt).time()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    """Last instant of the day, inclusive bound for range filters (ms precision)."""
    return datetime.combine(day, END_OF_DAY)


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end (floored, may be negative)."""
    return int((end - start).total_seconds() // 60)


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600


def truncate_to_millis(moment: datetime) -> datetime:
    """Drop sub-millisecond precision so the stored DATETIME(3) keeps the same day."""
    return moment.replace(microsecond=moment.microsecond // 1000 * 1000)
