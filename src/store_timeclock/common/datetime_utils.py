from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional

from ..core.constants import SECONDS_PER_HOUR


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_year_month(value: str) -> tuple[int, int]:
    """Parse YYYY-MM string into (year, month)."""
    parsed = datetime.strptime(value, "%Y-%m")
    return parsed.year, parsed.month


def parse_hhmm(value: str) -> time:
    """Parse a wall-clock "HH:MM" value (no date)."""
    return datetime.strptime(value.strip(), "%H:%M").time()


def format_hhmm(value: Optional[datetime | time]) -> str:
    return value.strftime("%H:%M") if value else "-"


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def at_time(day: date, wall_clock: time) -> datetime:
    return datetime.combine(day, wall_clock)


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / SECONDS_PER_HOUR


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of a month."""
    last = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


def iter_month_days(year: int, month: int) -> Iterator[date]:
    first, last = month_bounds(year, month)
    day = first
    while day <= last:
        yield day
        day += timedelta(days=1)


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def week_start(day: date) -> date:
    """Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())
