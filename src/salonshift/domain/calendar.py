"""Calendar helpers for month-based scheduling.

Months are identified by "YYYY-MM" keys. Weekday indices used in shift
conditions follow the salon's convention of 0 = Sunday through 6 = Saturday,
which differs from ``date.weekday()`` (0 = Monday).
"""

import calendar
from datetime import date, timedelta
from typing import Optional


def parse_month(month: str) -> tuple[int, int]:
    """Parse a "YYYY-MM" month key into (year, month).

    Raises:
        ValueError: If the key is malformed or the month is out of range.
    """
    try:
        year_str, month_str = month.split("-")
        year, month_num = int(year_str), int(month_str)
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid month key {month!r}, expected YYYY-MM")
    if not 1 <= month_num <= 12:
        raise ValueError(f"Invalid month key {month!r}, month must be 01-12")
    return year, month_num


def month_key(d: date) -> str:
    """Month key ("YYYY-MM") for a date."""
    return f"{d.year:04d}-{d.month:02d}"


def first_day(month: str) -> date:
    """First calendar date of a month."""
    year, month_num = parse_month(month)
    return date(year, month_num, 1)


def last_day(month: str) -> date:
    """Last calendar date of a month."""
    year, month_num = parse_month(month)
    return date(year, month_num, calendar.monthrange(year, month_num)[1])


def month_dates(month: str) -> list[date]:
    """All dates of a month in ascending order."""
    start = first_day(month)
    end = last_day(month)
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def weekday_index(d: date) -> int:
    """Weekday index with 0 = Sunday ... 6 = Saturday."""
    return d.isoweekday() % 7


def is_weekend(d: date) -> bool:
    """True on Saturday and Sunday."""
    return d.weekday() >= 5


def week_start(d: date) -> date:
    """Monday of the week containing ``d``."""
    return d - timedelta(days=d.weekday())


def full_weeks(start: date, end: date) -> list[date]:
    """Mondays of every Monday-Sunday week lying entirely within [start, end]."""
    monday = week_start(start)
    if monday < start:
        monday += timedelta(days=7)
    mondays = []
    while monday + timedelta(days=6) <= end:
        mondays.append(monday)
        monday += timedelta(days=7)
    return mondays


def deadline_date(month: str, deadline_days_before: int) -> date:
    """Request submission cutoff: the month's last day minus the offset."""
    return last_day(month) - timedelta(days=deadline_days_before)


def is_after_deadline(
    month: str,
    deadline_days_before: int,
    today: Optional[date] = None,
) -> bool:
    """Check whether the request deadline for a month has passed."""
    today = today or date.today()
    return today > deadline_date(month, deadline_days_before)
