"""
Week and working-day arithmetic for the booking grid.

All functions take "today" as an argument; only ``today()`` reads the clock.
"""

from datetime import date
from typing import List

import pendulum
from pendulum import Date

from .models import as_date

WORKING_DAYS_PER_WEEK = 5

# Czech labels, Monday first
DAY_NAMES = ["Pondělí", "Úterý", "Středa", "Čtvrtek", "Pátek"]


def today(timezone: str = "Europe/Prague") -> Date:
    """Return the current local date in the given timezone."""
    return pendulum.today(timezone).date()


def is_working_day(day: date) -> bool:
    """Check whether the day is Monday to Friday."""
    return day.weekday() < 5


def week_dates(week_offset: int, today: date) -> List[Date]:
    """
    Get Monday to Friday of the week ``week_offset`` weeks away from today.

    Weeks start on Monday, so a Saturday or Sunday belongs to the week that
    began on the preceding Monday.

    Args:
        week_offset: 0 for the current week, negative for past weeks
        today: Reference date

    Returns:
        Five consecutive dates starting with a Monday
    """
    current = as_date(today)
    monday = current.subtract(days=current.weekday()).add(weeks=week_offset)
    return [monday.add(days=i) for i in range(WORKING_DAYS_PER_WEEK)]


def working_days_between(start: date, end: date) -> int:
    """
    Count working days after ``start`` up to and including ``end``.

    Time of day is ignored. Returns 0 when ``end`` is not after ``start``.

    Example:
        Friday -> following Monday is 1, Monday -> Wednesday is 2.
    """
    current = as_date(start)
    target = as_date(end)
    if target <= current:
        return 0

    weeks, rest = divmod(target.toordinal() - current.toordinal(), 7)
    count = weeks * WORKING_DAYS_PER_WEEK

    # whole weeks always hold five working days, walk the remainder
    current = current.add(days=weeks * 7)
    for _ in range(rest):
        current = current.add(days=1)
        if is_working_day(current):
            count += 1

    return count


def week_range_label(week_offset: int, today: date) -> str:
    """Format the week as ``D. M. YYYY - D. M. YYYY`` (Monday to Friday)."""
    dates = week_dates(week_offset, today)
    return f"{_format_day(dates[0])} - {_format_day(dates[-1])}"


def _format_day(day: Date) -> str:
    return f"{day.day}. {day.month}. {day.year}"
