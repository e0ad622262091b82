"""Leave/month overlap arithmetic.

Leaves may straddle month boundaries (e.g. Jan 30 - Feb 2), so the number
of leave days charged to a month is the inclusive length of the
intersection of the leave interval with the calendar month.
"""

import calendar
from datetime import date
from typing import Tuple

from .schemas import Leave


def month_bounds(month: int, year: int) -> Tuple[date, date]:
    """First and last calendar day of a month.

    Raises:
        ValueError: If month is not in 1..12
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month {month}. Must be 1..12.")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def days_in_calendar_month(month: int, year: int) -> int:
    """Calendar length of a month (28-31)."""
    first, last = month_bounds(month, year)
    return (last - first).days + 1


def is_in_month(leave: Leave, month: int, year: int) -> bool:
    """True if the leave starts or ends in the month, or spans all of it.

    days_in_month() > 0 gives the same answer for well-formed leaves; this
    is kept as a cheap pre-filter.
    """
    month_start, month_end = month_bounds(month, year)
    starts_here = leave.start_date.month == month and leave.start_date.year == year
    ends_here = leave.end_date.month == month and leave.end_date.year == year
    spans = leave.start_date < month_start and leave.end_date > month_end
    return starts_here or ends_here or spans


def days_in_month(leave: Leave, month: int, year: int) -> int:
    """Number of leave days falling inside the given month.

    Example:
        Leave 2024-01-30..2024-02-02 -> 2 for January, 2 for February.
    """
    month_start, month_end = month_bounds(month, year)

    overlap_start = max(leave.start_date, month_start)
    overlap_end = min(leave.end_date, month_end)

    if overlap_start > overlap_end:
        return 0

    return (overlap_end - overlap_start).days + 1
