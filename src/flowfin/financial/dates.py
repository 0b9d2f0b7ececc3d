"""Calendar-date helpers.

Everything here works on plain ``datetime.date`` values (year, month, day).
There is no time-of-day and no timezone anywhere in the engine, so a date
entered as 2024-01-31 is never shifted by a UTC conversion.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime


def parse_date(value: date | datetime | str) -> date:
    """Coerce a value to a calendar date.

    Strings must be ISO ``YYYY-MM-DD``. A ``datetime`` keeps its own
    (local) year/month/day and drops the time part.

    Examples:
        >>> parse_date("2024-02-29")
        datetime.date(2024, 2, 29)
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError as e:
            raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD") from e
    raise TypeError(f"Cannot interpret {type(value).__name__} as a date")


def add_months(value: date, months: int) -> date:
    """Shift a date by whole months, clamping to the end of short months.

    The day of month is preserved when the target month has it, otherwise
    the last day of the target month is used.

    Examples:
        >>> add_months(date(2024, 1, 31), 1)
        datetime.date(2024, 2, 29)
        >>> add_months(date(2023, 1, 31), 1)
        datetime.date(2023, 2, 28)
        >>> add_months(date(2024, 3, 31), -1)
        datetime.date(2024, 2, 29)
    """
    month_index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(value.day, last_day))


def months_between(start: date, end: date) -> int:
    """Whole calendar months from ``start`` to ``end``, ignoring the day of month.

    Negative when ``end`` falls in an earlier month.
    """
    return (end.year - start.year) * 12 + (end.month - start.month)
