"""Calendar-date helpers for the payroll calendar.

Weekday numbers in this module count Sunday=0 through Saturday=6; the
Thursday/Friday rules in pay_periods are written against that ordering.
"""

from __future__ import annotations

import datetime

from payroll_errors import InvalidDateError

SUNDAY = 0
MONDAY = 1
TUESDAY = 2
WEDNESDAY = 3
THURSDAY = 4
FRIDAY = 5
SATURDAY = 6


def add_days(value: datetime.date, days: int) -> datetime.date:
    return value + datetime.timedelta(days=days)


def difference_in_days(date1: datetime.date, date2: datetime.date) -> int:
    """Absolute number of whole days between two dates."""
    return abs((date1 - date2).days)


def weekday_index(value: datetime.date) -> int:
    return value.isoweekday() % 7


def days_until_weekday(value: datetime.date, target: int) -> int:
    """Days forward from value to the next `target` weekday, in 1..7.

    A date already on the target weekday counts as 7 (the following week).
    """
    return (target - weekday_index(value) + 7) % 7 or 7


def is_weekend(value: datetime.date) -> bool:
    return weekday_index(value) in (SATURDAY, SUNDAY)


def parse_date(value) -> datetime.date:
    """Coerce an ISO date/datetime string or a date object into a date.

    Raises InvalidDateError for anything else.
    """
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if not isinstance(value, str):
        raise InvalidDateError('Date must be an ISO-8601 string', value=value)

    raw = value.strip()
    if not raw:
        raise InvalidDateError('Date is empty', value=value)
    try:
        return datetime.date.fromisoformat(raw)
    except ValueError:
        pass
    try:
        # Older interpreters do not accept a trailing 'Z' in fromisoformat.
        if raw.endswith('Z'):
            raw = raw[:-1] + '+00:00'
        return datetime.datetime.fromisoformat(raw).date()
    except ValueError:
        raise InvalidDateError(f'Invalid date: {value!r}', value=value) from None
