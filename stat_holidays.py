"""Statutory holidays and payment-date adjustment.

Scope:
- Fixed-date holidays only, keyed by (month, day) and applied to every year.
- The default table is the four federal dates the payroll calendar pays
  around. Moveable and provincial holidays (Good Friday, Labour Day,
  Thanksgiving, ...) are not in it; add them to a HolidayCalendar if needed.
"""

from __future__ import annotations

import datetime
from typing import Optional

from date_utils import add_days, is_weekend
from payroll_errors import InvalidArgumentError

DEFAULT_STATUTORY_HOLIDAYS: dict[tuple[int, int], str] = {
    (1, 1): "New Year's Day",
    (7, 1): 'Canada Day',
    (12, 25): 'Christmas Day',
    (12, 26): 'Boxing Day',
}

# Stepping further than this means the calendar leaves no business day.
_MAX_ADJUSTMENT_DAYS = 366


class HolidayCalendar:
    """A (month, day) -> name table of holidays that recur every year."""

    def __init__(self, holidays: Optional[dict[tuple[int, int], str]] = None):
        table = DEFAULT_STATUTORY_HOLIDAYS if holidays is None else holidays
        self._holidays: dict[tuple[int, int], str] = {}
        for (month, day), name in table.items():
            try:
                # 2000 is a leap year, so Feb 29 is accepted.
                datetime.date(2000, int(month), int(day))
            except (TypeError, ValueError):
                raise InvalidArgumentError(
                    f'Invalid holiday date {month}-{day}',
                    field='holidays',
                    value=(month, day),
                ) from None
            self._holidays[(int(month), int(day))] = str(name)

    def __len__(self) -> int:
        return len(self._holidays)

    def __contains__(self, value: datetime.date) -> bool:
        return self.is_holiday(value)

    def items(self) -> list[tuple[tuple[int, int], str]]:
        return sorted(self._holidays.items())

    def holiday_name(self, value: datetime.date) -> Optional[str]:
        return self._holidays.get((value.month, value.day))

    def is_holiday(self, value: datetime.date) -> bool:
        return (value.month, value.day) in self._holidays

    def adjust_payment_date(self, value: datetime.date) -> datetime.date:
        """Move a payment date forward to the next weekday that is not a holiday."""
        adjusted = value
        steps = 0
        while True:
            while is_weekend(adjusted):
                adjusted = add_days(adjusted, 1)
                steps += 1
            if not self.is_holiday(adjusted):
                return adjusted
            adjusted = add_days(adjusted, 1)
            steps += 1
            if steps > _MAX_ADJUSTMENT_DAYS:
                raise InvalidArgumentError(
                    'Holiday calendar leaves no business day',
                    field='holidays',
                    context={'date': value.isoformat()},
                )


DEFAULT_CALENDAR = HolidayCalendar()


def is_statutory_holiday(value: datetime.date, calendar: Optional[HolidayCalendar] = None) -> bool:
    return (DEFAULT_CALENDAR if calendar is None else calendar).is_holiday(value)


def adjust_payment_date(value: datetime.date, calendar: Optional[HolidayCalendar] = None) -> datetime.date:
    """Shift a payment date off weekends and statutory holidays."""
    return (DEFAULT_CALENDAR if calendar is None else calendar).adjust_payment_date(value)
