"""Bi-weekly pay-period schedule for contractor invoicing.

Derives the pay periods for a contract from its start date: period
boundaries, submission deadlines (day after the period ends) and payment
dates (the Friday after the period ends).

Notes / scope:
- Periods are anchored to end on Thursdays. A contract starting Monday to
  Thursday gets a short first period up to the next Thursday; a contract
  starting Friday to Sunday gets one full period plus the days to the
  following Thursday added to its first period.
- A zero-day offset to a target weekday wraps to the following week. A
  Thursday start therefore gets an 8-day first period, and a period ending
  on a Friday is paid the Friday after.
- Payment dates here are raw Fridays. Weekend/holiday adjustment is left to
  stat_holidays.adjust_payment_date.
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from typing import Optional

from date_utils import (
    FRIDAY,
    SATURDAY,
    SUNDAY,
    THURSDAY,
    add_days,
    days_until_weekday,
    difference_in_days,
    parse_date,
    weekday_index,
)
from payroll_errors import InvalidArgumentError

logger = logging.getLogger(__name__)

PERIOD_LENGTH_DAYS = 14
DEFAULT_NUMBER_OF_PERIODS = 26  # one year of bi-weekly periods
MIN_NUMBER_OF_PERIODS = 1
MAX_NUMBER_OF_PERIODS = 520  # twenty years
DEFAULT_DEADLINE_HORIZON_DAYS = 30


@dataclass(frozen=True)
class PayPeriod:
    period_number: int
    start_date: datetime.date
    end_date: datetime.date
    submission_deadline: datetime.date
    payment_date: datetime.date
    is_partial_period: bool
    days_in_period: int

    def contains(self, day: datetime.date) -> bool:
        return self.start_date <= day <= self.end_date

    def to_dict(self) -> dict:
        return {
            'periodNumber': self.period_number,
            'startDate': self.start_date.isoformat(),
            'endDate': self.end_date.isoformat(),
            'submissionDeadline': self.submission_deadline.isoformat(),
            'paymentDate': self.payment_date.isoformat(),
            'isPartialPeriod': self.is_partial_period,
            'daysInPeriod': self.days_in_period,
        }


@dataclass(frozen=True)
class PayrollSchedule:
    contract_start_date: datetime.date
    first_period_end: datetime.date
    periods: tuple[PayPeriod, ...]

    @property
    def has_partial_first_period(self) -> bool:
        return bool(self.periods) and self.periods[0].is_partial_period

    def to_dict(self) -> dict:
        return {
            'contractStartDate': self.contract_start_date.isoformat(),
            'firstPeriodEnd': self.first_period_end.isoformat(),
            'periods': [p.to_dict() for p in self.periods],
        }


def _next_friday(value: datetime.date) -> datetime.date:
    return add_days(value, days_until_weekday(value, FRIDAY))


def _validate_number_of_periods(number_of_periods) -> int:
    if isinstance(number_of_periods, bool) or not isinstance(number_of_periods, int):
        raise InvalidArgumentError(
            'numberOfPeriods must be an integer',
            field='numberOfPeriods',
            value=number_of_periods,
        )
    if not MIN_NUMBER_OF_PERIODS <= number_of_periods <= MAX_NUMBER_OF_PERIODS:
        raise InvalidArgumentError(
            f'numberOfPeriods must be between {MIN_NUMBER_OF_PERIODS} and {MAX_NUMBER_OF_PERIODS}',
            field='numberOfPeriods',
            value=number_of_periods,
        )
    return number_of_periods


def find_first_period_end(start_date: datetime.date) -> datetime.date:
    """End date of the first pay period for a contract starting on start_date."""
    dow = weekday_index(start_date)
    days_until_thursday = days_until_weekday(start_date, THURSDAY)
    if dow in (FRIDAY, SATURDAY, SUNDAY):
        # Full period plus the days to Thursday.
        return add_days(start_date, PERIOD_LENGTH_DAYS - 1 + days_until_thursday)
    return add_days(start_date, days_until_thursday)


def build_pay_period(
    start_date: datetime.date,
    end_date: datetime.date,
    period_number: int,
    check_partial: bool,
) -> PayPeriod:
    days_in_period = difference_in_days(end_date, start_date) + 1
    return PayPeriod(
        period_number=period_number,
        start_date=start_date,
        end_date=end_date,
        submission_deadline=add_days(end_date, 1),
        payment_date=_next_friday(end_date),
        is_partial_period=bool(check_partial) and days_in_period < PERIOD_LENGTH_DAYS,
        days_in_period=days_in_period,
    )


def calculate_payroll_schedule(
    contract_start_date,
    number_of_periods: int = DEFAULT_NUMBER_OF_PERIODS,
) -> PayrollSchedule:
    """Build the pay-period schedule for a contract.

    contract_start_date may be an ISO date string or a date. Raises
    InvalidDateError for an unparseable date and InvalidArgumentError when
    number_of_periods is not an integer in
    [MIN_NUMBER_OF_PERIODS, MAX_NUMBER_OF_PERIODS].
    """
    start_date = parse_date(contract_start_date)
    count = _validate_number_of_periods(number_of_periods)

    first_period_end = find_first_period_end(start_date)
    periods = [build_pay_period(start_date, first_period_end, 1, True)]

    current_start = add_days(first_period_end, 1)
    for period_number in range(2, count + 1):
        period_end = add_days(current_start, PERIOD_LENGTH_DAYS - 1)
        periods.append(build_pay_period(current_start, period_end, period_number, False))
        current_start = add_days(period_end, 1)

    logger.debug(
        'Payroll schedule: start=%s first_end=%s periods=%d last_end=%s',
        start_date,
        first_period_end,
        len(periods),
        periods[-1].end_date,
    )
    return PayrollSchedule(
        contract_start_date=start_date,
        first_period_end=first_period_end,
        periods=tuple(periods),
    )


def get_current_pay_period(
    schedule: PayrollSchedule,
    today: Optional[datetime.date] = None,
) -> Optional[PayPeriod]:
    day = today or datetime.date.today()
    for period in schedule.periods:
        if period.contains(day):
            return period
    return None


def get_upcoming_deadlines(
    schedule: PayrollSchedule,
    days_ahead: int = DEFAULT_DEADLINE_HORIZON_DAYS,
    today: Optional[datetime.date] = None,
) -> list[PayPeriod]:
    """Periods whose submission deadline falls within [today, today + days_ahead]."""
    if isinstance(days_ahead, bool) or not isinstance(days_ahead, int) or days_ahead < 0:
        raise InvalidArgumentError(
            'daysAhead must be a non-negative integer',
            field='daysAhead',
            value=days_ahead,
        )
    day = today or datetime.date.today()
    horizon = add_days(day, days_ahead)
    return [p for p in schedule.periods if day <= p.submission_deadline <= horizon]


def format_period_dates(period: PayPeriod) -> str:
    partial = ' (Partial Period)' if period.is_partial_period else ''
    return (
        f'Period {period.period_number}: {period.start_date.isoformat()} - '
        f'{period.end_date.isoformat()} ({period.days_in_period} days)\n'
        f'    Submit by: {period.submission_deadline.isoformat()}\n'
        f'    Payment: {period.payment_date.isoformat()}{partial}'
    )
