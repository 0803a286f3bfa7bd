from __future__ import annotations

import argparse

from pay_periods import DEFAULT_NUMBER_OF_PERIODS, calculate_payroll_schedule, format_period_dates
from payroll_errors import PayrollScheduleError
from stat_holidays import adjust_payment_date


def main() -> None:
    parser = argparse.ArgumentParser(description='Print the bi-weekly pay-period schedule for a contract.')
    parser.add_argument('start_date', help='Contract start date (YYYY-MM-DD)')
    parser.add_argument('--periods', type=int, default=DEFAULT_NUMBER_OF_PERIODS)
    parser.add_argument('--adjust', action='store_true', help='Also show weekend/holiday-adjusted payment dates')
    args = parser.parse_args()

    try:
        schedule = calculate_payroll_schedule(args.start_date, args.periods)
    except PayrollScheduleError as exc:
        raise SystemExit(f'error: {exc}')

    print(f'Contract start: {schedule.contract_start_date.isoformat()}')
    print(f'First period end: {schedule.first_period_end.isoformat()}')
    for period in schedule.periods:
        print(format_period_dates(period))
        if args.adjust:
            adjusted = adjust_payment_date(period.payment_date)
            if adjusted != period.payment_date:
                print(f'    Adjusted payment: {adjusted.isoformat()}')


if __name__ == '__main__':
    main()
