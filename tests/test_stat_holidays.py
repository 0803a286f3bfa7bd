import datetime
import unittest

from payroll_errors import InvalidArgumentError
from stat_holidays import HolidayCalendar, adjust_payment_date, is_statutory_holiday

D = datetime.date


class StatutoryHolidayTests(unittest.TestCase):
    def test_fixed_dates_any_year(self):
        for year in (1999, 2024, 2031):
            for month, day in ((1, 1), (7, 1), (12, 25), (12, 26)):
                with self.subTest(year=year, month=month, day=day):
                    self.assertTrue(is_statutory_holiday(D(year, month, day)))

    def test_table_is_intentionally_partial(self):
        # Good Friday, Victoria Day, Labour Day, Thanksgiving 2024
        for value in (D(2024, 3, 29), D(2024, 5, 20), D(2024, 9, 2), D(2024, 10, 14)):
            with self.subTest(value=value):
                self.assertFalse(is_statutory_holiday(value))
        self.assertFalse(is_statutory_holiday(D(2024, 12, 24)))

    def test_holiday_names(self):
        cal = HolidayCalendar()
        self.assertEqual(cal.holiday_name(D(2024, 7, 1)), 'Canada Day')
        self.assertIsNone(cal.holiday_name(D(2024, 7, 2)))
        self.assertEqual(len(cal), 4)
        self.assertIn(D(2024, 12, 25), cal)


class AdjustPaymentDateTests(unittest.TestCase):
    def test_business_day_unchanged(self):
        self.assertEqual(adjust_payment_date(D(2024, 1, 5)), D(2024, 1, 5))

    def test_saturday_moves_to_monday(self):
        self.assertEqual(adjust_payment_date(D(2024, 1, 6)), D(2024, 1, 8))
        self.assertEqual(adjust_payment_date(D(2024, 1, 7)), D(2024, 1, 8))

    def test_christmas_on_weekday_skips_boxing_day(self):
        # Wed Dec 25 2024 -> Thu Dec 26 is Boxing Day -> Fri Dec 27
        self.assertEqual(adjust_payment_date(D(2024, 12, 25)), D(2024, 12, 27))

    def test_holiday_then_weekend(self):
        # Fri Dec 26 2025 -> Sat/Sun -> Mon Dec 29
        self.assertEqual(adjust_payment_date(D(2025, 12, 26)), D(2025, 12, 29))

    def test_weekend_then_holiday(self):
        # Sat Dec 24 2022 -> Mon Dec 26 (Boxing Day) -> Tue Dec 27
        self.assertEqual(adjust_payment_date(D(2022, 12, 24)), D(2022, 12, 27))

    def test_canada_day(self):
        self.assertEqual(adjust_payment_date(D(2024, 7, 1)), D(2024, 7, 2))


class HolidayCalendarTests(unittest.TestCase):
    def test_custom_table(self):
        cal = HolidayCalendar({(9, 2): 'Labour Day 2024'})
        self.assertTrue(is_statutory_holiday(D(2024, 9, 2), cal))
        self.assertFalse(is_statutory_holiday(D(2024, 1, 1), cal))
        self.assertEqual(adjust_payment_date(D(2024, 9, 2), cal), D(2024, 9, 3))

    def test_empty_table_only_skips_weekends(self):
        cal = HolidayCalendar({})
        self.assertEqual(adjust_payment_date(D(2024, 1, 1), cal), D(2024, 1, 1))
        self.assertEqual(adjust_payment_date(D(2024, 1, 6), cal), D(2024, 1, 8))

    def test_leap_day_accepted_invalid_dates_rejected(self):
        HolidayCalendar({(2, 29): 'Leap'})
        with self.assertRaises(InvalidArgumentError):
            HolidayCalendar({(2, 30): 'Nope'})
        with self.assertRaises(InvalidArgumentError):
            HolidayCalendar({(13, 1): 'Nope'})

    def test_calendar_without_business_days(self):
        every_day = {}
        value = D(2000, 1, 1)
        while value.year == 2000:
            every_day[(value.month, value.day)] = 'Holiday'
            value += datetime.timedelta(days=1)
        with self.assertRaises(InvalidArgumentError):
            HolidayCalendar(every_day).adjust_payment_date(D(2024, 1, 2))

    def test_items_sorted(self):
        cal = HolidayCalendar()
        self.assertEqual(
            [key for key, _ in cal.items()],
            [(1, 1), (7, 1), (12, 25), (12, 26)],
        )


if __name__ == '__main__':
    unittest.main()
