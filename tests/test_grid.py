import calendar
import sys
import unittest
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from views.grid import (
    days_in_current_week,
    days_in_month,
    parse_weekday,
    to_day,
    weekday_labels,
)


class DaysInMonthTests(unittest.TestCase):
    def test_march_2024_sunday_start(self):
        # March 2024 runs Friday to Sunday, so the last week spills into April.
        days = days_in_month(date(2024, 3, 1), first_weekday=calendar.SUNDAY)
        self.assertEqual(len(days), 42)
        self.assertEqual(days[0], date(2024, 2, 25))
        self.assertEqual(days[-1], date(2024, 4, 6))

    def test_march_2024_monday_start(self):
        days = days_in_month(date(2024, 3, 1), first_weekday=calendar.MONDAY)
        self.assertEqual(len(days), 35)
        self.assertEqual(days[0], date(2024, 2, 26))
        self.assertEqual(days[-1], date(2024, 3, 31))

    def test_february_2021_monday_start_is_four_weeks(self):
        days = days_in_month(date(2021, 2, 14), first_weekday=calendar.MONDAY)
        self.assertEqual(days[0], date(2021, 2, 1))
        self.assertEqual(days[-1], date(2021, 2, 28))
        self.assertEqual(len(days), 28)

    def test_full_weeks_for_every_month_and_start(self):
        for year in (2023, 2024):
            for month in range(1, 13):
                first = date(year, month, 1)
                last = date(year, month, calendar.monthrange(year, month)[1])
                for first_weekday in range(7):
                    days = days_in_month(date(year, month, 15), first_weekday)
                    self.assertTrue(days)
                    self.assertEqual(len(days) % 7, 0)
                    self.assertEqual(days[0].weekday(), first_weekday)
                    self.assertEqual(days[-1].weekday(), (first_weekday + 6) % 7)
                    self.assertIn(first, days)
                    self.assertIn(last, days)
                    self.assertLessEqual((first - days[0]).days, 6)
                    self.assertLessEqual((days[-1] - last).days, 6)
                    steps = {(b - a).days for a, b in zip(days, days[1:])}
                    self.assertEqual(steps, {1})

    def test_datetime_reference_uses_local_day(self):
        berlin = timezone(timedelta(hours=1))
        # 23:30 UTC on Jan 31 is already Feb 1 at UTC+1.
        reference = datetime(2024, 1, 31, 23, 30, tzinfo=timezone.utc)
        days = days_in_month(reference, calendar.MONDAY, tzinfo=berlin)
        self.assertIn(date(2024, 2, 29), days)
        self.assertNotIn(date(2024, 1, 15), days)

    def test_unresolvable_weeks_give_empty_range(self):
        self.assertEqual(days_in_month(date(9999, 12, 1), calendar.SUNDAY), [])
        self.assertEqual(days_in_month(date(1, 1, 1), calendar.SUNDAY), [])

    def test_invalid_reference_gives_empty_range(self):
        self.assertEqual(days_in_month(None, calendar.SUNDAY), [])
        self.assertEqual(days_in_month("2024-03-01", calendar.SUNDAY), [])


class CurrentWeekTests(unittest.TestCase):
    def test_week_starts_on_first_weekday(self):
        days = days_in_current_week(datetime(2024, 3, 6, 15, 0), first_weekday=calendar.SUNDAY)
        self.assertEqual(days, [date(2024, 3, 3) + timedelta(days=n) for n in range(7)])

    def test_now_on_first_weekday_starts_that_day(self):
        days = days_in_current_week(date(2024, 3, 4), first_weekday=calendar.MONDAY)
        self.assertEqual(days[0], date(2024, 3, 4))
        self.assertEqual(days[-1], date(2024, 3, 10))

    def test_always_seven_consecutive_days(self):
        start = date(2024, 1, 1)
        for offset in range(30):
            for first_weekday in range(7):
                days = days_in_current_week(start + timedelta(days=offset), first_weekday)
                self.assertEqual(len(days), 7)
                self.assertEqual(days[0].weekday(), first_weekday)
                self.assertIn(start + timedelta(days=offset), days)
                self.assertEqual((days[-1] - days[0]).days, 6)

    def test_defaults_to_now(self):
        days = days_in_current_week(first_weekday=calendar.MONDAY)
        self.assertEqual(len(days), 7)
        self.assertIn(date.today(), days)

    def test_week_past_calendar_bounds_is_empty(self):
        # 0001-01-01 is a Monday, so a Sunday-start week would begin in year 0.
        self.assertEqual(days_in_current_week(date(1, 1, 1), calendar.SUNDAY), [])
        self.assertEqual(days_in_current_week(date(9999, 12, 31), calendar.SUNDAY), [])


class HelperTests(unittest.TestCase):
    def test_to_day(self):
        self.assertEqual(to_day(date(2024, 3, 5)), date(2024, 3, 5))
        self.assertEqual(to_day(datetime(2024, 3, 5, 23, 59)), date(2024, 3, 5))
        with self.assertRaises(TypeError):
            to_day(None)

    def test_parse_weekday(self):
        self.assertIsNone(parse_weekday(None))
        self.assertIsNone(parse_weekday(""))
        self.assertEqual(parse_weekday("Sunday"), calendar.SUNDAY)
        self.assertEqual(parse_weekday("2"), 2)
        self.assertEqual(parse_weekday(0), calendar.MONDAY)
        with self.assertRaises(ValueError):
            parse_weekday("someday")
        with self.assertRaises(ValueError):
            parse_weekday(7)

    def test_weekday_labels_rotate(self):
        labels = weekday_labels(calendar.SUNDAY)
        self.assertEqual(labels[0], calendar.day_abbr[calendar.SUNDAY])
        self.assertEqual(labels[1], calendar.day_abbr[calendar.MONDAY])
        self.assertEqual(len(labels), 7)


if __name__ == "__main__":
    unittest.main()
