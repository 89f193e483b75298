from datetime import date, timedelta

from django.test import SimpleTestCase, override_settings

from booking.services.calendar import expand_range, month_day, parse_day, rental_days
from booking.services.errors import PricingValidationError


class ExpandRangeTests(SimpleTestCase):
    def test_inclusive_ordered_days(self):
        cases = [
            ("2024-07-01", "2024-07-05"),
            ("2024-12-28", "2025-01-03"),
            ("2024-02-27", "2024-03-01"),
            ("2023-03-24", "2023-03-28"),
        ]
        for start, end in cases:
            with self.subTest(start=start, end=end):
                days = expand_range(start, end)
                span = (date.fromisoformat(end) - date.fromisoformat(start)).days
                self.assertEqual(len(days), span + 1)
                self.assertEqual(days[0], date.fromisoformat(start))
                self.assertEqual(days[-1], date.fromisoformat(end))
                self.assertTrue(all(b - a == timedelta(days=1) for a, b in zip(days, days[1:])))

    def test_leap_day_is_included(self):
        self.assertIn(date(2024, 2, 29), expand_range("2024-02-28", "2024-03-01"))
        self.assertEqual(len(expand_range("2023-02-28", "2023-03-01")), 2)

    def test_reversed_range_is_empty(self):
        self.assertEqual(expand_range("2024-07-05", "2024-07-01"), [])

    def test_single_day(self):
        self.assertEqual(expand_range("2024-07-01", "2024-07-01"), [date(2024, 7, 1)])

    def test_accepts_date_objects(self):
        self.assertEqual(
            expand_range(date(2024, 12, 31), "2025-01-01"),
            [date(2024, 12, 31), date(2025, 1, 1)],
        )

    def test_malformed_dates_fail_fast(self):
        for bad in ("2024-7-1", "01/07/2024", "2024-13-01", "2024-02-30", "", None):
            with self.subTest(bad=bad):
                with self.assertRaises(PricingValidationError):
                    expand_range(bad, "2024-07-05")


class MonthDayTests(SimpleTestCase):
    def test_formats(self):
        self.assertEqual(month_day("12-15"), (12, 15))
        self.assertEqual(month_day("2024-02-29"), (2, 29))
        self.assertEqual(month_day("02-29"), (2, 29))
        self.assertEqual(month_day(date(2025, 1, 5)), (1, 5))

    def test_invalid_month_day(self):
        for bad in ("02-30", "13-01", "1-5", "winter"):
            with self.subTest(bad=bad):
                with self.assertRaises(PricingValidationError):
                    month_day(bad)

    def test_parse_day_error_code(self):
        with self.assertRaises(PricingValidationError) as ctx:
            parse_day("tomorrow")
        self.assertEqual(ctx.exception.code, "invalid_date")


class RentalDaysTests(SimpleTestCase):
    def test_nights_between_dates(self):
        self.assertEqual(rental_days("2024-07-01", "2024-07-05"), 4)

    def test_same_day_counts_as_one(self):
        self.assertEqual(rental_days("2024-07-01", "2024-07-01"), 1)

    def test_return_within_grace_window(self):
        self.assertEqual(rental_days("2024-07-01", "2024-07-05", "10:00", "12:00"), 4)

    def test_late_return_bills_extra_day(self):
        self.assertEqual(rental_days("2024-07-01", "2024-07-05", "10:00", "12:30"), 5)

    @override_settings(RENTAL_GRACE_HOURS=4)
    def test_grace_hours_from_settings(self):
        self.assertEqual(rental_days("2024-07-01", "2024-07-05", "10:00", "13:30"), 4)

    def test_reversed_range_rejected(self):
        with self.assertRaises(PricingValidationError) as ctx:
            rental_days("2024-07-05", "2024-07-01")
        self.assertEqual(ctx.exception.code, "reversed_range")

    def test_bad_time_rejected(self):
        with self.assertRaises(PricingValidationError):
            rental_days("2024-07-01", "2024-07-05", "noon", "10:00")

    @override_settings(RENTAL_MAX_DAYS=30)
    def test_window_longer_than_limit_rejected(self):
        self.assertEqual(rental_days("2024-07-01", "2024-07-31"), 30)
        for args in (("2024-07-01", "2024-08-01"), ("2024-07-01", "2024-07-31", "10:00", "15:00")):
            with self.subTest(args=args):
                with self.assertRaises(PricingValidationError) as ctx:
                    rental_days(*args)
                self.assertEqual(ctx.exception.code, "too_long")

    def test_absurd_window_rejected_before_expansion(self):
        with self.assertRaises(PricingValidationError) as ctx:
            rental_days("0001-01-01", "9999-12-31")
        self.assertEqual(ctx.exception.code, "too_long")
