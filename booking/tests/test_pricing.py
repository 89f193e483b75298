from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import SimpleTestCase, override_settings

from booking.services.errors import DataIntegrityError, PricingValidationError
from booking.services.pricing import (
    PricingTier,
    pricing_config,
    quote,
    quote_rental,
    resolve_price_per_day,
    validate_tiers,
)
from booking.services.seasons import SeasonPeriod, SeasonRule

TIERS = [
    PricingTier(1, 3, Decimal("100")),
    PricingTier(4, 7, Decimal("80")),
    PricingTier(8, 999, Decimal("60")),
]
SUMMER = SeasonRule(1, "Summer", Decimal("1.2"), (SeasonPeriod("06-01", "09-30"),))
BASE_12 = SeasonRule(2, "Base", Decimal("1.2"))


class ResolvePricePerDayTests(SimpleTestCase):
    def test_duration_inside_tier(self):
        self.assertEqual(resolve_price_per_day(TIERS, 5), Decimal("80"))

    def test_tier_boundaries_select_their_own_tier(self):
        expected = {1: "100", 3: "100", 4: "80", 7: "80", 8: "60", 999: "60"}
        for days, price in expected.items():
            with self.subTest(days=days):
                self.assertEqual(resolve_price_per_day(TIERS, days), Decimal(price))

    def test_longer_than_every_tier_uses_greatest_max_days(self):
        tiers = [PricingTier(4, 7, Decimal("80")), PricingTier(1, 3, Decimal("100"))]
        self.assertEqual(resolve_price_per_day(tiers, 30), Decimal("80"))

    def test_overlapping_tiers_use_first_match(self):
        tiers = [PricingTier(1, 10, Decimal("90")), PricingTier(5, 15, Decimal("70"))]
        with self.assertLogs("booking.services.pricing", level="WARNING") as logs:
            self.assertEqual(resolve_price_per_day(tiers, 7), Decimal("90"))
        self.assertIn("overlap", logs.output[0])

    def test_gap_between_tiers_falls_back(self):
        tiers = [PricingTier(1, 3, Decimal("100")), PricingTier(10, 20, Decimal("50"))]
        self.assertEqual(resolve_price_per_day(tiers, 5), Decimal("50"))

    def test_empty_tier_list_is_integrity_error(self):
        with self.assertRaises(DataIntegrityError):
            resolve_price_per_day([], 3)

    def test_non_positive_or_fractional_days_rejected(self):
        for days in (0, -1, 2.5, True, "3", None):
            with self.subTest(days=days):
                with self.assertRaises(PricingValidationError):
                    resolve_price_per_day(TIERS, days)

    def test_total_for_any_positive_duration(self):
        prices = {tier.price_per_day for tier in TIERS}
        for days in range(1, 1200, 37):
            self.assertIn(resolve_price_per_day(TIERS, days), prices)


class QuoteTests(SimpleTestCase):
    def test_multiplier_and_total(self):
        result = quote([PricingTier(1, 365, Decimal("50"))], 3, [], BASE_12)
        self.assertEqual(result.price_per_day, Decimal("60.00"))
        self.assertEqual(result.total_price, Decimal("180.00"))
        self.assertEqual(result.base_price_per_day, Decimal("50"))
        self.assertEqual(result.season_name, "Base")
        self.assertEqual(result.currency, "EUR")

    def test_round_half_up(self):
        result = quote([PricingTier(1, 10, Decimal("10.35"))], 2, [], SeasonRule(3, "Peak", Decimal("1.5")))
        # 15.525 rounds up, not to even.
        self.assertEqual(result.price_per_day, Decimal("15.53"))
        self.assertEqual(result.total_price, Decimal("31.06"))

    def test_without_seasons_price_is_unchanged(self):
        result = quote(TIERS, 5)
        self.assertEqual(result.multiplier, Decimal("1.0"))
        self.assertEqual(result.price_per_day, Decimal("80.00"))
        self.assertEqual(result.total_price, Decimal("400.00"))
        self.assertIsNone(result.season_id)

    def test_identical_inputs_identical_quotes(self):
        args = (TIERS, 9, [SUMMER], BASE_12)
        self.assertEqual(quote(*args, dates=["2024-07-01"]), quote(*args, dates=["2024-07-01"]))

    @override_settings(PRICING_CURRENCY="RON")
    def test_currency_from_settings(self):
        self.assertEqual(quote(TIERS, 2).currency, "RON")
        self.assertEqual(pricing_config()["currency"], "RON")

    def test_quote_rental_uses_window_season(self):
        result = quote_rental(TIERS, "2024-07-01", "2024-07-06", [SUMMER], None)
        self.assertEqual(result.days, 5)
        self.assertEqual(result.price_per_day, Decimal("96.00"))
        self.assertEqual(result.total_price, Decimal("480.00"))
        self.assertEqual(result.season_name, "Summer")

    def test_quote_rental_late_return_moves_tier(self):
        result = quote_rental(TIERS, "2024-03-01", "2024-03-04", [SUMMER], None, "09:00", "15:00")
        self.assertEqual(result.days, 4)
        self.assertEqual(result.price_per_day, Decimal("80.00"))

    def test_quote_rental_rejects_reversed_window(self):
        with self.assertRaises(PricingValidationError):
            quote_rental(TIERS, "2024-07-06", "2024-07-01")

    def test_as_dict_is_json_friendly(self):
        payload = quote(TIERS, 5, [], BASE_12).as_dict()
        self.assertEqual(payload["price_per_day"], "96.00")
        self.assertEqual(payload["total_price"], "480.00")
        self.assertEqual(payload["season_id"], 2)


class ValidateTiersTests(SimpleTestCase):
    def test_well_formed_tiers_pass(self):
        validate_tiers(TIERS)
        validate_tiers([PricingTier(1, 999, Decimal("50"))])

    def test_problems_are_collected(self):
        tiers = [
            PricingTier(1, 5, Decimal("100")),
            PricingTier(4, 7, Decimal("80")),
            PricingTier(9, 8, Decimal("0")),
        ]
        with self.assertRaises(ValidationError) as ctx:
            validate_tiers(tiers)
        codes = {error.code for error in ctx.exception.error_list}
        self.assertEqual(codes, {"overlap", "max_days", "price"})

    def test_empty_list_rejected(self):
        with self.assertRaises(ValidationError):
            validate_tiers([])
