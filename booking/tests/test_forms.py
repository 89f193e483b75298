from datetime import date
from decimal import Decimal
from unittest.mock import patch

from django.forms import inlineformset_factory
from django.test import TestCase, override_settings

from booking.forms import PricingTierInlineFormSet, QuoteRequestForm, ReservationForm
from booking.models import PricingTier, Vehicle

TODAY = date(2030, 5, 10)


class ReservationFormTests(TestCase):
    def setUp(self):
        self.vehicle = Vehicle.objects.create(make="Dacia", model="Logan")
        PricingTier.objects.create(vehicle=self.vehicle, min_days=1, max_days=999, price_per_day=Decimal("40"))

    def _data(self, **overrides):
        data = {
            "vehicle": self.vehicle.pk,
            "customer_name": "Ana Pop",
            "customer_email": "ana@example.com",
            "customer_phone": "0740 123 456",
            "start_date": "2030-05-10",
            "end_date": "2030-05-12",
            "pickup_time": "10:00",
            "return_time": "10:00",
            "pickup_location": "Cluj-Napoca",
            "return_location": "Cluj-Napoca",
            "payment_method": "card_on_delivery",
            "terms_accepted": "on",
        }
        data.update(overrides)
        return data

    def test_valid_form_prices_the_rental(self):
        form = ReservationForm(self._data(), today=TODAY)
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.quote.days, 2)
        self.assertEqual(form.quote.total_price, Decimal("80.00"))
        # Cluj-Napoca delivery and return are 10 each.
        self.assertEqual(sum(charge.amount for charge in form.charges), Decimal("20.00"))

    def test_pickup_in_the_past(self):
        form = ReservationForm(self._data(start_date="2030-05-09"), today=TODAY)
        self.assertFalse(form.is_valid())
        self.assertIn("start_date", form.errors)

    def test_past_pickup_uses_project_local_date(self):
        with patch("booking.forms.timezone.localdate", return_value=TODAY):
            self.assertFalse(ReservationForm(self._data(start_date="2030-05-09")).is_valid())
            form = ReservationForm(self._data())
            self.assertTrue(form.is_valid(), form.errors)

    @override_settings(RENTAL_MAX_DAYS=30)
    def test_rental_longer_than_limit(self):
        form = ReservationForm(self._data(end_date="2030-06-20"), today=TODAY)
        self.assertFalse(form.is_valid())
        self.assertIn("end_date", form.errors)
        self.assertIsNone(form.quote)

    def test_flight_number_format(self):
        form = ReservationForm(self._data(flight_number="w6 3301"), today=TODAY)
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data["flight_number"], "W6 3301")

        form = ReservationForm(self._data(flight_number="W63301"), today=TODAY)
        self.assertFalse(form.is_valid())
        self.assertIn("flight_number", form.errors)

    def test_phone_validation(self):
        for phone in ("123", "+40+712345678", "12+345678901"):
            with self.subTest(phone=phone):
                form = ReservationForm(self._data(customer_phone=phone), today=TODAY)
                self.assertFalse(form.is_valid())
                self.assertIn("customer_phone", form.errors)

    def test_unavailable_vehicle_is_not_offered(self):
        self.vehicle.status = "maintenance"
        self.vehicle.save()
        form = ReservationForm(self._data(), today=TODAY)
        self.assertFalse(form.is_valid())
        self.assertIn("vehicle", form.errors)


class QuoteRequestFormTests(TestCase):
    def test_same_day_is_allowed(self):
        form = QuoteRequestForm({"start": "2030-05-10", "end": "2030-05-10"})
        self.assertTrue(form.is_valid(), form.errors)

    def test_reversed_range(self):
        form = QuoteRequestForm({"start": "2030-05-10", "end": "2030-05-09"})
        self.assertFalse(form.is_valid())
        self.assertIn("end", form.errors)

    @override_settings(RENTAL_MAX_DAYS=30)
    def test_window_longer_than_limit(self):
        form = QuoteRequestForm({"start": "2030-05-10", "end": "2030-06-09"})
        self.assertTrue(form.is_valid(), form.errors)
        form = QuoteRequestForm(
            {"start": "2030-05-10", "end": "2030-06-09", "pickup_time": "09:00", "return_time": "18:00"}
        )
        self.assertFalse(form.is_valid())
        self.assertIn("end", form.errors)


TierFormSet = inlineformset_factory(
    Vehicle,
    PricingTier,
    formset=PricingTierInlineFormSet,
    fields=["min_days", "max_days", "price_per_day"],
    extra=0,
    can_delete=True,
)


def formset_data(*rows, deleted=()):
    data = {
        "pricing_tiers-TOTAL_FORMS": str(len(rows)),
        "pricing_tiers-INITIAL_FORMS": "0",
        "pricing_tiers-MIN_NUM_FORMS": "0",
        "pricing_tiers-MAX_NUM_FORMS": "1000",
    }
    for index, (min_days, max_days, price) in enumerate(rows):
        data[f"pricing_tiers-{index}-min_days"] = str(min_days)
        data[f"pricing_tiers-{index}-max_days"] = str(max_days)
        data[f"pricing_tiers-{index}-price_per_day"] = str(price)
        if index in deleted:
            data[f"pricing_tiers-{index}-DELETE"] = "on"
    return data


class PricingTierFormSetTests(TestCase):
    def setUp(self):
        self.vehicle = Vehicle.objects.create(make="Dacia", model="Logan")

    def test_contiguous_tiers_are_accepted(self):
        formset = TierFormSet(formset_data((1, 3, 100), (4, 999, 80)), instance=self.vehicle)
        self.assertTrue(formset.is_valid(), formset.non_form_errors())

    def test_overlapping_tiers_are_rejected(self):
        formset = TierFormSet(formset_data((1, 5, 100), (4, 999, 80)), instance=self.vehicle)
        self.assertFalse(formset.is_valid())
        self.assertTrue(formset.non_form_errors())

    def test_deleted_rows_are_ignored(self):
        data = formset_data((1, 5, 100), (4, 999, 80), (6, 999, 70), deleted=(1,))
        formset = TierFormSet(data, instance=self.vehicle)
        self.assertTrue(formset.is_valid(), formset.non_form_errors())

    def test_vehicle_needs_a_tier(self):
        formset = TierFormSet(formset_data(), instance=self.vehicle)
        self.assertFalse(formset.is_valid())
