import re
from datetime import date

from django import forms
from django.core.exceptions import ValidationError
from django.forms.models import BaseInlineFormSet
from django.utils import timezone

from .models import Reservation, Vehicle
from .services.calendar import rental_days
from .services.extras import extras_breakdown
from .services.errors import PricingValidationError
from .services.pricing import quote_vehicle, validate_tiers

FLIGHT_NUMBER_RE = re.compile(r"^[A-Z]{2}\s\d+$")


def _clean_phone_value(value: str) -> str:
    """Keep digits and a leading '+'; reject anything that is not E.164 sized."""
    raw = (value or "").strip()
    cleaned = re.sub(r"[^0-9+]", "", raw)
    if cleaned.count("+") > 1 or ("+" in cleaned and not cleaned.startswith("+")):
        raise ValidationError("Phone number is not valid.")
    digits = cleaned.lstrip("+")
    if not 8 <= len(digits) <= 15:
        raise ValidationError("Phone number is not valid.")
    return cleaned


class QuoteRequestForm(forms.Form):
    start = forms.DateField()
    end = forms.DateField()
    pickup_time = forms.TimeField(required=False)
    return_time = forms.TimeField(required=False)

    def clean(self):
        cleaned_data = super().clean()
        start = cleaned_data.get("start")
        end = cleaned_data.get("end")
        if start and end and end < start:
            self.add_error("end", "Return date must not be before pickup date.")
        elif start and end:
            try:
                rental_days(start, end, cleaned_data.get("pickup_time"), cleaned_data.get("return_time"))
            except PricingValidationError as exc:
                self.add_error("end", exc)
        return cleaned_data


class ReservationForm(forms.ModelForm):
    scdw = forms.BooleanField(required=False)
    snow_chains = forms.BooleanField(required=False)
    child_seats_1_4 = forms.IntegerField(required=False, min_value=0, max_value=4, initial=0)
    child_seats_5_12 = forms.IntegerField(required=False, min_value=0, max_value=4, initial=0)
    extra_50km_blocks = forms.IntegerField(required=False, min_value=0, max_value=100, initial=0)
    terms_accepted = forms.BooleanField(error_messages={"required": "You must accept the terms and conditions."})

    class Meta:
        model = Reservation
        fields = [
            "vehicle",
            "customer_name",
            "customer_email",
            "customer_phone",
            "customer_message",
            "flight_number",
            "start_date",
            "end_date",
            "pickup_time",
            "return_time",
            "pickup_location",
            "return_location",
            "payment_method",
        ]

    def __init__(self, *args, today: date | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.today = today or timezone.localdate()
        self.fields["vehicle"].queryset = Vehicle.objects.filter(status="available").select_related("vehicle_class")
        self.quote = None
        self.charges = []

    def clean_customer_phone(self):
        return _clean_phone_value(self.cleaned_data.get("customer_phone"))

    def clean_flight_number(self):
        value = (self.cleaned_data.get("flight_number") or "").strip().upper()
        if value and not FLIGHT_NUMBER_RE.match(value):
            raise ValidationError("Flight number must look like 'AA 1234'.")
        return value

    def clean_start_date(self):
        start_date = self.cleaned_data.get("start_date")
        if start_date and start_date < self.today:
            raise ValidationError("Pickup date cannot be in the past.")
        return start_date

    def clean(self):
        cleaned_data = super().clean()

        start_date = cleaned_data.get("start_date")
        end_date = cleaned_data.get("end_date")
        vehicle = cleaned_data.get("vehicle")
        if not (start_date and end_date and vehicle):
            return cleaned_data
        if end_date < start_date:
            self.add_error("end_date", "Return date must not be before pickup date.")
            return cleaned_data
        try:
            rental_days(start_date, end_date, cleaned_data.get("pickup_time"), cleaned_data.get("return_time"))
        except PricingValidationError as exc:
            self.add_error("end_date", exc)
            return cleaned_data

        try:
            self.quote = quote_vehicle(
                vehicle,
                start_date,
                end_date,
                cleaned_data.get("pickup_time"),
                cleaned_data.get("return_time"),
            )
        except PricingValidationError as exc:
            self.add_error(None, exc)
            return cleaned_data
        if self.quote is None:
            self.add_error(None, "Pricing is currently unavailable for this vehicle.")
            return cleaned_data

        vehicle_class = vehicle.vehicle_class
        self.charges = extras_breakdown(
            self.quote.days,
            self.quote.price_per_day,
            scdw=cleaned_data.get("scdw") or False,
            snow_chains=cleaned_data.get("snow_chains") or False,
            child_seats_1_4=cleaned_data.get("child_seats_1_4") or 0,
            child_seats_5_12=cleaned_data.get("child_seats_5_12") or 0,
            extra_50km_blocks=cleaned_data.get("extra_50km_blocks") or 0,
            additional_50km_price=vehicle_class.additional_50km_price if vehicle_class else 0,
            pickup_location=cleaned_data.get("pickup_location"),
            return_location=cleaned_data.get("return_location"),
        )
        return cleaned_data

    def save(self, commit=True):
        instance = super().save(commit=False)
        instance.days = self.quote.days
        instance.price_per_day = self.quote.price_per_day
        instance.season_name = self.quote.season_name or ""
        instance.rental_price = self.quote.total_price
        instance.additional_charges = [charge.as_dict() for charge in self.charges]
        instance.total_price = self.quote.total_price + sum((charge.amount for charge in self.charges), 0)
        if commit:
            instance.save()
        return instance


class PricingTierInlineFormSet(BaseInlineFormSet):
    """Validate the whole tier list of a vehicle at once."""

    def clean(self):
        super().clean()
        if any(self.errors):
            return
        # Instances already carry the cleaned values at this point.
        tiers = [
            form.instance
            for form in self.forms
            if form.cleaned_data and not form.cleaned_data.get("DELETE", False)
        ]
        validate_tiers(tiers)
