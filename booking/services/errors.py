from django.core.exceptions import ValidationError


class PricingValidationError(ValidationError):
    """Bad caller input: malformed dates, non-positive durations, reversed ranges."""


class DataIntegrityError(Exception):
    """Stored pricing data cannot produce a quote (e.g. a vehicle without tiers)."""
