import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from django.conf import settings
from django.core.exceptions import ValidationError

from .calendar import expand_range, rental_days
from .errors import DataIntegrityError, PricingValidationError
from .seasons import resolve_multiplier, season_snapshot

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


@dataclass(frozen=True)
class PricingTier:
    min_days: int
    max_days: int
    price_per_day: Decimal


@dataclass(frozen=True)
class Quote:
    days: int
    base_price_per_day: Decimal
    multiplier: Decimal
    price_per_day: Decimal
    total_price: Decimal
    currency: str
    season_id: object = None
    season_name: str | None = None

    def as_dict(self) -> dict:
        return {
            "days": self.days,
            "base_price_per_day": str(self.base_price_per_day),
            "multiplier": str(self.multiplier),
            "price_per_day": str(self.price_per_day),
            "total_price": str(self.total_price),
            "currency": self.currency,
            "season_id": self.season_id,
            "season_name": self.season_name,
        }


def _money(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def _currency() -> str:
    return getattr(settings, "PRICING_CURRENCY", "EUR")


def resolve_price_per_day(tiers: Sequence, days: int) -> Decimal:
    """
    Return the base per-day price for a rental of ``days`` days.

    The first tier (in list order) whose [min_days, max_days] range holds the
    duration wins. Longer rentals than any tier covers use the tier with the
    greatest max_days.
    """
    if isinstance(days, bool) or not isinstance(days, int) or days < 1:
        raise PricingValidationError(
            f"Rental length must be a positive whole number of days, got {days!r}.",
            code="invalid_days",
        )
    tiers = list(tiers)
    if not tiers:
        raise DataIntegrityError("No pricing tiers configured.")

    matches = [tier for tier in tiers if tier.min_days <= days <= tier.max_days]
    if matches:
        if len(matches) > 1:
            logger.warning(
                "%d pricing tiers overlap for a %d-day rental; using %d-%d days.",
                len(matches),
                days,
                matches[0].min_days,
                matches[0].max_days,
            )
        return _money(matches[0].price_per_day)

    return _money(max(tiers, key=lambda tier: tier.max_days).price_per_day)


def validate_tiers(tiers: Sequence) -> None:
    """Reject tier lists that the resolver would have to guess about."""
    tiers = list(tiers)
    if not tiers:
        raise ValidationError("A vehicle needs at least one pricing tier.", code="no_tiers")

    errors = []
    for tier in tiers:
        label = f"{tier.min_days}-{tier.max_days} days"
        if tier.min_days < 1:
            errors.append(ValidationError(f"{label}: minimum days must be at least 1.", code="min_days"))
        if tier.max_days < tier.min_days:
            errors.append(ValidationError(f"{label}: maximum days is below minimum days.", code="max_days"))
        if _money(tier.price_per_day) <= 0:
            errors.append(ValidationError(f"{label}: price per day must be positive.", code="price"))

    ordered = sorted(tiers, key=lambda tier: tier.min_days)
    for previous, current in zip(ordered, ordered[1:]):
        if current.min_days <= previous.max_days:
            errors.append(
                ValidationError(
                    f"{previous.min_days}-{previous.max_days} days overlaps "
                    f"{current.min_days}-{current.max_days} days.",
                    code="overlap",
                )
            )
    if errors:
        raise ValidationError(errors)


def quote(tiers: Sequence, days: int, active_seasons: Sequence = (), current_season=None, dates=None) -> Quote:
    """
    Authoritative per-day and total price for a rental.

    ``dates`` is the rental's expanded day list used to pick the season; without
    it no season can overlap and the current season (if any) applies.
    """
    base = resolve_price_per_day(tiers, days)
    match = resolve_multiplier(dates or [], active_seasons, current_season)
    price_per_day = (base * match.multiplier).quantize(CENT, rounding=ROUND_HALF_UP)
    total_price = (price_per_day * days).quantize(CENT, rounding=ROUND_HALF_UP)
    return Quote(
        days=days,
        base_price_per_day=base,
        multiplier=match.multiplier,
        price_per_day=price_per_day,
        total_price=total_price,
        currency=_currency(),
        season_id=match.season_id,
        season_name=match.season_name,
    )


def quote_rental(
    tiers: Sequence,
    start_date,
    end_date,
    active_seasons: Sequence = (),
    current_season=None,
    pickup_time=None,
    return_time=None,
) -> Quote:
    """Quote a concrete pickup/return window."""
    days = rental_days(start_date, end_date, pickup_time, return_time)
    dates = expand_range(start_date, end_date)
    return quote(tiers, days, active_seasons, current_season, dates=dates)


def quote_vehicle(vehicle, start_date, end_date, pickup_time=None, return_time=None) -> Quote | None:
    """
    Quote a stored vehicle against the current season data.

    Returns None when the vehicle's pricing data is unusable so pages can show
    "price unavailable"; bad dates still raise PricingValidationError.
    """
    tiers = vehicle.tier_list()
    active_seasons, current_season = season_snapshot()
    try:
        return quote_rental(tiers, start_date, end_date, active_seasons, current_season, pickup_time, return_time)
    except DataIntegrityError:
        logger.exception("Pricing unavailable for vehicle %s (%s)", vehicle.pk, vehicle)
        return None


def pricing_config():
    """Pricing constants exposed to API clients."""
    return {
        "currency": _currency(),
        "decimal_places": 2,
        "rounding": "half_up",
        "grace_hours": getattr(settings, "RENTAL_GRACE_HOURS", 2),
        "open_ended_days": getattr(settings, "PRICING_TIER_OPEN_ENDED_DAYS", 999),
    }
