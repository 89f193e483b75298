"""Calendar-day helpers shared by season matching and rental duration."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta

from django.conf import settings

from .errors import PricingValidationError

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_MONTH_DAY = re.compile(r"^(?:\d{4}-)?(\d{2})-(\d{2})$")
# Leap year, so 02-29 is a valid recurring day.
_REFERENCE_YEAR = 2000


def parse_day(value) -> date:
    """Return ``value`` as a ``date``; accepts date/datetime or ``YYYY-MM-DD``."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value or "").strip()
    if not _ISO_DATE.match(text):
        raise PricingValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD.", code="invalid_date")
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise PricingValidationError(f"Invalid date {value!r}.", code="invalid_date") from exc


def month_day(value) -> tuple[int, int]:
    """
    Reduce a date to its (month, day) pair.

    Accepts a date, a ``YYYY-MM-DD`` string or a bare ``MM-DD`` string. The
    year, when present, is ignored: season periods recur every year.
    """
    if isinstance(value, date):
        return value.month, value.day
    text = str(value or "").strip()
    match = _MONTH_DAY.match(text)
    if not match:
        raise PricingValidationError(f"Invalid date {value!r}, expected MM-DD or YYYY-MM-DD.", code="invalid_date")
    month, day = int(match.group(1)), int(match.group(2))
    try:
        date(_REFERENCE_YEAR, month, day)
    except ValueError as exc:
        raise PricingValidationError(f"Invalid date {value!r}.", code="invalid_date") from exc
    return month, day


def expand_range(start, end) -> list[date]:
    """Inclusive list of calendar days from ``start`` to ``end``; empty when reversed."""
    start_day = parse_day(start)
    end_day = parse_day(end)
    if start_day > end_day:
        return []
    span = (end_day - start_day).days
    return [start_day + timedelta(days=offset) for offset in range(span + 1)]


def _parse_time(value) -> time | None:
    if value in (None, ""):
        return None
    if isinstance(value, time):
        return value
    try:
        return time.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise PricingValidationError(f"Invalid time {value!r}, expected HH:MM.", code="invalid_time") from exc


def max_rental_days() -> int:
    return int(getattr(settings, "RENTAL_MAX_DAYS", 365))


def check_rental_length(days: int) -> None:
    limit = max_rental_days()
    if days > limit:
        raise PricingValidationError(
            f"Rentals are limited to {limit} days.",
            code="too_long",
        )


def rental_days(start, end, pickup_time=None, return_time=None, grace_hours: int | None = None) -> int:
    """
    Return the billable rental length in days (at least 1).

    Each calendar night counts as a day. When both times are known, returning
    later than ``grace_hours`` after the pickup time bills one more day.
    Windows longer than ``RENTAL_MAX_DAYS`` are rejected.
    """
    start_day = parse_day(start)
    end_day = parse_day(end)
    if end_day < start_day:
        raise PricingValidationError("Return date must not be before pickup date.", code="reversed_range")

    days = (end_day - start_day).days
    pickup = _parse_time(pickup_time)
    returned = _parse_time(return_time)
    if pickup is not None and returned is not None:
        if grace_hours is None:
            grace_hours = getattr(settings, "RENTAL_GRACE_HOURS", 2)
        pickup_minutes = pickup.hour * 60 + pickup.minute
        return_minutes = returned.hour * 60 + returned.minute
        if return_minutes > pickup_minutes + grace_hours * 60:
            days += 1
    days = max(days, 1)
    check_rental_length(days)
    return days
