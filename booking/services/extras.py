"""Optional reservation charges added on top of the rental quote."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings

CENT = Decimal("0.01")


@dataclass(frozen=True)
class Charge:
    description: str
    amount: Decimal

    def as_dict(self):
        return {"description": self.description, "amount": str(self.amount)}


def _per_day_extra() -> Decimal:
    return Decimal(str(getattr(settings, "BOOKING_EXTRA_PER_DAY", "3")))


def scdw_price(days: int, price_per_day: Decimal) -> Decimal:
    """
    Super collision damage waiver.

    Two daily rates cover the first three days; the first further 3-day block
    adds 6 and every block after that adds 5.
    """
    base = Decimal(price_per_day) * 2
    if days <= 3:
        return base.quantize(CENT, rounding=ROUND_HALF_UP)
    blocks = -(-(days - 3) // 3)
    return (base + 6 + 5 * (blocks - 1)).quantize(CENT, rounding=ROUND_HALF_UP)


def location_fee(name: str | None) -> Decimal:
    fees = getattr(settings, "BOOKING_LOCATION_FEES", {})
    return Decimal(str(fees.get((name or "").strip(), 0)))


def extras_breakdown(
    days: int,
    price_per_day: Decimal,
    *,
    scdw: bool = False,
    snow_chains: bool = False,
    child_seats_1_4: int = 0,
    child_seats_5_12: int = 0,
    extra_50km_blocks: int = 0,
    additional_50km_price: Decimal = Decimal("0"),
    pickup_location: str = "",
    return_location: str = "",
) -> list[Charge]:
    """Return the non-zero extra charges for a reservation, in display order."""
    per_day = _per_day_extra()
    charges = [
        Charge("Delivery fee", location_fee(pickup_location)),
        Charge("Return fee", location_fee(return_location)),
    ]
    if scdw:
        charges.append(Charge("SCDW insurance", scdw_price(days, price_per_day)))
    if snow_chains:
        charges.append(Charge("Snow chains", per_day * days))
    if child_seats_1_4:
        charges.append(Charge(f"Child seat 1-4 years x{child_seats_1_4}", per_day * days * child_seats_1_4))
    if child_seats_5_12:
        charges.append(Charge(f"Child seat 5-12 years x{child_seats_5_12}", per_day * days * child_seats_5_12))
    if extra_50km_blocks:
        charges.append(
            Charge(f"Extra kilometres ({extra_50km_blocks * 50} km)", Decimal(additional_50km_price) * extra_50km_blocks)
        )
    return [
        Charge(charge.description, charge.amount.quantize(CENT, rounding=ROUND_HALF_UP))
        for charge in charges
        if charge.amount > 0
    ]
