"""
Quick demo seeding for the booking API.

Run:
    python manage.py shell < scripts/seed_demo.py
"""

from datetime import date, timedelta
from decimal import Decimal

from booking.models import BlogPost, CurrentSeason, PricingTier, Season, SeasonPeriod, Vehicle, VehicleClass
from booking.services.pricing import quote_vehicle


def main():
    economy, _ = VehicleClass.objects.get_or_create(
        name="economy",
        defaults={"display_name": "Economy", "additional_50km_price": Decimal("5.00")},
    )

    vehicle, created = Vehicle.objects.get_or_create(
        make="Dacia",
        model="Logan",
        year=2023,
        defaults={
            "vehicle_type": "sedan",
            "transmission": "manual",
            "fuel_type": "petrol",
            "seats": 5,
            "location": "Cluj-Napoca",
            "vehicle_class": economy,
        },
    )
    if created:
        for min_days, max_days, price in ((1, 3, "45"), (4, 7, "40"), (8, 999, "35")):
            PricingTier.objects.create(
                vehicle=vehicle,
                min_days=min_days,
                max_days=max_days,
                price_per_day=Decimal(price),
            )

    summer, created = Season.objects.get_or_create(name="Summer", defaults={"multiplier": Decimal("1.200")})
    if created:
        SeasonPeriod.objects.create(season=summer, start_date=date(2024, 6, 1), end_date=date(2024, 9, 30))
    winter, created = Season.objects.get_or_create(name="Winter holidays", defaults={"multiplier": Decimal("1.300")})
    if created:
        SeasonPeriod.objects.create(season=winter, start_date=date(2024, 12, 15), end_date=date(2025, 1, 5))
    base, _ = Season.objects.get_or_create(name="Base", defaults={"multiplier": Decimal("1.000")})
    CurrentSeason.assign(base, set_by="seed_demo")

    BlogPost.objects.get_or_create(
        title="Driving in Transylvania",
        defaults={
            "excerpt": "Routes and tips for your first road trip.",
            "content": "Start early, keep cash for tolls and enjoy the view.",
            "is_published": True,
        },
    )

    start = date.today() + timedelta(days=7)
    quote = quote_vehicle(vehicle, start, start + timedelta(days=5))

    print("Seeded demo data:")
    print(f"- Vehicle: {vehicle} ({vehicle.pricing_tiers.count()} tiers)")
    print(f"- Seasons: {', '.join(Season.objects.values_list('name', flat=True))}")
    if quote:
        print(f"- 5-day quote from {start}: {quote.price_per_day}/day, {quote.total_price} {quote.currency}")


if __name__ == "__main__":
    main()
