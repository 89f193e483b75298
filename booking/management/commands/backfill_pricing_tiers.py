from decimal import Decimal, InvalidOperation

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from booking.models import PricingTier, Vehicle

BACKFILL_MAX_DAYS = 365


class Command(BaseCommand):
    help = "Move legacy flat daily rates into a single pricing tier for vehicles that have none."

    def add_arguments(self, parser):
        parser.add_argument(
            "--default-price",
            default="50",
            help="Price per day for vehicles without a legacy rate (default: 50).",
        )

    def handle(self, *args, **options):
        try:
            default_price = Decimal(str(options["default_price"]))
        except InvalidOperation as exc:
            raise CommandError(f"Invalid --default-price: {options['default_price']}") from exc
        if default_price <= 0:
            raise CommandError("--default-price must be positive.")

        created, cleared = 0, 0
        with transaction.atomic():
            for vehicle in Vehicle.objects.prefetch_related("pricing_tiers"):
                if not vehicle.tier_list():
                    price = vehicle.daily_rate if vehicle.daily_rate and vehicle.daily_rate > 0 else default_price
                    PricingTier.objects.create(
                        vehicle=vehicle,
                        min_days=1,
                        max_days=BACKFILL_MAX_DAYS,
                        price_per_day=price,
                    )
                    created += 1
                elif vehicle.daily_rate is None:
                    continue
                else:
                    cleared += 1
                vehicle.daily_rate = None
                vehicle.save(update_fields=["daily_rate"])

        self.stdout.write(
            self.style.SUCCESS(f"Tiers created: {created}. Legacy rates cleared: {cleared}.")
        )
