from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from django.utils.text import slugify

from .services.seasons import SeasonPeriod as PeriodRule
from .services.seasons import SeasonRule


class VehicleClass(models.Model):
    name = models.CharField(max_length=50, unique=True)
    display_name = models.CharField(max_length=100, blank=True, default="")
    description = models.TextField(blank=True, default="")
    sort_index = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    additional_50km_price = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        default=Decimal("5.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Charge for each extra 50 km block.",
    )

    class Meta:
        ordering = ["sort_index", "name"]
        verbose_name_plural = "vehicle classes"

    def __str__(self):
        return self.display_name or self.name

    def save(self, *args, **kwargs):
        if self._state.adding and not self.sort_index:
            last = VehicleClass.objects.aggregate(models.Max("sort_index"))["sort_index__max"]
            self.sort_index = 0 if last is None else last + 1
        return super().save(*args, **kwargs)


class Vehicle(models.Model):
    TYPE_CHOICES = [
        ("sedan", "Sedan"),
        ("suv", "SUV"),
        ("hatchback", "Hatchback"),
        ("sports", "Sports"),
        ("truck", "Truck"),
        ("van", "Van"),
    ]
    TRANSMISSION_CHOICES = [
        ("automatic", "Automatic"),
        ("manual", "Manual"),
    ]
    FUEL_CHOICES = [
        ("petrol", "Petrol"),
        ("diesel", "Diesel"),
        ("electric", "Electric"),
        ("hybrid", "Hybrid"),
    ]
    STATUS_CHOICES = [
        ("available", "Available"),
        ("rented", "Rented"),
        ("maintenance", "Maintenance"),
    ]

    make = models.CharField(max_length=50)
    model = models.CharField(max_length=50)
    year = models.PositiveIntegerField(blank=True, null=True)
    vehicle_type = models.CharField(max_length=20, choices=TYPE_CHOICES, blank=True, default="")
    seats = models.PositiveIntegerField(blank=True, null=True)
    transmission = models.CharField(max_length=20, choices=TRANSMISSION_CHOICES, blank=True, default="")
    fuel_type = models.CharField(max_length=20, choices=FUEL_CHOICES, blank=True, default="")
    engine_capacity = models.DecimalField(max_digits=3, decimal_places=1, blank=True, null=True)
    engine_type = models.CharField(max_length=50, blank=True, default="")
    vehicle_class = models.ForeignKey(
        VehicleClass,
        on_delete=models.PROTECT,
        related_name="vehicles",
        blank=True,
        null=True,
    )
    location = models.CharField(max_length=120, blank=True, default="")
    features = models.JSONField(default=list, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="available")
    is_featured = models.BooleanField(default=False)
    daily_rate = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        blank=True,
        null=True,
        help_text="Legacy flat rate. Moved into a pricing tier by backfill_pricing_tiers.",
    )

    class Meta:
        ordering = ["make", "model", "id"]

    def __str__(self):
        year = f" {self.year}" if self.year else ""
        return f"{self.make} {self.model}{year}"

    def tier_list(self):
        """Pricing tiers as a list, ordered by minimum days."""
        return list(self.pricing_tiers.all())


class PricingTier(models.Model):
    vehicle = models.ForeignKey(Vehicle, on_delete=models.CASCADE, related_name="pricing_tiers")
    min_days = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    max_days = models.PositiveIntegerField(
        default=999,
        validators=[MinValueValidator(1)],
        help_text="999 or more means no upper limit.",
    )
    price_per_day = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )

    class Meta:
        ordering = ["min_days", "id"]

    def __str__(self):
        return f"{self.min_days}-{self.max_days} days: {self.price_per_day}"


class Season(models.Model):
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, default="")
    multiplier = models.DecimalField(
        max_digits=5,
        decimal_places=3,
        default=Decimal("1.000"),
        validators=[MinValueValidator(Decimal("0.001"))],
        help_text="1.000 leaves prices unchanged.",
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.name} (x{self.multiplier})"

    def as_rule(self) -> SeasonRule:
        """Immutable snapshot used by the pricing engine."""
        return SeasonRule(
            id=self.pk,
            name=self.name,
            multiplier=self.multiplier,
            periods=tuple(PeriodRule(p.start_date, p.end_date) for p in self.periods.all()),
            is_active=self.is_active,
        )


class SeasonPeriod(models.Model):
    season = models.ForeignKey(Season, on_delete=models.CASCADE, related_name="periods")
    start_date = models.DateField(help_text="Only month and day are used; the period repeats every year.")
    end_date = models.DateField(help_text="May fall before the start date to wrap over New Year.")
    description = models.CharField(max_length=200, blank=True, default="")

    class Meta:
        ordering = ["start_date", "id"]

    def __str__(self):
        return f"{self.start_date:%m-%d} .. {self.end_date:%m-%d}"


class CurrentSeason(models.Model):
    """Single-row pointer to the season used when no period matches a rental."""

    season = models.ForeignKey(Season, on_delete=models.PROTECT, related_name="+")
    set_at = models.DateTimeField(default=timezone.now)
    set_by = models.CharField(max_length=150, blank=True, default="")

    def __str__(self):
        return f"Current season: {self.season.name}"

    @classmethod
    def assign(cls, season: Season, set_by: str = "") -> "CurrentSeason":
        if not season.is_active:
            raise ValueError("Cannot set an inactive season as current.")
        cls.objects.all().delete()
        return cls.objects.create(season=season, set_by=set_by or "")

    @classmethod
    def clear(cls):
        cls.objects.all().delete()

    @classmethod
    def get_rule(cls) -> SeasonRule | None:
        pointer = cls.objects.select_related("season").order_by("-set_at").first()
        if pointer is None:
            return None
        return pointer.season.as_rule()


class Reservation(models.Model):
    STATUS_CHOICES = [
        ("pending", "Pending"),
        ("confirmed", "Confirmed"),
        ("cancelled", "Cancelled"),
        ("completed", "Completed"),
    ]
    PAYMENT_CHOICES = [
        ("cash_on_delivery", "Cash on delivery"),
        ("card_on_delivery", "Card payment on delivery"),
        ("card_online", "Card payment online"),
    ]

    vehicle = models.ForeignKey(Vehicle, on_delete=models.PROTECT, related_name="reservations")
    customer_name = models.CharField(max_length=100)
    customer_email = models.EmailField()
    customer_phone = models.CharField(max_length=30)
    customer_message = models.TextField(blank=True, default="")
    flight_number = models.CharField(max_length=10, blank=True, default="")
    start_date = models.DateField()
    end_date = models.DateField()
    pickup_time = models.TimeField()
    return_time = models.TimeField()
    pickup_location = models.CharField(max_length=120)
    return_location = models.CharField(max_length=120)
    payment_method = models.CharField(max_length=20, choices=PAYMENT_CHOICES)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending")
    days = models.PositiveIntegerField()
    price_per_day = models.DecimalField(max_digits=8, decimal_places=2)
    season_name = models.CharField(max_length=100, blank=True, default="")
    rental_price = models.DecimalField(max_digits=10, decimal_places=2)
    additional_charges = models.JSONField(default=list, blank=True)
    total_price = models.DecimalField(max_digits=10, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"#{self.pk} {self.customer_name} / {self.vehicle} / {self.start_date:%Y-%m-%d}"

    def as_dict(self):
        return {
            "id": self.pk,
            "vehicle": {"id": self.vehicle_id, "name": str(self.vehicle)},
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "pickup_time": self.pickup_time.strftime("%H:%M"),
            "return_time": self.return_time.strftime("%H:%M"),
            "pickup_location": self.pickup_location,
            "return_location": self.return_location,
            "status": self.status,
            "days": self.days,
            "price_per_day": str(self.price_per_day),
            "season_name": self.season_name or None,
            "rental_price": str(self.rental_price),
            "additional_charges": self.additional_charges,
            "total_price": str(self.total_price),
        }


class BlogPostQuerySet(models.QuerySet):
    def published(self):
        return self.filter(is_published=True, published_at__lte=timezone.now())


class BlogPost(models.Model):
    title = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, unique=True, blank=True)
    excerpt = models.TextField(blank=True, default="")
    content = models.TextField()
    is_published = models.BooleanField(default=False)
    published_at = models.DateTimeField(blank=True, null=True)

    objects = BlogPostQuerySet.as_manager()

    class Meta:
        ordering = ["-published_at", "-id"]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.title)[:220]
        if self.is_published and not self.published_at:
            self.published_at = timezone.now()
        return super().save(*args, **kwargs)
