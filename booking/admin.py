from django.contrib import admin, messages

from .forms import PricingTierInlineFormSet
from .models import BlogPost, CurrentSeason, PricingTier, Reservation, Season, SeasonPeriod, Vehicle, VehicleClass


@admin.register(VehicleClass)
class VehicleClassAdmin(admin.ModelAdmin):
    list_display = ("name", "display_name", "sort_index", "additional_50km_price", "is_active")
    list_editable = ("sort_index",)
    search_fields = ("name", "display_name")


class PricingTierInline(admin.TabularInline):
    model = PricingTier
    formset = PricingTierInlineFormSet
    extra = 0
    min_num = 1


@admin.register(Vehicle)
class VehicleAdmin(admin.ModelAdmin):
    list_display = ("__str__", "vehicle_class", "vehicle_type", "transmission", "status", "is_featured")
    list_filter = ("status", "vehicle_class", "vehicle_type", "transmission", "is_featured")
    search_fields = ("make", "model", "location")
    inlines = [PricingTierInline]


class SeasonPeriodInline(admin.TabularInline):
    model = SeasonPeriod
    extra = 0
    min_num = 1


@admin.register(Season)
class SeasonAdmin(admin.ModelAdmin):
    list_display = ("name", "multiplier", "is_active", "is_current")
    list_filter = ("is_active",)
    search_fields = ("name",)
    inlines = [SeasonPeriodInline]
    actions = ["make_current", "clear_current"]

    @admin.display(boolean=True, description="Current")
    def is_current(self, obj):
        return CurrentSeason.objects.filter(season=obj).exists()

    @admin.action(description="Set as current season")
    def make_current(self, request, queryset):
        if queryset.count() != 1:
            self.message_user(request, "Select exactly one season.", messages.ERROR)
            return
        season = queryset.get()
        try:
            CurrentSeason.assign(season, set_by=request.user.get_username())
        except ValueError as exc:
            self.message_user(request, str(exc), messages.ERROR)
            return
        self.message_user(request, f"{season.name} is now the current season.", messages.SUCCESS)

    @admin.action(description="Clear current season (base pricing)")
    def clear_current(self, request, queryset):
        CurrentSeason.clear()
        self.message_user(request, "Current season cleared.", messages.SUCCESS)


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "vehicle",
        "customer_name",
        "start_date",
        "end_date",
        "days",
        "price_per_day",
        "total_price",
        "status",
    )
    list_filter = ("status", "payment_method", "start_date")
    search_fields = ("customer_name", "customer_email", "customer_phone", "vehicle__make", "vehicle__model")
    readonly_fields = ("days", "price_per_day", "season_name", "rental_price", "additional_charges", "total_price")

    def has_add_permission(self, request):
        # Prices are only set by the booking form.
        return False


@admin.register(BlogPost)
class BlogPostAdmin(admin.ModelAdmin):
    list_display = ("title", "slug", "is_published", "published_at")
    list_filter = ("is_published",)
    search_fields = ("title", "excerpt")
    prepopulated_fields = {"slug": ("title",)}
