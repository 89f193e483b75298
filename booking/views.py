import json
import logging
from decimal import Decimal, InvalidOperation

from django.contrib.admin.views.decorators import staff_member_required
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET, require_POST

from .forms import QuoteRequestForm, ReservationForm
from .models import BlogPost, CurrentSeason, Season, Vehicle
from .services.errors import DataIntegrityError, PricingValidationError
from .services.notifications import send_reservation_emails
from .services.pricing import PricingTier, pricing_config, quote_rental, quote_vehicle
from .services.seasons import season_snapshot

logger = logging.getLogger(__name__)


def _form_errors(form):
    return {field: [str(message) for message in messages] for field, messages in form.errors.items()}


def _serialize_vehicle(vehicle: Vehicle, quote=None):
    """Listing payload for one vehicle, with its live quote when dates are known."""
    vehicle_class = vehicle.vehicle_class
    return {
        "id": vehicle.id,
        "name": str(vehicle),
        "make": vehicle.make,
        "model": vehicle.model,
        "year": vehicle.year,
        "type": vehicle.vehicle_type,
        "seats": vehicle.seats,
        "transmission": vehicle.transmission,
        "fuel_type": vehicle.fuel_type,
        "engine_capacity": str(vehicle.engine_capacity) if vehicle.engine_capacity is not None else None,
        "engine_type": vehicle.engine_type,
        "location": vehicle.location,
        "features": vehicle.features or [],
        "class": vehicle_class.name if vehicle_class else None,
        "additional_50km_price": str(vehicle_class.additional_50km_price) if vehicle_class else None,
        "pricing_tiers": [
            {"min_days": tier.min_days, "max_days": tier.max_days, "price_per_day": str(tier.price_per_day)}
            for tier in vehicle.pricing_tiers.all()
        ],
        "quote": quote.as_dict() if quote else None,
    }


@require_GET
def vehicle_list(request):
    queryset = (
        Vehicle.objects.filter(status="available")
        .select_related("vehicle_class")
        .prefetch_related("pricing_tiers")
    )
    vehicle_type = (request.GET.get("type") or "").strip()
    transmission = (request.GET.get("transmission") or "").strip()
    class_name = (request.GET.get("class") or "").strip()
    if vehicle_type:
        queryset = queryset.filter(vehicle_type=vehicle_type)
    if transmission:
        queryset = queryset.filter(transmission=transmission)
    if class_name:
        queryset = queryset.filter(vehicle_class__name=class_name)
    queryset = queryset.order_by("vehicle_class__sort_index", "make", "model", "id")

    wants_quote = bool(request.GET.get("start") or request.GET.get("end"))
    if not wants_quote:
        results = [_serialize_vehicle(vehicle) for vehicle in queryset]
        return JsonResponse({"results": results, "pricing": pricing_config()})

    form = QuoteRequestForm(request.GET)
    if not form.is_valid():
        return JsonResponse({"errors": _form_errors(form)}, status=400)

    data = form.cleaned_data
    active_seasons, current_season = season_snapshot()
    results = []
    for vehicle in queryset:
        try:
            quote = quote_rental(
                vehicle.tier_list(),
                data["start"],
                data["end"],
                active_seasons,
                current_season,
                data.get("pickup_time"),
                data.get("return_time"),
            )
        except DataIntegrityError:
            logger.exception("Pricing unavailable for vehicle %s (%s)", vehicle.pk, vehicle)
            quote = None
        results.append(_serialize_vehicle(vehicle, quote))
    return JsonResponse({"results": results, "pricing": pricing_config()})


@require_GET
def vehicle_quote(request, pk: int):
    vehicle = get_object_or_404(Vehicle, pk=pk)
    form = QuoteRequestForm(request.GET)
    if not form.is_valid():
        return JsonResponse({"errors": _form_errors(form)}, status=400)

    data = form.cleaned_data
    quote = quote_vehicle(vehicle, data["start"], data["end"], data.get("pickup_time"), data.get("return_time"))
    if quote is None:
        return JsonResponse({"vehicle": vehicle.id, "quote": None, "error": "Pricing unavailable."}, status=503)
    return JsonResponse({"vehicle": vehicle.id, "quote": quote.as_dict()})


@require_POST
def reservation_create(request):
    form = ReservationForm(request.POST)
    if not form.is_valid():
        return JsonResponse({"errors": _form_errors(form)}, status=400)

    reservation = form.save()
    logger.info(
        "Reservation %s stored: vehicle=%s days=%s total=%s",
        reservation.pk,
        reservation.vehicle_id,
        reservation.days,
        reservation.total_price,
    )
    delivery = send_reservation_emails(reservation)
    return JsonResponse({"reservation": reservation.as_dict(), "emails": delivery}, status=201)


def _tiers_from_payload(raw_tiers):
    if raw_tiers is None:
        raw_tiers = []
    if not isinstance(raw_tiers, list):
        raise PricingValidationError("Pricing tiers must be a list.", code="invalid_tier")
    tiers = []
    for raw in raw_tiers:
        try:
            tiers.append(
                PricingTier(
                    min_days=int(raw["min_days"]),
                    max_days=int(raw["max_days"]),
                    price_per_day=Decimal(str(raw["price_per_day"])),
                )
            )
        except (KeyError, TypeError, ValueError, InvalidOperation) as exc:
            raise PricingValidationError(f"Invalid pricing tier {raw!r}.", code="invalid_tier") from exc
    return tiers


@staff_member_required
@require_POST
def pricing_preview(request):
    """
    Quote unsaved tiers (and optionally a season override) for the admin.

    Body: {"tiers": [...], "start": "YYYY-MM-DD", "end": "YYYY-MM-DD",
    "pickup_time"?, "return_time"?, "season_id"?}
    """
    try:
        payload = json.loads(request.body or b"{}")
    except json.JSONDecodeError:
        return JsonResponse({"error": "Body must be JSON."}, status=400)
    if not isinstance(payload, dict):
        return JsonResponse({"error": "Body must be a JSON object."}, status=400)

    season_id = payload.get("season_id")
    if season_id:
        try:
            season_id = int(season_id)
        except (TypeError, ValueError):
            return JsonResponse({"error": "Invalid season id."}, status=400)

    try:
        tiers = _tiers_from_payload(payload.get("tiers"))
        if season_id:
            season = get_object_or_404(Season.objects.prefetch_related("periods"), pk=season_id)
            active_seasons, current_season = [season.as_rule()], CurrentSeason.get_rule()
        else:
            active_seasons, current_season = season_snapshot()
        quote = quote_rental(
            tiers,
            payload.get("start"),
            payload.get("end"),
            active_seasons,
            current_season,
            payload.get("pickup_time"),
            payload.get("return_time"),
        )
    except PricingValidationError as exc:
        return JsonResponse({"error": " ".join(exc.messages)}, status=400)
    except DataIntegrityError as exc:
        return JsonResponse({"error": str(exc)}, status=400)
    return JsonResponse({"quote": quote.as_dict()})


def _serialize_post(post: BlogPost, full: bool = False):
    data = {
        "title": post.title,
        "slug": post.slug,
        "excerpt": post.excerpt,
        "published_at": post.published_at.isoformat() if post.published_at else None,
    }
    if full:
        data["content"] = post.content
    return data


@require_GET
def blog_list(request):
    posts = BlogPost.objects.published()
    return JsonResponse({"results": [_serialize_post(post) for post in posts]})


@require_GET
def blog_detail(request, slug: str):
    post = get_object_or_404(BlogPost.objects.published(), slug=slug)
    return JsonResponse(_serialize_post(post, full=True))
