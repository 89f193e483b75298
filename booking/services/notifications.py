import logging

from django.conf import settings
from django.core.mail import send_mail
from django.template.loader import render_to_string

logger = logging.getLogger(__name__)


def _send(subject: str, template: str, context: dict, recipients: list[str]) -> bool:
    body = render_to_string(template, context)
    try:
        send_mail(subject, body, settings.DEFAULT_FROM_EMAIL, recipients)
    except Exception:  # noqa: BLE001 - the reservation is already stored
        logger.exception("Failed to send %s to %s", template, ", ".join(recipients))
        return False
    return True


def send_reservation_emails(reservation) -> dict[str, bool]:
    """
    Send the customer confirmation and the operator notification.

    Delivery failures are logged and reported in the result; they never undo
    the reservation.
    """
    context = {"reservation": reservation, "currency": getattr(settings, "PRICING_CURRENCY", "EUR")}
    result = {
        "customer": _send(
            f"Reservation request #{reservation.pk} received",
            "booking/email/reservation_customer.txt",
            context,
            [reservation.customer_email],
        )
    }
    notify = getattr(settings, "BOOKING_NOTIFY_EMAIL", "")
    if notify:
        result["operator"] = _send(
            f"New reservation #{reservation.pk}: {reservation.vehicle}",
            "booking/email/reservation_admin.txt",
            context,
            [address.strip() for address in notify.split(",") if address.strip()],
        )
    return result
