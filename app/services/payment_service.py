# app/services/payment_service.py
"""
Thin wrapper around the Stripe SDK.
Amounts go in as major units (rupees) and are sent to Stripe in minor units (paise).
Stripe is configured lazily from settings so tests can patch the SDK freely.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
import stripe
from babel.numbers import format_currency
from app.config import settings
from app.models.payment import PaymentStatus
from app.utils.logger import get_logger

logger = get_logger(__name__)

REFUND_REASONS = {"duplicate", "fraudulent", "requested_by_customer"}

STRIPE_STATUS_MAP = {
    "requires_payment_method": PaymentStatus.PENDING,
    "requires_confirmation": PaymentStatus.PENDING,
    "requires_action": PaymentStatus.PENDING,
    "processing": PaymentStatus.PROCESSING,
    "requires_capture": PaymentStatus.PROCESSING,
    "canceled": PaymentStatus.FAILED,
    "succeeded": PaymentStatus.COMPLETED,
}

# Checked in order: CardError etc. all subclass StripeError
STRIPE_ERROR_MESSAGES = [
    (stripe.RateLimitError, "Too many requests made to the API too quickly", "rate_limit"),
    (stripe.InvalidRequestError, "Invalid parameters were supplied to Stripe's API", "invalid_request"),
    (stripe.AuthenticationError, "You probably used an incorrect API key", "authentication_error"),
    (stripe.APIConnectionError, "Some kind of error occurred during the HTTPS communication", "connection_error"),
    (stripe.APIError, "An error occurred internally with Stripe's API", "api_error"),
]


def configure_stripe():
    """Push API key, pinned API version and retry policy into the SDK."""
    stripe.api_key = settings.STRIPE_SECRET_KEY
    stripe.api_version = settings.STRIPE_API_VERSION
    stripe.max_network_retries = settings.STRIPE_MAX_NETWORK_RETRIES


def to_minor_units(amount) -> int:
    """1499.995 → 150000. Half-up rounding, never banker's rounding."""
    return int((Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def create_payment_intent(amount: float, currency: str = None, metadata: Optional[dict] = None):
    configure_stripe()
    currency = currency or settings.DEFAULT_CURRENCY
    intent = stripe.PaymentIntent.create(
        amount=to_minor_units(amount),
        currency=currency,
        metadata=metadata or {},
        automatic_payment_methods={"enabled": True},
    )
    logger.info(f"[PAYMENT] Created intent {intent.id} for {amount} {currency.upper()}")
    return intent


def create_refund(payment_intent_id: str, amount: Optional[float] = None, reason: Optional[str] = None):
    """Full refund unless `amount` is given. `reason` must be one of Stripe's refund reasons."""
    if reason is not None and reason not in REFUND_REASONS:
        raise ValueError(f"Unsupported refund reason: {reason}")

    configure_stripe()
    params = {"payment_intent": payment_intent_id}
    if amount:
        params["amount"] = to_minor_units(amount)
    if reason:
        params["reason"] = reason

    refund = stripe.Refund.create(**params)
    logger.info(f"[PAYMENT] Refund {refund.id} for intent {payment_intent_id} (amount={amount or 'full'})")
    return refund


def verify_webhook_signature(payload: bytes, signature: str, secret: str):
    """Returns the verified stripe.Event; raises stripe.SignatureVerificationError or ValueError."""
    configure_stripe()
    return stripe.Webhook.construct_event(payload, signature, secret)


def create_customer(email: str, name: Optional[str] = None, metadata: Optional[dict] = None):
    configure_stripe()
    params = {"email": email, "metadata": metadata or {}}
    if name:
        params["name"] = name
    customer = stripe.Customer.create(**params)
    logger.info(f"[PAYMENT] Created customer {customer.id}")
    return customer


def attach_payment_method(payment_method_id: str, customer_id: str):
    configure_stripe()
    return stripe.PaymentMethod.attach(payment_method_id, customer=customer_id)


def format_amount(amount_minor: int, currency: str = "inr") -> str:
    """Minor units → display string, Indian grouping: 12345678 paise → '₹1,23,456.78'."""
    return format_currency(Decimal(amount_minor) / 100, currency.upper(), locale="en_IN")


def map_stripe_status(stripe_status: str) -> PaymentStatus:
    return STRIPE_STATUS_MAP.get(stripe_status, PaymentStatus.PENDING)


def describe_stripe_error(error: Exception) -> dict:
    """Caller-safe {message, code} for a Stripe SDK exception."""
    if isinstance(error, stripe.CardError):
        return {"message": error.user_message or str(error), "code": error.code}
    for error_type, message, code in STRIPE_ERROR_MESSAGES:
        if isinstance(error, error_type):
            return {"message": message, "code": code}
    return {"message": "An unknown error occurred", "code": "unknown_error"}
