# app/services/payment_event_dispatcher.py
"""Routes verified Stripe webhook events to the payment handlers that update the payments table."""

import json
from datetime import datetime
from sqlalchemy.orm import Session
from app.models.payment import Payment, PaymentStatus
from app.utils.logger import get_logger

logger = get_logger(__name__)


def _find_payment(db: Session, payment_intent_id: str):
    payment = db.query(Payment).filter(Payment.stripe_payment_intent_id == payment_intent_id).first()
    if not payment:
        logger.error(f"[PAYMENT] No payment found for PaymentIntent {payment_intent_id}")
    return payment


def _merge_metadata(payment: Payment, **extra):
    """Merge extra keys into the payment's JSON metadata blob."""
    current = json.loads(payment.metadata_json or "{}")
    current.update(extra)
    payment.metadata_json = json.dumps(current, default=str)


def _set_status(db: Session, payment: Payment, status: PaymentStatus, **metadata):
    payment.status = status
    payment.updated_at = datetime.utcnow()
    if metadata:
        _merge_metadata(payment, **metadata)
    db.commit()


def handle_payment_succeeded(intent: dict, db: Session):
    payment = _find_payment(db, intent["id"])
    if not payment:
        return
    payment.paid_at = datetime.utcnow()
    _set_status(db, payment, PaymentStatus.COMPLETED,
                stripeChargeId=intent.get("latest_charge"),
                paymentMethod=intent.get("payment_method"))
    logger.info(f"[PAYMENT] Succeeded for booking {payment.booking_id} ({payment.amount} {payment.currency})")


def handle_payment_failed(intent: dict, db: Session):
    payment = _find_payment(db, intent["id"])
    if not payment:
        return
    error = intent.get("last_payment_error") or {}
    _set_status(db, payment, PaymentStatus.FAILED,
                failureReason=error.get("message"),
                failureCode=error.get("code"))
    logger.warning(f"[PAYMENT] Failed for booking {payment.booking_id}: {error.get('message')}")


def handle_payment_canceled(intent: dict, db: Session):
    payment = _find_payment(db, intent["id"])
    if not payment:
        return
    _set_status(db, payment, PaymentStatus.CANCELLED, canceledAt=datetime.utcnow().isoformat())
    logger.info(f"[PAYMENT] Canceled PaymentIntent {intent['id']}")


def handle_payment_requires_action(intent: dict, db: Session):
    payment = _find_payment(db, intent["id"])
    if not payment:
        return
    _set_status(db, payment, PaymentStatus.PENDING,
                requiresAction=True,
                nextAction=intent.get("next_action"))
    logger.info(f"[PAYMENT] PaymentIntent {intent['id']} requires customer action")


def handle_charge_dispute(dispute: dict, db: Session):
    charge_id = dispute.get("charge")
    payment = (
        db.query(Payment).filter(Payment.metadata_json.contains(charge_id, autoescape=True)).first()
        if charge_id else None
    )
    if not payment:
        logger.error(f"[PAYMENT] No payment found for disputed charge {charge_id}")
        return
    logger.warning(
        f"[PAYMENT] Dispute {dispute.get('id')} on payment {payment.id} "
        f"(booking {payment.booking_id}): reason={dispute.get('reason')} "
        f"amount={(dispute.get('amount') or 0) / 100}"
    )


EVENT_HANDLERS = {
    "payment_intent.succeeded": handle_payment_succeeded,
    "payment_intent.payment_failed": handle_payment_failed,
    "payment_intent.canceled": handle_payment_canceled,
    "payment_intent.requires_action": handle_payment_requires_action,
    "charge.dispute.created": handle_charge_dispute,
}


def dispatch_payment_event(event, db: Session) -> bool:
    """Run the handler for `event["type"]`. Returns False for event types we don't handle."""
    handler = EVENT_HANDLERS.get(event["type"])
    if not handler:
        logger.info(f"[PAYMENT] Unhandled event type: {event['type']}")
        return False
    handler(event["data"]["object"], db)
    return True
