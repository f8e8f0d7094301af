# app/routers/webhooks.py
"""
Stripe webhook endpoint.
Signature is verified against STRIPE_WEBHOOK_SECRET before anything is read from the payload.
"""

import json
import stripe
from fastapi import APIRouter, Depends, Header, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from app.config import settings
from app.database import get_db
from app.services.payment_service import verify_webhook_signature
from app.services.payment_event_dispatcher import dispatch_payment_event
from app.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post("/webhooks/stripe", summary="Stripe webhook — payment intent + dispute events")
async def stripe_webhook(
    request: Request,
    stripe_signature: str = Header(None, alias="Stripe-Signature"),
    db: Session = Depends(get_db),
):
    payload = await request.body()

    if not stripe_signature:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST,
                            content={"error": "Missing stripe-signature header"})

    if not settings.STRIPE_WEBHOOK_SECRET:
        logger.error("STRIPE_WEBHOOK_SECRET not configured")
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            content={"error": "Webhook secret not configured"})

    try:
        verify_webhook_signature(payload, stripe_signature, settings.STRIPE_WEBHOOK_SECRET)
    except (stripe.SignatureVerificationError, ValueError) as e:
        logger.warning(f"Webhook signature verification failed: {e}")
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST,
                            content={"error": "Invalid signature"})

    # Plain dicts for the handlers; the signature check above already parsed this payload
    event = json.loads(payload)
    logger.info(f"Stripe event {event.get('id')} type={event.get('type')}")

    try:
        dispatch_payment_event(event, db)
    except Exception as e:
        logger.error(f"Webhook processing error: {e}", exc_info=True)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            content={"error": "Webhook processing failed"})

    return {"received": True}
