# app/models/payment.py
"""
Payments table — one row per Stripe PaymentIntent raised for a booking.
Status and metadata are kept in sync by the Stripe webhook handlers.
"""

import enum
import uuid
from sqlalchemy import Column, String, Float, DateTime, Text, Enum
from app.database import Base


class PaymentStatus(str, enum.Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"


class Payment(Base):
    __tablename__ = "payments"

    id = Column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    booking_id = Column(String(100), nullable=False, index=True)
    amount = Column(Float, nullable=False)
    currency = Column(String(10), nullable=False, default="INR")
    status = Column(Enum(PaymentStatus, native_enum=False, length=20),
                    nullable=False, default=PaymentStatus.PENDING)
    payment_method = Column(String(50), default="STRIPE")
    stripe_payment_intent_id = Column(String(255), unique=True, index=True)
    metadata_json = Column(Text)             # JSON blob (client secret, charge id, failure reason...)
    paid_at = Column(DateTime)
    created_at = Column(DateTime)
    updated_at = Column(DateTime)

    def __repr__(self):
        return f"<Payment {self.id} intent={self.stripe_payment_intent_id} status={self.status}>"
