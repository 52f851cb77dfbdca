"""
Gift (monetary contribution) model
"""

import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Text, Float, DateTime, Enum, ForeignKey, Index
from sqlalchemy.orm import relationship

from invite_core.core.db import Base

class PaymentMethod(str, enum.Enum):
    cash = "cash"
    khqr = "khqr"

class Currency(str, enum.Enum):
    khr = "khr"
    usd = "usd"

class Gift(Base):
    __tablename__ = "gifts"

    id = Column(String(36), primary_key=True, default=lambda: uuid.uuid4().hex)
    guest_id = Column(String(36), ForeignKey("guests.id"), nullable=False, index=True)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)
    payment_method = Column(Enum(PaymentMethod), nullable=False)
    currency = Column(Enum(Currency), nullable=False)
    amount = Column(Float, nullable=False)  # currency-native units
    note = Column(Text, nullable=True)
    receipt_image = Column(String(500), nullable=True)
    created_by = Column(String(36), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("ix_gifts_guest_created", "guest_id", "created_at"),
        Index("ix_gifts_event_created", "event_id", "created_at"),
    )

    # Relationships
    guest = relationship("Guest", back_populates="gifts")
