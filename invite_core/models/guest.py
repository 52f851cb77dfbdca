"""
Guest model
"""

import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Text, Boolean, DateTime, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from invite_core.core.db import Base

class GuestStatus(str, enum.Enum):
    pending = "pending"
    confirmed = "confirmed"
    declined = "declined"

class Guest(Base):
    __tablename__ = "guests"

    id = Column(String(36), primary_key=True, default=lambda: uuid.uuid4().hex)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    created_by = Column(String(36), ForeignKey("users.id"), nullable=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    status = Column(Enum(GuestStatus), nullable=False, default=GuestStatus.pending, index=True)
    invite_token = Column(String(128), unique=True, nullable=False, index=True)
    opened_at = Column(DateTime, nullable=True)
    clicked_at = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)
    has_given_gift = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # NULL user_id/email/phone never collide, so manual guests stay unconstrained
    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_guest_event_user"),
        UniqueConstraint("event_id", "email", name="uq_guest_event_email"),
        UniqueConstraint("event_id", "phone", name="uq_guest_event_phone"),
    )

    # Relationships
    event = relationship("Event", back_populates="guests")
    user = relationship("User", foreign_keys=[user_id])
    gifts = relationship("Gift", back_populates="guest", cascade="all, delete-orphan")
