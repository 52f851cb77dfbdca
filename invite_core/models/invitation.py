"""
Invitation request model
"""

import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from invite_core.core.db import Base

class InvitationStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    declined = "declined"

class Invitation(Base):
    __tablename__ = "invitations"

    id = Column(String(36), primary_key=True, default=lambda: uuid.uuid4().hex)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    message = Column(Text, nullable=True)
    status = Column(Enum(InvitationStatus), nullable=False, default=InvitationStatus.pending, index=True)
    responded_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # One request per user per event
    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_invitation_event_user"),
    )

    # Relationships
    event = relationship("Event", back_populates="invitations")
    user = relationship("User")
