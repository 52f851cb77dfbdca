"""
Event model (read-only record consumed from the events service)
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship

from invite_core.core.db import Base

class Event(Base):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=lambda: uuid.uuid4().hex)
    host_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    date = Column(DateTime, nullable=True)
    venue = Column(String(255), nullable=True)
    template_slug = Column(String(100), nullable=True)
    # {"images": {...}, "colors": {...}, "fonts": {...}} keyed overrides
    user_template_config = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    host = relationship("User")
    guests = relationship("Guest", back_populates="event", cascade="all, delete-orphan")
    invitations = relationship("Invitation", back_populates="event", cascade="all, delete-orphan")
