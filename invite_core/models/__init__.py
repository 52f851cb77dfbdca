"""
Database models package
"""

from .user import User
from .event import Event
from .template import Template
from .invitation import Invitation, InvitationStatus
from .guest import Guest, GuestStatus
from .gift import Gift, PaymentMethod, Currency

__all__ = [
    "User",
    "Event",
    "Template",
    "Invitation",
    "InvitationStatus",
    "Guest",
    "GuestStatus",
    "Gift",
    "PaymentMethod",
    "Currency",
]
