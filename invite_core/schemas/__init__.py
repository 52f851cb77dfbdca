"""
Pydantic schemas package
"""

from .common import *
from .event import *
from .invitation import *
from .guest import *
from .gift import *
from .invite import *

__all__ = [
    "StandardResponse",
    "ErrorResponse",
    "Page",
    "IdRef",
    "ExpandedRef",
    "UserSummary",
    "EventSummary",
    "TemplateAssets",
    "TemplateResponse",
    "AssetMaps",
    "InvitationCreate",
    "InvitationStatusUpdate",
    "InvitationResponse",
    "GuestCreate",
    "GuestUpdate",
    "GuestResponse",
    "HostGuestResponse",
    "GiftCreate",
    "GiftUpdate",
    "GiftResponse",
    "RSVPRequest",
    "InviteRenderData",
    "TokenResponse",
]
