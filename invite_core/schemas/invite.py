"""
Public invite (token-authenticated) schemas
"""

from typing import Optional
from pydantic import BaseModel, Field

from invite_core.schemas.event import AssetMaps, EventSummary, TemplateResponse
from invite_core.schemas.guest import GuestResponse

class RSVPRequest(BaseModel):
    """RSVP submitted by the invite holder"""
    status: str
    message: Optional[str] = Field(default=None, max_length=1000)

class InviteRenderData(BaseModel):
    """Everything the renderer needs to draw one guest's invitation"""
    event: EventSummary
    guest: GuestResponse
    template: Optional[TemplateResponse] = None
    assets: AssetMaps

class TokenResponse(BaseModel):
    token: str
    invite_url: str
