"""
Guest-related Pydantic schemas
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from invite_core.models.guest import GuestStatus

class GuestCreate(BaseModel):
    """Schema for creating a guest"""
    event_id: str
    name: str = Field(min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    status: str = "pending"
    notes: Optional[str] = None
    user_id: Optional[str] = None

class GuestUpdate(BaseModel):
    """Schema for editing a guest; omitted fields are left unchanged"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    status: Optional[str] = None
    notes: Optional[str] = None

class GuestResponse(BaseModel):
    """Guest response schema (never carries the invite token)"""
    id: str
    event_id: str
    user_id: Optional[str] = None
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    status: GuestStatus
    opened_at: Optional[datetime] = None
    clicked_at: Optional[datetime] = None
    notes: Optional[str] = None
    has_given_gift: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class HostGuestResponse(GuestResponse):
    """Guest as seen by the event host, including the invite token"""
    invite_token: str
