"""
Gift-related Pydantic schemas
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from invite_core.models.gift import Currency, PaymentMethod

class GiftCreate(BaseModel):
    """Schema for recording a gift"""
    guest_id: str
    payment_method: str
    currency: str
    amount: float
    note: Optional[str] = Field(default=None, max_length=1000)
    receipt_image: Optional[str] = None

class GiftUpdate(BaseModel):
    """Schema for updating a gift"""
    payment_method: Optional[str] = None
    currency: Optional[str] = None
    amount: Optional[float] = None
    note: Optional[str] = Field(default=None, max_length=1000)
    receipt_image: Optional[str] = None

class GiftResponse(BaseModel):
    """Gift response schema"""
    id: str
    guest_id: str
    event_id: str
    payment_method: PaymentMethod
    currency: Currency
    amount: float
    note: Optional[str] = None
    receipt_image: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
