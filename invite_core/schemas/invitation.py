"""
Invitation-related Pydantic schemas
"""

from datetime import datetime
from typing import Annotated, Optional, Union
from pydantic import BaseModel, Field

from invite_core.models.invitation import InvitationStatus

from invite_core.schemas.common import IdRef, ExpandedRef
from invite_core.schemas.event import EventSummary, UserSummary

EventRef = Annotated[Union[IdRef, ExpandedRef[EventSummary]], Field(discriminator="kind")]
UserRef = Annotated[Union[IdRef, ExpandedRef[UserSummary]], Field(discriminator="kind")]

class InvitationCreate(BaseModel):
    """Schema for requesting an invitation"""
    event_id: str
    message: Optional[str] = Field(default=None, max_length=1000)

class InvitationStatusUpdate(BaseModel):
    """Host decision on a pending request"""
    status: str

class InvitationResponse(BaseModel):
    """Invitation response schema"""
    id: str
    event: EventRef
    user: UserRef
    message: Optional[str] = None
    status: InvitationStatus
    responded_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
