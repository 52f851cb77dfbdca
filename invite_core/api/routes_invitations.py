"""
Invitation request routes - requires authentication
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from invite_core.core.db import get_db
from invite_core.models import User
from invite_core.schemas.invitation import InvitationCreate, InvitationStatusUpdate
from invite_core.services.invitation_service import InvitationService, to_invitation_response
from invite_core.utils.security import get_current_user
from invite_core.utils.responses import success_response

router = APIRouter()

@router.post("")
async def create_invitation(
    payload: InvitationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Request an invitation to an event for the current user"""
    invitation = InvitationService.create(db, payload.event_id, current_user.id, payload.message)
    return success_response(
        message="Invitation request created successfully",
        data=to_invitation_response(invitation),
        status_code=201
    )

@router.get("")
async def list_invitations(
    event_id: Optional[str] = Query(None),
    user_id: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    expand: bool = Query(False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List invitations, newest first"""
    result = InvitationService.list(
        db,
        {"event_id": event_id, "user_id": user_id, "status": status},
        page=page,
        page_size=page_size,
        expand=expand
    )
    return success_response(message="Invitations retrieved successfully", data=result)

@router.get("/mine")
async def my_invitations(
    event_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Invitation requests made by the current user"""
    invitations = InvitationService.list_for_user(db, current_user.id, event_id)
    return success_response(
        message="Invitations retrieved successfully",
        data=[to_invitation_response(item, expand=True) for item in invitations]
    )

@router.get("/event/{event_id}")
async def event_invitations(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Invitation requests for one of the current user's events"""
    invitations = InvitationService.list_for_event(db, event_id, current_user.id)
    return success_response(
        message="Invitations retrieved successfully",
        data=[to_invitation_response(item, expand=True) for item in invitations]
    )

@router.get("/{invitation_id}")
async def get_invitation(
    invitation_id: str,
    expand: bool = Query(False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    invitation = InvitationService.get(db, invitation_id)
    return success_response(
        message="Invitation retrieved successfully",
        data=to_invitation_response(invitation, expand)
    )

@router.patch("/{invitation_id}/status")
async def update_invitation_status(
    invitation_id: str,
    payload: InvitationStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Approve or decline a pending request (event host only)"""
    invitation = InvitationService.update_status(db, invitation_id, payload.status, current_user.id)
    return success_response(
        message=f"Invitation {invitation.status.value} successfully",
        data=to_invitation_response(invitation)
    )

@router.delete("/{invitation_id}")
async def delete_invitation(
    invitation_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Delete a request (requester or event host)"""
    InvitationService.remove(db, invitation_id, current_user.id)
    return success_response(
        message="Invitation deleted successfully",
        data={"deleted_invitation_id": invitation_id}
    )
