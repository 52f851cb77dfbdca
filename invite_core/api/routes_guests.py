"""
Guest management routes - requires authentication as the event host
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from invite_core.core.db import get_db
from invite_core.models import User
from invite_core.schemas.common import Page
from invite_core.schemas.guest import GuestCreate, GuestUpdate, HostGuestResponse
from invite_core.services.guest_service import GuestService
from invite_core.utils.security import get_current_user
from invite_core.utils.responses import success_response

router = APIRouter()

@router.post("")
async def create_guest(
    payload: GuestCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Add a guest to one of the current user's events"""
    guest = GuestService.create(db, payload, host_id=current_user.id)
    return success_response(
        message="Guest created successfully",
        data=HostGuestResponse.model_validate(guest),
        status_code=201
    )

@router.get("/event/{event_id}")
async def list_event_guests(
    event_id: str,
    status: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Search and list guests for an event"""
    guests, total = GuestService.list_by_event(
        db, event_id, current_user.id, status=status, search=search, page=page, page_size=per_page
    )
    return success_response(
        message="Guests retrieved successfully",
        data=Page[HostGuestResponse](
            items=[HostGuestResponse.model_validate(guest) for guest in guests],
            total=total,
            page=page,
            page_size=per_page
        )
    )

@router.get("/{guest_id}")
async def get_guest(
    guest_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    guest = GuestService.get_for_host(db, guest_id, current_user.id)
    return success_response(
        message="Guest retrieved successfully",
        data=HostGuestResponse.model_validate(guest)
    )

@router.patch("/{guest_id}")
async def update_guest(
    guest_id: str,
    payload: GuestUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Edit a guest of one of the current user's events"""
    guest = GuestService.update(db, guest_id, payload, current_user.id)
    return success_response(
        message="Guest updated successfully",
        data=HostGuestResponse.model_validate(guest)
    )

@router.delete("/{guest_id}")
async def delete_guest(
    guest_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    GuestService.delete(db, guest_id, current_user.id)
    return success_response(
        message="Guest deleted successfully",
        data={"deleted_guest_id": guest_id}
    )
