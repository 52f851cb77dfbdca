"""
Gift routes - requires authentication as the event host
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from invite_core.core.db import get_db
from invite_core.models import User
from invite_core.schemas.gift import GiftCreate, GiftUpdate, GiftResponse
from invite_core.services.event_access import require_event_host
from invite_core.services.gift_service import GiftService
from invite_core.services.guest_service import GuestService
from invite_core.utils.security import get_current_user
from invite_core.utils.responses import success_response

router = APIRouter()

def _gift_for_host(db: Session, gift_id: str, host_id: str):
    gift = GiftService.get(db, gift_id)
    require_event_host(db, gift.event_id, host_id, "You can only manage gifts for your own events")
    return gift

@router.post("")
async def create_gift(
    payload: GiftCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Record a gift for a guest and refresh the guest's gift flag"""
    GuestService.get_for_host(db, payload.guest_id, current_user.id)
    gift = GiftService.create(
        db,
        guest_id=payload.guest_id,
        payment_method=payload.payment_method,
        currency=payload.currency,
        amount=payload.amount,
        note=payload.note,
        receipt_image=payload.receipt_image,
        created_by=current_user.id
    )
    GuestService.refresh_gift_flag(db, gift.guest_id)
    return success_response(
        message="Gift recorded successfully",
        data=GiftResponse.model_validate(gift),
        status_code=201
    )

@router.get("")
async def list_gifts(
    guest_id: Optional[str] = Query(None),
    event_id: Optional[str] = Query(None),
    payment_method: Optional[str] = Query(None),
    currency: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Filtered gifts across the current user's events, newest first"""
    result = GiftService.list(
        db,
        {
            "guest_id": guest_id,
            "event_id": event_id,
            "payment_method": payment_method,
            "currency": currency,
            "host_id": current_user.id,
        },
        page=page,
        page_size=page_size
    )
    return success_response(message="Gifts retrieved successfully", data=result)

@router.get("/guest/{guest_id}")
async def list_guest_gifts(
    guest_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    GuestService.get_for_host(db, guest_id, current_user.id)
    gifts = GiftService.list_by_guest(db, guest_id)
    return success_response(
        message="Gifts retrieved successfully",
        data=[GiftResponse.model_validate(gift) for gift in gifts]
    )

@router.get("/event/{event_id}")
async def list_event_gifts(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    require_event_host(db, event_id, current_user.id, "You can only view gifts for your own events")
    gifts = GiftService.list_by_event(db, event_id)
    return success_response(
        message="Gifts retrieved successfully",
        data=[GiftResponse.model_validate(gift) for gift in gifts]
    )

@router.get("/{gift_id}")
async def get_gift(
    gift_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    gift = _gift_for_host(db, gift_id, current_user.id)
    return success_response(
        message="Gift retrieved successfully",
        data=GiftResponse.model_validate(gift)
    )

@router.patch("/{gift_id}")
async def update_gift(
    gift_id: str,
    payload: GiftUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    _gift_for_host(db, gift_id, current_user.id)
    gift = GiftService.update(db, gift_id, payload.model_dump(exclude_unset=True))
    return success_response(
        message="Gift updated successfully",
        data=GiftResponse.model_validate(gift)
    )

@router.delete("/{gift_id}")
async def delete_gift(
    gift_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Delete a gift and refresh the guest's gift flag"""
    _gift_for_host(db, gift_id, current_user.id)
    guest_id = GiftService.remove(db, gift_id)
    GuestService.refresh_gift_flag(db, guest_id)
    return success_response(
        message="Gift deleted successfully",
        data={"deleted_gift_id": gift_id}
    )
