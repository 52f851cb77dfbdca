"""
Invite routes - public endpoints are authenticated by the invite token only
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from sqlalchemy.orm import Session

from invite_core.core.db import get_db
from invite_core.models import User
from invite_core.schemas.guest import GuestResponse
from invite_core.schemas.invite import RSVPRequest, TokenResponse
from invite_core.services.guest_service import GuestService
from invite_core.services.invite_service import InviteService, invite_url
from invite_core.services.qr_service import QRService
from invite_core.utils.security import get_current_user, rate_limit_check, get_client_ip
from invite_core.utils.responses import success_response, error_response, pixel_response

router = APIRouter()

def _rate_limited(request: Request):
    if not rate_limit_check(get_client_ip(request)):
        return error_response(
            message="Rate limit exceeded. Please try again later.",
            error_code="rate_limited",
            status_code=429
        )
    return None

@router.get("/{token}")
async def get_invite(
    token: str,
    request: Request,
    db: Session = Depends(get_db)
):
    """Event, guest, template and merged assets for rendering"""
    limited = _rate_limited(request)
    if limited:
        return limited

    data = InviteService.get_render_data(db, token)
    return success_response(message="Invitation retrieved successfully", data=data)

@router.get("/{token}/track/open")
async def track_open(token: str, db: Session = Depends(get_db)):
    """Tracking pixel; always answers with the image"""
    InviteService.track_open(db, token)
    return pixel_response()

@router.post("/{token}/track/click")
async def track_click(token: str, db: Session = Depends(get_db)):
    InviteService.track_click(db, token)
    return success_response(message="Click tracked")

@router.post("/{token}/rsvp")
async def submit_rsvp(
    token: str,
    payload: RSVPRequest,
    request: Request,
    db: Session = Depends(get_db)
):
    limited = _rate_limited(request)
    if limited:
        return limited

    guest = InviteService.submit_rsvp(db, token, payload.status, payload.message)
    return success_response(
        message="RSVP submitted successfully",
        data=GuestResponse.model_validate(guest)
    )

@router.post("/guest/{guest_id}/regenerate-token")
async def regenerate_token(
    guest_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Rotate a guest's invite token (event host only)"""
    token = InviteService.regenerate_token(db, guest_id, current_user.id)
    return success_response(
        message="Token regenerated successfully",
        data=TokenResponse(token=token, invite_url=invite_url(token))
    )

@router.get("/guest/{guest_id}/qr.png")
async def get_invite_qr(
    guest_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """QR code image of a guest's invite link (event host only)"""
    guest = GuestService.get_for_host(db, guest_id, current_user.id)
    qr_bytes = QRService.generate_invite_qr(guest.invite_token)

    return Response(
        content=qr_bytes,
        media_type="image/png",
        headers={"Content-Disposition": f"inline; filename=invite_{guest.id}.png"}
    )
