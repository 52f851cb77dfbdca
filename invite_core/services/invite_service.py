"""
Public invite access, authenticated only by possession of the invite token.

Tokens are bearer secrets: they are never logged, and every resolution
failure produces the same "Invitation not found" error so callers cannot tell
a revoked token from one that never existed.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from invite_core.core.config import settings
from invite_core.core.errors import NotFoundError
from invite_core.models import Guest
from invite_core.schemas.event import AssetMaps, EventSummary, TemplateResponse
from invite_core.schemas.guest import GuestResponse
from invite_core.schemas.invite import InviteRenderData
from invite_core.services.assets import AssetBundle, merge_assets, overrides_from_config, project_template_assets
from invite_core.services.event_access import require_event_host
from invite_core.services.guest_service import GuestService, generate_invite_token, parse_guest_status
from invite_core.services.repositories import EventRepo, GuestRepo, TemplateRepo

logger = logging.getLogger(__name__)

INVITE_NOT_FOUND = "Invitation not found"

def invite_url(token: str) -> str:
    """Public link a guest opens to view their invitation"""
    return f"{settings.BASE_URL.rstrip('/')}/invite/{token}"

class InviteService:
    """Service behind the public /invite/{token} surface"""

    @staticmethod
    def _guest_by_token(db: Session, token: str) -> Guest:
        guest = GuestRepo.get_by_token(db, token) if token else None
        if not guest:
            raise NotFoundError(INVITE_NOT_FOUND)
        return guest

    @staticmethod
    def get_render_data(db: Session, token: str) -> InviteRenderData:
        guest = InviteService._guest_by_token(db, token)
        event = EventRepo.get_by_id(db, guest.event_id)
        if not event:
            raise NotFoundError(INVITE_NOT_FOUND)

        template = TemplateRepo.get_by_slug(db, event.template_slug) if event.template_slug else None
        base = project_template_assets(template.assets) if template else AssetBundle()
        assets = merge_assets(base, overrides_from_config(event.user_template_config))

        return InviteRenderData(
            event=EventSummary.model_validate(event),
            guest=GuestResponse.model_validate(guest),
            template=TemplateResponse.model_validate(template) if template else None,
            assets=AssetMaps(**assets.as_dict()),
        )

    @staticmethod
    def track_open(db: Session, token: str) -> None:
        """First-touch open stamp; unknown tokens are ignored"""
        InviteService._track(db, token, "opened_at")

    @staticmethod
    def track_click(db: Session, token: str) -> None:
        """First-touch click stamp; unknown tokens are ignored"""
        InviteService._track(db, token, "clicked_at")

    @staticmethod
    def _track(db: Session, token: str, column: str) -> None:
        if not token:
            return
        try:
            GuestRepo.mark_first_touch(db, token, column)
        except Exception as e:
            db.rollback()
            # Exception text carries bound parameters, which include the token
            logger.error(f"Failed to record {column} tracking: {type(e).__name__}")

    @staticmethod
    def submit_rsvp(db: Session, token: str, status: str, message: Optional[str] = None) -> Guest:
        guest = InviteService._guest_by_token(db, token)
        guest = GuestRepo.set_rsvp(db, guest, parse_guest_status(status), message)
        logger.info(f"Guest {guest.id} RSVP {guest.status.value}")
        return guest

    @staticmethod
    def regenerate_token(db: Session, guest_id: str, host_id: str) -> str:
        """Replace the guest's token; the old one stops resolving immediately"""
        guest = GuestService.get(db, guest_id)
        require_event_host(
            db, guest.event_id, host_id,
            "You can only regenerate tokens for your own event guests"
        )

        token = generate_invite_token()
        if not GuestRepo.replace_token(db, guest_id, token):
            raise NotFoundError("Guest not found")
        logger.info(f"Invite token rotated for guest {guest_id} by host {host_id}")
        return token
