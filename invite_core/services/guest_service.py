"""
Guest store operations for hosts
"""

import logging
import secrets
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from invite_core.core.config import settings
from invite_core.core.errors import BadRequestError, NotFoundError
from invite_core.models import Guest, GuestStatus
from invite_core.schemas.guest import GuestCreate, GuestUpdate
from invite_core.services.event_access import require_event, require_event_host
from invite_core.services.repositories import GiftRepo, GuestRepo

logger = logging.getLogger(__name__)

def generate_invite_token() -> str:
    """Unguessable, URL-safe bearer token for the public invite view"""
    return secrets.token_urlsafe(settings.INVITE_TOKEN_BYTES)

def parse_guest_status(value: str) -> GuestStatus:
    try:
        return GuestStatus(value)
    except ValueError:
        raise BadRequestError("Invalid status. Must be one of: pending, confirmed, declined")

class GuestService:
    """Service for guest records"""

    @staticmethod
    def create(db: Session, data: GuestCreate, host_id: Optional[str] = None) -> Guest:
        """Create a guest with a fresh invite token.

        When ``host_id`` is given it must host the event. Duplicate user,
        email or phone within the event raises ``ConflictError``.
        """
        if host_id:
            require_event_host(db, data.event_id, host_id, "You can only add guests to your own events")
        else:
            require_event(db, data.event_id)

        guest = GuestRepo.create(
            db,
            event_id=data.event_id,
            user_id=data.user_id,
            created_by=host_id,
            name=data.name,
            email=data.email.lower() if data.email else None,
            phone=data.phone,
            status=parse_guest_status(data.status),
            notes=data.notes,
            invite_token=generate_invite_token(),
        )
        logger.info(f"Guest {guest.id} created for event {guest.event_id}")
        return guest

    @staticmethod
    def get(db: Session, guest_id: str) -> Guest:
        guest = GuestRepo.get_by_id(db, guest_id)
        if not guest:
            raise NotFoundError("Guest not found")
        return guest

    @staticmethod
    def get_for_host(db: Session, guest_id: str, host_id: str) -> Guest:
        guest = GuestService.get(db, guest_id)
        require_event_host(db, guest.event_id, host_id, "You can only manage guests of your own events")
        return guest

    @staticmethod
    def list_by_event(
        db: Session,
        event_id: str,
        host_id: str,
        status: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        page_size: int = 50
    ) -> Tuple[List[Guest], int]:
        require_event_host(db, event_id, host_id, "You can only view guests of your own events")
        status_filter = parse_guest_status(status) if status else None
        return GuestRepo.list_by_event(db, event_id, status_filter, search, page, page_size)

    @staticmethod
    def update(db: Session, guest_id: str, data: GuestUpdate, host_id: str) -> Guest:
        """Replace the fields set on ``data``; collisions raise ``ConflictError``"""
        guest = GuestService.get_for_host(db, guest_id, host_id)

        changes = data.model_dump(exclude_unset=True)
        fields: Dict[str, Any] = {}
        if changes.get("name") is not None:
            fields["name"] = changes["name"]
        if "email" in changes:
            fields["email"] = changes["email"].lower() if changes["email"] else None
        if "phone" in changes:
            fields["phone"] = changes["phone"] or None
        if changes.get("status") is not None:
            fields["status"] = parse_guest_status(changes["status"])
        if "notes" in changes:
            fields["notes"] = changes["notes"]

        guest = GuestRepo.update(db, guest, fields)
        logger.info(f"Guest {guest_id} updated by host {host_id}")
        return guest

    @staticmethod
    def delete(db: Session, guest_id: str, host_id: str) -> None:
        guest = GuestService.get_for_host(db, guest_id, host_id)
        GuestRepo.delete(db, guest)
        logger.info(f"Guest {guest_id} deleted by host {host_id}")

    @staticmethod
    def refresh_gift_flag(db: Session, guest_id: str) -> bool:
        """Recompute ``has_given_gift`` from the gifts recorded for the guest"""
        has_gift = GiftRepo.count_by_guest(db, guest_id) > 0
        GuestRepo.set_gift_flag(db, guest_id, has_gift)
        return has_gift
