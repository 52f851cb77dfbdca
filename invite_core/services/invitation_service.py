"""
Invitation lifecycle: requests to attend an event and the host's decision.

State machine: ``pending -> approved`` and ``pending -> declined``; both are
terminal. Approval is committed first and then materializes a confirmed guest
for the requester as a best-effort follow-up: a ``ConflictError`` there means
the guest already exists and is ignored, any other error propagates while the
approval stays committed.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from invite_core.core.config import settings
from invite_core.core.errors import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from invite_core.models import Invitation, InvitationStatus
from invite_core.schemas.common import ExpandedRef, IdRef, Page
from invite_core.schemas.event import EventSummary, UserSummary
from invite_core.schemas.guest import GuestCreate
from invite_core.schemas.invitation import InvitationResponse
from invite_core.services.event_access import require_event, require_event_host
from invite_core.services.guest_service import GuestService
from invite_core.services.repositories import EventRepo, InvitationRepo, UserRepo

logger = logging.getLogger(__name__)

RESPONSE_STATUSES = (InvitationStatus.approved, InvitationStatus.declined)

def to_invitation_response(invitation: Invitation, expand: bool = False) -> InvitationResponse:
    """Build the API shape, resolving event/user references in one place"""
    if expand and invitation.event is not None:
        event_ref = ExpandedRef[EventSummary](value=EventSummary.model_validate(invitation.event))
    else:
        event_ref = IdRef(id=invitation.event_id)

    if expand and invitation.user is not None:
        user_ref = ExpandedRef[UserSummary](value=UserSummary.model_validate(invitation.user))
    else:
        user_ref = IdRef(id=invitation.user_id)

    return InvitationResponse(
        id=invitation.id,
        event=event_ref,
        user=user_ref,
        message=invitation.message,
        status=invitation.status,
        responded_at=invitation.responded_at,
        created_at=invitation.created_at,
        updated_at=invitation.updated_at,
    )

def parse_response_status(value: str) -> InvitationStatus:
    try:
        status = InvitationStatus(value)
    except ValueError:
        status = None
    if status not in RESPONSE_STATUSES:
        raise BadRequestError("Invalid status. Must be one of: approved, declined")
    return status

class InvitationService:
    """Service for invitation requests"""

    @staticmethod
    def create(db: Session, event_id: str, user_id: str, message: Optional[str] = None) -> Invitation:
        require_event(db, event_id)
        if not UserRepo.get_by_id(db, user_id):
            raise NotFoundError("User not found")

        invitation = InvitationRepo.create(db, event_id, user_id, message)
        logger.info(f"Invitation {invitation.id} requested for event {event_id} by user {user_id}")
        return invitation

    @staticmethod
    def get(db: Session, invitation_id: str) -> Invitation:
        invitation = InvitationRepo.get_by_id(db, invitation_id)
        if not invitation:
            raise NotFoundError("Invitation not found")
        return invitation

    @staticmethod
    def update_status(db: Session, invitation_id: str, new_status: str, host_id: str) -> Invitation:
        status = parse_response_status(new_status)
        invitation = InvitationService.get(db, invitation_id)
        require_event_host(
            db, invitation.event_id, host_id,
            "You can only manage invitations for your own events"
        )
        if invitation.status != InvitationStatus.pending:
            raise BadRequestError("Invitation has already been responded to")

        if not InvitationRepo.respond(db, invitation_id, status):
            # Another request answered it between the read and the update
            raise BadRequestError("Invitation has already been responded to")
        logger.info(f"Invitation {invitation_id} {status.value} by host {host_id}")

        invitation = InvitationService.get(db, invitation_id)
        if status == InvitationStatus.approved:
            InvitationService._materialize_guest(db, invitation, host_id)
        return invitation

    @staticmethod
    def _materialize_guest(db: Session, invitation: Invitation, host_id: str) -> None:
        user = UserRepo.get_by_id(db, invitation.user_id)
        if not user:
            logger.warning(f"Invitation {invitation.id} approved but user {invitation.user_id} has no profile")
            return

        try:
            GuestService.create(db, GuestCreate.model_construct(
                event_id=invitation.event_id,
                user_id=user.id,
                name=user.name,
                email=user.email,
                phone=user.phone,
                status="confirmed",
                notes=None,
            ), host_id)
        except ConflictError:
            logger.info(f"Guest for invitation {invitation.id} already exists")

    @staticmethod
    def remove(db: Session, invitation_id: str, user_id: str) -> None:
        """Delete a request; allowed for the requester or the event host"""
        invitation = InvitationService.get(db, invitation_id)
        if invitation.user_id != user_id:
            event = EventRepo.get_by_id(db, invitation.event_id)
            if not event or event.host_id != user_id:
                raise ForbiddenError(
                    "You can only delete your own invitation requests or invitations to your events"
                )
        InvitationRepo.delete(db, invitation)
        logger.info(f"Invitation {invitation_id} deleted by user {user_id}")

    @staticmethod
    def list(
        db: Session,
        filters: Dict[str, Any],
        page: int = 1,
        page_size: Optional[int] = None,
        expand: bool = False
    ) -> Page[InvitationResponse]:
        page = max(page, 1)
        page_size = min(max(page_size or settings.DEFAULT_PAGE_SIZE, 1), settings.MAX_PAGE_SIZE)
        if filters.get("status"):
            try:
                filters = {**filters, "status": InvitationStatus(filters["status"])}
            except ValueError:
                raise BadRequestError("Invalid status. Must be one of: pending, approved, declined")

        items, total = InvitationRepo.list_paginated(db, filters, page, page_size)
        return Page[InvitationResponse](
            items=[to_invitation_response(item, expand) for item in items],
            total=total,
            page=page,
            page_size=page_size,
        )

    @staticmethod
    def list_for_event(db: Session, event_id: str, host_id: str) -> List[Invitation]:
        require_event_host(db, event_id, host_id, "You can only view invitations for your own events")
        return InvitationRepo.list_by_event(db, event_id)

    @staticmethod
    def list_for_user(db: Session, user_id: str, event_id: Optional[str] = None) -> List[Invitation]:
        return InvitationRepo.list_by_user(db, user_id, event_id)
