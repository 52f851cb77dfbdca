"""
Repository layer abstracting storage for invitations, guests and gifts.

Uniqueness (one invitation per event/user, unique invite tokens, one guest per
event/user, email or phone) is enforced by table constraints; a violated
constraint is rolled back here and surfaced as ``ConflictError``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import or_, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from invite_core.core.errors import ConflictError
from invite_core.models import (
    Event,
    Gift,
    Guest,
    GuestStatus,
    Invitation,
    InvitationStatus,
    Template,
    User,
)


def _commit_or_conflict(db: Session, message: str) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(message) from exc


# -------- Collaborator lookups (read-only) --------

class UserRepo:
    @staticmethod
    def get_by_id(db: Session, user_id: str) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()


class EventRepo:
    @staticmethod
    def get_by_id(db: Session, event_id: str) -> Optional[Event]:
        return db.query(Event).filter(Event.id == event_id).first()


class TemplateRepo:
    @staticmethod
    def get_by_slug(db: Session, slug: str) -> Optional[Template]:
        return db.query(Template).filter(Template.slug == slug).first()


# -------- Invitation repository --------

class InvitationRepo:
    @staticmethod
    def create(db: Session, event_id: str, user_id: str, message: Optional[str]) -> Invitation:
        invitation = Invitation(
            event_id=event_id,
            user_id=user_id,
            message=message,
            status=InvitationStatus.pending,
        )
        db.add(invitation)
        _commit_or_conflict(db, "Invitation request already exists for this event")
        db.refresh(invitation)
        return invitation

    @staticmethod
    def get_by_id(db: Session, invitation_id: str) -> Optional[Invitation]:
        return db.query(Invitation).filter(Invitation.id == invitation_id).first()

    @staticmethod
    def list_by_event(db: Session, event_id: str) -> List[Invitation]:
        return db.query(Invitation).filter(
            Invitation.event_id == event_id
        ).order_by(Invitation.created_at.desc()).all()

    @staticmethod
    def list_by_user(db: Session, user_id: str, event_id: Optional[str] = None) -> List[Invitation]:
        query = db.query(Invitation).filter(Invitation.user_id == user_id)
        if event_id:
            query = query.filter(Invitation.event_id == event_id)
        return query.order_by(Invitation.created_at.desc()).all()

    @staticmethod
    def list_paginated(
        db: Session,
        filters: Dict[str, Any],
        page: int,
        page_size: int
    ) -> Tuple[List[Invitation], int]:
        query = db.query(Invitation)
        if filters.get("event_id"):
            query = query.filter(Invitation.event_id == filters["event_id"])
        if filters.get("user_id"):
            query = query.filter(Invitation.user_id == filters["user_id"])
        if filters.get("status"):
            query = query.filter(Invitation.status == filters["status"])

        total = query.count()
        items = query.order_by(Invitation.created_at.desc()).offset(
            (page - 1) * page_size
        ).limit(page_size).all()
        return items, total

    @staticmethod
    def respond(db: Session, invitation_id: str, status: InvitationStatus) -> bool:
        """Move a pending invitation to ``status``; False if it was no longer pending"""
        now = datetime.utcnow()
        updated = db.query(Invitation).filter(
            Invitation.id == invitation_id,
            Invitation.status == InvitationStatus.pending
        ).update(
            {"status": status, "responded_at": now, "updated_at": now},
            synchronize_session=False
        )
        db.commit()
        return updated == 1

    @staticmethod
    def delete(db: Session, invitation: Invitation) -> None:
        db.delete(invitation)
        db.commit()


# -------- Guest repository --------

class GuestRepo:
    @staticmethod
    def create(db: Session, **fields: Any) -> Guest:
        guest = Guest(**fields)
        db.add(guest)
        _commit_or_conflict(db, "Guest already exists for this event")
        db.refresh(guest)
        return guest

    @staticmethod
    def get_by_id(db: Session, guest_id: str) -> Optional[Guest]:
        return db.query(Guest).filter(Guest.id == guest_id).first()

    @staticmethod
    def get_by_token(db: Session, token: str) -> Optional[Guest]:
        return db.query(Guest).filter(Guest.invite_token == token).first()

    @staticmethod
    def list_by_event(
        db: Session,
        event_id: str,
        status: Optional[GuestStatus] = None,
        search: Optional[str] = None,
        page: int = 1,
        page_size: int = 50
    ) -> Tuple[List[Guest], int]:
        query = db.query(Guest).filter(Guest.event_id == event_id)
        if status:
            query = query.filter(Guest.status == status)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                Guest.name.ilike(pattern),
                Guest.email.ilike(pattern),
                Guest.phone.ilike(pattern),
            ))

        total = query.count()
        items = query.order_by(Guest.created_at.desc()).offset(
            (page - 1) * page_size
        ).limit(page_size).all()
        return items, total

    @staticmethod
    def mark_first_touch(db: Session, token: str, column: str) -> bool:
        """Stamp ``opened_at``/``clicked_at`` only when still unset"""
        field = getattr(Guest, column)
        now = datetime.utcnow()
        updated = db.query(Guest).filter(
            Guest.invite_token == token,
            field.is_(None)
        ).update({column: now, "updated_at": now}, synchronize_session=False)
        db.commit()
        return updated == 1

    @staticmethod
    def set_rsvp(db: Session, guest: Guest, status: GuestStatus, notes: Optional[str]) -> Guest:
        guest.status = status
        if notes:
            guest.notes = notes
        guest.updated_at = datetime.utcnow()
        db.commit()
        db.refresh(guest)
        return guest

    @staticmethod
    def replace_token(db: Session, guest_id: str, token: str) -> bool:
        updated = db.query(Guest).filter(Guest.id == guest_id).update(
            {"invite_token": token, "updated_at": datetime.utcnow()},
            synchronize_session=False
        )
        _commit_or_conflict(db, "Invite token collision, retry")
        return updated == 1

    @staticmethod
    def update(db: Session, guest: Guest, fields: Dict[str, Any]) -> Guest:
        for key, value in fields.items():
            setattr(guest, key, value)
        guest.updated_at = datetime.utcnow()
        _commit_or_conflict(db, "Guest already exists for this event")
        db.refresh(guest)
        return guest

    @staticmethod
    def set_gift_flag(db: Session, guest_id: str, has_given_gift: bool) -> None:
        db.query(Guest).filter(Guest.id == guest_id).update(
            {"has_given_gift": has_given_gift, "updated_at": datetime.utcnow()},
            synchronize_session=False
        )
        db.commit()

    @staticmethod
    def delete(db: Session, guest: Guest) -> None:
        db.delete(guest)
        db.commit()


# -------- Gift repository --------

class GiftRepo:
    @staticmethod
    def create(db: Session, **fields: Any) -> Gift:
        gift = Gift(**fields)
        db.add(gift)
        _commit_or_conflict(db, "Gift could not be recorded")
        db.refresh(gift)
        return gift

    @staticmethod
    def get_by_id(db: Session, gift_id: str) -> Optional[Gift]:
        return db.query(Gift).filter(Gift.id == gift_id).first()

    @staticmethod
    def update(db: Session, gift: Gift, fields: Dict[str, Any]) -> Gift:
        for key, value in fields.items():
            setattr(gift, key, value)
        gift.updated_at = datetime.utcnow()
        db.commit()
        db.refresh(gift)
        return gift

    @staticmethod
    def delete(db: Session, gift: Gift) -> None:
        db.delete(gift)
        db.commit()

    @staticmethod
    def list_by_guest(db: Session, guest_id: str) -> List[Gift]:
        return db.query(Gift).filter(Gift.guest_id == guest_id).order_by(Gift.created_at.desc()).all()

    @staticmethod
    def list_by_event(db: Session, event_id: str) -> List[Gift]:
        return db.query(Gift).filter(Gift.event_id == event_id).order_by(Gift.created_at.desc()).all()

    @staticmethod
    def list_paginated(
        db: Session,
        filters: Dict[str, Any],
        page: int,
        page_size: int
    ) -> Tuple[List[Gift], int]:
        query = db.query(Gift)
        if filters.get("host_id"):
            query = query.join(Event, Gift.event_id == Event.id).filter(Event.host_id == filters["host_id"])
        for key in ("guest_id", "event_id", "payment_method", "currency"):
            if filters.get(key):
                query = query.filter(getattr(Gift, key) == filters[key])

        total = query.count()
        items = query.order_by(Gift.created_at.desc()).offset(
            (page - 1) * page_size
        ).limit(page_size).all()
        return items, total

    @staticmethod
    def count_by_guest(db: Session, guest_id: str) -> int:
        return db.query(func.count(Gift.id)).filter(Gift.guest_id == guest_id).scalar() or 0
