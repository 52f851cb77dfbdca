"""
Gift recording service
"""

import logging
import math
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from invite_core.core.config import settings
from invite_core.core.errors import BadRequestError, NotFoundError
from invite_core.models import Currency, Gift, PaymentMethod
from invite_core.schemas.common import Page
from invite_core.schemas.gift import GiftResponse
from invite_core.services.repositories import GiftRepo, GuestRepo

logger = logging.getLogger(__name__)

def _payment_method(value: str) -> PaymentMethod:
    try:
        return PaymentMethod(value)
    except ValueError:
        raise BadRequestError("Invalid payment method. Must be one of: cash, khqr")

def _currency(value: str) -> Currency:
    try:
        return Currency(value)
    except ValueError:
        raise BadRequestError("Invalid currency. Must be one of: khr, usd")

def _amount(value: float) -> float:
    if value is None or not math.isfinite(value) or value <= 0:
        raise BadRequestError("Amount must be greater than 0")
    return value

def _receipt_image(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    if not value.startswith(("http://", "https://")):
        raise BadRequestError("Receipt image must be a valid URL")
    return value

class GiftService:
    """Service for gifts recorded against guests.

    The guest's ``has_given_gift`` flag is not maintained here; callers
    refresh it after ``create`` and ``remove``.
    """

    @staticmethod
    def create(
        db: Session,
        guest_id: str,
        payment_method: str,
        currency: str,
        amount: float,
        note: Optional[str] = None,
        receipt_image: Optional[str] = None,
        created_by: Optional[str] = None
    ) -> Gift:
        fields = {
            "payment_method": _payment_method(payment_method),
            "currency": _currency(currency),
            "amount": _amount(amount),
            "note": note,
            "receipt_image": _receipt_image(receipt_image),
        }

        guest = GuestRepo.get_by_id(db, guest_id)
        if not guest:
            raise NotFoundError("Guest not found")

        gift = GiftRepo.create(
            db,
            guest_id=guest.id,
            event_id=guest.event_id,
            created_by=created_by,
            **fields
        )
        logger.info(f"Gift {gift.id} recorded for guest {guest_id}")
        return gift

    @staticmethod
    def get(db: Session, gift_id: str) -> Gift:
        gift = GiftRepo.get_by_id(db, gift_id)
        if not gift:
            raise NotFoundError("Gift not found")
        return gift

    @staticmethod
    def update(db: Session, gift_id: str, changes: Dict[str, Any]) -> Gift:
        """Replace only the fields present in ``changes``"""
        gift = GiftService.get(db, gift_id)

        fields: Dict[str, Any] = {}
        if "payment_method" in changes:
            fields["payment_method"] = _payment_method(changes["payment_method"])
        if "currency" in changes:
            fields["currency"] = _currency(changes["currency"])
        if "amount" in changes:
            fields["amount"] = _amount(changes["amount"])
        if "note" in changes:
            fields["note"] = changes["note"]
        if "receipt_image" in changes:
            fields["receipt_image"] = _receipt_image(changes["receipt_image"])

        return GiftRepo.update(db, gift, fields)

    @staticmethod
    def remove(db: Session, gift_id: str) -> str:
        """Hard-delete a gift and return the guest it belonged to"""
        gift = GiftService.get(db, gift_id)
        guest_id = gift.guest_id
        GiftRepo.delete(db, gift)
        logger.info(f"Gift {gift_id} removed from guest {guest_id}")
        return guest_id

    @staticmethod
    def list_by_guest(db: Session, guest_id: str) -> List[Gift]:
        return GiftRepo.list_by_guest(db, guest_id)

    @staticmethod
    def list_by_event(db: Session, event_id: str) -> List[Gift]:
        return GiftRepo.list_by_event(db, event_id)

    @staticmethod
    def list(
        db: Session,
        filters: Dict[str, Any],
        page: int = 1,
        page_size: Optional[int] = None
    ) -> Page[GiftResponse]:
        """Newest-first page of gifts.

        ``filters`` may hold ``guest_id``, ``event_id``, ``payment_method``,
        ``currency`` and ``host_id`` (only gifts of events the host owns).
        """
        page = max(page, 1)
        page_size = min(max(page_size or settings.DEFAULT_PAGE_SIZE, 1), settings.MAX_PAGE_SIZE)
        filters = dict(filters)
        if filters.get("payment_method"):
            filters["payment_method"] = _payment_method(filters["payment_method"])
        if filters.get("currency"):
            filters["currency"] = _currency(filters["currency"])

        items, total = GiftRepo.list_paginated(db, filters, page, page_size)
        return Page[GiftResponse](
            items=[GiftResponse.model_validate(item) for item in items],
            total=total,
            page=page,
            page_size=page_size,
        )
