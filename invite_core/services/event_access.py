"""
Host ownership checks shared by the host-facing services
"""

from sqlalchemy.orm import Session

from invite_core.core.errors import ForbiddenError, NotFoundError
from invite_core.models import Event
from invite_core.services.repositories import EventRepo

def require_event(db: Session, event_id: str) -> Event:
    event = EventRepo.get_by_id(db, event_id)
    if not event:
        raise NotFoundError("Event not found")
    return event

def require_event_host(db: Session, event_id: str, user_id: str, message: str) -> Event:
    """Return the event if ``user_id`` hosts it, otherwise raise ``ForbiddenError``"""
    event = require_event(db, event_id)
    if event.host_id != user_id:
        raise ForbiddenError(message)
    return event
