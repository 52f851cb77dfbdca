"""
Tests for host-side guest management
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from invite_core.core.db import Base
from invite_core.core.errors import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from invite_core.models import Event, Guest, GuestStatus, User
from invite_core.schemas.guest import GuestCreate, GuestUpdate
from invite_core.services.guest_service import GuestService

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_guests.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture
def db_session():
    """Create test database session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture
def event(db_session):
    db_session.add_all([
        User(id="host1", name="Sokha Host", email="host@example.com"),
        User(id="host2", name="Other Host", email="other@example.com"),
    ])
    db_session.flush()
    db_session.add(Event(id="e1", host_id="host1", title="Wedding of Sokha"))
    db_session.commit()

def test_create_generates_token_and_lowercases_email(db_session, event):
    guest = GuestService.create(
        db_session,
        GuestCreate(event_id="e1", name="Dara", email="Dara@Example.com"),
        host_id="host1"
    )

    assert guest.email == "dara@example.com"
    assert guest.status == GuestStatus.pending
    assert len(guest.invite_token) == 43

    with pytest.raises(ForbiddenError):
        GuestService.create(db_session, GuestCreate(event_id="e1", name="Vanna"), host_id="host2")

def test_update_changes_only_given_fields(db_session, event):
    guest = GuestService.create(
        db_session,
        GuestCreate(event_id="e1", name="Dara", phone="+85512000111", notes="Table 4"),
        host_id="host1"
    )
    token = guest.invite_token

    updated = GuestService.update(
        db_session, guest.id,
        GuestUpdate(name="Dara Chan", email="DARA@example.com", status="confirmed"),
        "host1"
    )

    assert updated.name == "Dara Chan"
    assert updated.email == "dara@example.com"
    assert updated.status == GuestStatus.confirmed
    assert updated.phone == "+85512000111"
    assert updated.notes == "Table 4"
    assert updated.invite_token == token

    updated = GuestService.update(db_session, guest.id, GuestUpdate(notes=None), "host1")
    assert updated.notes is None

def test_update_collision_conflicts(db_session, event):
    GuestService.create(db_session, GuestCreate(event_id="e1", name="Dara", email="dara@example.com"), "host1")
    other = GuestService.create(db_session, GuestCreate(event_id="e1", name="Vanna"), "host1")

    with pytest.raises(ConflictError):
        GuestService.update(db_session, other.id, GuestUpdate(email="dara@example.com"), "host1")

    db_session.expire_all()
    assert db_session.query(Guest).filter(Guest.id == other.id).one().email is None

def test_update_requires_host_and_valid_status(db_session, event):
    guest = GuestService.create(db_session, GuestCreate(event_id="e1", name="Dara"), "host1")

    with pytest.raises(ForbiddenError):
        GuestService.update(db_session, guest.id, GuestUpdate(name="Hijacked"), "host2")
    with pytest.raises(BadRequestError):
        GuestService.update(db_session, guest.id, GuestUpdate(status="maybe"), "host1")
    with pytest.raises(NotFoundError):
        GuestService.update(db_session, "missing", GuestUpdate(name="X"), "host1")

    db_session.expire_all()
    assert GuestService.get(db_session, guest.id).name == "Dara"
