"""
End-to-end tests for the HTTP routes
"""

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from invite_core.core.config import settings
from invite_core.core.db import Base, get_db
from invite_core.models import Event, Guest, GuestStatus, Template, User
from invite_core.utils.security import rate_limiter
from main import app

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_api.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

def auth(user_id: str) -> dict:
    token = jwt.encode({"sub": user_id}, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return {"Authorization": f"Bearer {token}"}

@pytest.fixture
def client():
    Base.metadata.create_all(bind=engine)
    rate_limiter.clear()
    app.dependency_overrides[get_db] = override_get_db

    db = TestingSessionLocal()
    db.add_all([
        User(id="host1", name="Sokha Host", email="host@example.com"),
        User(id="host2", name="Other Host", email="other@example.com"),
        User(id="u1", name="Dara Guest", email="dara@example.com"),
    ])
    db.add(Template(slug="modern-minimal", name="modern-minimal", title="Modern Minimal",
                    assets={"colors": ["#222222"], "images": [], "fonts": ["Inter"]}))
    db.flush()
    db.add(Event(id="e1", host_id="host1", title="Wedding of Sokha", template_slug="modern-minimal",
                 user_template_config={"colors": {"default_0": "#FFFFFF"}}))
    db.flush()
    db.add(Guest(id="g1", event_id="e1", name="Vanna", invite_token="tok-g1"))
    db.commit()
    db.close()

    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        Base.metadata.drop_all(bind=engine)

def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}

def test_invitation_create_then_conflict(client):
    response = client.post("/invitations", json={"event_id": "e1"}, headers=auth("u1"))
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["status"] == "pending"
    assert body["data"]["event"] == {"kind": "id", "id": "e1"}
    assert body["data"]["user"] == {"kind": "id", "id": "u1"}

    response = client.post("/invitations", json={"event_id": "e1"}, headers=auth("u1"))
    assert response.status_code == 409
    assert response.json()["success"] is False
    assert response.json()["error_code"] == "conflict"

def test_invitation_for_missing_event(client):
    response = client.post("/invitations", json={"event_id": "nope"}, headers=auth("u1"))
    assert response.status_code == 404

def test_invitation_requires_authentication(client):
    response = client.post("/invitations", json={"event_id": "e1"})
    assert response.status_code in (401, 403)

    response = client.post("/invitations", json={"event_id": "e1"}, headers=auth("ghost"))
    assert response.status_code == 401

def test_approval_flow(client):
    created = client.post("/invitations", json={"event_id": "e1", "message": "Hi"}, headers=auth("u1")).json()
    invitation_id = created["data"]["id"]

    response = client.patch(f"/invitations/{invitation_id}/status", json={"status": "approved"}, headers=auth("host2"))
    assert response.status_code == 403

    response = client.patch(f"/invitations/{invitation_id}/status", json={"status": "approved"}, headers=auth("host1"))
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "approved"
    assert response.json()["data"]["responded_at"] is not None

    response = client.patch(f"/invitations/{invitation_id}/status", json={"status": "declined"}, headers=auth("host1"))
    assert response.status_code == 400

    guests = client.get("/guests/event/e1", params={"status": "confirmed"}, headers=auth("host1")).json()["data"]
    assert guests["total"] == 1
    assert guests["items"][0]["user_id"] == "u1"
    assert guests["items"][0]["invite_token"]

def test_invitation_listing_and_delete(client):
    created = client.post("/invitations", json={"event_id": "e1"}, headers=auth("u1")).json()
    invitation_id = created["data"]["id"]

    listed = client.get("/invitations", params={"event_id": "e1", "expand": True}, headers=auth("host1")).json()
    assert listed["data"]["total"] == 1
    assert listed["data"]["items"][0]["event"]["kind"] == "expanded"
    assert listed["data"]["items"][0]["event"]["value"]["title"] == "Wedding of Sokha"

    mine = client.get("/invitations/mine", headers=auth("u1")).json()
    assert len(mine["data"]) == 1

    assert client.get("/invitations/event/e1", headers=auth("u1")).status_code == 403
    assert client.delete(f"/invitations/{invitation_id}", headers=auth("host2")).status_code == 403
    assert client.delete(f"/invitations/{invitation_id}", headers=auth("u1")).status_code == 200
    assert client.get(f"/invitations/{invitation_id}", headers=auth("u1")).status_code == 404

def test_invite_render_and_not_found(client):
    response = client.get("/invite/tok-g1")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["guest"]["id"] == "g1"
    assert "invite_token" not in data["guest"]
    assert data["assets"]["colors"] == {"default_0": "#FFFFFF"}
    assert data["assets"]["fonts"] == {"default_0": "Inter"}

    response = client.get("/invite/tok-unknown")
    assert response.status_code == 404
    assert response.json()["message"] == "Invitation not found"

def test_tracking_always_succeeds(client):
    for token in ("tok-g1", "tok-unknown"):
        response = client.get(f"/invite/{token}/track/open")
        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.content.startswith(b"\x89PNG")

        response = client.post(f"/invite/{token}/track/click")
        assert response.status_code == 200

    db = TestingSessionLocal()
    guest = db.query(Guest).filter(Guest.id == "g1").one()
    assert guest.opened_at is not None
    assert guest.clicked_at is not None
    db.close()

def test_rsvp(client):
    response = client.post("/invite/tok-g1/rsvp", json={"status": "declined"})
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "declined"

    response = client.post("/invite/tok-g1/rsvp", json={"status": "confirmed", "message": "See you!"})
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "confirmed"
    assert response.json()["data"]["notes"] == "See you!"

    assert client.post("/invite/tok-g1/rsvp", json={"status": "yes"}).status_code == 400
    assert client.post("/invite/tok-unknown/rsvp", json={"status": "confirmed"}).status_code == 404

    db = TestingSessionLocal()
    assert db.query(Guest).filter(Guest.id == "g1").one().status == GuestStatus.confirmed
    db.close()

def test_public_endpoints_are_rate_limited(client, monkeypatch):
    monkeypatch.setattr(settings, "RATE_LIMIT_PER_MINUTE", 2)

    assert client.get("/invite/tok-g1").status_code == 200
    assert client.get("/invite/tok-g1").status_code == 200
    assert client.get("/invite/tok-g1").status_code == 429
    # tracking is never throttled
    assert client.get("/invite/tok-g1/track/open").status_code == 200

def test_regenerate_token(client):
    assert client.post("/invite/guest/g1/regenerate-token", headers=auth("host2")).status_code == 403
    assert client.post("/invite/guest/nope/regenerate-token", headers=auth("host1")).status_code == 404

    response = client.post("/invite/guest/g1/regenerate-token", headers=auth("host1"))
    assert response.status_code == 200
    token = response.json()["data"]["token"]
    assert response.json()["data"]["invite_url"].endswith(f"/invite/{token}")

    assert client.get("/invite/tok-g1").status_code == 404
    assert client.get(f"/invite/{token}").status_code == 200

def test_invite_qr_code(client):
    response = client.get("/invite/guest/g1/qr.png", headers=auth("host1"))
    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert response.content.startswith(b"\x89PNG")

    assert client.get("/invite/guest/g1/qr.png", headers=auth("host2")).status_code == 403

def test_guest_management(client):
    response = client.post("/guests", json={"event_id": "e1", "name": "Bopha", "email": "Bopha@Example.com"},
                           headers=auth("host1"))
    assert response.status_code == 201
    guest = response.json()["data"]
    assert guest["email"] == "bopha@example.com"
    assert guest["status"] == "pending"

    duplicate = client.post("/guests", json={"event_id": "e1", "name": "Bopha 2", "email": "bopha@example.com"},
                            headers=auth("host1"))
    assert duplicate.status_code == 409

    assert client.post("/guests", json={"event_id": "e1", "name": "X"}, headers=auth("host2")).status_code == 403
    assert client.get(f"/guests/{guest['id']}", headers=auth("host1")).status_code == 200

    found = client.get("/guests/event/e1", params={"search": "bop"}, headers=auth("host1")).json()["data"]
    assert found["total"] == 1

    assert client.delete(f"/guests/{guest['id']}", headers=auth("host1")).status_code == 200
    assert client.get(f"/guests/{guest['id']}", headers=auth("host1")).status_code == 404

def test_gift_endpoints(client):
    response = client.post("/gifts", json={"guest_id": "g1", "payment_method": "cash", "currency": "usd", "amount": -5},
                           headers=auth("host1"))
    assert response.status_code == 400

    response = client.post("/gifts", json={"guest_id": "g1", "payment_method": "khqr", "currency": "khr", "amount": 50000},
                           headers=auth("host1"))
    assert response.status_code == 201
    gift = response.json()["data"]
    assert gift["created_by"] == "host1"

    listed = client.get("/gifts/guest/g1", headers=auth("host1")).json()["data"]
    assert [g["id"] for g in listed] == [gift["id"]]
    assert client.get("/guests/g1", headers=auth("host1")).json()["data"]["has_given_gift"] is True

    assert client.post("/gifts", json={"guest_id": "g1", "payment_method": "cash", "currency": "usd", "amount": 5},
                       headers=auth("host2")).status_code == 403

    updated = client.patch(f"/gifts/{gift['id']}", json={"amount": 60000}, headers=auth("host1")).json()["data"]
    assert updated["amount"] == 60000
    assert updated["currency"] == "khr"

    assert len(client.get("/gifts/event/e1", headers=auth("host1")).json()["data"]) == 1
    assert client.get("/gifts/event/e1", headers=auth("host2")).status_code == 403

    assert client.delete(f"/gifts/{gift['id']}", headers=auth("host1")).status_code == 200
    assert client.get(f"/gifts/{gift['id']}", headers=auth("host1")).status_code == 404
    assert client.get("/guests/g1", headers=auth("host1")).json()["data"]["has_given_gift"] is False

def test_gift_with_nan_amount_is_bad_request(client):
    headers = {**auth("host1"), "Content-Type": "application/json"}
    for literal in (b"NaN", b"Infinity"):
        body = b'{"guest_id": "g1", "payment_method": "cash", "currency": "usd", "amount": ' + literal + b"}"
        response = client.post("/gifts", content=body, headers=headers)
        assert response.status_code == 400
        assert response.json()["error_code"] == "bad_request"

    assert client.get("/gifts/guest/g1", headers=auth("host1")).json()["data"] == []

def test_gift_listing_with_filters(client):
    for payload in (
        {"guest_id": "g1", "payment_method": "cash", "currency": "usd", "amount": 20},
        {"guest_id": "g1", "payment_method": "khqr", "currency": "khr", "amount": 40000},
    ):
        assert client.post("/gifts", json=payload, headers=auth("host1")).status_code == 201

    page = client.get("/gifts", params={"currency": "khr"}, headers=auth("host1")).json()["data"]
    assert page["total"] == 1
    assert page["items"][0]["payment_method"] == "khqr"

    assert client.get("/gifts", headers=auth("host2")).json()["data"]["total"] == 0
    assert client.get("/gifts", params={"currency": "eur"}, headers=auth("host1")).status_code == 400

def test_guest_update(client):
    response = client.patch("/guests/g1", json={"name": "Vanna Chan", "status": "confirmed"}, headers=auth("host1"))
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Vanna Chan"
    assert data["status"] == "confirmed"
    assert data["invite_token"] == "tok-g1"

    assert client.patch("/guests/g1", json={"name": "X"}, headers=auth("host2")).status_code == 403
    assert client.patch("/guests/g1", json={"status": "maybe"}, headers=auth("host1")).status_code == 400

    client.post("/guests", json={"event_id": "e1", "name": "Bopha", "email": "bopha@example.com"}, headers=auth("host1"))
    response = client.patch("/guests/g1", json={"email": "bopha@example.com"}, headers=auth("host1"))
    assert response.status_code == 409
