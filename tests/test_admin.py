import uuid
from datetime import datetime, timedelta

from flask_jwt_extended import create_access_token, decode_token

from pollguard.extensions import db
from pollguard.models.polls import Poll
from pollguard.models.user import User

STRONG = "StrongPass1!"


def _admin_headers(role="ADMIN"):
    token = create_access_token(identity=str(uuid.uuid4()), additional_claims={"role": role})
    return {"Authorization": f"Bearer {token}"}


def test_admin_lists_every_poll_newest_first(client, create_poll, u1, u2):
    older = create_poll(u1, question="Older?")
    newer = create_poll(u2, question="Newer?")
    base = datetime(2024, 1, 1)
    db.session.get(Poll, uuid.UUID(older["id"])).created_at = base
    db.session.get(Poll, uuid.UUID(newer["id"])).created_at = base + timedelta(minutes=5)
    db.session.commit()

    response = client.get("/api/admin/polls", headers=_admin_headers())
    assert response.status_code == 200
    body = response.get_json()
    assert body["success"] is True
    assert body["count"] == 2
    assert [p["id"] for p in body["polls"]] == [newer["id"], older["id"]]


def test_admin_list_forbidden_for_regular_user(client, headers_for, u1):
    response = client.get("/api/admin/polls", headers=headers_for(u1))
    assert response.status_code == 403
    assert response.get_json()["code"] == "FORBIDDEN"

    response = client.get("/api/admin/polls", headers=_admin_headers(role="USER"))
    assert response.status_code == 403


def test_admin_list_requires_token(client):
    assert client.get("/api/admin/polls").status_code == 401


def test_login_token_carries_role(client):
    client.post("/api/auth/register", json={"email": "admin@example.com", "password": STRONG})
    response = client.post("/api/auth/login", json={"email": "admin@example.com", "password": STRONG})
    assert decode_token(response.get_json()["access_token"])["role"] == "USER"
    assert response.get_json()["user"]["role"] == "USER"


def test_set_role_command_promotes_user(app, client):
    client.post("/api/auth/register", json={"email": "admin@example.com", "password": STRONG})

    result = app.test_cli_runner().invoke(args=["set-role", "admin@example.com", "ADMIN"])
    assert result.exit_code == 0
    assert "admin@example.com is now ADMIN" in result.output
    db.session.expire_all()
    assert User.query.filter_by(email="admin@example.com").one().role == User.ROLE_ADMIN

    response = client.post("/api/auth/login", json={"email": "admin@example.com", "password": STRONG})
    token = response.get_json()["access_token"]
    listing = client.get("/api/admin/polls", headers={"Authorization": f"Bearer {token}"})
    assert listing.status_code == 200


def test_set_role_command_unknown_user(app):
    result = app.test_cli_runner().invoke(args=["set-role", "ghost@example.com", "ADMIN"])
    assert result.exit_code != 0
    assert "No user with email ghost@example.com" in result.output
