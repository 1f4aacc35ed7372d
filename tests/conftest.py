"""Shared fixtures: an app on in-memory SQLite, a client, and auth/CSRF headers."""
import uuid

import pytest
from flask_jwt_extended import create_access_token

from pollguard import create_app
from pollguard.config import TestConfig
from pollguard.extensions import db


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def csrf_token(client):
    response = client.get("/api/csrf-token")
    assert response.status_code == 200
    return response.get_json()["csrf_token"]


@pytest.fixture
def headers_for(app, csrf_token):
    """Build request headers for a user id (None = anonymous)."""
    def _headers(user_id=None, with_csrf=True):
        headers = {}
        if user_id is not None:
            headers["Authorization"] = f"Bearer {create_access_token(identity=str(user_id))}"
        if with_csrf:
            headers["X-CSRF-Token"] = csrf_token
        return headers
    return _headers


@pytest.fixture
def u1():
    return uuid.uuid4()


@pytest.fixture
def u2():
    return uuid.uuid4()


@pytest.fixture
def create_poll(client, headers_for):
    def _create(owner, question="Best color?", options=("Red", "Blue")):
        response = client.post(
            "/api/polls/",
            json={"question": question, "options": list(options)},
            headers=headers_for(owner),
        )
        assert response.status_code == 201, response.get_json()
        return response.get_json()["poll"]
    return _create
