import pytest

from pollguard import create_app
from pollguard.config import TestConfig
from pollguard.extensions import db
from pollguard.models.polls import Poll
from pollguard.utils.security import password_policy_error

STRONG = "StrongPass1!"


@pytest.mark.parametrize("password, message", [
    ("Sh0rt!", "Password must be at least 8 characters long"),
    ("lowercase1!", "Password must contain at least one uppercase letter"),
    ("UPPERCASE1!", "Password must contain at least one lowercase letter"),
    ("NoDigits!!", "Password must contain at least one number"),
    ("NoSpecial11", "Password must contain at least one special character (!@#$%^&*)"),
    (STRONG, None),
])
def test_password_policy(password, message):
    assert password_policy_error(password) == message


def test_register_and_login(client):
    response = client.post("/api/auth/register", json={"email": "Voter@Example.com", "password": STRONG})
    assert response.status_code == 201
    assert response.get_json()["user"]["email"] == "voter@example.com"

    response = client.post("/api/auth/login", json={"email": "voter@example.com", "password": STRONG})
    assert response.status_code == 200
    assert response.get_json()["access_token"]


def test_register_rejects_weak_password(client):
    response = client.post("/api/auth/register", json={"email": "voter@example.com", "password": "weakpass"})
    assert response.status_code == 400
    assert response.get_json()["error"] == "Password must contain at least one uppercase letter"


def test_register_duplicate_email(client):
    client.post("/api/auth/register", json={"email": "voter@example.com", "password": STRONG})
    response = client.post("/api/auth/register", json={"email": "voter@example.com", "password": STRONG})
    assert response.status_code == 409


def test_login_wrong_password(client):
    client.post("/api/auth/register", json={"email": "voter@example.com", "password": STRONG})
    response = client.post("/api/auth/login", json={"email": "voter@example.com", "password": "Wrong1!xx"})
    assert response.status_code == 401
    assert response.get_json()["error"] == "Invalid email or password"


def test_login_is_rate_limited(client):
    statuses = [
        client.post("/api/auth/login", json={"email": "voter@example.com", "password": "Wrong1!xx"}).status_code
        for _ in range(6)
    ]
    assert statuses == [401, 401, 401, 401, 401, 429]


def test_spoofed_forwarded_for_does_not_reset_login_limit(client):
    statuses = [
        client.post(
            "/api/auth/login",
            json={"email": "voter@example.com", "password": "Wrong1!xx"},
            headers={"X-Forwarded-For": f"10.0.0.{i}"},
        ).status_code
        for i in range(8)
    ]
    assert statuses == [401, 401, 401, 401, 401, 429, 429, 429]


def test_forwarded_for_trusted_behind_configured_proxy():
    class ProxiedConfig(TestConfig):
        PROXY_FIX_X_FOR = 1

    app = create_app(ProxiedConfig)
    with app.app_context():
        db.create_all()
        client = app.test_client()
        for _ in range(6):
            client.post(
                "/api/auth/login",
                json={"email": "voter@example.com", "password": "Wrong1!xx"},
                headers={"X-Forwarded-For": "198.51.100.1"},
            )

        # A different client seen through the proxy has its own bucket
        response = client.post(
            "/api/auth/login",
            json={"email": "voter@example.com", "password": "Wrong1!xx"},
            headers={"X-Forwarded-For": "198.51.100.2"},
        )
        assert response.status_code == 401
        db.session.remove()
        db.drop_all()



def test_login_token_authorizes_mutations(client, csrf_token):
    client.post("/api/auth/register", json={"email": "owner@example.com", "password": STRONG})
    token = client.post(
        "/api/auth/login", json={"email": "owner@example.com", "password": STRONG}
    ).get_json()["access_token"]

    response = client.post(
        "/api/polls/",
        json={"question": "Best color?", "options": ["Red", "Blue"]},
        headers={"Authorization": f"Bearer {token}", "X-CSRF-Token": csrf_token},
    )
    assert response.status_code == 201
    assert Poll.query.count() == 1


def test_invalid_bearer_token_is_anonymous(client, csrf_token):
    response = client.post(
        "/api/polls/",
        json={"question": "Best color?", "options": ["Red", "Blue"]},
        headers={"Authorization": "Bearer not-a-jwt", "X-CSRF-Token": csrf_token},
    )
    assert response.status_code == 401
