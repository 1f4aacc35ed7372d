import hashlib
import hmac
import secrets
import time
from typing import Callable

from flask import current_app, g, request
from itsdangerous import BadSignature, URLSafeSerializer


class CsrfTokenManager:
    """
    Double-submit CSRF tokens.

    The raw secret only ever travels inside a signed, httpOnly cookie record
    ``{"secret", "issued_at"}``. Clients receive sha256(secret) to echo back in
    the X-CSRF-Token header; validation recomputes the digest from the cookie.
    """

    def __init__(
        self,
        signing_key: str,
        ttl_seconds: int = 24 * 60 * 60,
        secret_bytes: int = 32,
        clock: Callable[[], float] = time.time,
    ):
        self._serializer = URLSafeSerializer(signing_key, salt="pollguard-csrf")
        self.ttl_seconds = ttl_seconds
        self.secret_bytes = secret_bytes
        self._clock = clock

    @staticmethod
    def digest(secret: str) -> str:
        return hashlib.sha256(secret.encode("utf-8")).hexdigest()

    def issue(self) -> tuple[str, str]:
        """Returns (presented_token, stored_record)."""
        secret = secrets.token_hex(self.secret_bytes)
        record = self._serializer.dumps({"secret": secret, "issued_at": self._clock()})
        return self.digest(secret), record

    def validate(self, presented_token: str | None, stored_record: str | None) -> bool:
        if not presented_token or not stored_record:
            return False

        try:
            data = self._serializer.loads(stored_record)
        except BadSignature:
            return False

        if not isinstance(data, dict):
            return False
        secret = data.get("secret")
        issued_at = data.get("issued_at")
        if not isinstance(secret, str) or not isinstance(issued_at, (int, float)):
            return False

        if self._clock() - issued_at >= self.ttl_seconds:
            return False

        return hmac.compare_digest(self.digest(secret), presented_token)


def init_csrf(app, clock: Callable[[], float] = time.time) -> CsrfTokenManager:
    manager = CsrfTokenManager(
        signing_key=app.config["SECRET_KEY"],
        ttl_seconds=app.config["CSRF_TOKEN_TTL_SECONDS"],
        secret_bytes=app.config["CSRF_SECRET_BYTES"],
        clock=clock,
    )
    app.extensions["csrf"] = manager

    @app.after_request
    def _store_issued_token(response):
        record = g.pop("csrf_record", None)
        if record is not None:
            response.set_cookie(
                app.config["CSRF_COOKIE_NAME"],
                record,
                max_age=app.config["CSRF_TOKEN_TTL_SECONDS"],
                path="/",
                secure=app.config["CSRF_COOKIE_SECURE"],
                httponly=True,
                samesite="Strict",
            )
        return response

    return manager


def issue_csrf_token() -> str:
    """Issue a token for the current caller; the cookie is written after the request."""
    token, record = current_app.extensions["csrf"].issue()
    g.csrf_record = record
    return token


def validate_csrf_request() -> bool:
    presented = request.headers.get(current_app.config["CSRF_HEADER_NAME"])
    stored = request.cookies.get(current_app.config["CSRF_COOKIE_NAME"])
    return current_app.extensions["csrf"].validate(presented, stored)
