import uuid

from flask import current_app
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity
from flask_limiter.util import get_remote_address


def current_user_id() -> uuid.UUID | None:
    """
    Allow both authenticated and anonymous requests.
    Returns the caller's user id, or None when there is no valid token.
    """
    try:
        verify_jwt_in_request(optional=True)
        identity = get_jwt_identity()
    except Exception as e:
        current_app.logger.debug("Optional JWT check failed: %s", e)
        return None

    if not identity:
        return None
    try:
        return uuid.UUID(str(identity))
    except ValueError:
        return None


def client_ip() -> str:
    """
    The peer address. X-Forwarded-For is only honoured once ProxyFix has
    rewritten remote_addr for a configured number of trusted proxies.
    """
    return get_remote_address() or "unknown"
