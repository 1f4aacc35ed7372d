from flask import current_app, request

from ..errors import CsrfRejected, RateLimited, error_response
from ..utils.csrf import validate_csrf_request
from ..utils.identity import client_ip, current_user_id

SAFE_METHODS = ("GET", "HEAD")


def rate_limit_key() -> str:
    user_id = current_user_id()
    caller = f"user:{user_id}" if user_id else f"ip:{client_ip()}"
    # Unrouted requests share one bucket so arbitrary paths cannot mint keys
    return f"{request.endpoint or 'unrouted'}:{caller}"


def init_gatekeeper(app):
    """
    Every mutating request must carry a valid CSRF token and stay within the
    rate limit before it reaches a view. Rejections never touch the database.
    """

    @app.before_request
    def _gatekeeper():
        if request.method in SAFE_METHODS:
            return None

        if request.endpoint not in current_app.config["CSRF_EXEMPT_ENDPOINTS"]:
            if not validate_csrf_request():
                current_app.logger.info("CSRF rejected method=%s path=%s", request.method, request.path)
                return error_response(CsrfRejected("Invalid CSRF token"))

        key = rate_limit_key()
        if current_app.extensions["rate_limiter"].is_rate_limited(key):
            current_app.logger.info("Rate limited key=%s", key)
            return error_response(RateLimited("Too many attempts. Please try again later."))

        return None
