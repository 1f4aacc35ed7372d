import re
from werkzeug.security import generate_password_hash, check_password_hash

_PASSWORD_RULES = (
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter"),
    (re.compile(r"[0-9]"), "Password must contain at least one number"),
    (re.compile(r"[!@#$%^&*]"), "Password must contain at least one special character (!@#$%^&*)"),
)


def hash_password(raw_password: str) -> str:
    return generate_password_hash(raw_password)


def verify_password(raw_password: str, password_hash: str) -> bool:
    return check_password_hash(password_hash, raw_password)


def password_policy_error(raw_password: str) -> str | None:
    """Returns the first unmet rule, or None when the password is acceptable."""
    if len(raw_password) < 8:
        return "Password must be at least 8 characters long"
    for pattern, message in _PASSWORD_RULES:
        if not pattern.search(raw_password):
            return message
    return None
