from .user import User  # noqa: F401
from .polls import Poll  # noqa: F401
from .vote import Vote  # noqa: F401
from .audit_log import AuditLog  # noqa: F401

# Import ALL models so SQLAlchemy registers them

__all__ = [
    "User",
    "Poll",
    "Vote",
    "AuditLog",
]
