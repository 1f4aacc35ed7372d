from typing import Optional, Dict, Any
from flask import request

from ..extensions import db
from ..models.audit_log import AuditLog
from .identity import current_user_id, client_ip


def audit_log(
    action: str,
    entity_type: Optional[str] = None,
    entity_id=None,
    details: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Stage an audit row in the current session; the caller's commit persists
    it together with the change it describes.
    """
    ua = request.headers.get("User-Agent")

    log = AuditLog(
        actor_user_id=current_user_id(),
        action=action,
        entity_type=entity_type,
        entity_id=entity_id if entity_id else None,
        ip_address=client_ip(),
        user_agent=ua[:255] if ua else None,
        details=details or None,
    )
    db.session.add(log)
