import uuid
from datetime import datetime
from ..extensions import db
from ..utils.security import hash_password, verify_password


class User(db.Model):
    __tablename__ = "users"

    ROLE_USER = "USER"
    ROLE_ADMIN = "ADMIN"
    ROLES = (ROLE_USER, ROLE_ADMIN)

    id = db.Column(db.Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    role = db.Column(db.String(30), nullable=False, default=ROLE_USER)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def set_password(self, raw_password: str) -> None:
        self.password_hash = hash_password(raw_password)

    def check_password(self, raw_password: str) -> bool:
        return verify_password(raw_password, self.password_hash)
