import uuid
from datetime import datetime
from ..extensions import db


class Poll(db.Model):
    __tablename__ = "polls"

    QUESTION_MAX_LENGTH = 500
    OPTION_MAX_LENGTH = 200
    MIN_OPTIONS = 2

    id = db.Column(db.Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    owner_id = db.Column(db.Uuid(as_uuid=True), nullable=False, index=True)
    question = db.Column(db.String(QUESTION_MAX_LENGTH), nullable=False)
    # Ordered option texts; votes reference them by index
    options = db.Column(db.JSON, nullable=False, default=list)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    votes = db.relationship(
        "Vote",
        backref="poll",
        lazy=True,
        cascade="all, delete-orphan"
    )

    def is_owned_by(self, user_id) -> bool:
        return user_id is not None and str(self.owner_id) == str(user_id)

    def has_option(self, option_index: int) -> bool:
        return 0 <= option_index < len(self.options or [])
