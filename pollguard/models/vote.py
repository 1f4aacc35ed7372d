import uuid
from datetime import datetime
from ..extensions import db


class Vote(db.Model):
    __tablename__ = "votes"

    id = db.Column(db.Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    poll_id = db.Column(db.Uuid(as_uuid=True), db.ForeignKey("polls.id", ondelete="CASCADE"), nullable=False)
    user_id = db.Column(db.Uuid(as_uuid=True), nullable=False, index=True)
    option_index = db.Column(db.Integer, nullable=False)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        # One vote per user per poll; concurrent submissions are settled here
        db.UniqueConstraint("poll_id", "user_id", name="uq_votes_poll_user"),
        db.Index("ix_votes_poll_id", "poll_id"),
    )
