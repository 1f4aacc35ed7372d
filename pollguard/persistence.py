"""
Thin adapter over the database session.

Everything here either succeeds, raises ``AlreadyExists`` for a uniqueness
conflict, or lets ``SQLAlchemyError`` (timeouts included) propagate for the
operation layer to report as a persistence failure.
"""
from sqlalchemy.exc import IntegrityError

from .extensions import db
from .models.polls import Poll
from .models.vote import Vote


class AlreadyExists(Exception):
    pass


def get_poll(poll_id) -> Poll | None:
    return db.session.get(Poll, poll_id)


def find_vote(poll_id, user_id) -> Vote | None:
    return Vote.query.filter_by(poll_id=poll_id, user_id=user_id).first()


def insert_vote_if_absent(poll_id, user_id, option_index: int, before_commit=None) -> Vote:
    """
    Insert a vote and commit, relying on the (poll_id, user_id) unique
    constraint. ``before_commit`` runs inside the same transaction.
    """
    vote = Vote(poll_id=poll_id, user_id=user_id, option_index=option_index)
    try:
        db.session.add(vote)
        db.session.flush()
        if before_commit is not None:
            before_commit(vote)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        # Only a uniqueness conflict counts as a duplicate; anything else
        # (e.g. the poll vanished underneath us) is a plain store failure.
        if find_vote(poll_id, user_id) is not None:
            raise AlreadyExists(f"vote exists for poll={poll_id} user={user_id}")
        raise
    return vote
