"""
Entry points for poll mutations and voting.

Every function returns an ``OperationResult``; nothing raises to the caller.
Store failures are rolled back, logged, and reported as ``PersistenceError``.
"""
from functools import wraps

from flask import current_app
from marshmallow import ValidationError as SchemaValidationError
from sqlalchemy.exc import SQLAlchemyError

from .errors import OperationError, PersistenceError, Unauthorized, ValidationError
from .extensions import db
from .guards.ownership import authorize_mutation
from .guards import votes as vote_guard
from .models.polls import Poll
from .schemas.poll import PollInputSchema, PollReadSchema
from .utils.audit import audit_log
from .utils.validation import first_message

poll_input_schema = PollInputSchema()
poll_read_schema = PollReadSchema()


class OperationResult:
    def __init__(self, error: OperationError | None = None, status: int = 200, **data):
        self.error = error
        self.status = error.status if error else status
        self.data = data

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        body = {"success": self.ok, "error": self.error.message if self.error else None}
        if self.error:
            body["code"] = self.error.code
        body.update(self.data)
        return body

    def to_response(self):
        return self.to_dict(), self.status


def _persistence_guarded(action: str):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except SQLAlchemyError:
                db.session.rollback()
                current_app.logger.exception("DB error during %s", action)
                return OperationResult(PersistenceError(f"Failed to {action}."))
        return wrapper
    return decorator


def clean_poll_input(question, options):
    """Returns (data, error) with question/options sanitized and validated."""
    try:
        data = poll_input_schema.load({"question": question, "options": options})
    except SchemaValidationError as e:
        messages = e.messages if isinstance(e.messages, dict) else {"_schema": e.messages}
        for field in ("question", "options"):
            if field in messages:
                return None, ValidationError(first_message(messages[field]))
        return None, ValidationError(first_message(messages))
    return data, None


@_persistence_guarded("create poll")
def create_poll(user_id, question, options) -> OperationResult:
    if user_id is None:
        return OperationResult(Unauthorized("You must be logged in to create a poll."))

    data, error = clean_poll_input(question, options)
    if error:
        return OperationResult(error)

    poll = Poll(owner_id=user_id, question=data["question"], options=data["options"])
    db.session.add(poll)
    db.session.flush()

    audit_log(
        action="POLL_CREATED",
        entity_type="POLL",
        entity_id=poll.id,
        details={"question": poll.question, "option_count": len(poll.options)},
    )
    db.session.commit()

    return OperationResult(status=201, poll=poll_read_schema.dump(poll))


@_persistence_guarded("update poll")
def update_poll(poll_id, user_id, question, options) -> OperationResult:
    if user_id is None:
        return OperationResult(Unauthorized("You must be logged in to update a poll."))

    error = authorize_mutation(poll_id, user_id)
    if error:
        return OperationResult(error)

    data, error = clean_poll_input(question, options)
    if error:
        return OperationResult(error)

    poll = db.session.get(Poll, poll_id)
    poll.question = data["question"]
    poll.options = data["options"]

    audit_log(
        action="POLL_UPDATED",
        entity_type="POLL",
        entity_id=poll.id,
        details={"question": poll.question, "option_count": len(poll.options)},
    )
    db.session.commit()

    return OperationResult(poll=poll_read_schema.dump(poll))


@_persistence_guarded("delete poll")
def delete_poll(poll_id, user_id) -> OperationResult:
    if user_id is None:
        return OperationResult(Unauthorized("You must be logged in to delete a poll."))

    error = authorize_mutation(poll_id, user_id)
    if error:
        return OperationResult(error)

    poll = db.session.get(Poll, poll_id)
    audit_log(
        action="POLL_DELETED",
        entity_type="POLL",
        entity_id=poll.id,
        details={"question": poll.question},
    )
    db.session.delete(poll)
    db.session.commit()

    return OperationResult()


@_persistence_guarded("record vote")
def submit_vote(poll_id, user_id, option_index) -> OperationResult:
    def _audit(vote):
        audit_log(
            action="VOTE_SUBMITTED",
            entity_type="VOTE",
            entity_id=vote.id,
            details={"poll_id": str(poll_id), "option_index": option_index},
        )

    vote, error = vote_guard.submit_vote(poll_id, user_id, option_index, before_commit=_audit)
    if error:
        return OperationResult(error)

    return OperationResult(
        status=201,
        vote={"vote_id": str(vote.id), "poll_id": str(poll_id), "option_index": vote.option_index},
    )
