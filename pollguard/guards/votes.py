from flask import current_app

from ..errors import DuplicateVote, NotFound, Unauthorized, ValidationError, OperationError
from ..persistence import AlreadyExists, find_vote, get_poll, insert_vote_if_absent


def check_vote(poll_id, user_id, option_index) -> OperationError | None:
    """Everything that can be decided before the insert is attempted."""
    if user_id is None:
        return Unauthorized("You must be logged in to vote.")

    if isinstance(option_index, bool) or not isinstance(option_index, int):
        return ValidationError("Option index must be an integer.")

    poll = get_poll(poll_id)
    if poll is None:
        return NotFound("Poll not found.")

    if not poll.has_option(option_index):
        return ValidationError("Invalid option selected.")

    # Fast path only; the unique constraint is what actually guarantees this
    if find_vote(poll_id, user_id) is not None:
        return DuplicateVote("You have already voted on this poll.")

    return None


def record_vote(poll_id, user_id, option_index: int, before_commit=None):
    """
    Returns (vote, error). Store failures other than a uniqueness conflict
    propagate to the caller.
    """
    try:
        vote = insert_vote_if_absent(poll_id, user_id, option_index, before_commit=before_commit)
    except AlreadyExists:
        current_app.logger.info("Duplicate vote rejected by constraint poll=%s user=%s", poll_id, user_id)
        return None, DuplicateVote("You have already voted on this poll.")
    return vote, None


def submit_vote(poll_id, user_id, option_index, before_commit=None):
    """
    One vote per user per poll, on an option the poll actually has.
    Returns (vote, error); exactly one of them is None.
    """
    error = check_vote(poll_id, user_id, option_index)
    if error:
        return None, error
    return record_vote(poll_id, user_id, option_index, before_commit=before_commit)
