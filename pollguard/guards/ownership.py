from ..errors import Forbidden, NotFound, OperationError
from ..persistence import get_poll


def authorize_mutation(poll_id, caller_user_id) -> OperationError | None:
    """
    Only the creator of a poll may update or delete it. Enforced from the
    stored owner, never from anything the client sends.
    """
    poll = get_poll(poll_id)
    if poll is None:
        return NotFound("Poll not found.")

    if not poll.is_owned_by(caller_user_id):
        return Forbidden("You can only modify your own polls.")

    return None
