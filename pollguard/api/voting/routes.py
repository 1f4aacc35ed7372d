from flask import Blueprint
from flasgger import swag_from

from ... import operations
from ...schemas.vote import VoteSubmitSchema
from ...utils.identity import current_user_id
from ...utils.validation import json_object_or_abort, validate_or_abort

voting_bp = Blueprint("voting", __name__)
vote_submit_schema = VoteSubmitSchema()


@voting_bp.post("/<uuid:poll_id>/vote")
@swag_from({
    "tags": ["Voting"],
    "summary": "Submit a vote (one per user per poll)",
    "security": [{"BearerAuth": [], "CsrfToken": []}],
    "parameters": [{
        "in": "body",
        "name": "body",
        "required": True,
        "schema": {
            "type": "object",
            "properties": {"option_index": {"type": "integer", "example": 0}},
            "required": ["option_index"],
        },
    }],
    "responses": {
        201: {"description": "Vote recorded"},
        400: {"description": "Validation error"},
        401: {"description": "Not logged in"},
        403: {"description": "Invalid CSRF token"},
        404: {"description": "Poll not found"},
        409: {"description": "Duplicate vote"},
        429: {"description": "Too many attempts"},
        500: {"description": "Server error"},
    },
})
def submit_vote(poll_id):
    payload = json_object_or_abort()
    payload = validate_or_abort(vote_submit_schema, payload)

    result = operations.submit_vote(poll_id, current_user_id(), payload["option_index"])
    return result.to_response()
