from flask import Blueprint
from flasgger import swag_from
from flask_jwt_extended import jwt_required

from ... import operations
from ...extensions import db
from ...models.polls import Poll
from ...schemas.poll import PollReadSchema
from ...utils.identity import current_user_id
from ...utils.validation import json_object_or_abort

polls_bp = Blueprint("polls", __name__)

poll_read_schema = PollReadSchema()
poll_read_many_schema = PollReadSchema(many=True)

_POLL_BODY = {
    "in": "body",
    "name": "body",
    "required": True,
    "schema": {
        "type": "object",
        "properties": {
            "question": {"type": "string", "example": "Best color?"},
            "options": {"type": "array", "items": {"type": "string"}, "example": ["Red", "Blue"]},
        },
        "required": ["question", "options"],
    },
}


@polls_bp.post("/")
@swag_from({
    "tags": ["Polls"],
    "summary": "Create a poll",
    "security": [{"BearerAuth": [], "CsrfToken": []}],
    "parameters": [_POLL_BODY],
    "responses": {
        201: {"description": "Created"},
        400: {"description": "Validation error"},
        401: {"description": "Not logged in"},
        403: {"description": "Invalid CSRF token"},
        429: {"description": "Too many attempts"},
    }
})
def create_poll():
    payload = json_object_or_abort()
    result = operations.create_poll(
        current_user_id(),
        payload.get("question"),
        payload.get("options"),
    )
    return result.to_response()


@polls_bp.get("/")
@jwt_required()
@swag_from({
    "tags": ["Polls"],
    "summary": "List the caller's polls, newest first",
    "security": [{"BearerAuth": []}],
    "responses": {200: {"description": "OK"}, 401: {"description": "Unauthorized"}}
})
def list_polls():
    polls = (
        Poll.query
        .filter_by(owner_id=current_user_id())
        .order_by(Poll.created_at.desc())
        .all()
    )
    return {"success": True, "error": None, "polls": poll_read_many_schema.dump(polls)}, 200


@polls_bp.get("/<uuid:poll_id>")
@swag_from({"tags": ["Polls"], "summary": "Get a poll", "responses": {200: {}, 404: {}}})
def get_poll(poll_id):
    poll = db.session.get(Poll, poll_id)
    if not poll:
        return {"success": False, "error": "Poll not found.", "code": "NOT_FOUND"}, 404
    return {"success": True, "error": None, "poll": poll_read_schema.dump(poll)}, 200


@polls_bp.put("/<uuid:poll_id>")
@swag_from({
    "tags": ["Polls"],
    "summary": "Update a poll (owner only)",
    "security": [{"BearerAuth": [], "CsrfToken": []}],
    "parameters": [_POLL_BODY],
    "responses": {200: {}, 400: {}, 401: {}, 403: {}, 404: {}, 429: {}}
})
def update_poll(poll_id):
    payload = json_object_or_abort()
    result = operations.update_poll(
        poll_id,
        current_user_id(),
        payload.get("question"),
        payload.get("options"),
    )
    return result.to_response()


@polls_bp.delete("/<uuid:poll_id>")
@swag_from({
    "tags": ["Polls"],
    "summary": "Delete a poll (owner only)",
    "security": [{"BearerAuth": [], "CsrfToken": []}],
    "responses": {200: {}, 401: {}, 403: {}, 404: {}, 429: {}}
})
def delete_poll(poll_id):
    result = operations.delete_poll(poll_id, current_user_id())
    return result.to_response()
