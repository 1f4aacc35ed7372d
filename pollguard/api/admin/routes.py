from flask import Blueprint
from flasgger import swag_from
from flask_jwt_extended import jwt_required

from ...models.polls import Poll
from ...models.user import User
from ...schemas.poll import PollReadSchema
from ...utils.rbac import roles_required

admin_bp = Blueprint("admin", __name__)

poll_read_many_schema = PollReadSchema(many=True)


@admin_bp.get("/polls")
@jwt_required()
@roles_required(User.ROLE_ADMIN)
@swag_from({
    "tags": ["Admin"],
    "summary": "List every poll, newest first (admin only)",
    "description": "Read-only. Deleting still goes through DELETE /api/polls/<id>, which is owner-only.",
    "security": [{"BearerAuth": []}],
    "responses": {200: {"description": "OK"}, 401: {"description": "Unauthorized"}, 403: {"description": "Forbidden"}}
})
def list_all_polls():
    polls = Poll.query.order_by(Poll.created_at.desc()).all()
    return {
        "success": True,
        "error": None,
        "count": len(polls),
        "polls": poll_read_many_schema.dump(polls),
    }, 200
