from flask import Blueprint
from flasgger import swag_from

from ...utils.csrf import issue_csrf_token

csrf_bp = Blueprint("csrf", __name__)


@csrf_bp.get("/csrf-token")
@swag_from({
    "tags": ["Security"],
    "summary": "Issue a CSRF token",
    "description": "Sets the httpOnly csrf cookie and returns the value to send back in the X-CSRF-Token header.",
    "responses": {200: {"description": "Token issued"}},
})
def csrf_token():
    return {"csrf_token": issue_csrf_token()}, 200
