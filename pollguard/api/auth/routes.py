from flask import Blueprint, current_app
from flasgger import swag_from
from flask_jwt_extended import create_access_token
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ...extensions import db
from ...models.user import User
from ...schemas.auth import RegisterSchema, LoginSchema
from ...schemas.user import UserSchema
from ...utils.security import password_policy_error
from ...utils.validation import json_object_or_abort, validate_or_abort

auth_bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_req_schema = LoginSchema()
user_schema = UserSchema()


@auth_bp.post("/register")
@swag_from({
    "tags": ["Auth"],
    "summary": "Register a user",
    "parameters": [{
        "in": "body",
        "name": "body",
        "required": True,
        "schema": {
            "type": "object",
            "properties": {
                "email": {"type": "string", "example": "voter@example.com"},
                "password": {"type": "string", "example": "StrongPass1!"},
            },
            "required": ["email", "password"]
        }
    }],
    "responses": {
        "201": {"description": "User created"},
        "400": {"description": "Validation error"},
        "409": {"description": "Email already exists"},
        "429": {"description": "Too many attempts"},
    }
})
def register():
    payload = json_object_or_abort()
    payload = validate_or_abort(register_schema, payload)

    email = payload["email"].lower().strip()
    password = payload["password"]

    policy_error = password_policy_error(password)
    if policy_error:
        return {"success": False, "error": policy_error, "code": "VALIDATION_ERROR"}, 400

    if User.query.filter_by(email=email).first():
        return {"success": False, "error": "Email already registered", "code": "CONFLICT"}, 409

    user = User(email=email)
    user.set_password(password)

    try:
        db.session.add(user)
        db.session.commit()
        return {"success": True, "error": None, "user": user_schema.dump(user)}, 201

    except IntegrityError:
        db.session.rollback()
        return {"success": False, "error": "Email already registered", "code": "CONFLICT"}, 409
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("DB error during register")
        return {"success": False, "error": "Failed to register user", "code": "PERSISTENCE_ERROR"}, 500


@auth_bp.post("/login")
@swag_from({
    "tags": ["Auth"],
    "summary": "Login with email and password",
    "description": "Returns a bearer access token. Attempts are rate limited per client.",
    "responses": {
        200: {"description": "Login successful, token returned"},
        400: {"description": "Validation error"},
        401: {"description": "Invalid credentials"},
        429: {"description": "Too many attempts"},
    }
})
def login():
    payload = json_object_or_abort()
    payload = validate_or_abort(login_req_schema, payload)

    email = payload["email"].lower().strip()
    password = payload["password"]

    try:
        user = User.query.filter_by(email=email).first()
    except SQLAlchemyError:
        current_app.logger.exception("DB error during login")
        return {"success": False, "error": "Authentication service error. Please try again.", "code": "PERSISTENCE_ERROR"}, 500

    # Invalid credentials (don't leak which part failed)
    if not user or not user.check_password(password):
        current_app.logger.info("Login failed for %s", email)
        return {"success": False, "error": "Invalid email or password", "code": "UNAUTHORIZED"}, 401

    access_token = create_access_token(identity=str(user.id), additional_claims={"role": user.role})
    return {
        "success": True,
        "error": None,
        "access_token": access_token,
        "token_type": "bearer",
        "user": user_schema.dump(user),
    }, 200
