from flask import jsonify, g, current_app, request
from werkzeug.exceptions import HTTPException


class OperationError(Exception):
    """
    Base of the error taxonomy. Guards return instances instead of raising;
    the operation layer turns them into the uniform error payload.
    """
    code = "OPERATION_ERROR"
    status = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(OperationError):
    code = "VALIDATION_ERROR"
    status = 400


class Unauthorized(OperationError):
    code = "UNAUTHORIZED"
    status = 401


class Forbidden(OperationError):
    code = "FORBIDDEN"
    status = 403


class NotFound(OperationError):
    code = "NOT_FOUND"
    status = 404


class DuplicateVote(OperationError):
    code = "DUPLICATE_VOTE"
    status = 409


class RateLimited(OperationError):
    code = "RATE_LIMITED"
    status = 429


class CsrfRejected(OperationError):
    code = "CSRF_REJECTED"
    status = 403


class PersistenceError(OperationError):
    code = "PERSISTENCE_ERROR"
    status = 500


def _payload(code: str, message: str, details=None, status=400):
    return (
        jsonify({
            "success": False,
            "error": message,
            "code": code,
            "details": details or None,
            "request_id": getattr(g, "request_id", None),
        }),
        status,
    )


def error_response(error: OperationError):
    return _payload(code=error.code, message=error.message, status=error.status)


def register_error_handlers(app):
    # Generic HTTP errors (404, 405, schema aborts, ...)
    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        desc = e.description

        # Structured error info passed via abort(description=dict)
        if isinstance(desc, dict):
            code = desc.get("code") or e.name.replace(" ", "_").upper()
            message = desc.get("message") or e.name
            details = desc.get("errors") or desc.get("details")
            return _payload(code=code, message=message, details=details, status=e.code or 400)

        return _payload(
            code=e.name.replace(" ", "_").upper(),
            message=desc or e.name,
            details=None,
            status=e.code or 400
        )

    @app.errorhandler(404)
    def handle_404(_):
        return _payload("NOT_FOUND", "Resource not found", status=404)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return handle_http_exception(e)
        current_app.logger.exception("Unhandled exception path=%s", request.path)
        # Don't leak internals
        return _payload("INTERNAL_SERVER_ERROR", "An unexpected error occurred", status=500)
