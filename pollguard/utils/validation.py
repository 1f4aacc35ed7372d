from flask import abort, request


def validate_or_abort(schema, payload):
    errors = schema.validate(payload)
    if errors:
        abort(
            400,
            description={
                "code": "VALIDATION_ERROR",
                "message": "Validation error",
                "errors": errors,
            },
        )
    return payload


def first_message(messages) -> str:
    """Flatten a marshmallow error structure down to its first message."""
    if isinstance(messages, dict):
        for value in messages.values():
            return first_message(value)
        return "Validation error"
    if isinstance(messages, (list, tuple)):
        return first_message(messages[0]) if messages else "Validation error"
    return str(messages)


def json_object_or_abort() -> dict:
    """The request body as a dict; anything else (list, string, number) is a 400."""
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        abort(
            400,
            description={
                "code": "VALIDATION_ERROR",
                "message": "Request body must be a JSON object",
            },
        )
    return payload
