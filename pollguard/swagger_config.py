def swagger_template(app=None):
    title = "Pollguard API"
    version = "1.0.0"
    csrf_header = "X-CSRF-Token"

    if app:
        title = app.config.get("SWAGGER_TITLE", title)
        version = app.config.get("SWAGGER_VERSION", version)
        csrf_header = app.config.get("CSRF_HEADER_NAME", csrf_header)

    return {
        "swagger": "2.0",
        "info": {"title": title, "version": version},
        "securityDefinitions": {
            "BearerAuth": {
                "type": "apiKey",
                "name": "Authorization",
                "in": "header",
                "description": "JWT Authorization header: Bearer <token>"
            },
            "CsrfToken": {
                "type": "apiKey",
                "name": csrf_header,
                "in": "header",
                "description": "Value returned by GET /api/csrf-token; required on every non-GET request"
            },
        },
        "definitions": {
            "ErrorResponse": {
                "type": "object",
                "properties": {
                    "success": {"type": "boolean", "example": False},
                    "error": {"type": "string", "example": "Invalid CSRF token"},
                    "code": {"type": "string", "example": "CSRF_REJECTED"},
                    "details": {"type": "object"},
                    "request_id": {"type": "string"}
                }
            }
        }
    }
