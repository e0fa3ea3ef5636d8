"""API error types and the JSON error handlers registered on the app."""
import time
import traceback

from flask import current_app, jsonify, request
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException

from health_tracker.extensions import db, limiter


class APIError(Exception):
    status_code = 500
    message = "Server error"

    def __init__(self, message=None, status_code=None, payload=None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        data = dict(self.payload or {})
        data["error"] = self.message
        return data


class ValidationFailed(APIError):
    status_code = 400
    message = "Invalid request"


class AuthenticationFailed(APIError):
    status_code = 401
    message = "Invalid credentials"


class NotFound(APIError):
    status_code = 404
    message = "Not found"


class Conflict(APIError):
    status_code = 409
    message = "Conflict"


def first_message(messages):
    """Pick the first human-readable message out of marshmallow's nested error dict."""
    if isinstance(messages, str):
        return messages
    if isinstance(messages, list):
        return first_message(messages[0]) if messages else "Invalid request"
    if isinstance(messages, dict):
        for value in messages.values():
            return first_message(value)
    return "Invalid request"


def register_error_handlers(app):
    @app.errorhandler(APIError)
    def handle_api_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        return jsonify({
            "error": first_message(error.messages),
            "errors": error.messages,
        }), 400

    @app.errorhandler(404)
    def handle_not_found(error):
        return jsonify({
            "error": "Endpoint not found",
            "message": f"Cannot {request.method} {request.path}",
            "availableEndpoints": {
                "auth": "/api/auth",
                "records": "/api/records",
            },
        }), 404

    @app.errorhandler(429)
    def handle_rate_limited(error):
        current_app.logger.warning(
            f"Rate limit hit: {request.method} {request.path} from {request.remote_addr}"
        )
        body = {"error": "Too many requests. Please wait and try again.", "limit": error.description}
        current = limiter.current_limit
        if current is not None:
            # Seconds until the window resets
            body["retryAfter"] = max(0, int(current.reset_at - time.time()))
        return jsonify(body), 429

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return jsonify({"error": error.description or error.name}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        current_app.logger.exception(f"Unhandled error on {request.method} {request.path}")
        body = {"error": "Server error"}
        if current_app.config.get("SHOW_ERROR_DETAILS"):
            body["message"] = str(error)
            body["stack"] = traceback.format_exc()
        return jsonify(body), 500
