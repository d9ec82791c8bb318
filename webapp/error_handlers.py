"""Centralized HTTP error handling for JSON responses."""
from flask import current_app, jsonify, request
from werkzeug.exceptions import HTTPException, InternalServerError


def _error_response(code: int, message: str):
    response = jsonify({"status": "error", "errors": [message]})
    response.status_code = code
    return response


def register_error_handlers(app):
    """Register JSON error handlers for client and server errors."""

    @app.errorhandler(404)
    @app.errorhandler(405)
    def handle_client_errors(error):
        """Answer unknown routes and methods with a JSON error."""

        code = getattr(error, "code", 400)
        current_app.logger.warning("%s %s (%s)", code, request.path, request.remote_addr)
        return _error_response(code, getattr(error, "name", "Error"))

    @app.errorhandler(Exception)
    def handle_exception(error):
        """Log unexpected failures with their stack trace and hide the details."""

        if isinstance(error, HTTPException) and not isinstance(error, InternalServerError):
            code = error.code or 400
            current_app.logger.warning(
                "%s %s (%s)",
                code,
                request.path,
                request.remote_addr,
                extra={"event": "api.http_4xx"},
            )
            return _error_response(code, error.description or error.name)

        current_app.logger.error(
            "500 %s (%s)",
            request.path,
            request.remote_addr,
            exc_info=error,
            extra={"event": "api.http_5xx"},
        )
        return _error_response(500, "Internal Server Error")
