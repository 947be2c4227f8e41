"""JSON error handlers: every failure renders as ``{"error": message}``."""

from __future__ import annotations

from flask import Flask, jsonify
from pydantic import ValidationError as SchemaValidationError
from werkzeug.exceptions import HTTPException

from dress_studio.logging_config import get_logger
from dress_studio.services.errors import ServiceError

logger = get_logger("api")


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ServiceError)
    def handle_service_error(exc: ServiceError):
        if exc.status_code >= 500:
            logger.error("Service failure: %s", exc, exc_info=exc)
        return jsonify({"error": str(exc)}), exc.status_code

    @app.errorhandler(SchemaValidationError)
    def handle_schema_error(exc: SchemaValidationError):
        details = exc.errors(include_url=False, include_context=False, include_input=False)
        return jsonify({"error": "Invalid request body", "details": details}), 400

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return jsonify({"error": exc.description or exc.name}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.exception("Unhandled error while serving request")
        return jsonify({"error": "Internal server error"}), 500
