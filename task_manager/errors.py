"""
Error types and JSON error handlers for the Task Manager API.

Controllers raise ``ValidationError`` or ``NotFoundError``; the handlers
registered here turn them into ``{"error", "message"}`` JSON bodies with
the matching status code. Anything else that escapes a view is logged
and reported as a generic 500 so that clients never see a traceback.
"""

import logging

from flask import Flask, Response, jsonify
from werkzeug.exceptions import HTTPException, MethodNotAllowed, NotFound

from task_manager import db

logger = logging.getLogger(__name__)


class TaskManagerError(Exception):
    """Base class for errors that map onto an HTTP status code."""

    status_code: int = 500
    kind: str = "InternalServerError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        """Return the JSON error body for this error."""
        return {"error": self.kind, "message": self.message}


class ValidationError(TaskManagerError):
    """Raised when request input is missing or malformed."""

    status_code = 400
    kind = "ValidationError"


class NotFoundError(TaskManagerError):
    """Raised when no task exists for the requested id."""

    status_code = 404
    kind = "NotFoundError"


def register_error_handlers(app: Flask) -> None:
    """
    Attach JSON error handlers to the application.

    Unmapped paths and unmapped methods on mapped paths both answer with
    the same generic 404 body.
    """

    @app.errorhandler(TaskManagerError)
    def handle_task_manager_error(error: TaskManagerError) -> tuple[Response, int]:
        logger.warning("%s: %s", error.kind, error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(NotFound)
    @app.errorhandler(MethodNotAllowed)
    def handle_unmapped_route(error: Exception) -> tuple[Response, int]:
        return jsonify({"error": "NotFound", "message": "Resource not found"}), 404

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException) -> tuple[Response, int]:
        return jsonify({"error": error.name, "message": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception) -> tuple[Response, int]:
        db.session.rollback()
        logger.exception("Internal server error: %s", error)
        return jsonify({
            "error": "InternalServerError",
            "message": "Internal server error"
        }), 500
