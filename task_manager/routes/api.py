"""
REST API endpoints for Task management.

This module is a pure dispatch table: each view pulls values out of the
request, calls the matching controller operation and serialises the
result. Validation and error mapping live in the controller and in the
app-level error handlers.

Endpoints:
    GET    /health              - Health check (mounted on the app)
    GET    /v1/tasks            - List tasks (optional search/status filters)
    GET    /v1/tasks/<id>       - Get a single task by ID
    POST   /v1/tasks            - Create a new task
    PATCH  /v1/tasks/<id>       - Update a task (status-only bodies change status)
    DELETE /v1/tasks/<id>       - Delete a task
"""

import logging
import os

from flask import Blueprint, Response, jsonify, request

from task_manager import controller

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def _json_body() -> object:
    """Return the parsed JSON body, or None when it is missing or malformed."""
    return request.get_json(silent=True)


def health_check() -> tuple[Response, int]:
    """Health check endpoint for deployment verification."""
    return jsonify({
        "status": "healthy",
        "environment": os.getenv("ENVIRONMENT", "unknown"),
        "version": os.getenv("APP_VERSION", "unknown")
    }), 200


@api_bp.route("/tasks", methods=["POST"])
def create_task() -> tuple[Response, int]:
    """
    Create a new task.

    Request Body (JSON):
        title: Task title (required)
        description: Task description (required)
        status: Task status (optional, default: pending)

    Returns:
        JSON response with created task and 201 status code.
    """
    logger.info("POST /v1/tasks - Creating new task")

    data = _json_body()
    if not isinstance(data, dict):
        data = {}

    task = controller.create_task(
        data.get("title"),
        data.get("description"),
        data.get("status"),
    )
    return jsonify(task.to_dict()), 201


@api_bp.route("/tasks", methods=["GET"])
def get_tasks() -> tuple[Response, int]:
    """
    List tasks with optional filtering.

    Query Parameters:
        search: Case-insensitive substring of title or description
        status: Filter by status (pending, in-progress, completed)

    Returns:
        JSON array of tasks and 200 status code.
    """
    logger.info("GET /v1/tasks - Fetching tasks")

    tasks = controller.get_all_tasks(
        search=request.args.get("search"),
        status=request.args.get("status"),
    )
    return jsonify([task.to_dict() for task in tasks]), 200


@api_bp.route("/tasks/<int:task_id>", methods=["GET"])
def get_task(task_id: int) -> tuple[Response, int]:
    """Get a single task by ID."""
    logger.info("GET /v1/tasks/%s - Fetching task", task_id)

    task = controller.get_task_by_id(task_id)
    return jsonify(task.to_dict()), 200


@api_bp.route("/tasks/<int:task_id>", methods=["PATCH"])
def update_task(task_id: int) -> tuple[Response, int]:
    """
    Update an existing task.

    A body carrying only ``status`` is routed to the dedicated status
    update; any other body is a partial update of the task fields.

    Request Body (JSON):
        title: Task title
        description: Task description
        status: Task status
    """
    logger.info("PATCH /v1/tasks/%s - Updating task", task_id)

    data = _json_body()
    if isinstance(data, dict) and set(data) == {"status"}:
        task = controller.update_task_status(task_id, data["status"])
    else:
        task = controller.update_task(task_id, data)
    return jsonify(task.to_dict()), 200


@api_bp.route("/tasks/<int:task_id>", methods=["DELETE"])
def delete_task(task_id: int) -> tuple[Response, int]:
    """Delete a task and return a confirmation message."""
    logger.info("DELETE /v1/tasks/%s - Deleting task", task_id)

    return jsonify(controller.delete_task(task_id)), 200
