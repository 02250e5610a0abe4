"""
REST API endpoints for Task management.

This module provides CRUD operations for tasks via HTTP methods.
All endpoints return JSON responses and follow REST conventions.

Endpoints:
    GET    /tasks          - List all tasks (optional ?completed= filter)
    GET    /tasks/<id>     - Get a single task by ID
    POST   /tasks          - Create a new task
    PUT    /tasks/<id>     - Update an existing task
    DELETE /tasks/<id>     - Delete a task
"""

from __future__ import annotations

import logging
import re
from typing import Any

from flask import Blueprint, Response, current_app, jsonify, request

from .. import GATEWAY_EXTENSION_KEY
from ..errors import TaskManagerError, TaskNotFoundError, ValidationError
from ..gateway import TaskGateway
from ..models import TITLE_MAX_LENGTH, Task

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)

# Fields a client may set; everything else in a request body is ignored.
UPDATABLE_FIELDS = ("title", "description", "completed")

_TRUE_VALUES = {"true", "1", "yes"}
_FALSE_VALUES = {"false", "0", "no"}

# Largest value a 32-bit INTEGER primary key can hold (PostgreSQL int4).
MAX_TASK_ID = 2**31 - 1
_TASK_ID_PATTERN = re.compile(r"\+?[0-9]+")


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------

def get_gateway() -> TaskGateway:
    """Return the gateway the application factory attached to the current app."""
    return current_app.extensions[GATEWAY_EXTENSION_KEY]


def parse_task_id(raw_id: str) -> int:
    """
    Parse a task id taken from the URL path.

    Only ASCII digits are accepted, and the value must fit the 32-bit
    ``tasks.id`` column on every supported database.

    Raises:
        ValidationError: The value is not a positive integer in range.
    """
    if not isinstance(raw_id, str) or not _TASK_ID_PATTERN.fullmatch(raw_id):
        logger.warning("Invalid task id: %r", raw_id)
        raise ValidationError("Invalid ID format")
    task_id = int(raw_id)
    if not 1 <= task_id <= MAX_TASK_ID:
        logger.warning("Task id out of range: %r", raw_id)
        raise ValidationError("Invalid ID format")
    return task_id


def parse_completed_filter(raw_value: str | None) -> bool | None:
    """Translate the ``completed`` query parameter into a boolean filter."""
    if raw_value is None:
        return None
    value = raw_value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValidationError("Invalid 'completed' filter. Use true or false")


def read_json_body() -> dict[str, Any]:
    """
    Decode the request body as a JSON object.

    Raises:
        ValidationError: The body is missing, not JSON, or not an object.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def validate_task_data(data: dict, required_fields: list[str] | None = None) -> tuple[bool, str | None]:
    """
    Validate task data from request.

    Args:
        data: Dictionary containing task data.
        required_fields: List of fields that must be present.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if required_fields:
        for field in required_fields:
            if data.get(field) is None:
                return False, f"'{field}' is required"

    if "title" in data:
        title = data["title"]
        if not isinstance(title, str):
            return False, "'title' must be a string"
        # Whitespace-only titles count as empty
        if not title.strip():
            return False, "'title' is required"
        if len(title) > TITLE_MAX_LENGTH:
            return False, f"Title must be {TITLE_MAX_LENGTH} characters or less"

    if "description" in data:
        description = data["description"]
        if description is not None and not isinstance(description, str):
            return False, "'description' must be a string or null"

    if "completed" in data and not isinstance(data["completed"], bool):
        return False, "'completed' must be a boolean"

    return True, None


# -----------------------------------------------------------------------------
# API Endpoints
# -----------------------------------------------------------------------------

@api_bp.route("", methods=["GET"])
def get_tasks() -> tuple[Response, int]:
    """
    List all live tasks.

    Query Parameters:
        completed: Only return tasks with this completion flag (true/false).

    Returns:
        JSON array of tasks and 200 status code.
    """
    logger.info("GET /tasks - Fetching all tasks")

    completed = parse_completed_filter(request.args.get("completed"))
    tasks = get_gateway().list(completed=completed)
    logger.info("Found %d tasks", len(tasks))

    return jsonify([task.to_dict() for task in tasks]), 200


@api_bp.route("/<task_id>", methods=["GET"])
def get_task(task_id: str) -> tuple[Response, int]:
    """
    Get a single task by ID.

    Returns:
        JSON task and 200, 400 for a malformed id, 404 if not found.
    """
    logger.info("GET /tasks/%s - Fetching task", task_id)

    task = get_gateway().get_by_id(parse_task_id(task_id))
    return jsonify(task.to_dict()), 200


@api_bp.route("", methods=["POST"])
def create_task() -> tuple[Response, int]:
    """
    Create a new task.

    Request Body (JSON):
        title: Task title (required)
        description: Task description (optional)
        completed: Completion flag (optional, default: false)

    Returns:
        JSON response with created task and 201 status code,
        or error message and 400 if validation fails.
    """
    logger.info("POST /tasks - Creating new task")

    data = read_json_body()

    is_valid, error = validate_task_data(data, required_fields=["title"])
    if not is_valid:
        logger.warning("Validation failed: %s", error)
        return jsonify({"error": error}), 400

    task = Task(
        title=data["title"],
        description=data.get("description"),
        completed=data.get("completed", False)
    )
    get_gateway().create(task)

    return jsonify(task.to_dict()), 201


@api_bp.route("/<task_id>", methods=["PUT"])
def update_task(task_id: str) -> tuple[Response, int]:
    """
    Update an existing task.

    Only the fields present in the body change; the id and audit
    timestamps are never taken from the request.

    Request Body (JSON):
        title: Task title
        description: Task description
        completed: Completion flag

    Returns:
        JSON response with updated task and 200 status code,
        or error message and 400/404/500.
    """
    logger.info("PUT /tasks/%s - Updating task", task_id)

    parsed_id = parse_task_id(task_id)
    data = read_json_body()

    is_valid, error = validate_task_data(data)
    if not is_valid:
        logger.warning("Validation failed: %s", error)
        return jsonify({"error": error}), 400

    gateway = get_gateway()
    task = gateway.get_by_id(parsed_id)
    for field in UPDATABLE_FIELDS:
        if field in data:
            setattr(task, field, data[field])
    gateway.update(task)

    return jsonify(task.to_dict()), 200


@api_bp.route("/<task_id>", methods=["DELETE"])
def delete_task(task_id: str) -> Response:
    """
    Delete a task.

    Deleting an id that does not exist is a no-op and still answers 204.

    Returns:
        Empty 204 response, 400 for a malformed id, 500 on storage errors.
    """
    logger.info("DELETE /tasks/%s - Deleting task", task_id)

    parsed_id = parse_task_id(task_id)
    try:
        get_gateway().delete(parsed_id)
    except TaskNotFoundError:
        logger.warning("Task %s not found, nothing to delete", parsed_id)

    return Response(status=204)


# -----------------------------------------------------------------------------
# Error Handlers
# -----------------------------------------------------------------------------

@api_bp.errorhandler(TaskManagerError)
def handle_task_error(error: TaskManagerError) -> tuple[Response, int]:
    """Convert gateway and validation errors into JSON responses."""
    if error.status_code >= 500:
        logger.error("Request failed: %s", error.message)
    elif isinstance(error, TaskNotFoundError):
        logger.warning("Task %s not found", error.task_id)
    else:
        logger.warning("Bad request: %s", error.message)
    return jsonify({"error": error.message}), error.status_code
