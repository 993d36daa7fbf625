"""
REST API endpoints for Task management.

This module provides CRUD operations for tasks via HTTP methods.
Every route is registered explicitly on the blueprint, and request
bodies are decoded and validated by the helper functions below rather
than bound automatically. The YAML block after ``---`` in each
handler docstring is the operation description used by the OpenAPI
document.

Endpoints:
    GET    /api/health                - Health check
    GET    /api/openapi.json          - OpenAPI document
    GET    /api/tasks                 - List all tasks, ordered by due date
    GET    /api/tasks/filter          - List tasks by completion flag
    POST   /api/tasks                 - Create a new task
    GET    /api/tasks/<id>            - Get a single task by ID
    PUT    /api/tasks/<id>            - Replace a task's fields
    PUT    /api/tasks/<id>/complete   - Mark a task as completed
    DELETE /api/tasks/<id>            - Delete a task
"""

from __future__ import annotations

import logging
import os
import re
from datetime import date
from typing import Any

from flask import Blueprint, Response, abort, current_app, jsonify, request

from tasklist.models import Task
from tasklist.openapi import build_openapi_document
from tasklist.store import TaskStore

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)

TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
FALSE_VALUES = frozenset({"false", "0", "no", "off"})
DUE_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------

def get_store() -> TaskStore:
    """Return the task store wired into the current application."""
    return current_app.extensions["task_store"]


def empty_response(status: int) -> Response:
    """Build a response with no body."""
    return Response(status=status)


def parse_bool_flag(raw: str | None, name: str) -> bool:
    """
    Parse a required boolean query parameter.

    Args:
        raw: Raw query string value, or None when missing.
        name: Parameter name, used in the error message.

    Returns:
        The parsed flag.

    Raises:
        BadRequest: If the value is missing or not a recognised boolean.
    """
    if raw is None:
        abort(400, description=f"Required parameter '{name}' is missing")
    value = raw.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    abort(400, description=f"Parameter '{name}' must be a boolean")


def parse_due_date(value: Any) -> date | None:
    """
    Parse a ``YYYY-MM-DD`` due date from a JSON value.

    Raises:
        BadRequest: If the value is neither null nor a valid date string.
    """
    if value is None:
        return None
    # fromisoformat alone also accepts 20250101 and 2025-W01-1
    if not isinstance(value, str) or not DUE_DATE_RE.fullmatch(value):
        abort(400, description="Invalid dueDate format. Use YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError:
        abort(400, description="Invalid dueDate format. Use YYYY-MM-DD")


def _optional_text(data: dict, field: str) -> str | None:
    value = data.get(field)
    if value is not None and not isinstance(value, str):
        abort(400, description=f"'{field}' must be a string")
    return value


def read_json_object() -> dict:
    """Return the request body as a dict, or abort with 400."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        abort(400, description="Request body must be a JSON object")
    return data


def decode_task_fields(data: dict) -> dict[str, Any]:
    """
    Decode the mutable task fields from a JSON payload.

    Missing fields decode to None (``completed`` to False). Unknown
    keys, including ``id``, are ignored.

    Args:
        data: The deserialised JSON request body.

    Returns:
        Dictionary with ``title``, ``description``, ``completed`` and
        ``due_date`` keys, ready to pass to ``Task``.
    """
    completed = data.get("completed")
    if completed is not None and not isinstance(completed, bool):
        abort(400, description="'completed' must be a boolean")

    return {
        "title": _optional_text(data, "title"),
        "description": _optional_text(data, "description"),
        "completed": bool(completed),
        "due_date": parse_due_date(data.get("dueDate")),
    }


# -----------------------------------------------------------------------------
# API Endpoints
# -----------------------------------------------------------------------------

@api_bp.route("/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """
    Health check endpoint for deployment verification.
    ---
    get:
      summary: Health check
      responses:
        "200":
          description: Service is up
    """
    return jsonify({
        "status": "healthy",
        "environment": os.getenv("ENVIRONMENT", "unknown"),
        "version": current_app.config.get("API_VERSION", "unknown"),
    }), 200


@api_bp.route("/openapi.json", methods=["GET"])
def openapi_document() -> tuple[Response, int]:
    """
    Serve the OpenAPI description of this API.
    ---
    get:
      summary: OpenAPI document
      responses:
        "200":
          description: OpenAPI 3.0 document
    """
    return jsonify(build_openapi_document(current_app)), 200


@api_bp.route("/tasks", methods=["GET"])
def get_tasks() -> tuple[Response, int]:
    """
    List all tasks ordered by due date (ascending, undated last).

    Returns:
        JSON array of tasks and 200 status code.
    ---
    get:
      summary: List all tasks
      responses:
        "200":
          description: Tasks ordered by due date, undated last
          content:
            application/json:
              schema:
                type: array
                items:
                  $ref: "#/components/schemas/Task"
    """
    logger.info("GET /api/tasks - Fetching all tasks")

    tasks = get_store().list_all_ordered_by_due_date()
    logger.info("Returning %d tasks", len(tasks))

    return jsonify([task.to_dict() for task in tasks]), 200


@api_bp.route("/tasks/filter", methods=["GET"])
def filter_tasks() -> tuple[Response, int]:
    """
    List tasks by completion flag.

    Returns:
        JSON array of matching tasks and 200 status code,
        or 400 if the flag is missing or unparsable.
    ---
    get:
      summary: Filter tasks by completion flag
      parameters:
        - name: completed
          in: query
          required: true
          schema:
            type: boolean
      responses:
        "200":
          description: Tasks whose completed flag matches
          content:
            application/json:
              schema:
                type: array
                items:
                  $ref: "#/components/schemas/Task"
        "400": BadRequest
    """
    completed = parse_bool_flag(request.args.get("completed"), "completed")
    logger.info("GET /api/tasks/filter - completed=%s", completed)

    tasks = get_store().list_by_completed(completed)
    return jsonify([task.to_dict() for task in tasks]), 200


@api_bp.route("/tasks", methods=["POST"])
def create_task() -> tuple[Response, int]:
    """
    Create a new task.

    A client-supplied ``id`` is ignored. When ``title`` is absent,
    the legacy ``text`` field is used instead.

    Returns:
        JSON of the saved task (including its new id) and 200,
        or 400 if the body is malformed.
    ---
    post:
      summary: Create a task
      requestBody:
        required: true
        content:
          application/json:
            schema:
              $ref: "#/components/schemas/TaskInput"
      responses:
        "200":
          description: The saved task with its assigned id
          content:
            application/json:
              schema:
                $ref: "#/components/schemas/Task"
        "400": BadRequest
    """
    logger.info("POST /api/tasks - Creating new task")

    data = read_json_object()
    fields = decode_task_fields(data)

    # Older clients send 'text' instead of 'title'
    if fields["title"] is None:
        fields["title"] = _optional_text(data, "text")

    task = get_store().save(Task(**fields))

    logger.info("Created task with ID: %s", task.id)
    return jsonify(task.to_dict()), 200


@api_bp.route("/tasks/<int:task_id>", methods=["GET"])
def get_task(task_id: int) -> tuple[Response, int] | Response:
    """
    Get a single task by ID.
    ---
    get:
      summary: Get a task
      parameters:
        - TaskId
      responses:
        "200":
          description: The task
          content:
            application/json:
              schema:
                $ref: "#/components/schemas/Task"
        "404": NotFound
    """
    logger.info("GET /api/tasks/%s - Fetching task", task_id)

    task = get_store().find_by_id(task_id)
    if task is None:
        logger.warning("Task %s not found", task_id)
        return empty_response(404)

    return jsonify(task.to_dict()), 200


@api_bp.route("/tasks/<int:task_id>", methods=["PUT"])
def update_task(task_id: int) -> tuple[Response, int] | Response:
    """
    Replace all mutable fields of an existing task.

    Missing fields are written as null (completed as false). The id
    never changes. An unknown id is reported as 404 even when the
    body is also malformed.
    ---
    put:
      summary: Replace a task
      parameters:
        - TaskId
      requestBody:
        required: true
        content:
          application/json:
            schema:
              $ref: "#/components/schemas/TaskInput"
      responses:
        "200":
          description: The updated task
          content:
            application/json:
              schema:
                $ref: "#/components/schemas/Task"
        "400": BadRequest
        "404": NotFound
    """
    logger.info("PUT /api/tasks/%s - Updating task", task_id)

    store = get_store()
    # Existence is checked before the body is decoded
    task = store.find_by_id(task_id)
    if task is None:
        logger.warning("Task %s not found", task_id)
        return empty_response(404)

    fields = decode_task_fields(read_json_object())
    task.title = fields["title"]
    task.description = fields["description"]
    task.completed = fields["completed"]
    task.due_date = fields["due_date"]

    task = store.save(task)

    logger.info("Updated task %s", task_id)
    return jsonify(task.to_dict()), 200


@api_bp.route("/tasks/<int:task_id>/complete", methods=["PUT", "PATCH"])
def complete_task(task_id: int) -> tuple[Response, int] | Response:
    """
    Mark a task as completed.
    ---
    put:
      summary: Mark a task as completed
      parameters:
        - TaskId
      responses:
        "200":
          description: The completed task
          content:
            application/json:
              schema:
                $ref: "#/components/schemas/Task"
        "404": NotFound
    patch:
      summary: Mark a task as completed
      parameters:
        - TaskId
      responses:
        "200":
          description: The completed task
          content:
            application/json:
              schema:
                $ref: "#/components/schemas/Task"
        "404": NotFound
    """
    logger.info("%s /api/tasks/%s/complete - Completing task", request.method, task_id)

    store = get_store()
    task = store.find_by_id(task_id)
    if task is None:
        logger.warning("Task %s not found", task_id)
        return empty_response(404)

    task.completed = True
    task = store.save(task)

    logger.info("Marked task %s as completed", task_id)
    return jsonify(task.to_dict()), 200


@api_bp.route("/tasks/<int:task_id>", methods=["DELETE"])
def delete_task(task_id: int) -> Response:
    """
    Delete a task.
    ---
    delete:
      summary: Delete a task
      parameters:
        - TaskId
      responses:
        "204":
          description: Task deleted
        "404": NotFound
    """
    logger.info("DELETE /api/tasks/%s - Deleting task", task_id)

    store = get_store()
    if not store.exists_by_id(task_id):
        logger.warning("Task %s not found", task_id)
        return empty_response(404)

    store.delete_by_id(task_id)

    logger.info("Deleted task %s", task_id)
    return empty_response(204)


# -----------------------------------------------------------------------------
# Error Handlers
# -----------------------------------------------------------------------------

@api_bp.errorhandler(400)
def bad_request(error: Exception) -> tuple[Response, int]:
    """Handle 400 Bad Request errors."""
    message = getattr(error, "description", None) or "Bad request"
    logger.warning("Bad request: %s", message)
    return jsonify({"error": message}), 400


@api_bp.errorhandler(500)
def internal_error(error: Exception) -> tuple[Response, int]:
    """Handle 500 Internal Server errors."""
    logger.error("Internal server error: %s", error)
    return jsonify({"error": "Internal server error"}), 500
