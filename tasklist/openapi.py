"""
OpenAPI document generation.

Builds an OpenAPI 3.0 description of the ``/api`` routes with apispec.
The Flask plugin resolves each view's URL rule, and the operations are
read from the YAML block after ``---`` in the view docstrings. Shared
schemas, parameters and responses are registered here as components
and referenced from those docstrings by name.
"""

from __future__ import annotations

from typing import Any

from apispec import APISpec
from apispec_webframeworks.flask import FlaskPlugin
from flask import Flask

OPENAPI_VERSION = "3.0.3"
API_PREFIX = "/api"

TASK_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": {"type": "integer", "format": "int64", "nullable": True, "readOnly": True},
        "title": {"type": "string", "nullable": True},
        "description": {"type": "string", "nullable": True},
        "completed": {"type": "boolean", "default": False},
        "dueDate": {"type": "string", "format": "date", "nullable": True},
    },
}

TASK_INPUT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "nullable": True},
        "text": {
            "type": "string",
            "nullable": True,
            "description": "Legacy alias for title, used on create when title is absent",
        },
        "description": {"type": "string", "nullable": True},
        "completed": {"type": "boolean", "nullable": True, "default": False},
        "dueDate": {"type": "string", "format": "date", "nullable": True, "example": "2025-01-01"},
    },
}

ERROR_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {"error": {"type": "string"}},
}


def _register_components(spec: APISpec) -> None:
    spec.components.schema("Task", TASK_SCHEMA)
    spec.components.schema("TaskInput", TASK_INPUT_SCHEMA)
    spec.components.schema("Error", ERROR_SCHEMA)
    spec.components.parameter(
        "TaskId",
        "path",
        {
            "name": "task_id",
            "description": "Task identifier",
            "schema": {"type": "integer", "format": "int64"},
        },
    )
    spec.components.response(
        "BadRequest",
        {
            "description": "Malformed request",
            "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Error"}}},
        },
    )
    spec.components.response("NotFound", {"description": "Task not found (empty body)"})


def build_openapi_document(app: Flask) -> dict[str, Any]:
    """
    Build the OpenAPI document for every registered ``/api`` route.

    Args:
        app: The Flask application whose routes are described.

    Returns:
        A JSON-serialisable OpenAPI 3.0 document.
    """
    spec = APISpec(
        title=app.config.get("API_TITLE", "Tasklist API"),
        version=app.config.get("API_VERSION", "1.0.0"),
        openapi_version=OPENAPI_VERSION,
        info={"description": app.config.get("API_DESCRIPTION", "")},
        plugins=[FlaskPlugin()],
    )
    _register_components(spec)

    for rule in sorted(app.url_map.iter_rules(), key=lambda r: r.rule):
        if rule.rule.startswith(API_PREFIX):
            spec.path(view=app.view_functions[rule.endpoint], app=app)

    return spec.to_dict()
