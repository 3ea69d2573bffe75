from flask import Blueprint, jsonify


docs_bp = Blueprint("docs", __name__)

_TASK_SCHEMA = {
    "type": "object",
    "properties": {
        "id": {"type": "string", "format": "uuid"},
        "description": {"type": "string"},
        "isCompleted": {"type": "boolean"},
        "createdAt": {"type": "string", "format": "date-time"},
    },
    "required": ["id", "description", "isCompleted", "createdAt"],
}

_ERROR = {"$ref": "#/components/schemas/Error"}
_TASK = {"$ref": "#/components/schemas/Task"}


def _json(schema, description):
    return {"description": description, "content": {"application/json": {"schema": schema}}}


OPENAPI_DOCUMENT = {
    "openapi": "3.0.3",
    "info": {
        "title": "Task Manager API",
        "version": "v1",
        "description": "A simple task management API",
    },
    "paths": {
        "/api/tasks": {
            "get": {
                "operationId": "GetTasks",
                "summary": "List tasks, active first, newest first within each group",
                "responses": {"200": _json({"type": "array", "items": _TASK}, "All tasks")},
            },
            "post": {
                "operationId": "CreateTask",
                "requestBody": _json(
                    {
                        "type": "object",
                        "properties": {"description": {"type": "string"}},
                        "required": ["description"],
                    },
                    "New task",
                ),
                "responses": {
                    "201": _json(_TASK, "Created task"),
                    "400": _json(_ERROR, "Description is required"),
                },
            },
        },
        "/api/tasks/{id}": {
            "parameters": [
                {"name": "id", "in": "path", "required": True, "schema": {"type": "string", "format": "uuid"}}
            ],
            "put": {
                "operationId": "UpdateTask",
                "requestBody": _json(
                    {
                        "type": "object",
                        "properties": {
                            "description": {"type": "string"},
                            "isCompleted": {"type": "boolean", "default": False},
                        },
                    },
                    "Fields to change",
                ),
                "responses": {
                    "200": _json(_TASK, "Updated task"),
                    "400": _json(_ERROR, "Invalid field"),
                    "404": _json(_ERROR, "Task not found"),
                },
            },
            "delete": {
                "operationId": "DeleteTask",
                "responses": {
                    "204": {"description": "Deleted"},
                    "404": _json(_ERROR, "Task not found"),
                },
            },
        },
    },
    "components": {
        "schemas": {
            "Task": _TASK_SCHEMA,
            "Error": {"type": "object", "properties": {"error": {"type": "string"}}},
        }
    },
}


@docs_bp.get("/swagger/v1/swagger.json")
def openapi_document():
    return jsonify(OPENAPI_DOCUMENT), 200
