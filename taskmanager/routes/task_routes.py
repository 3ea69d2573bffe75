from flask import Blueprint, jsonify, request, url_for

from taskmanager.utils.store import get_store


tasks_bp = Blueprint("tasks", __name__)


def _payload():
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


@tasks_bp.get("")
def list_tasks():
    tasks = get_store().list_tasks()
    return jsonify([t.to_dict() for t in tasks]), 200


@tasks_bp.post("")
def create_task():
    payload = _payload()
    description = payload.get("description")
    if not isinstance(description, str) or not description.strip():
        return jsonify(error="Description is required"), 400

    task = get_store().create_task(description)
    response = jsonify(task.to_dict())
    response.headers["Location"] = url_for("tasks.update_task", task_id=task.id)
    return response, 201


@tasks_bp.put("/<task_id>")
def update_task(task_id):
    payload = _payload()

    description = payload.get("description")
    if description is not None and (not isinstance(description, str) or not description.strip()):
        return jsonify(error="Description must be a non-empty string"), 400

    # An omitted flag means "not completed", same as the original contract.
    is_completed = payload.get("isCompleted", False)
    if not isinstance(is_completed, bool):
        return jsonify(error="isCompleted must be a boolean"), 400

    task = get_store().update_task(task_id, description=description, is_completed=is_completed)
    if task is None:
        return jsonify(error="Task not found"), 404
    return jsonify(task.to_dict()), 200


@tasks_bp.delete("/<task_id>")
def delete_task(task_id):
    if not get_store().delete_task(task_id):
        return jsonify(error="Task not found"), 404
    return "", 204
