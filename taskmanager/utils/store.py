import json
import logging
import os
import threading
from dataclasses import replace
from typing import List, Optional

from flask import current_app

from taskmanager.models.task_model import Task, sort_tasks, utcnow


logger = logging.getLogger(__name__)

EXTENSION_KEY = "task_store"


class TaskStoreError(Exception):
    """Raised when the tasks file exists but cannot be read back."""


class TaskStore:
    """
    Flat-file task store.

    The whole list lives in memory and is written out as a single JSON array
    after every mutation. One lock serializes all access, readers included.
    """

    def __init__(self, path="tasks.json"):
        self._path = os.fspath(path)
        self._lock = threading.Lock()
        self._tasks: List[Task] = []
        self._load()
        logger.info("TaskStore ready file=%s total=%s", self._path, len(self._tasks))

    @property
    def path(self) -> str:
        return self._path

    def _load(self) -> None:
        if not os.path.exists(self._path):
            return
        try:
            with open(self._path, "r", encoding="utf-8") as fh:
                raw = fh.read()
            items = json.loads(raw) if raw.strip() else []
            if not isinstance(items, list):
                raise ValueError("expected a JSON array of tasks")
            self._tasks = [Task.from_dict(item) for item in items]
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise TaskStoreError(f"Cannot load tasks from {self._path}: {exc}") from exc

    def _save(self, tasks: List[Task]) -> None:
        directory = os.path.dirname(self._path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self._path, "w", encoding="utf-8") as fh:
            json.dump([t.to_dict() for t in tasks], fh)
        logger.debug("Saved %s tasks to %s", len(tasks), self._path)

    def _commit(self, tasks: List[Task]) -> None:
        # The in-memory list only changes once the file write went through.
        self._save(tasks)
        self._tasks = tasks

    def _find(self, task_id: str) -> Optional[Task]:
        # UUIDs compare case-insensitively.
        wanted = task_id.lower()
        for task in self._tasks:
            if task.id.lower() == wanted:
                return task
        return None

    def count(self) -> int:
        with self._lock:
            return len(self._tasks)

    def list_tasks(self) -> List[Task]:
        with self._lock:
            return [replace(t) for t in sort_tasks(self._tasks)]

    def get_task(self, task_id: str) -> Optional[Task]:
        with self._lock:
            task = self._find(task_id)
            return replace(task) if task is not None else None

    def create_task(self, description: str) -> Task:
        with self._lock:
            task = Task(description=description, is_completed=False, created_at=utcnow())
            self._commit(self._tasks + [task])
            logger.info("Created task id=%s", task.id)
            return replace(task)

    def update_task(
        self, task_id: str, description: Optional[str] = None, is_completed: bool = False
    ) -> Optional[Task]:
        with self._lock:
            task = self._find(task_id)
            if task is None:
                return None
            updated = replace(
                task,
                description=task.description if description is None else description,
                is_completed=is_completed,
            )
            self._commit([updated if t is task else t for t in self._tasks])
            logger.info("Updated task id=%s completed=%s", updated.id, updated.is_completed)
            return replace(updated)

    def delete_task(self, task_id: str) -> bool:
        with self._lock:
            task = self._find(task_id)
            if task is None:
                return False
            self._commit([t for t in self._tasks if t is not task])
            logger.info("Deleted task id=%s", task.id)
            return True


def init_app(app) -> TaskStore:
    store = TaskStore(app.config["TASKS_FILE"])
    app.extensions[EXTENSION_KEY] = store
    return store


def get_store() -> TaskStore:
    return current_app.extensions[EXTENSION_KEY]
