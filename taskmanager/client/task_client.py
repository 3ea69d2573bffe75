"""Client-side mirror of the task list with optimistic updates.

Every mutation is applied to the local list (and written to local storage)
before the server is asked to do the same. When the server call fails the
client flips to offline mode and keeps the local change; nothing is rolled
back.
"""

import logging
import uuid
from typing import Dict, List, Optional

from taskmanager.client.api import TaskApi, TaskApiError
from taskmanager.models.task_model import Task, sort_tasks, utcnow


logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"
OFFLINE_MESSAGE = "Using offline mode - tasks will sync when connection is restored"
FILTERS = ("all", "active", "completed")


class TaskClient:
    def __init__(self, api: TaskApi, storage):
        self.api = api
        self.storage = storage
        self.tasks: List[Task] = self._load_cached()
        self.is_online = True
        self.error: Optional[str] = None

    def _load_cached(self) -> List[Task]:
        cached = self.storage.get(TASKS_KEY, [])
        if not isinstance(cached, list):
            logger.warning("Cached %r is not a list; starting empty.", TASKS_KEY)
            return []
        tasks = []
        for item in cached:
            try:
                tasks.append(Task.from_dict(item))
            except (KeyError, TypeError, ValueError):
                logger.warning("Dropping malformed cached task: %r", item)
        return tasks

    def _set_tasks(self, tasks) -> None:
        self.tasks = sort_tasks(tasks)
        self.storage.set(TASKS_KEY, [t.to_dict() for t in self.tasks])

    def _went_online(self) -> None:
        self.is_online = True

    def _went_offline(self, action: str, exc: TaskApiError) -> None:
        logger.error("Failed to %s: %s", action, exc)
        self.is_online = False

    def _find(self, task_id: str) -> Task:
        for task in self.tasks:
            if task.id == task_id:
                return task
        raise KeyError(task_id)

    def fetch_tasks(self) -> List[Task]:
        try:
            fetched = self.api.get_all_tasks()
        except TaskApiError as exc:
            logger.error("Failed to fetch tasks, using local storage: %s", exc)
            self.is_online = False
            self.error = OFFLINE_MESSAGE
            return self.tasks
        self._set_tasks(fetched)
        self.is_online = True
        self.error = None
        return self.tasks

    def add_task(self, description: str) -> Optional[Task]:
        if not description.strip():
            return None

        temp = Task(
            id=str(uuid.uuid4()),
            description=description,
            is_completed=False,
            created_at=utcnow(),
        )
        self._set_tasks(self.tasks + [temp])

        try:
            created = self.api.create_task(description)
        except TaskApiError as exc:
            self._went_offline("create task", exc)
            return temp

        # Swap the temporary record for the server's one.
        self._set_tasks([created if t.id == temp.id else t for t in self.tasks])
        self._went_online()
        return created

    def toggle_task_completion(self, task_id: str) -> Task:
        task = self._find(task_id)
        updated = Task(
            id=task.id,
            description=task.description,
            is_completed=not task.is_completed,
            created_at=task.created_at,
        )
        self._set_tasks([updated if t.id == task_id else t for t in self.tasks])

        try:
            self.api.update_task(task_id, is_completed=updated.is_completed)
        except TaskApiError as exc:
            self._went_offline("update task", exc)
        else:
            self._went_online()
        return updated

    def edit_task(self, task_id: str, description: str) -> Task:
        if not description.strip():
            raise ValueError("Description is required")
        task = self._find(task_id)
        updated = Task(
            id=task.id,
            description=description,
            is_completed=task.is_completed,
            created_at=task.created_at,
        )
        self._set_tasks([updated if t.id == task_id else t for t in self.tasks])

        try:
            self.api.update_task(task_id, is_completed=updated.is_completed, description=description)
        except TaskApiError as exc:
            self._went_offline("update task", exc)
        else:
            self._went_online()
        return updated

    def delete_task(self, task_id: str) -> None:
        self._set_tasks([t for t in self.tasks if t.id != task_id])

        try:
            self.api.delete_task(task_id)
        except TaskApiError as exc:
            self._went_offline("delete task", exc)
        else:
            self._went_online()

    def filtered_tasks(self, filter: str = "all") -> List[Task]:
        if filter == "active":
            return [t for t in self.tasks if not t.is_completed]
        if filter == "completed":
            return [t for t in self.tasks if t.is_completed]
        if filter == "all":
            return list(self.tasks)
        raise ValueError(f"Unknown filter: {filter}")

    def stats(self) -> Dict[str, int]:
        active = sum(1 for t in self.tasks if not t.is_completed)
        return {
            "total": len(self.tasks),
            "active": active,
            "completed": len(self.tasks) - active,
        }

    def resolve_id(self, prefix: str) -> str:
        """Resolve a full id or a unique id prefix against the local list."""
        matches = [t.id for t in self.tasks if t.id.startswith(prefix)]
        if prefix in matches:
            return prefix
        if len(matches) == 1:
            return matches[0]
        if not matches:
            raise KeyError(f"No task matches '{prefix}'")
        raise KeyError(f"'{prefix}' is ambiguous ({len(matches)} tasks match)")
