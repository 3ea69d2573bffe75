from typing import List, Optional

import requests

from taskmanager.config import ClientConfig
from taskmanager.models.task_model import Task


class TaskApiError(Exception):
    """A request to the tasks API failed (transport error or non-2xx reply)."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class TaskApi:
    """Thin wrapper over the /api/tasks endpoints."""

    def __init__(self, base_url=None, timeout=None, session=None):
        self.base_url = (base_url or ClientConfig.API_URL).rstrip("/")
        self.timeout = ClientConfig.TIMEOUT if timeout is None else timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def _request(self, method, path, payload=None, decode=None):
        """Send one request and, when ``decode`` is given, parse the reply with it.

        Transport errors, non-2xx replies and undecodable bodies all surface
        as TaskApiError.
        """
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(method, url, json=payload, timeout=self.timeout)
            resp.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            raise TaskApiError(f"{method} {url} failed with HTTP {status}", status) from exc
        except requests.RequestException as exc:
            raise TaskApiError(f"{method} {url} failed: {exc}") from exc

        if decode is None:
            return None
        try:
            return decode(resp.json())
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise TaskApiError(
                f"{method} {url} returned an unreadable body: {exc}", resp.status_code
            ) from exc

    def get_all_tasks(self) -> List[Task]:
        return self._request("GET", "/tasks", decode=lambda items: [Task.from_dict(item) for item in items])

    def create_task(self, description: str) -> Task:
        return self._request("POST", "/tasks", {"description": description}, decode=Task.from_dict)

    def update_task(self, task_id: str, is_completed: bool, description: Optional[str] = None) -> Task:
        payload = {"isCompleted": is_completed}
        if description is not None:
            payload["description"] = description
        return self._request("PUT", f"/tasks/{task_id}", payload, decode=Task.from_dict)

    def delete_task(self, task_id: str) -> None:
        self._request("DELETE", f"/tasks/{task_id}")
