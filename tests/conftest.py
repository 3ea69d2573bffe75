# tests/conftest.py

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from urllib.parse import urlsplit

import pytest
import requests

from taskmanager.app import create_app
from taskmanager.models.task_model import Task

API_URL = "http://testserver/api"


class FakeResponse:
    def __init__(self, status_code: int, body: bytes) -> None:
        self.status_code = status_code
        self._body = body

    def json(self):
        return json.loads(self._body)

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}", response=self)


class FlaskSession:
    """
    Stand-in for requests.Session that routes calls into a Flask test client.

    Lets the real TaskApi/TaskClient code talk to the real app without a socket.
    """

    def __init__(self, test_client) -> None:
        self.headers: dict[str, str] = {}
        self.calls: list[tuple[str, str, dict | None]] = []
        self._client = test_client

    def request(self, method, url, json=None, timeout=None):
        path = urlsplit(url).path
        self.calls.append((method, path, json))
        resp = self._client.open(path, method=method, json=json)
        return FakeResponse(resp.status_code, resp.get_data())


class OfflineSession:
    """Every request fails as if the server were unreachable."""

    def __init__(self) -> None:
        self.headers: dict[str, str] = {}
        self.calls: list[tuple[str, str, dict | None]] = []

    def request(self, method, url, json=None, timeout=None):
        self.calls.append((method, urlsplit(url).path, json))
        raise requests.ConnectionError("connection refused")


class CannedSession:
    """Answers every request with the same status and raw body."""

    def __init__(self, status_code: int, body: bytes) -> None:
        self.headers: dict[str, str] = {}
        self.calls: list[tuple[str, str, dict | None]] = []
        self._status_code = status_code
        self._body = body

    def request(self, method, url, json=None, timeout=None):
        self.calls.append((method, urlsplit(url).path, json))
        return FakeResponse(self._status_code, self._body)


@pytest.fixture()
def html_session() -> CannedSession:
    """A 200 reply that is not JSON, e.g. a captive portal page."""
    return CannedSession(200, b"<html>hello</html>")


@pytest.fixture()
def tasks_file(tmp_path: Path) -> Path:
    return tmp_path / "tasks.json"


@pytest.fixture()
def app(tasks_file: Path):
    app = create_app({"TESTING": True, "TASKS_FILE": str(tasks_file)})
    yield app


@pytest.fixture()
def http(app):
    return app.test_client()


@pytest.fixture()
def online_session(http) -> FlaskSession:
    return FlaskSession(http)


@pytest.fixture()
def offline_session() -> OfflineSession:
    return OfflineSession()


@pytest.fixture()
def seeded_tasks() -> list[Task]:
    """Four tasks with distinct creation times, oldest first."""
    base = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    return [
        Task(id="aaaa0000-0000-4000-8000-000000000001", description="oldest open",
             is_completed=False, created_at=base),
        Task(id="bbbb0000-0000-4000-8000-000000000002", description="old done",
             is_completed=True, created_at=base + timedelta(hours=1)),
        Task(id="cccc0000-0000-4000-8000-000000000003", description="newer open",
             is_completed=False, created_at=base + timedelta(hours=2)),
        Task(id="dddd0000-0000-4000-8000-000000000004", description="newest done",
             is_completed=True, created_at=base + timedelta(hours=3)),
    ]


@pytest.fixture()
def write_tasks():
    """Write a tasks file in the same format the store uses."""

    def _write(path: Path, tasks: list[Task]) -> None:
        path.write_text(json.dumps([t.to_dict() for t in tasks]), encoding="utf-8")

    return _write
