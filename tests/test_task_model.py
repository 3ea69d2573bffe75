# tests/test_task_model.py

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from taskmanager.models.task_model import Task, format_timestamp, parse_timestamp, sort_tasks


def test_new_task_defaults() -> None:
    task = Task(description="write report")

    assert task.is_completed is False
    assert task.created_at.tzinfo is not None
    assert uuid.UUID(task.id).version == 4


def test_to_dict_uses_wire_names() -> None:
    created = datetime(2024, 5, 1, 12, 30, 15, 250000, tzinfo=timezone.utc)
    task = Task(id="t-1", description="x", is_completed=True, created_at=created)

    assert task.to_dict() == {
        "id": "t-1",
        "description": "x",
        "isCompleted": True,
        "createdAt": "2024-05-01T12:30:15.250000Z",
    }


def test_from_dict_restores_record() -> None:
    task = Task.from_dict(
        {"id": "t-1", "description": "x", "isCompleted": True, "createdAt": "2024-05-01T12:30:15Z"}
    )

    assert task.id == "t-1"
    assert task.is_completed is True
    assert task.created_at == datetime(2024, 5, 1, 12, 30, 15, tzinfo=timezone.utc)


def test_parse_timestamp_accepts_offsets_and_naive_values() -> None:
    expected = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    assert parse_timestamp("2024-01-02T03:04:05Z") == expected
    assert parse_timestamp("2024-01-02T03:04:05+00:00") == expected
    assert parse_timestamp("2024-01-02T03:04:05") == expected
    assert parse_timestamp("2024-01-02T05:04:05+02:00") == expected


def test_format_timestamp_treats_naive_as_utc() -> None:
    assert format_timestamp(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05.000000Z"


def test_sort_puts_active_first_then_newest(seeded_tasks) -> None:
    ordered = [t.description for t in sort_tasks(seeded_tasks)]

    assert ordered == ["newer open", "oldest open", "newest done", "old done"]


def test_sort_returns_new_list(seeded_tasks) -> None:
    original = list(seeded_tasks)
    sort_tasks(seeded_tasks)

    assert seeded_tasks == original
