import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, List


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Render a UTC timestamp as ISO-8601 with a trailing ``Z``."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def parse_timestamp(raw: str) -> datetime:
    """Parse ``...Z`` / ``...+00:00`` / naive ISO strings into an aware UTC datetime."""
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    value = datetime.fromisoformat(raw)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass
class Task:
    description: str
    is_completed: bool = False
    created_at: datetime = field(default_factory=utcnow)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "description": self.description,
            "isCompleted": self.is_completed,
            "createdAt": format_timestamp(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        return cls(
            id=str(data["id"]),
            description=data["description"],
            is_completed=bool(data.get("isCompleted", False)),
            created_at=parse_timestamp(data["createdAt"]),
        )


def sort_tasks(tasks: Iterable[Task]) -> List[Task]:
    # Active before completed; newest first within each group.
    newest_first = sorted(tasks, key=lambda t: t.created_at, reverse=True)
    return sorted(newest_first, key=lambda t: t.is_completed)
