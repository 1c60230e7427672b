# src/task_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

# Persisted in place of updatedAt until the first mutation.
NOT_APPLICABLE = "N/A"


class TaskStatus(StrEnum):
    """Task lifecycle status."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def parse(cls, raw: str | None) -> TaskStatus | None:
        """Return the matching status, or None for anything outside the enumeration."""
        if raw is None:
            return None
        try:
            return cls(raw)
        except ValueError:
            return None

    @classmethod
    def choices(cls) -> list[str]:
        return [s.value for s in cls]


def utc_now() -> datetime:
    """Current UTC time truncated to milliseconds (the persisted precision)."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond - now.microsecond % 1000)


def format_timestamp(ts: datetime) -> str:
    return ts.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(raw: str) -> datetime:
    """
    Read any ISO-8601 text; naive values are UTC. Precision is cut to
    milliseconds so the next save writes back exactly what is held in memory.
    """
    ts = datetime.fromisoformat(raw)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.replace(microsecond=ts.microsecond - ts.microsecond % 1000)


@dataclass(slots=True)
class Task:
    id: int
    description: str
    status: TaskStatus
    created_at: datetime
    updated_at: datetime | None = None

    def to_record(self) -> dict[str, Any]:
        """JSON-ready record; key order is the on-disk field order."""
        return {
            "id": self.id,
            "description": self.description,
            "status": self.status.value,
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": (
                format_timestamp(self.updated_at) if self.updated_at is not None else NOT_APPLICABLE
            ),
        }

    @classmethod
    def from_record(cls, raw: Any) -> Task:
        """
        Build a Task from a decoded JSON record.

        Raises ValueError on any missing or ill-typed field. Nothing is defaulted
        or repaired.
        """
        if not isinstance(raw, dict):
            raise ValueError(f"task record must be an object, got {type(raw).__name__}")

        missing = [k for k in ("id", "description", "status", "createdAt", "updatedAt") if k not in raw]
        if missing:
            raise ValueError(f"task record is missing field(s): {', '.join(missing)}")

        task_id = raw["id"]
        # bool is an int subclass; reject it explicitly.
        if not isinstance(task_id, int) or isinstance(task_id, bool):
            raise ValueError(f"task id must be an integer, got {task_id!r}")

        description = raw["description"]
        if not isinstance(description, str):
            raise ValueError(f"task {task_id}: description must be text")

        status = TaskStatus.parse(raw["status"]) if isinstance(raw["status"], str) else None
        if status is None:
            raise ValueError(f"task {task_id}: invalid status {raw['status']!r}")

        created_raw = raw["createdAt"]
        updated_raw = raw["updatedAt"]
        if not isinstance(created_raw, str) or not isinstance(updated_raw, str):
            raise ValueError(f"task {task_id}: timestamps must be text")

        return cls(
            id=task_id,
            description=description,
            status=status,
            created_at=parse_timestamp(created_raw),
            updated_at=None if updated_raw == NOT_APPLICABLE else parse_timestamp(updated_raw),
        )
