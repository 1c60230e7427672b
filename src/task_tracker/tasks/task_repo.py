# src/task_tracker/tasks/task_repo.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from datetime import datetime, timedelta

from ..core.ports import TaskStorage
from .errors import InvalidStatusError, TaskNotFoundError
from .task_models import Task, TaskStatus, utc_now

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

# Plain ASCII digits only: int() alone would also take "1_000" or full-width digits.
_ID_RE = re.compile(r"[+-]?[0-9]+")

# Smallest step the persisted timestamp format can represent.
_TICK = timedelta(milliseconds=1)


def parse_task_id(raw: int | str | None) -> int | None:
    """Parse a command-line id; anything non-numeric yields None."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    text = raw.strip()
    if not _ID_RE.fullmatch(text):
        return None
    return int(text)


class TaskRepository:
    """
    In-memory operations over the task collection.

    The collection is loaded from the storage handle on first use. Every
    successful mutation is followed by exactly one save; failed lookups and
    validation errors raise before anything is changed or written.
    """

    def __init__(self, storage: TaskStorage, *, clock: Clock = utc_now) -> None:
        self._storage = storage
        self._clock = clock
        self._tasks: list[Task] | None = None
        self._last_issued_id = 0

    # ---- low-level helpers ----

    def _collection(self) -> list[Task]:
        if self._tasks is None:
            self._tasks = self._storage.load()
        return self._tasks

    def _persist(self) -> None:
        self._storage.save(self._collection())

    def _next_id(self, now: datetime) -> int:
        """
        Millisecond timestamp, bumped past every existing and previously issued
        id so two adds within the same millisecond never collide.
        """
        candidate = int(now.timestamp() * 1000)
        floor = max((t.id for t in self._collection()), default=0)
        floor = max(floor, self._last_issued_id)
        if candidate <= floor:
            candidate = floor + 1
        self._last_issued_id = candidate
        return candidate

    def _touch(self, task: Task) -> None:
        """Stamp updated_at, always strictly after created_at and any earlier update."""
        floor = task.updated_at if task.updated_at is not None else task.created_at
        task.updated_at = max(self._clock(), floor + _TICK)

    # ---- queries ----

    def get_task(self, task_id: int | str | None) -> Task:
        tasks = self._collection()
        parsed = parse_task_id(task_id)
        if parsed is not None:
            for task in tasks:
                if task.id == parsed:
                    return task
        raise TaskNotFoundError(task_id)

    def list_tasks(self, status_filter: str | None = None) -> list[Task]:
        """
        All tasks in creation order, or only those whose status equals the filter.

        An unknown filter value matches nothing; it is not validated.
        """
        tasks = self._collection()
        if not status_filter:
            return list(tasks)
        return [t for t in tasks if t.status.value == status_filter]

    # ---- mutations ----

    def add_task(self, description: str) -> Task:
        now = self._clock()
        task = Task(
            id=self._next_id(now),
            description=description,
            status=TaskStatus.TODO,
            created_at=now,
            updated_at=None,
        )
        self._collection().append(task)
        self._persist()
        logger.info("Task added id=%s", task.id)
        return task

    def update_task(self, task_id: int | str | None, description: str) -> Task:
        task = self.get_task(task_id)
        task.description = description
        self._touch(task)
        self._persist()
        logger.info("Task updated id=%s", task.id)
        return task

    def set_status(self, task_id: int | str | None, status: str | None) -> Task:
        task = self.get_task(task_id)
        new_status = TaskStatus.parse(status)
        if new_status is None:
            raise InvalidStatusError(status)
        task.status = new_status
        self._touch(task)
        self._persist()
        logger.info("Task status set id=%s status=%s", task.id, new_status.value)
        return task

    def delete_task(self, task_id: int | str | None) -> Task:
        task = self.get_task(task_id)
        self._collection().remove(task)
        self._persist()
        logger.info("Task deleted id=%s", task.id)
        return task
