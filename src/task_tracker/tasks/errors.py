# src/task_tracker/tasks/errors.py

"""
Error kinds.

Storage errors are fatal for the invocation and propagate up to the entry point.
Lookup, validation and usage errors are recovered by the command dispatcher and
reported as ordinary messages.
"""

from __future__ import annotations

from pathlib import Path


class TaskTrackerError(Exception):
    """Base class for every error raised by this package."""


class StorageError(TaskTrackerError):
    def __init__(self, path: str | Path, message: str) -> None:
        super().__init__(f"{message} ({path})")
        self.path = Path(path)


class StorageReadError(StorageError):
    """The store exists but could not be read or holds malformed data."""


class StorageWriteError(StorageError):
    """The store could not be written."""


class TaskNotFoundError(TaskTrackerError):
    def __init__(self, task_id: object) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class InvalidStatusError(TaskTrackerError):
    def __init__(self, status: object) -> None:
        super().__init__(f"Invalid status: {status}")
        self.status = status


class UsageError(TaskTrackerError):
    """The command name is missing or not recognised."""
