# src/task_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task repository.

The repository depends on a Protocol instead of the concrete JSON store, so the
store is passed in as an explicit handle and can be swapped out in tests.
"""

from collections.abc import Iterable
from typing import Protocol

from ..tasks.task_models import Task


class TaskStorage(Protocol):
    """Whole-collection persistence: one load and one save per invocation."""

    def load(self) -> list[Task]: ...
    def save(self, tasks: Iterable[Task]) -> None: ...
