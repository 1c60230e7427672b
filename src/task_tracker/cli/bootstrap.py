# src/task_tracker/cli/bootstrap.py

"""
Composition root: settings -> JSON store -> repository.

Nothing is read from disk here; the repository loads the store lazily when a
command first needs it.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..tasks.task_repo import TaskRepository
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_repository(*, settings: Settings | None = None) -> TaskRepository:
    """
    Build a TaskRepository backed by the configured JSON file.

    Keeping settings injectable makes the wiring testable without touching the
    process environment. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    store = TaskStore(settings.tasks_path)
    logger.debug("Using task store %s (exists=%s)", store.path, store.exists())
    return TaskRepository(store)
