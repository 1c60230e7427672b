# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from task_tracker.tasks.task_repo import TaskRepository
from task_tracker.tasks.task_store import TaskStore

from .fakes import FakeClock, InMemoryTaskStore


@pytest.fixture()
def tasks_path(tmp_path: Path) -> Path:
    return tmp_path / "tasks.json"


@pytest.fixture()
def store(tasks_path: Path) -> TaskStore:
    return TaskStore(tasks_path)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def repo(store: TaskStore, clock: FakeClock) -> TaskRepository:
    """
    Repository over a real JSON file in tmp_path.

    The file store is real on purpose: persisting through it is part of what
    the repository tests check.
    """
    return TaskRepository(store, clock=clock)


@pytest.fixture()
def memory_store() -> InMemoryTaskStore:
    return InMemoryTaskStore()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep a developer's TASK_TRACKER_* variables or .env out of the tests."""
    for name in (
        "TASK_TRACKER_TASKS_PATH",
        "TASK_TRACKER_LOG_LEVEL",
        "TASK_TRACKER_LOG_FILE",
        "TASK_TRACKER_APP_NAME",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
