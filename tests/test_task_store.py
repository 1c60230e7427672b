# tests/test_task_store.py

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from task_tracker.tasks.errors import StorageReadError, StorageWriteError
from task_tracker.tasks.task_models import Task, TaskStatus
from task_tracker.tasks.task_store import TaskStore


def _task(task_id: int, description: str, **kw) -> Task:
    return Task(
        id=task_id,
        description=description,
        status=kw.get("status", TaskStatus.TODO),
        created_at=kw.get("created_at", datetime(2026, 3, 1, 9, 30, 0, 125000, tzinfo=timezone.utc)),
        updated_at=kw.get("updated_at"),
    )


def test_load_missing_file_initialises_empty_array(store: TaskStore, tasks_path: Path) -> None:
    assert not tasks_path.exists()

    assert store.load() == []

    assert tasks_path.exists()
    assert json.loads(tasks_path.read_text("utf-8")) == []


def test_load_creates_missing_parent_directories(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "dir" / "tasks.json"
    assert TaskStore(path).load() == []
    assert path.exists()


def test_save_then_load_round_trips(store: TaskStore) -> None:
    tasks = [
        _task(1, "buy milk"),
        _task(
            2,
            "write report",
            status=TaskStatus.IN_PROGRESS,
            updated_at=datetime(2026, 3, 2, 10, 0, 0, tzinfo=timezone.utc),
        ),
        _task(3, "ship it", status=TaskStatus.DONE),
    ]

    store.save(tasks)
    loaded = store.load()

    assert loaded == tasks
    assert [t.id for t in loaded] == [1, 2, 3]


def test_save_of_loaded_collection_leaves_file_content_unchanged(
    store: TaskStore, tasks_path: Path
) -> None:
    store.save([_task(1, "a"), _task(2, "b", status=TaskStatus.DONE)])
    before = tasks_path.read_text("utf-8")

    store.save(store.load())

    assert tasks_path.read_text("utf-8") == before


def test_saved_file_is_pretty_printed_with_expected_fields(store: TaskStore, tasks_path: Path) -> None:
    store.save([_task(7, "buy milk")])

    text = tasks_path.read_text("utf-8")
    assert '\n  {\n    "id": 7,' in text

    (record,) = json.loads(text)
    assert list(record) == ["id", "description", "status", "createdAt", "updatedAt"]
    assert record["status"] == "todo"
    assert record["createdAt"] == "2026-03-01T09:30:00.125Z"
    assert record["updatedAt"] == "N/A"


def test_load_accepts_records_written_by_other_tools(store: TaskStore, tasks_path: Path) -> None:
    tasks_path.write_text(
        json.dumps(
            [
                {
                    "id": 1718000000000,
                    "description": "legacy",
                    "status": "in-progress",
                    "createdAt": "2024-06-10T06:13:20.000Z",
                    "updatedAt": "2024-06-11T08:00:00",
                }
            ]
        ),
        "utf-8",
    )

    (task,) = store.load()
    assert task.id == 1718000000000
    assert task.status is TaskStatus.IN_PROGRESS
    assert task.updated_at == datetime(2024, 6, 11, 8, 0, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "content",
    [
        "not json at all",
        '{"id": 1}',
        '[{"id": 1, "description": "x"}]',
        '[{"id": "1", "description": "x", "status": "todo", "createdAt": "2026-01-01T00:00:00Z", "updatedAt": "N/A"}]',
        '[{"id": 1, "description": "x", "status": "bogus", "createdAt": "2026-01-01T00:00:00Z", "updatedAt": "N/A"}]',
        '[{"id": 1, "description": "x", "status": "todo", "createdAt": "yesterday", "updatedAt": "N/A"}]',
    ],
)
def test_load_malformed_content_raises_and_keeps_file(
    store: TaskStore, tasks_path: Path, content: str
) -> None:
    tasks_path.write_text(content, "utf-8")

    with pytest.raises(StorageReadError):
        store.load()

    assert tasks_path.read_text("utf-8") == content


def test_load_duplicate_ids_raises(store: TaskStore, tasks_path: Path) -> None:
    record = {
        "id": 5,
        "description": "dup",
        "status": "todo",
        "createdAt": "2026-01-01T00:00:00.000Z",
        "updatedAt": "N/A",
    }
    tasks_path.write_text(json.dumps([record, record]), "utf-8")

    with pytest.raises(StorageReadError, match="Duplicate task id 5"):
        store.load()


def test_save_failure_raises_write_error(tmp_path: Path) -> None:
    # A directory where the file should be makes the final rename fail.
    target = tmp_path / "tasks.json"
    target.mkdir()

    with pytest.raises(StorageWriteError):
        TaskStore(target).save([_task(1, "x")])

    assert not (tmp_path / "tasks.json.tmp").exists()


def test_save_with_undecodable_text_raises_write_error_and_keeps_file(
    store: TaskStore, tasks_path: Path
) -> None:
    store.save([_task(1, "fine")])
    before = tasks_path.read_bytes()

    with pytest.raises(StorageWriteError, match="not valid UTF-8"):
        store.save([_task(1, "fine"), _task(2, "bad\udcff")])

    assert tasks_path.read_bytes() == before
    assert not (tasks_path.parent / "tasks.json.tmp").exists()


def test_foreign_timestamps_are_normalised_once_then_stable(store: TaskStore, tasks_path: Path) -> None:
    tasks_path.write_text(
        json.dumps(
            [
                {
                    "id": 1,
                    "description": "from elsewhere",
                    "status": "todo",
                    "createdAt": "2026-01-01T14:00:00.123456+02:00",
                    "updatedAt": "2026-01-02T08:00:00",
                }
            ]
        ),
        "utf-8",
    )

    store.save(store.load())
    (record,) = json.loads(tasks_path.read_text("utf-8"))
    assert record["createdAt"] == "2026-01-01T12:00:00.123Z"
    assert record["updatedAt"] == "2026-01-02T08:00:00.000Z"

    (task,) = store.load()
    assert task.created_at.microsecond == 123000

    normalised = tasks_path.read_text("utf-8")
    store.save(store.load())
    assert tasks_path.read_text("utf-8") == normalised
