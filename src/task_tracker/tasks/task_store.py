# src/task_tracker/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Iterable
from pathlib import Path

from .errors import StorageReadError, StorageWriteError
from .task_models import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    JSON file task store.

    The whole collection is read and written as one document:
    - a missing file is initialised to an empty array on first load
    - every save rewrites the file through a temp file + os.replace
    - malformed content raises StorageReadError and is left untouched on disk
    """

    def __init__(self, path: str | Path = "tasks.json") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    # ---- low-level helpers ----

    def _write_text_atomic(self, text: str) -> None:
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            # Encode first: undecodable argv bytes arrive as lone surrogates.
            data = text.encode("utf-8")
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_bytes(data)
            os.replace(tmp, self._path)
        except UnicodeEncodeError as exc:
            raise StorageWriteError(self._path, "Task text is not valid UTF-8") from exc
        except OSError as exc:
            raise StorageWriteError(self._path, f"Failed to write task store: {exc.strerror or exc}") from exc
        finally:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)

    @staticmethod
    def _encode(tasks: Iterable[Task]) -> str:
        return json.dumps([t.to_record() for t in tasks], ensure_ascii=False, indent=2) + "\n"

    def _decode(self, text: str) -> list[Task]:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StorageReadError(self._path, f"Task store is not valid JSON: {exc.msg}") from exc

        if not isinstance(data, list):
            raise StorageReadError(self._path, "Task store must contain a JSON array")

        tasks: list[Task] = []
        seen: set[int] = set()
        for idx, raw in enumerate(data):
            try:
                task = Task.from_record(raw)
            except ValueError as exc:
                raise StorageReadError(self._path, f"Malformed task at index {idx}: {exc}") from exc
            if task.id in seen:
                raise StorageReadError(self._path, f"Duplicate task id {task.id}")
            seen.add(task.id)
            tasks.append(task)
        return tasks

    # ---- public API ----

    def load(self) -> list[Task]:
        if not self._path.exists():
            self._write_text_atomic(self._encode([]))
            logger.info("Initialised empty task store at %s", self._path)
            return []

        try:
            text = self._path.read_text("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageReadError(self._path, f"Failed to read task store: {exc}") from exc

        tasks = self._decode(text)
        logger.debug("Loaded %d task(s) from %s", len(tasks), self._path)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        tasks = list(tasks)
        self._write_text_atomic(self._encode(tasks))
        logger.debug("Saved %d task(s) to %s", len(tasks), self._path)
