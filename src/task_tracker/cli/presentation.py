# src/task_tracker/cli/presentation.py

"""
Text rendering for command output.

Pure functions: no I/O, no state. The caller decides where the text goes.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..tasks.errors import StorageError
from ..tasks.task_models import Task, TaskStatus

NO_TASKS_FOUND = "No tasks found."


def format_task(task: Task) -> str:
    return f"[{task.status.value}] ({task.id}) {task.description}"


def format_task_list(tasks: Sequence[Task]) -> str:
    if not tasks:
        return NO_TASKS_FOUND
    return "\n".join(format_task(t) for t in tasks)


def format_added(task: Task) -> str:
    return f"Task added (ID: {task.id})."


def format_updated(task: Task) -> str:
    return f"Task {task.id} updated."


def format_status_set(task: Task) -> str:
    return f"Task {task.id} status set to {task.status.value}."


def format_deleted(task: Task) -> str:
    return f"Task {task.id} deleted."


def format_not_found(task_id: object) -> str:
    shown = "" if task_id is None else str(task_id)
    return f"Task {shown} not found." if shown else "Task not found."


def format_invalid_status(status: object) -> str:
    choices = ", ".join(TaskStatus.choices())
    if status is None or status == "":
        return f"Missing status. Use one of: {choices}."
    return f"Invalid status: {status}. Use one of: {choices}."


def format_fatal(exc: StorageError) -> str:
    return f"Error: {exc}"


def format_usage(prog: str, entries: Sequence[tuple[str, str]]) -> str:
    width = max((len(u) for u, _ in entries), default=0)
    lines = [f"Usage: {prog} <command> [args...]", "", "Commands:"]
    for usage, help_text in entries:
        lines.append(f"  {usage.ljust(width)}  {help_text}")
    return "\n".join(lines)
