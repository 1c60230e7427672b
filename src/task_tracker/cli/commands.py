# src/task_tracker/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ..tasks.errors import InvalidStatusError, TaskNotFoundError, UsageError
from ..tasks.task_repo import TaskRepository
from . import presentation

CommandHandler = Callable[[TaskRepository, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Maps a command name plus positional args to exactly one repository call."""

    def __init__(self, prog: str = "task-tracker") -> None:
        self.prog = prog
        self._handlers: dict[str, CommandHandler] = {}
        self._usage: dict[str, tuple[str, str]] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        usage: str,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._usage[key] = (usage, help_text)
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def names(self) -> list[str]:
        return list(self._usage)

    def build_help(self) -> str:
        return presentation.format_usage(self.prog, list(self._usage.values()))

    def handle(self, repo: TaskRepository, argv: Sequence[str]) -> str:
        """
        Dispatch argv (without the program name) and return the text to print.

        Not-found, invalid-status and usage problems come back as messages.
        Storage errors propagate to the caller.
        """
        if not argv:
            return self.build_help()

        try:
            return self._resolve(argv[0])(repo, list(argv[1:]))
        except TaskNotFoundError as exc:
            return presentation.format_not_found(exc.task_id)
        except InvalidStatusError as exc:
            return presentation.format_invalid_status(exc.status)
        except UsageError as exc:
            return f"{exc}\n\n{self.build_help()}"

    def _resolve(self, name: str) -> CommandHandler:
        handler = self._handlers.get(name.lower())
        if handler is None:
            logger.debug("Unknown command %r", name)
            raise UsageError(f"Unknown command: {name}")
        return handler


def _arg(args: list[str], idx: int) -> str | None:
    return args[idx] if idx < len(args) else None


def cmd_add(repo: TaskRepository, args: list[str]) -> str:
    task = repo.add_task(" ".join(args))
    return presentation.format_added(task)


def cmd_list(repo: TaskRepository, args: list[str]) -> str:
    return presentation.format_task_list(repo.list_tasks(_arg(args, 0)))


def cmd_update(repo: TaskRepository, args: list[str]) -> str:
    task = repo.update_task(_arg(args, 0), " ".join(args[1:]))
    return presentation.format_updated(task)


def cmd_status(repo: TaskRepository, args: list[str]) -> str:
    task = repo.set_status(_arg(args, 0), _arg(args, 1))
    return presentation.format_status_set(task)


def cmd_delete(repo: TaskRepository, args: list[str]) -> str:
    task = repo.delete_task(_arg(args, 0))
    return presentation.format_deleted(task)


def build_registry(prog: str = "task-tracker") -> CommandRegistry:
    registry = CommandRegistry(prog)

    def cmd_help(repo: TaskRepository, args: list[str]) -> str:
        return registry.build_help()

    registry.register("add", cmd_add, "add <description...>", "Add a new task.")
    registry.register(
        "list", cmd_list, "list [status]", "List tasks, optionally only todo/in-progress/done."
    )
    registry.register("update", cmd_update, "update <id> <description...>", "Change a task description.")
    registry.register("status", cmd_status, "status <id> <status>", "Set status: todo, in-progress or done.")
    registry.register("delete", cmd_delete, "delete <id>", "Delete a task.")
    registry.register("help", cmd_help, "help", "Show this help.", aliases=["-h", "--help"])
    return registry
