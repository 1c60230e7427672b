# src/task_tracker/config.py

"""Settings loaded from environment variables (+ optional .env).

Recognised variables:
- TASK_TRACKER_TASKS_PATH  store location (default: tasks.json in the working directory)
- TASK_TRACKER_LOG_LEVEL   console log level (default: WARNING)
- TASK_TRACKER_LOG_FILE    also write a full DEBUG log here (default: off)
- TASK_TRACKER_APP_NAME    program name shown in usage text (default: task-tracker)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TASK_TRACKER"

DEFAULT_TASKS_PATH = Path("tasks.json")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_path(name: str, default: Path | None) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw.strip()).expanduser()


def _env_log_level(name: str, default: str) -> str:
    raw = _env(name, default).upper()
    return raw if isinstance(logging.getLevelName(raw), int) else default


@dataclass(frozen=True, slots=True)
class Settings:
    app_name: str
    log_level: str
    tasks_path: Path
    log_file: Path | None

    @property
    def console_level(self) -> int:
        return logging.getLevelName(self.log_level)

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            app_name=_env(_k("APP_NAME"), "task-tracker"),
            log_level=_env_log_level(_k("LOG_LEVEL"), "WARNING"),
            tasks_path=_env_path(_k("TASKS_PATH"), DEFAULT_TASKS_PATH) or DEFAULT_TASKS_PATH,
            log_file=_env_path(_k("LOG_FILE"), None),
        )


def get_settings() -> Settings:
    # .env is looked up from the working directory; real env vars win.
    load_dotenv(find_dotenv(usecwd=True), override=False)
    return Settings.from_env()
