# src/task_tracker/cli/main.py

"""
CLI entrypoint.

Loads settings, initialises logging, wires the repository and dispatches a
single command. Exit status is 0 for every handled outcome (including
"not found", "invalid status" and usage help) and 1 when the task store
cannot be read or written.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from ..config import get_settings
from ..logging_setup import setup_logging
from ..tasks.errors import StorageError
from .bootstrap import create_repository
from .commands import build_registry
from .presentation import format_fatal

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    settings = get_settings()
    setup_logging(console_level=settings.console_level, log_file=settings.log_file)
    logger.debug("Starting %s argv=%s", settings.app_name, list(argv))

    registry = build_registry(settings.app_name)
    repo = create_repository(settings=settings)

    try:
        output = registry.handle(repo, argv)
    except StorageError as exc:
        logger.debug("Storage failure.", exc_info=True)
        print(format_fatal(exc), file=sys.stderr)
        return 1

    print(output)
    return 0


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
