"""Process-wide logging setup for the CLI and the demo UI.

The library modules only create module-level loggers; entry points call
configure_logging() once.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3


def configure_logging(*, level: int | str | None = None, log_file: str | None = None) -> None:
    """Configure the root logger with a stderr handler and an optional rotating file.

    Args:
        level: Log level (e.g. logging.INFO or "DEBUG"). If None, taken from settings.
        log_file: If set, also log to this file with rotation. If None, from settings.
    """
    if level is None or log_file is None:
        from calendar_engine.settings import get_settings

        settings = get_settings()
        if level is None:
            level = settings.log_level
        if log_file is None:
            log_file = settings.log_file

    if isinstance(level, str):
        level = getattr(logging, level.strip().upper(), logging.INFO)

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s", datefmt="%Y-%m-%d %H:%M:%S")

    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file:
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8"
            )
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
        except OSError as exc:
            root.warning("Could not open log file %s: %s; logging to stderr only", log_file, exc)
