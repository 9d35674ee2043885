"""Logging for StepClock.

Every module logs through the shared ``log`` object.  Nothing is written
to disk until :func:`setup_logging` is called from the entry point, so
importing the package (e.g. from tests) has no side effects.

Log files live at:
    ~/Library/Application Support/StepClock/logs/
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path


LOG_DIR = Path.home() / "Library" / "Application Support" / "StepClock" / "logs"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOGGER_NAME = "stepclock"

log = logging.getLogger(LOGGER_NAME)
log.addHandler(logging.NullHandler())


def setup_logging(
    level: int | str = logging.INFO,
    log_dir: Path | None = None,
    *,
    max_bytes: int = 2 * 1024 * 1024,
    backup_count: int = 3,
    console: bool = False,
) -> logging.Logger:
    """Attach file (and optionally console) handlers to ``log``.

    Safe to call more than once: handlers are named and only added once.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    log.propagate = False
    log.setLevel(level)

    log_dir = log_dir or LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    fmt = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    def _have(name: str) -> bool:
        return any(h.get_name() == name for h in log.handlers)

    # Rolling history across runs
    persistent_name = f"{LOGGER_NAME}:persistent"
    if not _have(persistent_name):
        handler = RotatingFileHandler(
            filename=log_dir / f"{LOGGER_NAME}.log",
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(fmt)
        handler.set_name(persistent_name)
        log.addHandler(handler)

    # Overwritten on each run
    latest_name = f"{LOGGER_NAME}:latest"
    if not _have(latest_name):
        handler = logging.FileHandler(
            filename=log_dir / "latest.log",
            mode="w",
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(fmt)
        handler.set_name(latest_name)
        log.addHandler(handler)

    console_name = f"{LOGGER_NAME}:console"
    if console and not _have(console_name):
        handler = logging.StreamHandler()
        handler.setLevel(level)
        handler.setFormatter(fmt)
        handler.set_name(console_name)
        log.addHandler(handler)

    return log
