# link_audit/logger.py
"""Logging for LinkAudit.

Every module logs through ``LinkAudit`` or one of its children
(``LinkAudit.crawler`` and so on); handlers live on ``LinkAudit`` only.
Log lines go to stderr, stdout is reserved for the JSON report.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "LinkAudit"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """``get_logger()`` is the project logger, ``get_logger("crawler")`` a child of it."""
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def configure(
    level: Union[int, str] = "WARNING",
    log_file: Union[str, Path, None] = None,
    log_format: str = LOG_FORMAT,
) -> logging.Logger:
    """Drop the current handlers and attach stderr (plus *log_file*, rotated) at *level*."""
    root = get_logger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8"
            )
        )

    formatter = logging.Formatter(log_format)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root.setLevel(level.upper() if isinstance(level, str) else level)
    root.propagate = False
    return root


logger: logging.Logger = configure()

__all__ = ["logger", "configure", "get_logger", "LOGGER_NAME", "LOG_FORMAT"]
