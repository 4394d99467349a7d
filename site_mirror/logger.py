# === FILE: site_mirror/logger.py ===
"""Project logger for **SiteMirror**.

Everything the crawler reports on the console goes through the ``SiteMirror``
logger: fetch statuses, new-URL counts per iteration, the error block and the
elapsed time. Modules take a child logger::

    from site_mirror.logger import get_logger
    log = get_logger("fetcher")        # -> "SiteMirror.fetcher"

The CLI calls :func:`init_logging` once per invocation to apply the level,
format and optional log file.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "SiteMirror"

_LevelT = Union[int, str]


def _with_format(handler: logging.Handler, fmt: str) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Reset the project logger's handlers: stdout always, a rotating file if *log_file* is set."""
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    lg.handlers.clear()

    lg.addHandler(_with_format(logging.StreamHandler(sys.stdout), log_format))
    if log_file is not None:
        file_handler = RotatingFileHandler(
            filename=str(log_file),
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        lg.addHandler(_with_format(file_handler, log_format))

    lg.propagate = False
    return lg


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the project logger or one of its children (``SiteMirror.<name>``)."""
    return logging.getLogger(LOGGER_NAME if not name else f"{LOGGER_NAME}.{name}")


logger: logging.Logger = init_logging()

__all__ = ["logger", "init_logging", "get_logger", "LOGGER_NAME", "DEFAULT_FORMAT"]
