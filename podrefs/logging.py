"""Logging setup shared by the podrefs CLI and service."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO

_LOGGER_NAME = "podrefs"

CONSOLE_FORMAT = "[podrefs] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``podrefs`` or one of its children, e.g. ``podrefs.installer``."""
    if not name:
        return logging.getLogger(_LOGGER_NAME)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def _attach(logger: logging.Logger, handler: logging.Handler, level: int, fmt: str) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Route podrefs records to the console (stderr by default) and an optional file.

    Installer steps are logged at INFO; ``verbose`` adds the per-group and
    per-store DEBUG records. Calling this again replaces earlier handlers.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = get_logger()
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    _attach(logger, logging.StreamHandler(stream), level, CONSOLE_FORMAT)
    if log_file is not None:
        _attach(logger, logging.FileHandler(log_file, encoding="utf-8"), level, FILE_FORMAT)
    return logger


__all__ = ["configure_logging", "get_logger"]
