"""Package logger setup shared by the CLI and the HTTP service."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT_LOGGER = "htmlimport2esm"
CONSOLE_FORMAT = "[htmlimport2esm] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``htmlimport2esm.<name>``, or the package logger itself."""
    if not name:
        return logging.getLogger(ROOT_LOGGER)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def _attach(logger: logging.Logger, handler: logging.Handler, level: int, fmt: str) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)


def _detach_all(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route package logs to stderr and, when ``log_file`` is given, to that file.

    Calling this again replaces the previous handlers, so repeated CLI runs in
    one process never duplicate lines. Conversion output goes to stdout, logs
    never do.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = get_logger()
    logger.setLevel(level)
    logger.propagate = False
    _detach_all(logger)

    _attach(logger, logging.StreamHandler(sys.stderr), level, CONSOLE_FORMAT)
    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        _attach(logger, logging.FileHandler(log_path, encoding="utf-8"), level, FILE_FORMAT)
    return logger


__all__ = ["configure_logging", "get_logger"]
