"""Logging setup shared by merlon commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

_LOGGER_NAME = "merlon"


class _DiagnosticFormatter(logging.Formatter):
    """Render records the way compiler-style tools report diagnostics.

    Warnings and errors read ``warning: <message>`` so they stand out on stderr,
    informational output is printed bare, and debug records carry the emitting
    component for troubleshooting.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.levelno >= logging.WARNING:
            text = f"{record.levelname.lower()}: {message}"
        elif record.levelno <= logging.DEBUG:
            component = record.name.rpartition(".")[2]
            text = f"debug[{component}]: {message}"
        else:
            text = message
        if record.exc_text:
            text = f"{text}\n{record.exc_text}"
        return text


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a component logger under the ``merlon`` hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Send merlon diagnostics to stderr, plus an optional timestamped log file."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Handlers are rebuilt on every call so repeated CLI runs in one process
    # do not print each diagnostic twice.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console.setLevel(level)
    console.setFormatter(_DiagnosticFormatter())
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
