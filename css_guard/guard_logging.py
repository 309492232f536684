"""Logging setup for css-guard.

Everything logs under the ``css_guard`` logger, which never propagates to
the root logger. Diagnostics go to stderr so they never mix with a report
written to stdout. A rotating debug log file is optional.
"""

import json
import logging
import logging.config
import logging.handlers
from collections.abc import Generator
from contextlib import contextmanager
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Any

ROOT_LOGGER_NAME = "css_guard"

TEXT_FORMAT = "%(levelname)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d - %(message)s"


class LogCategory(Enum):
    """Sub-loggers for the stages of a lint run."""

    PARSER = "analysis"
    ENGINE = "rules"
    RUNNER = "runner"
    CONFIG = "config"


class JSONFormatter(logging.Formatter):
    """One JSON object per log line.

    Values passed through ``extra=`` under the names in ``EXTRA_FIELDS``
    are copied into the object, e.g. per-file timings from the runner.
    """

    EXTRA_FIELDS = ("file_path", "rule_id", "duration_ms", "violation_count")

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        entry.update(
            (name, getattr(record, name))
            for name in self.EXTRA_FIELDS
            if hasattr(record, name)
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _console_level(level: str, quiet: bool, verbose: bool) -> str:
    if quiet:
        return "ERROR"
    return "DEBUG" if verbose else level.upper()


def setup_logging(
    level: str = "WARNING",
    quiet: bool = False,
    verbose: bool = False,
    log_file: Path | None = None,
    log_format: str = "text",
    rotation_count: int = 3,
    max_bytes: int = 10 * 1024 * 1024,
) -> logging.Logger:
    """Configure the ``css_guard`` logger.

    Args:
        level: Console level when neither quiet nor verbose is set.
        quiet: No console handler at all.
        verbose: Console level DEBUG.
        log_file: Rotating debug log; omitted when None.
        log_format: "text" or "json", applied to both handlers.
        rotation_count: Rotated files kept next to ``log_file``.
        max_bytes: Size at which ``log_file`` rotates.

    Returns:
        The configured ``css_guard`` logger.
    """
    as_json = log_format == "json"
    handlers: dict[str, dict[str, Any]] = {}

    if not quiet:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
            "level": _console_level(level, quiet, verbose),
            "formatter": "json" if as_json else "text",
        }
    if log_file:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str(log_file),
            "maxBytes": max_bytes,
            "backupCount": rotation_count,
            "encoding": "utf-8",
            "level": "DEBUG",
            "formatter": "json" if as_json else "file",
        }

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "text": {"format": TEXT_FORMAT},
                "file": {"format": FILE_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
                "json": {"()": JSONFormatter},
            },
            "handlers": handlers,
            "loggers": {
                ROOT_LOGGER_NAME: {
                    "handlers": list(handlers),
                    "level": "DEBUG",
                    "propagate": False,
                }
            },
        }
    )
    return logging.getLogger(ROOT_LOGGER_NAME)


def get_logger() -> logging.Logger:
    """The ``css_guard`` package logger."""
    return logging.getLogger(ROOT_LOGGER_NAME)


def get_category_logger(category: LogCategory) -> logging.Logger:
    """Child logger for one stage, e.g. ``css_guard.runner``.

    Example:
        >>> logger = get_category_logger(LogCategory.RUNNER)
        >>> logger.info("Linted 12 files")
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{category.value}")


@contextmanager
def debug_context(logger: logging.Logger | None = None) -> Generator[logging.Logger, None, None]:
    """Lower a logger and its handlers to DEBUG for the duration of a block."""
    target = logger or get_logger()
    saved = (target.level, [(h, h.level) for h in target.handlers])
    target.setLevel(logging.DEBUG)
    for handler, _ in saved[1]:
        handler.setLevel(logging.DEBUG)
    try:
        yield target
    finally:
        target.setLevel(saved[0])
        for handler, handler_level in saved[1]:
            handler.setLevel(handler_level)
