"""Logging configuration.

Uses standard library logging with either a coloured line formatter or a JSON
formatter for the root logger, plus one named logger per trigger.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

TRACE = 5
SILENT = logging.CRITICAL + 10

logging.addLevelName(TRACE, "TRACE")
logging.addLevelName(SILENT, "SILENT")

# Workflow files use loglevel-style names.
_LEVEL_NAMES: dict[str, int] = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "silent": SILENT,
}

_RESET = "\x1b[0m"
_GRAY = "\x1b[90m"
_GREEN = "\x1b[32m"
_LEVEL_COLORS: dict[int, str] = {
    TRACE: "\x1b[35m",
    logging.DEBUG: "\x1b[36m",
    logging.INFO: "\x1b[34m",
    logging.WARNING: "\x1b[33m",
    logging.ERROR: "\x1b[31m",
    logging.CRITICAL: "\x1b[41m",
}

# Attributes every LogRecord carries; anything else on a record came from `extra=`.
_STANDARD_RECORD_ATTRS: frozenset[str] = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}

_TRIGGER_HANDLER_ATTR = "_workflow_triggers_handler"


def to_logging_level(level: object) -> int:
    """Translate a loglevel-style name (or a numeric level) to a logging level.

    Raises:
        ValueError: For unknown names and for values that are neither str nor int.
    """

    if isinstance(level, bool):
        raise ValueError(f"Unknown log level: {level!r}")
    if isinstance(level, int):
        return level
    if not isinstance(level, str):
        raise ValueError(f"Unknown log level: {level!r}")
    normalized = level.strip().lower()
    if normalized in _LEVEL_NAMES:
        return _LEVEL_NAMES[normalized]
    if normalized.isdigit():
        return int(normalized)
    raise ValueError(f"Unknown log level: {level!r}")


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    """The fields a caller attached to ``record`` through `extra=`."""

    return {
        key: value
        for key, value in vars(record).items()
        if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    """One JSON object per record: time, level, logger, message, extras."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        created = datetime.fromtimestamp(record.created, tz=UTC)
        payload: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        extras = record_extras(record)
        if extras:
            payload["extra"] = extras
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class TriggerLineFormatter(logging.Formatter):
    """`[timestamp] level name: message`, with ANSI colours when enabled."""

    def __init__(self, *, color: bool = True) -> None:
        super().__init__()
        self._color = color

    def _paint(self, code: str, text: str) -> str:
        if not self._color:
            return text
        return f"{code}{text}{_RESET}"

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        timestamp = datetime.fromtimestamp(record.created, tz=UTC).strftime("%H:%M:%S")
        level = record.levelname.lower()
        line = " ".join(
            [
                self._paint(_GRAY, f"[{timestamp}]"),
                self._paint(_LEVEL_COLORS.get(record.levelno, ""), level),
                self._paint(_GREEN, f"{record.name}:"),
                record.getMessage(),
            ]
        )
        if record.exc_info:
            line = line + "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(level: str | int, *, json_output: bool = False) -> None:
    """Send root log records to stdout, as JSON lines or coloured text."""

    root = logging.getLogger()
    root.handlers.clear()

    formatter: logging.Formatter = (
        JsonFormatter() if json_output else TriggerLineFormatter(color=sys.stdout.isatty())
    )
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(formatter)
    root.addHandler(handler)
    root.setLevel(to_logging_level(level))

    # urllib3 (under requests) logs every connection at debug.
    logging.getLogger("urllib3").setLevel(max(root.level, logging.INFO))


def trigger_logger_name(name: str, app_name: str) -> str:
    return f"{app_name}-trigger [{name}]"


def get_trigger_logger(name: str, level: str | int, *, app_name: str) -> logging.Logger:
    """Return the per-trigger logger, installing its line handler once.

    The logger does not propagate to the root so trigger lines keep their own
    level independently of the root configuration.
    """

    logger = logging.getLogger(trigger_logger_name(name, app_name))
    if not getattr(logger, _TRIGGER_HANDLER_ATTR, False):
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(TriggerLineFormatter(color=sys.stderr.isatty()))
        logger.addHandler(handler)
        logger.propagate = False
        setattr(logger, _TRIGGER_HANDLER_ATTR, True)
    logger.setLevel(to_logging_level(level))
    return logger
