"""Opt-in log output for scalemind.

Nothing is printed unless the embedding application asks for it: the
package installs a NullHandler on the ``scalemind`` logger at import. Each
``enable_*`` call attaches one handler to that logger:

    scalemind.enable_console_logging(level="DEBUG")       # stderr, plain text
    scalemind.enable_file_logging("logs/scalemind.log")   # size-rotated file
    scalemind.enable_json_logging()                       # stderr, JSON lines
    scalemind.configure_from_env()                        # driven by SM_* variables

What gets logged where:
    INFO   engine lifecycle, pause/resume, reset, bottleneck engaged/cleared
    DEBUG  one line per tick with the full metric set, clamped multipliers,
           clock transitions

Engine records carry simulation context (``tick``, ``active_users``,
``bottleneck``) as record attributes. JsonFormatter copies them into the
JSON object so a session can be replayed from its log.

Environment variables:
    SM_LOGGING: Level name. Enables logging when set.
    SM_LOG_FILE: Log file path. Enables rotating file output when set.
    SM_LOG_JSON: "1" selects JSON output for stderr or file.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Literal

__all__ = [
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_logging",
    "set_level",
    "set_module_level",
]

LOGGER_NAME = "scalemind"

TEXT_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
TEXT_DATE_FORMAT = "%H:%M:%S"

ROTATE_AT_BYTES = 5 * 1024 * 1024
ROTATED_FILES_KEPT = 3

# Record attributes set through ``extra=`` by the engine.
CONTEXT_FIELDS = ("tick", "active_users", "bottleneck")

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with simulation context when present.

    Example output:
        {"timestamp": "2026-01-15T10:30:00.123456+00:00", "level": "DEBUG",
         "logger": "scalemind.engine", "message": "Tick 4: users=5000 ...",
         "tick": 4, "active_users": 5000}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            if hasattr(record, name):
                entry[name] = getattr(record, name)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _get_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


def _get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def _make_formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return JsonFormatter()
    return logging.Formatter(TEXT_FORMAT, TEXT_DATE_FORMAT)


def _attach(handler: logging.Handler, level: str | int, formatter: logging.Formatter):
    numeric = _get_level(level)
    handler.setLevel(numeric)
    handler.setFormatter(formatter)
    logger = _get_logger()
    logger.setLevel(numeric)
    logger.addHandler(handler)
    return handler


def enable_console_logging(
    level: LogLevel | int = "INFO",
    format: str = TEXT_FORMAT,
    date_format: str = TEXT_DATE_FORMAT,
) -> logging.StreamHandler:
    """Attach a plain-text stderr handler and return it."""
    return _attach(logging.StreamHandler(), level, logging.Formatter(format, date_format))


def enable_json_logging(level: LogLevel | int = "INFO") -> logging.StreamHandler:
    """Attach a JSON-lines stderr handler and return it."""
    return _attach(logging.StreamHandler(), level, JsonFormatter())


def enable_file_logging(
    path: str | Path,
    level: LogLevel | int = "INFO",
    max_bytes: int = ROTATE_AT_BYTES,
    backup_count: int = ROTATED_FILES_KEPT,
    json_format: bool = False,
) -> RotatingFileHandler:
    """Attach a size-rotated file handler and return it.

    Args:
        path: Log file. Missing parent directories are created.
        level: Level name or number.
        max_bytes: File size that triggers rotation.
        backup_count: Number of rotated files kept next to ``path``.
        json_format: Write JSON lines instead of plain text.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count)
    return _attach(handler, level, _make_formatter(json_format))


def configure_from_env() -> logging.Handler | None:
    """Attach one handler according to SM_LOGGING, SM_LOG_FILE and SM_LOG_JSON.

    Returns the handler, or None when neither SM_LOGGING nor SM_LOG_FILE is set.
    """
    level = os.environ.get("SM_LOGGING", "").strip() or None
    log_file = os.environ.get("SM_LOG_FILE", "").strip() or None
    json_format = os.environ.get("SM_LOG_JSON", "") == "1"

    if level is None and log_file is None:
        return None
    level = level or "INFO"

    if log_file is not None:
        return enable_file_logging(log_file, level=level, json_format=json_format)
    return _attach(logging.StreamHandler(), level, _make_formatter(json_format))


def set_level(level: LogLevel | int) -> None:
    _get_logger().setLevel(_get_level(level))


def set_module_level(module: str, level: LogLevel | int) -> None:
    """Adjust one submodule, e.g. ``set_module_level("engine", "DEBUG")`` for per-tick lines."""
    logging.getLogger(f"{LOGGER_NAME}.{module}").setLevel(_get_level(level))


def disable_logging() -> None:
    """Detach and close every handler, then silence the scalemind logger."""
    logger = _get_logger()
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.CRITICAL + 1)
