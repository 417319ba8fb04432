"""Operational logger: startup, provider outages, upstream failures.

Not part of the audit trail. Two sinks:
- stderr, human readable, at the configured level (default INFO)
- system.jsonl, WARNING and above only, attached once the config names a log_dir

Records are usually dicts with an ``event`` key plus context, e.g.
``{"event": "upstream_unreachable", "path": "/API/Hotel/list"}``.
"""

from __future__ import annotations

__all__ = [
    "ConsoleFormatter",
    "configure_system_logger_file",
    "get_system_logger",
    "set_system_log_level",
]

import logging
import sys
from pathlib import Path

from resorter_admin.constants import APP_NAME
from resorter_admin.utils.logging.jsonl_formatter import JsonLineFormatter
from resorter_admin.utils.logging.logger_setup import ensure_log_directory

SYSTEM_LOGGER_NAME = f"{APP_NAME}.system"

# system.jsonl keeps problems only
_FILE_LEVEL = logging.WARNING


class ConsoleFormatter(logging.Formatter):
    """``LEVEL: text`` lines for stderr.

    For dict records the text is the ``message`` key, falling back to
    ``event``; remaining keys are appended as ``key=value``.
    """

    def format(self, record: logging.LogRecord) -> str:
        if not isinstance(record.msg, dict):
            return f"{record.levelname}: {record.getMessage()}"

        fields = dict(record.msg)
        text = fields.pop("message", None) or fields.pop("event", "")
        fields.pop("event", None)
        context = " ".join(f"{key}={value}" for key, value in fields.items())
        return f"{record.levelname}: {text}" + (f" ({context})" if context else "")


_logger: logging.Logger | None = None
_log_file: Path | None = None


def _console_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if not isinstance(h, logging.FileHandler)]


def _file_handlers(logger: logging.Logger) -> list[logging.FileHandler]:
    return [h for h in logger.handlers if isinstance(h, logging.FileHandler)]


def get_system_logger() -> logging.Logger:
    """Return the process-wide system logger, creating it with a stderr sink."""
    global _logger

    if _logger is None:
        logger = logging.getLogger(SYSTEM_LOGGER_NAME)
        logger.setLevel(logging.INFO)
        logger.propagate = False
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

        console = logging.StreamHandler(sys.stderr)
        console.setLevel(logging.INFO)
        console.setFormatter(ConsoleFormatter())
        logger.addHandler(console)
        _logger = logger

    return _logger


def set_system_log_level(level: str) -> None:
    """Apply a level name ("DEBUG", "INFO", ...) to the logger and its stderr sink.

    The file sink stays at WARNING.
    """
    logger = get_system_logger()
    numeric = logging.getLevelName(level.upper())
    logger.setLevel(min(numeric, _FILE_LEVEL))
    for handler in _console_handlers(logger):
        handler.setLevel(numeric)


def configure_system_logger_file(log_path: Path) -> None:
    """Attach (or move) the system.jsonl sink.

    Repeated calls with the same path do nothing. If the directory cannot be
    created the failure is reported on stderr and the server keeps running
    without a file sink.
    """
    global _log_file

    if _log_file == log_path:
        return

    logger = get_system_logger()
    try:
        ensure_log_directory(log_path)
    except OSError as e:
        logger.warning({"event": "system_log_dir_unavailable", "path": str(log_path.parent), "message": str(e)})
        return

    for handler in _file_handlers(logger):
        handler.close()
        logger.removeHandler(handler)

    file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    file_handler.setLevel(_FILE_LEVEL)
    file_handler.setFormatter(JsonLineFormatter())
    logger.addHandler(file_handler)
    _log_file = log_path
