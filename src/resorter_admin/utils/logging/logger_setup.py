"""Logger factories for the JSONL log files.

setup_jsonl_logger attaches a single file handler writing JsonLineFormatter
output to an owner-only file. setup_null_logger is the stand-in used when
file logging is disabled (``logging.log_dir: null``).
"""

from __future__ import annotations

__all__ = [
    "StrictFileHandler",
    "ensure_log_directory",
    "setup_jsonl_logger",
    "setup_null_logger",
]

import logging
from pathlib import Path

from resorter_admin.utils.file_helpers import restrict_to_owner
from resorter_admin.utils.logging.jsonl_formatter import JsonLineFormatter


def ensure_log_directory(log_file: Path) -> None:
    """Create the parent directory of ``log_file`` (mode 0700).

    Raises:
        OSError: Directory could not be created; the message names it.
    """
    directory = log_file.parent
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise type(e)(f"Cannot create log directory {directory}: {e}") from e
    restrict_to_owner(directory)


class StrictFileHandler(logging.FileHandler):
    """File handler whose write failures propagate to the caller.

    The stock handler prints a traceback to stderr and drops the record,
    which is not acceptable for the audit trail.
    """

    def handleError(self, record: logging.LogRecord) -> None:  # noqa: N802
        raise


def _detach_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def setup_jsonl_logger(
    logger_name: str,
    log_file: Path,
    log_level: int = logging.INFO,
    *,
    strict: bool = False,
    include_level: bool = True,
) -> logging.Logger:
    """Return ``logger_name`` writing JSONL to ``log_file`` only.

    Any handlers left from a previous call are closed first, so calling this
    twice (app factory in tests, reloads) does not duplicate lines.

    Args:
        logger_name: e.g. "resorter-admin.audit.auth".
        log_file: Target file; its directory is created if needed.
        log_level: Threshold for both logger and handler.
        strict: Use StrictFileHandler so write errors raise.
        include_level: Forwarded to JsonLineFormatter.

    Raises:
        OSError: Log directory or file could not be created.
    """
    ensure_log_directory(log_file)

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)
    logger.propagate = False
    _detach_handlers(logger)

    handler: logging.FileHandler
    if strict:
        handler = StrictFileHandler(log_file, mode="a", encoding="utf-8")
    else:
        handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    handler.setLevel(log_level)
    handler.setFormatter(JsonLineFormatter(include_level=include_level))
    logger.addHandler(handler)

    restrict_to_owner(log_file)
    return logger


def setup_null_logger(logger_name: str) -> logging.Logger:
    """Return ``logger_name`` with every record discarded."""
    logger = logging.getLogger(logger_name)
    logger.propagate = False
    _detach_handlers(logger)
    logger.addHandler(logging.NullHandler())
    return logger
