"""JSONL formatter shared by the audit and system log files."""

from __future__ import annotations

__all__ = ["JsonLineFormatter", "utc_timestamp"]

import json
import logging
from datetime import datetime, timezone
from typing import Any


def utc_timestamp(created: float) -> str:
    """Render a LogRecord.created value as ``2026-03-01T09:15:02.481Z``."""
    moment = datetime.fromtimestamp(created, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record, led by ``time`` (UTC, millisecond precision).

    Dict messages are structured events and are merged into the line as-is.
    Anything else becomes ``{"message": ...}``. ``include_level`` adds the
    record's level name, which the system log wants and the audit log does
    not (every audit line is INFO).
    """

    def __init__(self, *, include_level: bool = True) -> None:
        super().__init__()
        self.include_level = include_level

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {"time": utc_timestamp(record.created)}
        if self.include_level:
            entry["level"] = record.levelname

        if isinstance(record.msg, dict):
            entry.update(record.msg)
        else:
            entry["message"] = record.getMessage()

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
