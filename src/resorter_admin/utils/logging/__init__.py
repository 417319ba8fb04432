"""Logging utilities and helpers.

This package provides logging infrastructure for resorter-admin:
- jsonl_formatter: One JSON object per record with a UTC timestamp
- logger_setup: Factory function for creating configured JSONL loggers
- logging_helpers: Event serialization and ID hashing

Import directly from submodules to avoid circular imports:
    from resorter_admin.utils.logging.logger_setup import setup_jsonl_logger
"""

__all__: list[str] = []  # Direct submodule imports required (see docstring)
