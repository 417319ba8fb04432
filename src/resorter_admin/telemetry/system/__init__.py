"""System (operational) logging."""

from .system_logger import configure_system_logger_file, get_system_logger, set_system_log_level

__all__ = [
    "configure_system_logger_file",
    "get_system_logger",
    "set_system_log_level",
]
