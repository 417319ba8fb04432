"""Shared CLI utility functions.

Provides common helpers for CLI commands to avoid duplication.
"""

from __future__ import annotations

__all__ = [
    "configure_logging",
    "load_app_config",
]

from pathlib import Path

from resorter_admin.config import AppConfig, get_config_path, get_system_log_path
from resorter_admin.exceptions import ConfigurationError
from resorter_admin.telemetry.system.system_logger import (
    configure_system_logger_file,
    set_system_log_level,
)


def load_app_config(config_path: Path | None = None) -> AppConfig:
    """Load configuration for a CLI command.

    Precedence: environment overrides > config file > built-in defaults.
    A missing default config file is not an error (defaults are used); a
    missing explicitly requested file is.

    Args:
        config_path: Explicit config file, or None for the app-dir default.

    Returns:
        AppConfig with environment overrides applied.

    Raises:
        ConfigurationError: File missing (explicit path) or invalid, or an
            environment override has an invalid value.
    """
    explicit = config_path is not None
    path = config_path if config_path is not None else get_config_path()

    try:
        if path.exists() or explicit:
            base = AppConfig.load_from_files(path)
        else:
            base = AppConfig()
        return base.with_env_overrides()
    except (OSError, ValueError) as e:
        raise ConfigurationError(str(e)) from e


def configure_logging(config: AppConfig) -> None:
    """Apply LoggingConfig to the system logger (level and optional file)."""
    set_system_log_level(config.logging.log_level)
    system_log_path = get_system_log_path(config)
    if system_log_path is not None:
        configure_system_logger_file(system_log_path)
