"""CLI utility functions.

Re-exports helpers for convenient importing.
"""

from .helpers import configure_logging, load_app_config

__all__ = [
    "configure_logging",
    "load_app_config",
]
