"""Command-line interface for resorter-admin.

Provides commands for initializing configuration, checking credentials
against the identity provider, and running the API server.
"""

from .main import cli, main

__all__ = ["cli", "main"]
