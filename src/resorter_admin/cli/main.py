"""Main CLI entry point for resorter-admin.

Defines the CLI group and registers all subcommands.

Commands:
    check-login - Verify credentials against the identity provider
    config      - Configuration management (init, show, path)
    serve       - Run the admin API server

Subcommand help:
    resorter-admin COMMAND -h         Show help for a specific command
"""

from __future__ import annotations

__all__ = ["cli"]

import sys

import click

from resorter_admin import __version__

from .commands.check_login import check_login
from .commands.config import config
from .commands.serve import serve


class QuickStartGroup(click.Group):
    """Group whose help ends with a quick start and the environment overrides."""

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        formatter.write(
            """
Quick Start:
  resorter-admin config init                 Write default config
  resorter-admin check-login admin           Test credentials against the provider
  resorter-admin serve                       Run the API on 127.0.0.1:5000

Environment overrides:
  API_BASE_URL                  Identity provider and catalogue API base URL
  RESORTER_ADMIN_SESSION_TTL    Session lifetime in seconds
  RESORTER_ADMIN_CORS_ORIGINS   Comma-separated allowed origins
"""
        )


@click.group(
    cls=QuickStartGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """resorter-admin: Admin console API for the Resorter360 catalogue."""
    if version:
        click.echo(f"resorter-admin {__version__}")
        sys.exit(0)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Register commands
cli.add_command(check_login)
cli.add_command(config)
cli.add_command(serve)


def main() -> None:
    """CLI entry point."""
    cli()
