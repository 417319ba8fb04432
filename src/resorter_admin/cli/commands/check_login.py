"""check-login command for resorter-admin CLI.

Asks the configured identity provider about one set of credentials,
without starting the server or creating a session. Useful to tell a
wrong password from a provider outage.

Exit codes:
    0  accepted
    1  rejected
    2  identity provider unavailable
"""

from __future__ import annotations

__all__ = ["check_login"]

import asyncio
import sys
from pathlib import Path

import click

from resorter_admin.auth.credentials import CredentialDelegate
from resorter_admin.config import IdentityProviderConfig
from resorter_admin.exceptions import ConfigurationError, ServiceUnavailableError
from resorter_admin.utils.cli import load_app_config

from ..styling import style_error, style_success, style_warning

EXIT_ACCEPTED = 0
EXIT_REJECTED = 1
EXIT_UNAVAILABLE = 2


async def _verify(provider: IdentityProviderConfig, username: str, password: str) -> bool:
    async with CredentialDelegate(provider) as delegate:
        return await delegate.verify(username, password)


@click.command("check-login")
@click.argument("username")
@click.option("--password", prompt=True, hide_input=True, help="Password (prompted if omitted)")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default: app dir config.json)",
)
def check_login(username: str, password: str, config_path: Path | None) -> None:
    """Check USERNAME's credentials against the identity provider."""
    try:
        app_config = load_app_config(config_path)
    except ConfigurationError as e:
        click.echo(style_error(f"Invalid configuration: {e}"), err=True)
        sys.exit(e.exit_code)

    provider = app_config.identity_provider
    try:
        accepted = asyncio.run(_verify(provider, username, password))
    except ServiceUnavailableError as e:
        click.echo(style_warning(f"Identity provider unavailable ({e.reason}): {e}"), err=True)
        sys.exit(EXIT_UNAVAILABLE)

    if accepted:
        click.echo(style_success(f"Credentials for '{username}' accepted by {provider.base_url}"))
        sys.exit(EXIT_ACCEPTED)

    click.echo(style_error(f"Credentials for '{username}' rejected by {provider.base_url}"), err=True)
    sys.exit(EXIT_REJECTED)
