"""Serve command for resorter-admin CLI.

Runs the admin API with uvicorn.
"""

from __future__ import annotations

__all__ = ["serve"]

import sys
from pathlib import Path

import click
import uvicorn

from resorter_admin import __version__
from resorter_admin.api.server import create_api_app
from resorter_admin.config import get_auth_log_path
from resorter_admin.exceptions import ConfigurationError
from resorter_admin.telemetry.system.system_logger import get_system_logger
from resorter_admin.utils.cli import configure_logging, load_app_config

from ..styling import style_error, style_label


@click.command()
@click.option("--host", help="Bind address (overrides server.host)")
@click.option("--port", type=click.IntRange(1, 65535), help="Bind port (overrides server.port)")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default: app dir config.json)",
)
def serve(host: str | None, port: int | None, config_path: Path | None) -> None:
    """Start the admin API server.

    Configuration precedence: command-line options > environment
    (API_BASE_URL, RESORTER_ADMIN_SESSION_TTL, RESORTER_ADMIN_CORS_ORIGINS)
    > config file > defaults.

    Examples:
        resorter-admin serve
        resorter-admin serve --port 8080 --config ./config.json
    """
    try:
        app_config = load_app_config(config_path)
    except ConfigurationError as e:
        click.echo(style_error(f"Invalid configuration: {e}"), err=True)
        sys.exit(e.exit_code)

    configure_logging(app_config)

    bind_host = host or app_config.server.host
    bind_port = port or app_config.server.port

    click.echo(f"resorter-admin {__version__}")
    click.echo(f"{style_label('Listening')} http://{bind_host}:{bind_port}")
    click.echo(f"{style_label('Identity provider')} {app_config.identity_provider.base_url}")
    click.echo(f"{style_label('Auth log')} {get_auth_log_path(app_config) or '(disabled)'}")

    app = create_api_app(app_config)

    get_system_logger().info({"event": "server_starting", "host": bind_host, "port": bind_port})
    uvicorn.run(
        app,
        host=bind_host,
        port=bind_port,
        log_level=app_config.logging.log_level.lower(),
    )
