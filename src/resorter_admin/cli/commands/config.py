"""Config command group for resorter-admin CLI.

Provides configuration management subcommands.
"""

from __future__ import annotations

__all__ = ["config"]

import json
import sys
from pathlib import Path

import click

from resorter_admin.config import (
    AppConfig,
    get_auth_log_path,
    get_config_path,
    get_system_log_path,
)
from resorter_admin.exceptions import ConfigurationError
from resorter_admin.utils.cli import load_app_config

from ..styling import style_dim, style_error, style_header, style_success


def _load_raw_config(config_path: Path) -> dict[str, object]:
    """Load raw JSON from config file without Pydantic defaults."""
    with open(config_path, encoding="utf-8") as f:
        result: dict[str, object] = json.load(f)
        return result


def _is_default(raw_config: dict[str, object], *keys: str) -> bool:
    """Check if a config path is missing from the raw file (default in use)."""
    current: object = raw_config
    for key in keys:
        if not isinstance(current, dict) or key not in current:
            return True
        current = current[key]
    return False


def _value_line(raw_config: dict[str, object], section: str, key: str, value: object) -> str:
    marker = click.style(" (default)", dim=True) if _is_default(raw_config, section, key) else ""
    return f"  {key}: {value}{marker}"


@click.group()
def config() -> None:
    """Configuration management commands."""


@config.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
@click.option("--api-base-url", help="Resorter360 API base URL (identity provider and catalogue)")
@click.option("--session-ttl", type=int, help="Session lifetime in seconds")
def config_init(force: bool, api_base_url: str | None, session_ttl: int | None) -> None:
    """Create the config file with defaults.

    Refuses to overwrite an existing file unless --force is given.
    """
    path = get_config_path()
    if path.exists() and not force:
        click.echo(style_error(f"Config already exists at {path}"), err=True)
        click.echo("Use --force to overwrite.", err=True)
        sys.exit(1)

    data = AppConfig().model_dump()
    if api_base_url:
        data["identity_provider"]["base_url"] = api_base_url
        data["upstream"]["base_url"] = api_base_url
    if session_ttl is not None:
        data["session"]["ttl_seconds"] = session_ttl

    try:
        new_config = AppConfig.model_validate(data)
    except ValueError as e:
        click.echo(style_error(f"Invalid value: {e}"), err=True)
        sys.exit(1)

    try:
        new_config.save_to_file(path)
    except OSError as e:
        click.echo(style_error(f"Could not write {path}: {e}"), err=True)
        sys.exit(1)

    click.echo(style_success(f"Configuration saved to {path}"))


@config.command("show")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def config_show(as_json: bool) -> None:
    """Display the effective configuration.

    Values marked (default) are not in the config file. Environment
    overrides are applied.
    """
    config_file_path = get_config_path()

    try:
        loaded_config = load_app_config()
        raw_config = _load_raw_config(config_file_path) if config_file_path.exists() else {}
    except (ConfigurationError, OSError, ValueError) as e:
        click.echo(style_error(str(e)), err=True)
        sys.exit(ConfigurationError.exit_code)

    if as_json:
        config_dict = loaded_config.model_dump(mode="json")
        config_dict["_computed"] = {
            "config_file": str(config_file_path),
            "log_files": {
                "system": str(get_system_log_path(loaded_config)),
                "auth": str(get_auth_log_path(loaded_config)),
            },
        }
        click.echo(json.dumps(config_dict, indent=2))
        return

    click.echo("\nresorter-admin configuration:\n")
    if not config_file_path.exists():
        click.echo(style_dim(f"(no config file at {config_file_path}, showing defaults)\n"))

    click.echo(style_header("Identity provider"))
    idp = loaded_config.identity_provider
    click.echo(_value_line(raw_config, "identity_provider", "base_url", idp.base_url))
    click.echo(_value_line(raw_config, "identity_provider", "timeout_seconds", idp.timeout_seconds))
    click.echo()

    click.echo(style_header("Upstream API"))
    upstream = loaded_config.upstream
    click.echo(_value_line(raw_config, "upstream", "base_url", upstream.base_url))
    click.echo(_value_line(raw_config, "upstream", "timeout_seconds", upstream.timeout_seconds))
    click.echo()

    click.echo(style_header("Session"))
    session = loaded_config.session
    click.echo(_value_line(raw_config, "session", "ttl_seconds", session.ttl_seconds))
    click.echo(_value_line(raw_config, "session", "cookie_name", session.cookie_name))
    click.echo(_value_line(raw_config, "session", "cookie_secure", session.cookie_secure))
    click.echo(_value_line(raw_config, "session", "cookie_samesite", session.cookie_samesite))
    click.echo()

    click.echo(style_header("Server"))
    server = loaded_config.server
    click.echo(_value_line(raw_config, "server", "host", server.host))
    click.echo(_value_line(raw_config, "server", "port", server.port))
    click.echo(_value_line(raw_config, "server", "cors_origins", server.cors_origins or "(disabled)"))
    click.echo()

    click.echo(style_header("Logging"))
    click.echo(_value_line(raw_config, "logging", "log_dir", loaded_config.logging.log_dir))
    click.echo(_value_line(raw_config, "logging", "log_level", loaded_config.logging.log_level))
    click.echo(f"    system: {get_system_log_path(loaded_config)}")
    click.echo(f"    auth: {get_auth_log_path(loaded_config)}")


@config.command("path")
def config_path_cmd() -> None:
    """Show config file path.

    Displays the OS-appropriate config file location:
    - macOS: ~/Library/Application Support/resorter-admin/
    - Linux: ~/.config/resorter-admin/
    - Windows: C:\\Users\\<user>\\AppData\\Roaming\\resorter-admin/
    """
    path = get_config_path()
    click.echo(str(path))

    if not path.exists():
        click.echo("(file does not exist - run 'resorter-admin config init' to create)", err=True)
