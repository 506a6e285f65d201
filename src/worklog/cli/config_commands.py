"""CLI commands for configuration management."""

import json
import sys
from typing import Any, NoReturn, Optional

import click  # type: ignore[import-not-found]
from rich.console import Console  # type: ignore[import-not-found]
from rich.markup import escape  # type: ignore[import-not-found]
from sqlalchemy.engine import make_url

from worklog.core.config import ConfigManager
from worklog.core.errors import ConfigError
from worklog.i18n import Translator

console = Console()
error_console = Console(stderr=True)

# CLI option name -> dot-notation config key
SETTABLE_OPTIONS = {
    "consultant": "defaults.consultant",
    "client": "defaults.client",
    "project": "defaults.project",
    "rate": "defaults.rate",
    "language": "language",
    "db_url": "database.url",
    "db_host": "database.host",
    "db_port": "database.port",
    "db_user": "database.user",
    "db_password": "database.password",
    "db_name": "database.name",
}


def _context_objects(ctx: click.Context) -> tuple[ConfigManager, Translator]:
    obj = ctx.find_object(dict) or {}
    config_mgr = obj.get("config") or ConfigManager()
    t = obj.get("translator") or Translator.detect(config_mgr.language)
    return config_mgr, t


def _error(t: Translator, message: str) -> NoReturn:
    error_console.print(f"[red]{t('error')}:[/red] {escape(message)}")
    sys.exit(1)


@click.group(invoke_without_command=True)  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config(ctx: click.Context) -> None:
    """Show or change saved defaults and database settings.

    Without a subcommand the current configuration is shown.

    Example:
        worklog config
        worklog config set --consultant Anna --rate 950
    """
    if ctx.invoked_subcommand is not None:
        return

    config_mgr, t = _context_objects(ctx)
    console.print(f"[bold]{t('config.title')}[/bold]")

    defaults = [
        ("config.default_consultant", config_mgr.default_consultant),
        ("config.default_client", config_mgr.default_client),
        ("config.default_project", config_mgr.default_project),
        ("config.default_rate", config_mgr.default_rate),
    ]
    if any(value is not None for _, value in defaults):
        for key, value in defaults:
            if value is not None:
                console.print(f"  {t(key, value=value)}", markup=False)
    else:
        console.print(f"  {t('config.no_defaults')}")
        console.print(f"  [dim]{escape(t('config.set_instruction'))}[/dim]")

    if config_mgr.language:
        console.print(f"  {t('config.language', value=config_mgr.language)}", markup=False)

    console.print()
    console.print(f"[bold]{t('config.database_title')}[/bold]")
    try:
        url = make_url(config_mgr.database_url())
    except ConfigError as e:
        _error(t, e.describe(t))
    console.print(f"  {t('config.database_url', value=url.render_as_string(hide_password=True))}", markup=False)
    for key, field in (
        ("config.database_host", "host"),
        ("config.database_port", "port"),
        ("config.database_user", "user"),
        ("config.database_name", "name"),
    ):
        value = config_mgr.database_setting(field)
        if value:
            console.print(f"  {t(key, value=value)}", markup=False)


@config.command("set")  # type: ignore[misc]
@click.option("--consultant", help="Default consultant name")  # type: ignore[misc]
@click.option("--client", help="Default customer name")  # type: ignore[misc]
@click.option("--project", help="Default project name")  # type: ignore[misc]
@click.option("--rate", type=float, help="Default hourly rate")  # type: ignore[misc]
@click.option("--language", help="UI language (sv or en)")  # type: ignore[misc]
@click.option("--db-url", help="SQLAlchemy database URL")  # type: ignore[misc]
@click.option("--db-host", help="PostgreSQL host")  # type: ignore[misc]
@click.option("--db-port", type=int, help="PostgreSQL port")  # type: ignore[misc]
@click.option("--db-user", help="PostgreSQL user")  # type: ignore[misc]
@click.option("--db-password", help="PostgreSQL password")  # type: ignore[misc]
@click.option("--db-name", help="PostgreSQL database name")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_set(ctx: click.Context, **options: Optional[Any]) -> None:
    """Save default values used by add.

    Example:
        worklog config set --consultant Anna --client Acme --project Backend --rate 950
        worklog config set --db-host db.example.com --db-user worklog
    """
    config_mgr, t = _context_objects(ctx)

    updates = {
        SETTABLE_OPTIONS[name]: value for name, value in options.items() if value is not None
    }
    if not updates:
        _error(t, t("config.must_specify"))

    try:
        for key, value in updates.items():
            config_mgr.set(key, value, save=False)
        config_mgr.save()
    except ConfigError as e:
        _error(t, e.describe(t))
    except OSError as e:
        _error(t, t("error.config_write", path=config_mgr.config_path, cause=e))

    console.print(f"[green]✓[/green] {t('config.saved')}")
    for key, value in updates.items():
        shown = "********" if key == "database.password" else value
        console.print(f"  {key} = {shown}", markup=False)


@config.command("get")  # type: ignore[misc]
@click.argument("key")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_get(ctx: click.Context, key: str) -> None:
    """Get a specific configuration value.

    Uses dot notation to access nested values.

    Example:
        worklog config get defaults.rate
        worklog config get database
    """
    config_mgr, t = _context_objects(ctx)
    value = config_mgr.get(key)

    if value is None:
        _error(t, t("config.key_not_found", key=key))

    if isinstance(value, dict):
        console.print(json.dumps(value, indent=2), markup=False)
    else:
        console.print(str(value), markup=False)


@config.command("clear")  # type: ignore[misc]
@click.confirmation_option(prompt="Clear all saved settings?")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_clear(ctx: click.Context) -> None:
    """Remove all saved defaults and database settings.

    Example:
        worklog config clear --yes
    """
    config_mgr, t = _context_objects(ctx)
    try:
        config_mgr.clear()
    except OSError as e:
        _error(t, t("error.config_write", path=config_mgr.config_path, cause=e))
    console.print(f"[green]✓[/green] {t('config.cleared')}")


@config.command("path")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_path(ctx: click.Context) -> None:
    """Print the configuration file path.

    Example:
        worklog config path
    """
    config_mgr, _ = _context_objects(ctx)
    click.echo(str(config_mgr.config_path))
