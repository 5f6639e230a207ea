"""Config commands -- view and modify the global configuration.

Provides the ``swagport config`` sub-command group for reading, updating
and resetting the user's :class:`~swagport.models.GlobalConfig`.
"""

from __future__ import annotations

import typer

from swagport.exceptions import ConfigError
from swagport.output import error, format_data, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the effective configuration (all layers applied).

    Example::

        swagport config show
    """
    from swagport.config import global_config_path, resolve_config

    try:
        config = resolve_config()
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    info(f"Config file: {global_config_path()}")
    format_data(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key (dot notation, e.g., 'importer.expand')."
    ),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a value in the global configuration file.

    Example::

        swagport config set importer.expand true
        swagport config set importer.response_mime_type application/xml
        swagport config set output.indent 4
    """
    from swagport.config import load_global_config, save_global_config, set_config_value

    try:
        config = set_config_value(load_global_config(), key, value)
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=2) from None

    save_global_config(config)
    success(f"Set {key} = {value}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Reset the global configuration to defaults."""
    from swagport.config import save_global_config
    from swagport.models import GlobalConfig

    if not force and not typer.confirm("Reset configuration to defaults?"):
        info("Cancelled.")
        raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
