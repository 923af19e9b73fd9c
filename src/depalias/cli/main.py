"""depalias CLI entrypoint.

Thin Typer application over the resolver: print resolved coordinates, list
and validate catalogs. Build tasks call the library API directly; the CLI
is for inspecting catalogs and requests by hand.
"""

from __future__ import annotations

import logging
from typing import Optional

import typer

app = typer.Typer(
    name="depalias",
    add_completion=False,
    no_args_is_help=True,
    help="Resolve dependency aliases into pinned coordinates.",
)


@app.callback()
def _callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    config: Optional[str] = typer.Option(None, "--config", help="Settings file (YAML or JSON)."),
) -> None:
    """depalias CLI."""
    from depalias.config import load_settings
    from depalias.core.errors import ConfigError

    try:
        settings = load_settings(defaults_path=config)
    except ConfigError as e:
        raise typer.BadParameter(str(e), param_hint="--config") from e
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    settings.configure_pods()
    ctx.obj = settings


@app.command("version")
def version() -> None:
    """Print the installed depalias version."""
    from depalias import __version__

    typer.echo(__version__)


def _register_commands() -> None:
    """Register CLI subcommands.

    Importing these modules must remain lightweight so `depalias --help` is fast.
    """
    from depalias.cli.commands import aliases as aliases_cmd
    from depalias.cli.commands import dep_version as dep_version_cmd
    from depalias.cli.commands import ensure as ensure_cmd
    from depalias.cli.commands import resolve as resolve_cmd
    from depalias.cli.commands import validate as validate_cmd

    resolve_cmd.register(app)
    aliases_cmd.register(app)
    validate_cmd.register(app)
    dep_version_cmd.register(app)
    ensure_cmd.register(app)


_register_commands()
