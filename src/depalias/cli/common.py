"""Helpers shared by CLI subcommands."""

from __future__ import annotations

from typing import Optional

import typer

from depalias.config import Settings
from depalias.core.catalog import Catalog
from depalias.io.catalog import read_catalog


def load_catalog(ctx: typer.Context, catalog: Optional[str]) -> Catalog:
    """`--catalog` wins over the configured catalog; otherwise the bundled one."""
    if catalog:
        try:
            return read_catalog(catalog)
        except (OSError, ValueError) as e:
            raise typer.BadParameter(str(e), param_hint="--catalog") from e
    settings = ctx.obj if isinstance(ctx.obj, Settings) else Settings()
    return settings.load_catalog()


def fail(message: str, code: int = 1) -> typer.Exit:
    typer.echo(message, err=True)
    return typer.Exit(code=code)
