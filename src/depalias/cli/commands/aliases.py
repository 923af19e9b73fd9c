"""`depalias aliases` command: list every leaf alias and its coordinates."""

from __future__ import annotations

from typing import Optional

import typer

from depalias.cli.common import load_catalog
from depalias.core.tables import catalog_table


def register(app: typer.Typer) -> None:
    @app.command("aliases")
    def aliases(
        ctx: typer.Context,
        catalog: Optional[str] = typer.Option(None, "--catalog", help="Catalog file (JSON or YAML)."),
    ) -> None:
        """List catalog aliases with their coordinates."""
        df = catalog_table(load_catalog(ctx, catalog))
        if df.empty:
            typer.echo("(empty catalog)")
            return
        typer.echo(df.loc[:, ["alias", "library", "version"]].to_string(index=False))
