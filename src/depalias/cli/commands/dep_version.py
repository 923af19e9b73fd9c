"""`depalias dep-version` command: version a request pins for one library."""

from __future__ import annotations

from typing import List, Optional

import typer

from depalias.cli.common import fail, load_catalog
from depalias.core.errors import InvalidExpressionError, MissingAliasError
from depalias.core.resolve import dep_version as find_version
from depalias.io.request import parse_request_text


def register(app: typer.Typer) -> None:
    @app.command("dep-version")
    def dep_version(
        ctx: typer.Context,
        library: str = typer.Argument(..., help="Library, eg com.datomic/datomic-pro."),
        items: List[str] = typer.Argument(..., help="Alias names or JSON request items."),
        catalog: Optional[str] = typer.Option(None, "--catalog", help="Catalog file (JSON or YAML)."),
    ) -> None:
        """Print the version the request pins for LIBRARY."""
        cat = load_catalog(ctx, catalog)
        try:
            expr = []
            for item in items:
                expr.extend(parse_request_text(item))
            version = find_version(cat, expr, library)
        except (MissingAliasError, InvalidExpressionError) as e:
            raise fail(str(e)) from e
        if version is None:
            raise fail(f"{library}: not pinned by this request")
        typer.echo(version)
