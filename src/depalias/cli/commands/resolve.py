"""`depalias resolve` command.

Resolve a request against a catalog and print one coordinate per line:

    $ depalias resolve aero '{"boot": ["cljs", "reload"]}'
    aero 1.0.0-beta2
    pleasetrythisathome/boot-cljs 1.9.198-SNAPSHOT
    adzerk/boot-reload 0.5.1

Each argument is either an alias name or a JSON request item; `--request`
reads a whole request from a JSON file (items are appended after arguments).
"""

from __future__ import annotations

from typing import List, Optional

import typer

from depalias.cli.common import fail, load_catalog
from depalias.core.errors import InvalidExpressionError, MissingAliasError
from depalias.core.resolve import resolve as resolve_request
from depalias.env.environment import distinct as distinct_coords
from depalias.io.request import parse_request_text, read_request_json


def register(app: typer.Typer) -> None:
    @app.command("resolve")
    def resolve(
        ctx: typer.Context,
        items: Optional[List[str]] = typer.Argument(None, help="Alias names or JSON request items."),
        catalog: Optional[str] = typer.Option(None, "--catalog", help="Catalog file (JSON or YAML)."),
        request: Optional[str] = typer.Option(None, "--request", help="Request JSON file."),
        distinct: bool = typer.Option(False, "--distinct", help="Drop repeated libraries (first wins)."),
        groups: bool = typer.Option(False, "--groups", help="Allow aliases naming a whole group."),
    ) -> None:
        """Resolve aliases into pinned coordinates."""
        cat = load_catalog(ctx, catalog)
        try:
            expr = []
            for item in items or []:
                expr.extend(parse_request_text(item))
            if request:
                expr.extend(read_request_json(request))
            coords = resolve_request(cat, expr, expand_groups=groups)
        except (MissingAliasError, InvalidExpressionError) as e:
            raise fail(str(e)) from e

        if distinct:
            coords = distinct_coords(coords)
        for c in coords:
            line = str(c)
            if c.exclusions:
                line += f" (exclusions: {', '.join(c.exclusions)})"
            typer.echo(line)
