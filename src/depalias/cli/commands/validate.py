"""`depalias validate` command.

Validates a catalog:
- semantic invariants via `depalias.core.validate.catalog_violations()`
  (violations fail the command)
- cross-alias version divergences via `depalias.core.tables.version_divergences()`
  (reported as warnings only)
"""

from __future__ import annotations

from typing import Optional

import typer

from depalias.cli.common import fail, load_catalog
from depalias.core.tables import version_divergences
from depalias.core.validate import CatalogValidationError, catalog_violations


def register(app: typer.Typer) -> None:
    @app.command("validate")
    def validate(
        ctx: typer.Context,
        catalog: Optional[str] = typer.Option(None, "--catalog", help="Catalog file (JSON or YAML)."),
    ) -> None:
        """Validate a dependency catalog."""
        cat = load_catalog(ctx, catalog)

        for row in version_divergences(cat).itertuples(index=False):
            typer.echo(f"warning: {row.library_id} pinned to {row.versions} by {row.aliases}", err=True)

        violations = catalog_violations(cat)
        if violations:
            raise fail(str(CatalogValidationError(violations)))
        typer.echo("OK")
