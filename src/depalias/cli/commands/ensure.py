"""`depalias ensure` command.

Show what a build task would add on top of a project's own dependencies:

    $ depalias ensure '{"boot": ["test"]}' --project .
    adzerk/boot-test 1.2.0 (scope: test)

The project's `deps.json` request (if any) is resolved unscoped into the
base environment; the arguments are then merged with `ensure_deps`, so
libraries the project already pins are skipped and the rest are tagged with
`--scope` (default: the configured `default_scope`).
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from depalias.cli.common import fail, load_catalog
from depalias.config import Settings
from depalias.core.errors import MissingAliasError
from depalias.core.resolve import resolve as resolve_request
from depalias.env.environment import BuildEnvironment, ensure_deps
from depalias.io.request import parse_request_text, read_project_request


def register(app: typer.Typer) -> None:
    @app.command("ensure")
    def ensure(
        ctx: typer.Context,
        items: List[str] = typer.Argument(..., help="Alias names or JSON request items."),
        project: Optional[Path] = typer.Option(None, "--project", help="Project directory holding deps.json."),
        catalog: Optional[str] = typer.Option(None, "--catalog", help="Catalog file (JSON or YAML)."),
        scope: Optional[str] = typer.Option(None, "--scope", help="Scope tag for added coordinates."),
        unscoped: bool = typer.Option(False, "--unscoped", help="Merge added coordinates without a scope."),
    ) -> None:
        """Print the coordinates a task would add to a project's environment."""
        settings = ctx.obj if isinstance(ctx.obj, Settings) else Settings()
        tag = None if unscoped else (scope or settings.default_scope)
        cat = load_catalog(ctx, catalog)
        try:
            base: list = []
            name = "build"
            if project is not None:
                base = resolve_request(cat, read_project_request(project))
                name = project.resolve().name or name
            env = BuildEnvironment(base, name=name)

            expr = []
            for item in items:
                expr.extend(parse_request_text(item))
            added = ensure_deps(env, cat, expr, scope=tag)
        except (MissingAliasError, ValueError) as e:
            raise fail(str(e)) from e

        for c in added:
            line = str(c)
            if c.scope:
                line += f" (scope: {c.scope})"
            typer.echo(line)
