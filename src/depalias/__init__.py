"""depalias: dependency-alias resolver for build pipelines.

Projects request dependencies by short alias names (`"aero"`,
`{"boot": ["cljs", "reload"]}`); depalias expands them against a catalog of
pinned coordinates and merges the result into a build environment.
"""

from __future__ import annotations

from depalias.core import (
    Catalog,
    Coordinate,
    MissingAliasError,
    catalog_from_data,
    expand,
    lookup,
    resolve,
)
from depalias.env import BuildEnvironment, ensure_deps, filter_new, isolated_environment, scope_as

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "BuildEnvironment",
    "Catalog",
    "Coordinate",
    "MissingAliasError",
    "catalog_from_data",
    "ensure_deps",
    "expand",
    "filter_new",
    "isolated_environment",
    "lookup",
    "resolve",
    "scope_as",
]
