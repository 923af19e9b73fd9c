"""depalias core: data model, catalog and resolver primitives.

This package is intentionally standalone and must not import env/io/cli
to avoid circular dependencies. pandas is only imported by `tables`.
"""

from __future__ import annotations

from .catalog import Catalog, CatalogNode, Group, Leaf, catalog_from_data, lookup, lookup_all
from .errors import AlreadyScopedError, ConfigError, DepaliasError, InvalidExpressionError, MissingAliasError
from .model import (
    AliasKey,
    AliasMap,
    AliasPath,
    Coordinate,
    CoordinateLiteral,
    canonical_library_id,
    flatten_coordinates,
    parse_coordinate,
    parse_request,
)
from .resolve import dep_version, expand, expand_all, join_keys, resolve, resolve_paths
from .validate import CatalogValidationError, Violation, catalog_violations, validate_catalog

__all__ = [
    "AliasKey",
    "AliasMap",
    "AliasPath",
    "AlreadyScopedError",
    "Catalog",
    "CatalogNode",
    "CatalogValidationError",
    "ConfigError",
    "Coordinate",
    "CoordinateLiteral",
    "DepaliasError",
    "Group",
    "InvalidExpressionError",
    "Leaf",
    "MissingAliasError",
    "Violation",
    "canonical_library_id",
    "catalog_from_data",
    "catalog_violations",
    "dep_version",
    "expand",
    "expand_all",
    "flatten_coordinates",
    "join_keys",
    "lookup",
    "lookup_all",
    "parse_coordinate",
    "parse_request",
    "resolve",
    "resolve_paths",
    "validate_catalog",
]
