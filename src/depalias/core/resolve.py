"""Resolver: request expression -> catalog paths -> coordinates.

Pipeline (per `resolve` call):
1. expand every request item into alias paths (or literal pass-throughs)
2. drop guarded-out paths (`None`, or any path containing `None`)
3. look each alias path up in the catalog; literals are used as-is
4. concatenate in path order and flatten to individual coordinates

Resolution is all-or-nothing: the first missing alias raises
`MissingAliasError` and nothing is returned. Duplicates are retained; whether
a coordinate is "new" depends on what is already active, which is the build
environment's concern (`depalias.env`).

Every function here is pure over frozen inputs and safe to call from several
threads at once.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence, Union

from depalias.core.catalog import Catalog, lookup, lookup_all
from depalias.core.errors import InvalidExpressionError, MissingAliasError
from depalias.core.model import (
    AliasKey,
    AliasMap,
    AliasPath,
    Coordinate,
    CoordinateLiteral,
    canonical_library_id,
    flatten_coordinates,
    parse_request,
    parse_request_item,
)

logger = logging.getLogger(__name__)

ExpandedPath = Union[AliasPath, CoordinateLiteral]


def _expand_alias_map(expr: AliasMap) -> list[AliasPath]:
    paths: list[AliasPath] = []
    for key, value in expr.entries:
        if value is True:
            paths.append((key,))
            continue
        for sub in value:
            if sub is None:
                # Guard evaluated false: this sub-alias is deliberately omitted.
                continue
            if isinstance(sub, AliasMap):
                paths.extend((key,) + p for p in _expand_alias_map(sub))
            else:
                paths.append((key, sub))
    return paths


def expand(expr: Any) -> list[ExpandedPath]:
    """Expand one request item into catalog paths.

    - `AliasKey` / "name"             -> [("name",)]
    - `AliasMap` / {"k": ["a", "b"]}  -> [("k", "a"), ("k", "b")]
      (nested maps are walked recursively and prefixed with their key)
    - `CoordinateLiteral` / [lib, v]  -> [CoordinateLiteral(...)] (no lookup)
    - None / False                    -> []

    Raises:
        InvalidExpressionError: for any other shape.
    """
    item = parse_request_item(expr, where="expand")
    if item is None:
        return []
    if isinstance(item, AliasKey):
        return [(item.name,)]
    if isinstance(item, AliasMap):
        return list(_expand_alias_map(item))
    if isinstance(item, CoordinateLiteral):
        return [item]
    raise InvalidExpressionError(expr, where="expand")  # pragma: no cover


def expand_all(request: Any) -> list[ExpandedPath]:
    """Expand a whole request (sequence of items), preserving input order."""
    paths: list[ExpandedPath] = []
    for item in parse_request(request):
        paths.extend(expand(item))
    return paths


def _is_guarded_out(path: Any) -> bool:
    if path is None:
        return True
    if isinstance(path, CoordinateLiteral):
        return False
    return any(p is None for p in path)


def resolve_paths(
    catalog: Catalog,
    paths: Iterable[ExpandedPath | Sequence[Any] | None],
    *,
    expand_groups: bool = False,
) -> list[Coordinate]:
    """Look up already-expanded paths and concatenate their coordinates.

    `None` paths and paths with a `None` element are skipped. Identical alias
    paths are looked up once per call; a path element that is not a string
    raises `MissingAliasError`.
    """
    fetch = lookup_all if expand_groups else lookup
    cache: dict[AliasPath, tuple[Coordinate, ...]] = {}

    out: list[Coordinate] = []
    for path in paths:
        if _is_guarded_out(path):
            continue
        if isinstance(path, CoordinateLiteral):
            out.extend(path.coordinates)
            continue
        key = (path,) if isinstance(path, str) else tuple(path)
        if not all(isinstance(k, str) for k in key):
            raise MissingAliasError(key, "alias path elements must be strings")
        if key not in cache:
            cache[key] = fetch(catalog, key)
        out.extend(cache[key])
    return flatten_coordinates(out)


def resolve(catalog: Catalog, request: Any, *, expand_groups: bool = False) -> list[Coordinate]:
    """Resolve a request expression against `catalog`.

    Args:
        catalog: the dependency catalog.
        request: sequence of request items (alias names, alias maps,
            coordinate literals); see `depalias.core.model.parse_request`.
        expand_groups: when True a path ending on an alias group pulls every
            leaf of that group instead of failing.

    Returns:
        Flat list of coordinates in request order, duplicates retained.

    Raises:
        MissingAliasError: if any alias path cannot be resolved.
        InvalidExpressionError: if the request is malformed.
    """
    paths = expand_all(request)
    coords = resolve_paths(catalog, paths, expand_groups=expand_groups)
    logger.debug("resolved %d path(s) into %d coordinate(s)", len(paths), len(coords))
    return coords


def dep_version(catalog: Catalog, request: Any, library: str) -> str | None:
    """Version pinned for `library` by the resolved `request`, or None."""
    wanted = canonical_library_id(library)
    for coord in resolve(catalog, request):
        if coord.library_id == wanted:
            return coord.version
    return None


def join_keys(path: Sequence[Any]) -> str:
    """Join an alias path into one name: ("boot", "cljs") -> "boot-cljs"."""
    return "-".join(str(p).lstrip(":") for p in path)


__all__ = [
    "ExpandedPath",
    "dep_version",
    "expand",
    "expand_all",
    "join_keys",
    "resolve",
    "resolve_paths",
]
