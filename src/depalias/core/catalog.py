"""Dependency catalog: a static tree of alias groups and coordinate lists.

A catalog node is a tagged variant:

- `Group`: ordered mapping alias name -> node
- `Leaf`: tuple of `Coordinate` for a single leaf alias

Built once from plain nested data (see `catalog_from_data`) and read-only
thereafter: nodes are frozen and groups expose read-only mappings, so a
catalog can be shared freely between threads.

Lookup rules:
- every key of the path must exist, in sequence (no partial-match fallback)
- the path must end on a `Leaf`; empty paths and paths ending on a group are
  invalid lookups (`lookup_all` is the opt-in exception for whole groups)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Sequence, Union

from depalias.core.errors import MissingAliasError
from depalias.core.model import AliasPath, Coordinate, flatten_coordinates


@dataclass(frozen=True)
class Leaf:
    coordinates: tuple[Coordinate, ...] = ()


@dataclass(frozen=True)
class Group:
    children: Mapping[str, "CatalogNode"] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", MappingProxyType(dict(self.children)))


CatalogNode = Union[Group, Leaf]


def _group_from_data(value: Mapping[Any, Any], *, where: str) -> Group:
    children: dict[str, CatalogNode] = {}
    for key, sub in value.items():
        if not isinstance(key, str) or not key.strip():
            raise ValueError(f"{where}: alias names must be non-empty strings, got {key!r}")
        k = key.strip().lstrip(":")
        if k in children:
            raise ValueError(f"{where}: duplicate alias {k!r}")
        children[k] = _node_from_data(sub, where=f"{where}.{k}")
    return Group(children)


def _node_from_data(value: Any, *, where: str) -> CatalogNode:
    if isinstance(value, (Group, Leaf)):
        return value
    if isinstance(value, Mapping):
        return _group_from_data(value, where=where)
    if isinstance(value, (list, tuple)):
        # Leaves may nest lists of coordinates; flatten depth-first once, here.
        return Leaf(tuple(flatten_coordinates(value, where=where)))
    raise ValueError(f"{where}: expected alias group (object) or coordinate list (array), got {type(value).__name__}")


@dataclass(frozen=True)
class Catalog:
    """Root of a dependency catalog."""

    root: Group = field(default_factory=Group)

    def node(self, path: Sequence[Any]) -> CatalogNode | None:
        """Return the node at `path` or None; the empty path is the root group."""
        current: CatalogNode = self.root
        for key in path:
            if not isinstance(current, Group):
                return None
            nxt = current.children.get(key) if isinstance(key, str) else None
            if nxt is None:
                return None
            current = nxt
        return current

    def iter_leaves(self, prefix: AliasPath = ()) -> Iterator[tuple[AliasPath, Leaf]]:
        """Yield `(path, leaf)` for every leaf under `prefix`, depth-first in catalog order."""
        start = self.node(prefix)
        if start is None:
            return
        stack: list[tuple[AliasPath, CatalogNode]] = [(tuple(prefix), start)]
        while stack:
            path, node = stack.pop()
            if isinstance(node, Leaf):
                yield path, node
                continue
            for key in reversed(list(node.children)):
                stack.append((path + (key,), node.children[key]))

    def leaf_paths(self) -> list[AliasPath]:
        return [path for path, _ in self.iter_leaves()]

    def keys(self) -> list[str]:
        return list(self.root.children)

    def __contains__(self, path: object) -> bool:
        if isinstance(path, str):
            path = (path,)
        if not isinstance(path, (list, tuple)):
            return False
        return isinstance(self.node(path), Leaf) and len(path) > 0

    def __len__(self) -> int:
        return sum(1 for _ in self.iter_leaves())

    def to_data(self) -> dict[str, Any]:
        """Plain nested data (dicts / coordinate arrays) in catalog order."""
        return _node_to_data(self.root)


def _node_to_data(node: CatalogNode) -> Any:
    if isinstance(node, Leaf):
        return [c.to_data() for c in node.coordinates]
    return {k: _node_to_data(v) for k, v in node.children.items()}


def catalog_from_data(data: Any) -> Catalog:
    """Build a `Catalog` from plain nested data (eg a parsed JSON/YAML document).

    Mappings become alias groups; arrays become leaves (nested arrays of
    coordinates are flattened depth-first). A leading ':' on alias names is
    dropped so EDN-style keyword spellings map onto the same catalog.
    """
    if isinstance(data, Catalog):
        return data
    if data is None:
        return Catalog()
    if not isinstance(data, Mapping):
        raise ValueError(f"catalog: expected JSON object at top level, got {type(data).__name__}")
    return Catalog(root=_group_from_data(data, where="catalog"))


def _require_catalog(catalog: Any, *, fn: str) -> Catalog:
    if not isinstance(catalog, Catalog):
        raise TypeError(f"{fn}: catalog must be a Catalog, got {type(catalog).__name__}")
    return catalog


def _walk(catalog: Catalog, path: Sequence[Any]) -> CatalogNode:
    path = tuple(path)
    if not path:
        raise MissingAliasError(path, "empty alias path")

    current: CatalogNode = catalog.root
    for i, key in enumerate(path):
        if isinstance(current, Leaf):
            raise MissingAliasError(path, f"{path[i - 1]!r} is a coordinate list, not an alias group")
        nxt = current.children.get(key) if isinstance(key, str) else None
        if nxt is None:
            where = "catalog" if i == 0 else repr(path[i - 1])
            raise MissingAliasError(path, f"no alias {key!r} under {where}")
        current = nxt
    return current


def lookup(catalog: Catalog, path: Sequence[Any]) -> tuple[Coordinate, ...]:
    """Return the coordinate list at `path`.

    Raises:
        MissingAliasError: if any key is missing, the path is empty, or the
            path ends on an alias group rather than a coordinate list.
    """
    catalog = _require_catalog(catalog, fn="lookup")
    node = _walk(catalog, path)
    if isinstance(node, Group):
        raise MissingAliasError(path, "path ends on an alias group, not a coordinate list")
    return node.coordinates


def lookup_all(catalog: Catalog, path: Sequence[Any]) -> tuple[Coordinate, ...]:
    """Like `lookup`, but a path ending on a group yields all of its leaves.

    Leaves are concatenated depth-first in catalog order.
    """
    catalog = _require_catalog(catalog, fn="lookup_all")
    node = _walk(catalog, path)
    if isinstance(node, Leaf):
        return node.coordinates
    out: list[Coordinate] = []
    for _, leaf in catalog.iter_leaves(tuple(path)):
        out.extend(leaf.coordinates)
    return tuple(out)


__all__ = [
    "Catalog",
    "CatalogNode",
    "Group",
    "Leaf",
    "catalog_from_data",
    "lookup",
    "lookup_all",
]
