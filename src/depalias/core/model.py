"""Core data model for depalias.

- `Coordinate`: a pinned dependency (library, version, exclusions, scope).
- Request expression variants: `AliasKey`, `AliasMap`, `CoordinateLiteral`.
- `AliasPath`: keys descending through the catalog, eg ("boot", "cljs").

Raw data (JSON/YAML documents, literal Python values written in task
definitions) is normalized into these frozen types once, at the boundary.
Downstream code (expansion, lookup, merging) dispatches on the variant types
and never re-inspects raw shapes.

This module must not import io/env/cli.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, Iterable, Iterator, Union

from depalias.core.errors import InvalidExpressionError


# Keep these as plain assignments (no typing.TypeAlias).
AliasPath = tuple[str, ...]

# Option keys accepted in the sequence form `[library, version, key, value, ...]`.
COORDINATE_OPTIONS = ("exclusions", "scope")


def _norm_str(value: Any, *, where: str) -> str:
    """Normalize a required string: strip and reject empty/whitespace."""
    if not isinstance(value, str):
        raise ValueError(f"{where}: expected str, got {type(value).__name__}")
    s = value.strip()
    if not s:
        raise ValueError(f"{where}: must be a non-empty string")
    return s


def _ensure_iterable_not_string(value: Any, *, where: str) -> Iterable[Any]:
    if value is None:
        return []
    if isinstance(value, (str, bytes)):
        raise ValueError(f"{where}: expected a list/tuple, got {type(value).__name__}")
    try:
        iter(value)
    except TypeError as e:
        raise ValueError(f"{where}: expected an iterable") from e
    return value


def _unique_in_order(values: Iterable[str]) -> tuple[str, ...]:
    seen: set[str] = set()
    out: list[str] = []
    for v in values:
        if v not in seen:
            seen.add(v)
            out.append(v)
    return tuple(out)


def canonical_library_id(name: str) -> str:
    """Canonical library identity: an ungrouped `foo` is the artifact `foo/foo`."""
    n = _norm_str(name, where="library")
    if "/" in n:
        return n
    return f"{n}/{n}"


@dataclass(frozen=True)
class Coordinate:
    """A concrete, pinned dependency coordinate.

    Canonicalization:
      - library/version/scope are stripped; empty strings hard-error.
      - exclusions: stripped, de-duplicated, definition order kept.

    Identity for "same dependency" purposes is `library_id`, not equality of
    the whole value (two versions of one library are the same dependency).
    """

    library: str
    version: str
    exclusions: tuple[str, ...] = ()
    scope: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "library", _norm_str(self.library, where="Coordinate.library"))
        object.__setattr__(self, "version", _norm_str(self.version, where="Coordinate.version"))
        excl = _ensure_iterable_not_string(self.exclusions, where="Coordinate.exclusions")
        object.__setattr__(
            self,
            "exclusions",
            _unique_in_order(_norm_str(e, where="Coordinate.exclusions[*]") for e in excl),
        )
        if self.scope is not None:
            object.__setattr__(self, "scope", _norm_str(self.scope, where="Coordinate.scope"))

    @property
    def library_id(self) -> str:
        return canonical_library_id(self.library)

    def with_scope(self, scope: str | None) -> "Coordinate":
        return replace(self, scope=scope)

    def to_data(self) -> list[Any]:
        """Sequence form `[library, version, "exclusions", [...], "scope", ...]`."""
        out: list[Any] = [self.library, self.version]
        if self.exclusions:
            out.extend(["exclusions", list(self.exclusions)])
        if self.scope is not None:
            out.extend(["scope", self.scope])
        return out

    def __str__(self) -> str:
        return f"{self.library} {self.version}"


def _option_key(value: Any, *, where: str) -> str:
    key = _norm_str(value, where=where).lstrip(":")
    if key not in COORDINATE_OPTIONS:
        raise ValueError(f"{where}: unknown coordinate option {key!r} (expected one of {list(COORDINATE_OPTIONS)})")
    return key


def parse_coordinate(raw: Any, *, where: str = "coordinate") -> Coordinate:
    """Parse one raw coordinate.

    Accepted shapes:
      - `Coordinate` (returned unchanged)
      - `[library, version, key, value, ...]` with keys from COORDINATE_OPTIONS
      - `{"library": ..., "version": ..., "exclusions": [...], "scope": ...}`
    """
    if isinstance(raw, Coordinate):
        return raw

    if isinstance(raw, Mapping):
        extras = [k for k in raw if k not in ("library", "version") + COORDINATE_OPTIONS]
        if extras:
            raise ValueError(f"{where}: unexpected keys: {sorted(map(str, extras))}")
        if "version" not in raw:
            raise ValueError(f"{where}: missing required key 'version'")
        return Coordinate(
            library=_norm_str(raw.get("library"), where=f"{where}.library"),
            version=_norm_str(raw.get("version"), where=f"{where}.version"),
            exclusions=tuple(_ensure_iterable_not_string(raw.get("exclusions"), where=f"{where}.exclusions")),
            scope=raw.get("scope"),
        )

    if not isinstance(raw, (list, tuple)):
        raise ValueError(f"{where}: expected [library, version, ...] array, got {type(raw).__name__}")
    if len(raw) < 2:
        raise ValueError(f"{where}: expected at least [library, version], got {len(raw)} item(s)")

    library = _norm_str(raw[0], where=f"{where}[0]")
    version = _norm_str(raw[1], where=f"{where}[1]")
    rest = list(raw[2:])
    if len(rest) % 2:
        raise ValueError(f"{where}: options must be key/value pairs, got odd count {len(rest)}")

    options: dict[str, Any] = {}
    for i in range(0, len(rest), 2):
        key = _option_key(rest[i], where=f"{where}[{i + 2}]")
        options[key] = rest[i + 1]

    return Coordinate(
        library=library,
        version=version,
        exclusions=tuple(_ensure_iterable_not_string(options.get("exclusions"), where=f"{where}.exclusions")),
        scope=options.get("scope"),
    )


def _is_coordinate_like(value: Any) -> bool:
    """A single coordinate: a Coordinate, or a sequence whose first element is an identifier."""
    if isinstance(value, Coordinate):
        return True
    if isinstance(value, Mapping):
        return "library" in value
    return isinstance(value, (list, tuple)) and len(value) > 0 and isinstance(value[0], str)


def _walk_coordinates(items: Any, *, where: str) -> Iterator[Coordinate]:
    if _is_coordinate_like(items):
        yield parse_coordinate(items, where=where)
        return
    if isinstance(items, Mapping):
        raise ValueError(f"{where}: expected coordinate or list of coordinates, got object without 'library'")
    for i, item in enumerate(_ensure_iterable_not_string(items, where=where)):
        if item is None:
            continue
        yield from _walk_coordinates(item, where=f"{where}[{i}]")


def flatten_coordinates(items: Any, *, where: str = "coordinates") -> list[Coordinate]:
    """Depth-first flatten of (possibly nested) coordinate collections.

    A coordinate is recognised by its literal identifier in first position;
    anything else iterable is descended into. `None` entries are skipped.
    """
    return list(_walk_coordinates(items, where=where))


# ----------------------------
# Request expressions
# ----------------------------


@dataclass(frozen=True)
class AliasKey:
    """A bare alias: expands to the one-element path `(name,)`."""

    name: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", _norm_str(self.name, where="AliasKey.name").lstrip(":"))


@dataclass(frozen=True)
class AliasMap:
    """Mapping alias -> sub-aliases, entries kept in definition order.

    Each entry value is either:
      - `True`: include the key itself, path `(key,)`
      - a tuple of sub-items, each a name (`str`), a nested `AliasMap` or
        `None` (a guard that evaluated false; omitted on expansion)
    """

    entries: tuple[tuple[str, Union[bool, tuple[Any, ...]]], ...]


@dataclass(frozen=True)
class CoordinateLiteral:
    """Already-resolved coordinates passed through expansion without lookup."""

    coordinates: tuple[Coordinate, ...]


RequestItem = Union[AliasKey, AliasMap, CoordinateLiteral]
Request = tuple[RequestItem, ...]


def _is_guard(value: Any) -> bool:
    # `None`/`False` stand for "condition not met": the path is omitted.
    return value is None or value is False


def _parse_sub_item(value: Any, *, where: str) -> Any:
    if _is_guard(value):
        return None
    if isinstance(value, AliasKey):
        return value.name
    if isinstance(value, str):
        if not value.strip():
            raise InvalidExpressionError(value, where=where, detail="alias name must be a non-empty string")
        return value.strip().lstrip(":")
    if isinstance(value, AliasMap):
        return value
    if isinstance(value, Mapping):
        return parse_alias_map(value, where=where)
    raise InvalidExpressionError(
        value,
        where=where,
        detail=f"expected sub-alias name or nested alias map, got {type(value).__name__}",
    )


def parse_alias_map(data: Mapping[str, Any], *, where: str = "request") -> AliasMap:
    """Normalize a raw mapping into an `AliasMap`."""
    entries: list[tuple[str, Union[bool, tuple[Any, ...]]]] = []
    for key, value in data.items():
        if not isinstance(key, str) or not key.strip():
            raise InvalidExpressionError(key, where=where, detail="alias map keys must be non-empty strings")
        k = key.strip().lstrip(":")
        here = f"{where}.{k}"
        if value is True:
            entries.append((k, True))
        elif _is_guard(value):
            entries.append((k, ()))
        elif isinstance(value, (AliasMap, Mapping)):
            entries.append((k, (_parse_sub_item(value, where=here),)))
        elif isinstance(value, (list, tuple)):
            entries.append((k, tuple(_parse_sub_item(v, where=f"{here}[{i}]") for i, v in enumerate(value))))
        else:
            raise InvalidExpressionError(
                value,
                where=here,
                detail=f"expected list of sub-aliases, nested map or boolean guard, got {type(value).__name__}",
            )
    return AliasMap(entries=tuple(entries))


def parse_request_item(value: Any, *, where: str = "request") -> RequestItem | None:
    """Normalize one raw request item; `None` means the item is guarded out."""
    if _is_guard(value):
        return None
    if isinstance(value, (AliasKey, AliasMap, CoordinateLiteral)):
        return value
    if isinstance(value, Coordinate):
        return CoordinateLiteral(coordinates=(value,))
    if isinstance(value, str):
        if not value.strip():
            raise InvalidExpressionError(value, where=where, detail="alias name must be a non-empty string")
        return AliasKey(value)
    if isinstance(value, Mapping):
        return parse_alias_map(value, where=where)
    if isinstance(value, (list, tuple)):
        try:
            coords = flatten_coordinates(value, where=where)
        except ValueError as e:
            raise InvalidExpressionError(value, where=where, detail=f"invalid coordinate literal ({e})") from e
        return CoordinateLiteral(coordinates=tuple(coords))
    raise InvalidExpressionError(value, where=where)


def parse_request(data: Any) -> Request:
    """Normalize a raw request expression into a tuple of request items.

    A request is a sequence of items. A single alias name or alias map is
    accepted as shorthand for a one-item request; `None` is the empty request.
    """
    if data is None:
        return ()
    if isinstance(data, (str, Mapping, AliasKey, AliasMap, CoordinateLiteral, Coordinate)):
        data = [data]
    elif not isinstance(data, (list, tuple)):
        raise InvalidExpressionError(data, where="request", detail="expected a sequence of request items")

    items: list[RequestItem] = []
    for i, value in enumerate(data):
        item = parse_request_item(value, where=f"request[{i}]")
        if item is not None:
            items.append(item)
    return tuple(items)


__all__ = [
    "AliasKey",
    "AliasMap",
    "AliasPath",
    "COORDINATE_OPTIONS",
    "Coordinate",
    "CoordinateLiteral",
    "Request",
    "RequestItem",
    "canonical_library_id",
    "flatten_coordinates",
    "parse_alias_map",
    "parse_coordinate",
    "parse_request",
    "parse_request_item",
]
