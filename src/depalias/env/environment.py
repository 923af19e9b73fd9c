"""Build environment: the set of dependencies active in a running build.

`BuildEnvironment` is an explicit object handed around by the build
orchestrator (there is no module-level global). Its only mutation, `merge`,
is serialized by an interior lock so concurrent resolutions cannot lose
updates. Everything else in this module is a pure function over immutable
coordinates.

Merge semantics:
- a coordinate is "already loaded" when its `library_id` is active, whatever
  the version; merging never replaces or upgrades an active dependency
- merging the same coordinates twice leaves the active set unchanged
- merging an empty list is a no-op
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import Any, Iterable

from depalias.core.catalog import Catalog
from depalias.core.errors import AlreadyScopedError
from depalias.core.model import Coordinate, canonical_library_id
from depalias.core.resolve import resolve

logger = logging.getLogger(__name__)


def _library_ids(active: Iterable[Any]) -> set[str]:
    ids: set[str] = set()
    for item in active:
        if isinstance(item, Coordinate):
            ids.add(item.library_id)
        else:
            ids.add(canonical_library_id(item))
    return ids


def filter_new(active: Iterable[Any], coords: Iterable[Coordinate]) -> list[Coordinate]:
    """Coordinates from `coords` whose library is not in `active`, order kept.

    `active` may hold library names ("x", "org/x") or coordinates.
    """
    ids = _library_ids(active)
    return [c for c in coords if c.library_id not in ids]


def distinct(coords: Iterable[Coordinate]) -> list[Coordinate]:
    """Drop repeated libraries; the first occurrence wins."""
    seen: set[str] = set()
    out: list[Coordinate] = []
    for c in coords:
        if c.library_id in seen:
            continue
        seen.add(c.library_id)
        out.append(c)
    return out


def scope_as(coords: Iterable[Coordinate], scope: str) -> list[Coordinate]:
    """Return copies of `coords` tagged with `scope`.

    Input is assumed unscoped; a coordinate that already carries a scope is a
    precondition violation and is never silently overwritten.

    Raises:
        ValueError: if `scope` is not a non-empty string.
        AlreadyScopedError: for the first coordinate that already has a scope.
    """
    tag = scope.strip() if isinstance(scope, str) else ""
    if not tag:
        raise ValueError(f"scope_as: scope must be a non-empty string, got {scope!r}")
    coords = list(coords)
    for c in coords:
        if c.scope is not None:
            raise AlreadyScopedError(c, tag)
    return [c.with_scope(tag) for c in coords]


class BuildEnvironment:
    """Mutable, thread-safe holder of the active dependency list.

    Args:
        dependencies: coordinates active from the start (deduplicated by library).
        settings: free-form build configuration carried along (paths, flags);
            copied on construction and on `fork`, never interpreted here.
        name: label used in logs.
    """

    def __init__(
        self,
        dependencies: Iterable[Coordinate] = (),
        *,
        settings: Mapping[str, Any] | None = None,
        name: str = "build",
    ) -> None:
        self.name = name
        self._lock = threading.RLock()
        self._dependencies: list[Coordinate] = distinct(dependencies)
        self._ids: set[str] = {c.library_id for c in self._dependencies}
        self._settings: dict[str, Any] = dict(settings or {})

    def __repr__(self) -> str:
        return f"BuildEnvironment(name={self.name!r}, dependencies={len(self)})"

    def __len__(self) -> int:
        with self._lock:
            return len(self._dependencies)

    @property
    def dependencies(self) -> tuple[Coordinate, ...]:
        """Snapshot of the active coordinates, in merge order."""
        with self._lock:
            return tuple(self._dependencies)

    @property
    def settings(self) -> dict[str, Any]:
        with self._lock:
            return dict(self._settings)

    def active_libraries(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._ids)

    def is_loaded(self, dep: Coordinate | str) -> bool:
        lib = dep.library_id if isinstance(dep, Coordinate) else canonical_library_id(dep)
        with self._lock:
            return lib in self._ids

    def _merge_locked(self, coords: Iterable[Coordinate]) -> tuple[Coordinate, ...]:
        added: list[Coordinate] = []
        for c in coords:
            if c.library_id in self._ids:
                continue
            self._ids.add(c.library_id)
            self._dependencies.append(c)
            added.append(c)
        return tuple(added)

    def merge(self, coords: Iterable[Coordinate]) -> tuple[Coordinate, ...]:
        """Add coordinates whose library is not active yet; return those added."""
        coords = list(coords)
        if not coords:
            return ()
        with self._lock:
            added = self._merge_locked(coords)
        logger.debug("%s: merged %d of %d coordinate(s)", self.name, len(added), len(coords))
        return added

    def merge_new(self, coords: Iterable[Coordinate], *, scope: str | None = None) -> tuple[Coordinate, ...]:
        """Filter against the active set, scope what is left, and merge, atomically.

        Raises:
            AlreadyScopedError: if `scope` is given and a new coordinate is already scoped.
        """
        coords = list(coords)
        with self._lock:
            fresh = distinct(filter_new(self._ids, coords))
            if not fresh:
                return ()
            if scope is not None:
                fresh = scope_as(fresh, scope)
            added = self._merge_locked(fresh)
        logger.debug("%s: merged %d new coordinate(s) (scope=%s)", self.name, len(added), scope)
        return added

    def fork(self, extra: Iterable[Coordinate] = (), *, name: str | None = None) -> "BuildEnvironment":
        """Independent copy of this environment with `extra` merged in.

        The copy shares nothing mutable with `self`.
        """
        with self._lock:
            deps = list(self._dependencies)
            settings = dict(self._settings)
        child = BuildEnvironment(deps, settings=settings, name=name or f"{self.name}-fork")
        child.merge(extra)
        return child


def merge(env: BuildEnvironment, coords: Iterable[Coordinate]) -> tuple[Coordinate, ...]:
    """Merge `coords` into `env`; see `BuildEnvironment.merge`."""
    return env.merge(coords)


def ensure_deps(
    env: BuildEnvironment,
    catalog: Catalog,
    request: Any,
    *,
    scope: str | None = "test",
) -> tuple[Coordinate, ...]:
    """Resolve `request` and merge whatever is not loaded yet into `env`.

    The default scope mirrors build-time-only tooling (test runners, compilers
    pulled in by a task); pass `scope=None` to merge unscoped.

    Raises:
        MissingAliasError: if the request does not resolve; `env` is untouched.
    """
    coords = resolve(catalog, request)
    added = env.merge_new(coords, scope=scope)
    if added:
        logger.info("%s: added %s", env.name, ", ".join(str(c) for c in added))
    return added


__all__ = [
    "BuildEnvironment",
    "distinct",
    "ensure_deps",
    "filter_new",
    "merge",
    "scope_as",
]
