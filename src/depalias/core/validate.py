"""Semantic validators for dependency catalogs.

Structural problems (wrong JSON types, malformed coordinates) are rejected
while the catalog is built (`depalias.core.catalog.catalog_from_data`). This
module enforces the semantic invariants on an already-built catalog:

- every alias group has at least one entry
- every leaf alias has at least one coordinate
- a leaf does not list the same library twice
- catalog coordinates are unscoped (scope is attached at merge time)
- a coordinate does not exclude its own library

Validation is explicit and deterministic so that failures are easy to debug
and tests can assert error messages.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from depalias.core.catalog import Catalog, Group, Leaf
from depalias.core.errors import DepaliasError
from depalias.core.model import AliasPath, canonical_library_id


@dataclass(frozen=True)
class Violation:
    alias: str
    message: str

    def __str__(self) -> str:  # pragma: no cover (covered indirectly by exception message)
        return f"{self.alias}: {self.message}"


class CatalogValidationError(DepaliasError, ValueError):
    """Aggregates multiple catalog validation failures.

    The message is stable and suitable for test assertions.
    """

    def __init__(self, violations: Iterable[Violation]):
        v = list(violations)
        if not v:
            super().__init__("catalog validation failed (no details)")
            self.violations = []
            return
        # Deterministic ordering for stable exception messages.
        v_sorted = sorted(v, key=lambda x: (x.alias, x.message))
        msg = "catalog validation failed:\n" + "\n".join(f"  - {item}" for item in v_sorted)
        super().__init__(msg)
        self.violations = v_sorted


def _alias_name(path: AliasPath) -> str:
    return "/".join(path) if path else "<root>"


def _check_group(path: AliasPath, group: Group, violations: list[Violation]) -> None:
    if not group.children:
        violations.append(Violation(_alias_name(path), "alias group is empty"))
    for key, child in group.children.items():
        sub = path + (key,)
        if isinstance(child, Group):
            _check_group(sub, child, violations)
        else:
            _check_leaf(sub, child, violations)


def _check_leaf(path: AliasPath, leaf: Leaf, violations: list[Violation]) -> None:
    alias = _alias_name(path)
    if not leaf.coordinates:
        violations.append(Violation(alias, "coordinate list is empty"))
        return

    seen: dict[str, int] = {}
    for i, coord in enumerate(leaf.coordinates):
        lib = coord.library_id
        if lib in seen:
            violations.append(
                Violation(alias, f"library {coord.library!r} listed more than once (positions {seen[lib]} and {i})")
            )
        else:
            seen[lib] = i
        if coord.scope is not None:
            violations.append(Violation(alias, f"coordinate {coord.library!r} must not carry a scope ({coord.scope!r})"))
        if any(canonical_library_id(e) == lib for e in coord.exclusions):
            violations.append(Violation(alias, f"coordinate {coord.library!r} excludes itself"))


def catalog_violations(catalog: Catalog) -> list[Violation]:
    """Return every violation in `catalog` (empty list when valid), sorted."""
    if not isinstance(catalog, Catalog):
        raise TypeError(f"catalog: expected Catalog, got {type(catalog).__name__}")
    violations: list[Violation] = []
    for key, child in catalog.root.children.items():
        if isinstance(child, Group):
            _check_group((key,), child, violations)
        else:
            _check_leaf((key,), child, violations)
    return sorted(violations, key=lambda x: (x.alias, x.message))


def validate_catalog(catalog: Catalog) -> None:
    """Validate semantic catalog invariants.

    Raises:
        CatalogValidationError: aggregating every violation found.
    """
    violations = catalog_violations(catalog)
    if violations:
        raise CatalogValidationError(violations)


__all__ = [
    "CatalogValidationError",
    "Violation",
    "catalog_violations",
    "validate_catalog",
]
