"""Tabular (pandas) views of catalogs and coordinate lists.

The resolver itself works on frozen dataclasses; these tables exist for
reporting: listing a catalog, printing resolved sets, and spotting libraries
pinned to different versions by different aliases. Column order and row order
are canonical so the output is stable in tests and on the command line.

Row order:
- `catalog_table`: catalog definition order (alias leaves depth-first, then
  position within the leaf); the `position` column makes it explicit
- `coordinates_table`: input order
- `version_divergences`: sorted by `library_id`
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from depalias.core.catalog import Catalog
from depalias.core.model import Coordinate

if TYPE_CHECKING:  # pragma: no cover
    import pandas as pd


# ----------------------------
# Canonical schema descriptors
# ----------------------------

TABLE_SCHEMAS: dict[str, dict[str, str]] = {
    "catalog": {
        "alias": "string",
        "position": "Int64",
        "library": "string",
        "library_id": "string",
        "version": "string",
        "exclusions": "string",
        "scope": "string",
    },
    "coordinates": {
        "library": "string",
        "library_id": "string",
        "version": "string",
        "exclusions": "string",
        "scope": "string",
    },
    "divergences": {
        "library_id": "string",
        "versions": "string",
        "aliases": "string",
    },
}

TABLE_COLUMN_ORDER: dict[str, list[str]] = {
    name: list(schema.keys()) for name, schema in TABLE_SCHEMAS.items()
}


def _coordinate_row(coord: Coordinate) -> dict[str, object]:
    return {
        "library": coord.library,
        "library_id": coord.library_id,
        "version": coord.version,
        "exclusions": ",".join(coord.exclusions) if coord.exclusions else None,
        "scope": coord.scope,
    }


def _frame(rows: list[dict[str, object]], *, table: str) -> "pd.DataFrame":
    import pandas as pd

    columns = TABLE_COLUMN_ORDER[table]
    df = pd.DataFrame(rows, columns=columns)
    for col, dtype in TABLE_SCHEMAS[table].items():
        df[col] = df[col].astype(dtype)
    return df.reset_index(drop=True)


def catalog_table(catalog: Catalog) -> "pd.DataFrame":
    """One row per (leaf alias, coordinate), in catalog definition order."""
    rows: list[dict[str, object]] = []
    for path, leaf in catalog.iter_leaves():
        alias = "/".join(path)
        for i, coord in enumerate(leaf.coordinates):
            row = {"alias": alias, "position": i}
            row.update(_coordinate_row(coord))
            rows.append(row)
    return _frame(rows, table="catalog")


def coordinates_table(coords: Iterable[Coordinate]) -> "pd.DataFrame":
    """One row per coordinate, input order kept (duplicates included)."""
    return _frame([_coordinate_row(c) for c in coords], table="coordinates")


def version_divergences(catalog: Catalog) -> "pd.DataFrame":
    """Libraries pinned to more than one distinct version across the catalog.

    This is a report only; the resolver never reconciles versions.
    """
    df = catalog_table(catalog)
    if df.empty:
        return _frame([], table="divergences")

    rows: list[dict[str, object]] = []
    for lib, grp in df.groupby("library_id", sort=True):
        versions = sorted(set(grp["version"].tolist()))
        if len(versions) < 2:
            continue
        aliases = list(dict.fromkeys(grp["alias"].tolist()))
        rows.append(
            {
                "library_id": lib,
                "versions": ",".join(versions),
                "aliases": ",".join(aliases),
            }
        )
    return _frame(rows, table="divergences")


__all__ = [
    "TABLE_COLUMN_ORDER",
    "TABLE_SCHEMAS",
    "catalog_table",
    "coordinates_table",
    "version_divergences",
]
