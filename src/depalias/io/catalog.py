"""Catalog document I/O (JSON / YAML).

Document shape: nested objects are alias groups, arrays are coordinate lists.

{
  "aero": [["aero", "1.0.0-beta2"]],
  "boot": {
    "cljs": [["pleasetrythisathome/boot-cljs", "1.9.198-SNAPSHOT"]],
    "reload": [["adzerk/boot-reload", "0.5.1"]]
  },
  "aws": [["com.amazonaws/aws-java-sdk", "1.9.39",
           "exclusions", ["commons-logging"]]]
}

Rules:
- Catalog construction/validation happens via `depalias.core.catalog.catalog_from_data`.
- Key order is the document order (JSON objects and YAML mappings both keep it).
- Writer is stable: UTF-8, `indent=2`, catalog key order, newline-terminated.
- The bundled default catalog is parsed once per process and cached.
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

from depalias.core.catalog import Catalog, catalog_from_data

DEFAULT_CATALOG_RESOURCE = "catalog.json"

CATALOG_SUFFIXES = (".json", ".yaml", ".yml")


def _load_document(path: Path) -> Any:
    suffix = path.suffix.lower()
    if suffix not in CATALOG_SUFFIXES:
        raise ValueError(f"{path}: unsupported catalog format {path.suffix!r} (expected one of {list(CATALOG_SUFFIXES)})")
    with path.open("r", encoding="utf-8") as f:
        if suffix == ".json":
            return json.load(f)
        return yaml.safe_load(f)


def read_catalog(path: str | Path) -> Catalog:
    """Read a catalog document (.json, .yaml, .yml) and build a `Catalog`.

    Hard errors:
    - unsupported file suffix
    - top-level must be an object (an empty YAML file is an empty catalog)
    - malformed groups/coordinates (raised by `catalog_from_data`)
    """
    p = Path(path)
    data = _load_document(p)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"{p.name}: expected object at top level, got {type(data).__name__}")
    return catalog_from_data(data)


def catalog_to_json_dict(catalog: Catalog) -> dict[str, Any]:
    """Convert a `Catalog` to JSON-ready nested dicts/lists."""
    return catalog.to_data()


def write_catalog_json(catalog: Catalog, path: str | Path) -> None:
    """Write a catalog as JSON deterministically (catalog key order kept)."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(catalog_to_json_dict(catalog), indent=2)
    if not text.endswith("\n"):
        text += "\n"
    p.write_text(text, encoding="utf-8")


@lru_cache(maxsize=None)
def load_default_catalog() -> Catalog:
    """The catalog bundled with depalias (`depalias/data/catalog.json`)."""
    text = resources.files("depalias.data").joinpath(DEFAULT_CATALOG_RESOURCE).read_text(encoding="utf-8")
    return catalog_from_data(json.loads(text))


__all__ = [
    "CATALOG_SUFFIXES",
    "DEFAULT_CATALOG_RESOURCE",
    "catalog_to_json_dict",
    "load_default_catalog",
    "read_catalog",
    "write_catalog_json",
]
