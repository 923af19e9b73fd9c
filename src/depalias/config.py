"""Settings for depalias: defaults, override files, environment variables.

Resolution order (later wins):
1. built-in defaults (`DEFAULT_SETTINGS`)
2. a defaults file (optional; must exist when given)
3. a local override file (optional; skipped when absent)
4. environment variables `DEPALIAS_CATALOG`, `DEPALIAS_SCOPE`,
   `DEPALIAS_LOG_LEVEL`

Files are YAML (.yaml/.yml) or JSON (.json) objects. Layers are combined
with `deep_merge`: dicts merge by key, lists and scalars are replaced, and a
type conflict between layers is an error.
"""

from __future__ import annotations

import json
import os
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from depalias.core.catalog import Catalog
from depalias.core.errors import ConfigError

DEFAULT_SETTINGS: dict[str, Any] = {
    "catalog_path": None,
    "default_scope": "test",
    "pod_workers": 4,
    "log_level": "WARNING",
}

ENV_VARS: dict[str, str] = {
    "DEPALIAS_CATALOG": "catalog_path",
    "DEPALIAS_SCOPE": "default_scope",
    "DEPALIAS_LOG_LEVEL": "log_level",
}


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge `override` into a copy of `base`; inputs are not mutated.

    Raises:
        ConfigError: if a key holds different types in base and override.
    """
    result: dict[str, Any] = deepcopy(dict(base))
    for key, value in override.items():
        if key not in result or result[key] is None or value is None:
            result[key] = deepcopy(value)
            continue
        current = result[key]
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            result[key] = deep_merge(current, value)
            continue
        if isinstance(value, list):
            result[key] = deepcopy(value)
            continue
        if type(current) is not type(value):
            raise ConfigError(f"type conflict for key {key!r}: {type(current).__name__} vs {type(value).__name__}")
        result[key] = deepcopy(value)
    return result


def _load_file(path: Path) -> dict[str, Any]:
    suffix = path.suffix.lower()
    with path.open("r", encoding="utf-8") as f:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(f)
        elif suffix == ".json":
            data = json.load(f)
        else:
            raise ConfigError(f"{path}: unsupported settings format {path.suffix!r}")
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: settings root must be an object, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class Settings:
    catalog_path: Optional[Path] = None
    default_scope: Optional[str] = "test"
    pod_workers: int = 4
    log_level: str = "WARNING"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Settings":
        unknown = sorted(set(data) - set(DEFAULT_SETTINGS))
        if unknown:
            raise ConfigError(f"unknown settings: {unknown}")
        merged = {**DEFAULT_SETTINGS, **data}

        catalog_path = merged["catalog_path"]
        scope = merged["default_scope"]
        try:
            workers = int(merged["pod_workers"])
        except (TypeError, ValueError) as e:
            raise ConfigError(f"pod_workers: expected int, got {merged['pod_workers']!r}") from e
        if isinstance(merged["pod_workers"], bool) or workers < 1:
            raise ConfigError(f"pod_workers: must be a positive int, got {merged['pod_workers']!r}")

        return cls(
            catalog_path=Path(catalog_path) if catalog_path else None,
            # An empty scope string in a file or env var means "merge unscoped".
            default_scope=(str(scope).strip() or None) if scope is not None else None,
            pod_workers=workers,
            log_level=str(merged["log_level"]).strip().upper() or "WARNING",
        )

    def load_catalog(self) -> Catalog:
        """The configured catalog, or the bundled default when none is set."""
        from depalias.io.catalog import load_default_catalog, read_catalog

        if self.catalog_path is None:
            return load_default_catalog()
        return read_catalog(self.catalog_path)

    def configure_pods(self) -> None:
        """Size the shared pod executor used by `isolated_environment` to `pod_workers`."""
        from depalias.env.pods import configure_pod_executor

        configure_pod_executor(self.pod_workers)


def load_settings(
    *,
    defaults_path: str | Path | None = None,
    local_path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Settings:
    """Resolve effective settings; see module docstring for precedence.

    Raises:
        ConfigError: missing defaults file, unsupported format, non-object
            root, merge type conflict or invalid values.
    """
    effective: dict[str, Any] = dict(DEFAULT_SETTINGS)

    if defaults_path is not None:
        p = Path(defaults_path)
        if not p.exists():
            raise ConfigError(f"settings file not found: {p}")
        effective = deep_merge(effective, _load_file(p))

    if local_path is not None:
        p = Path(local_path)
        if p.exists():
            effective = deep_merge(effective, _load_file(p))

    environ = os.environ if env is None else env
    for var, key in ENV_VARS.items():
        if var in environ:
            effective[key] = environ[var]

    return Settings.from_dict(effective)


__all__ = [
    "DEFAULT_SETTINGS",
    "ENV_VARS",
    "Settings",
    "deep_merge",
    "load_settings",
]
