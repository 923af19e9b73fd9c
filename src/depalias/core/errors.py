"""Error taxonomy for depalias.

Every error raised deliberately by the resolver, the catalog and the build
environment derives from `DepaliasError`, so callers (build orchestration)
can catch the whole family in one place. Each concrete error also derives
from the closest builtin (`LookupError`/`ValueError`) so plain Python code
handling builtins keeps working.

Errors carry their diagnostic payload as attributes; messages are
deterministic and suitable for test assertions.
"""

from __future__ import annotations

from typing import Any


class DepaliasError(Exception):
    """Base class for all depalias errors."""


def _format_path(path: Any) -> str:
    if isinstance(path, (list, tuple)):
        return "[" + ", ".join(repr(p) for p in path) + "]"
    return repr(path)


class MissingAliasError(DepaliasError, LookupError):
    """Raised when an alias path does not resolve to a coordinate list.

    Attributes:
        path: the full failing alias path (tuple of keys).
        reason: short human readable cause (missing key, ends on a group, ...).
    """

    def __init__(self, path: Any, reason: str = "no such alias") -> None:
        self.path = tuple(path) if isinstance(path, (list, tuple)) else (path,)
        self.reason = reason
        super().__init__(f"missing dep: {_format_path(self.path)} ({reason})")


class InvalidExpressionError(DepaliasError, ValueError):
    """Raised for a request expression that is not an alias, alias map or coordinate literal."""

    def __init__(self, value: Any, *, where: str = "request", detail: str | None = None) -> None:
        self.value = value
        self.where = where
        msg = detail or f"expected alias name, alias map or coordinate literal, got {type(value).__name__}"
        super().__init__(f"{where}: {msg}: {value!r}")


class AlreadyScopedError(DepaliasError, ValueError):
    """Raised by scoping when a coordinate already carries a scope."""

    def __init__(self, coordinate: Any, scope: str) -> None:
        self.coordinate = coordinate
        self.scope = scope
        super().__init__(
            f"cannot scope {coordinate.library!r} as {scope!r}: already scoped as {coordinate.scope!r}"
        )


class ConfigError(DepaliasError, ValueError):
    """Raised when settings cannot be loaded or merged."""


__all__ = [
    "AlreadyScopedError",
    "ConfigError",
    "DepaliasError",
    "InvalidExpressionError",
    "MissingAliasError",
]
