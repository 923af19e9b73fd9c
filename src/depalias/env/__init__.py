"""Build environment: active dependency set, merging and isolated pods."""

from __future__ import annotations

from .environment import BuildEnvironment, distinct, ensure_deps, filter_new, merge, scope_as
from .pods import configure_pod_executor, isolated_environment, shutdown_pod_executor

__all__ = [
    "BuildEnvironment",
    "configure_pod_executor",
    "distinct",
    "ensure_deps",
    "filter_new",
    "isolated_environment",
    "merge",
    "scope_as",
    "shutdown_pod_executor",
]
