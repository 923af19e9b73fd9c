"""Pytest configuration.

This repo follows the `src/` layout. Some environments may invoke a `pytest`
entrypoint from a different Python install than the one used for
`python -m pip install -e ...`, which can cause `import depalias` to fail.

We ensure `src/` is on `sys.path` during tests.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest


def pytest_configure() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    sys.path.insert(0, str(src_dir))


# =============================================================================
# Shared Test Helpers
# =============================================================================


def sample_catalog_data() -> dict[str, Any]:
    """A small catalog mixing top-level leaves, groups and a nested group."""
    return {
        "a": [["x", "1.0"]],
        "b": {
            "c": [["y", "2.0"]],
            "d": [["org/z", "3.0", "exclusions", ["org/w"]], ["w", "4.0"]],
        },
        "tools": {
            "lint": {
                "strict": [["org/linter", "0.9"]],
            },
            "fmt": [["org/formatter", "1.1"]],
        },
    }


@pytest.fixture
def catalog():
    from depalias.core.catalog import catalog_from_data

    return catalog_from_data(sample_catalog_data())


@pytest.fixture
def pod_executor():
    from concurrent.futures import ThreadPoolExecutor

    executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="TestPods")
    yield executor
    executor.shutdown(wait=True)
