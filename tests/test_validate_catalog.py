from __future__ import annotations

import pytest

from depalias.core.catalog import Catalog, catalog_from_data
from depalias.core.validate import CatalogValidationError, catalog_violations, validate_catalog


def test_sample_catalog_is_valid(catalog: Catalog):
    validate_catalog(catalog)
    assert catalog_violations(catalog) == []


def test_bundled_catalog_is_valid():
    from depalias.io.catalog import load_default_catalog

    validate_catalog(load_default_catalog())


def test_validation_aggregates_sorted_violations():
    cat = catalog_from_data(
        {
            "zeta": [],
            "alpha": {"empty": {}},
            "dup": [["lib", "1.0"], ["lib/lib", "2.0"]],
            "scoped": [["lib", "1.0", "scope", "test"]],
            "selfish": [["org/a", "1.0", "exclusions", ["org/a"]]],
        }
    )

    with pytest.raises(CatalogValidationError) as ei:
        validate_catalog(cat)

    aliases = [v.alias for v in ei.value.violations]
    assert aliases == ["alpha/empty", "dup", "scoped", "selfish", "zeta"]

    msg = str(ei.value)
    assert msg.startswith("catalog validation failed:\n")
    assert "  - alpha/empty: alias group is empty" in msg
    assert "  - dup: library 'lib/lib' listed more than once (positions 0 and 1)" in msg
    assert "  - scoped: coordinate 'lib' must not carry a scope ('test')" in msg
    assert "  - selfish: coordinate 'org/a' excludes itself" in msg
    assert "  - zeta: coordinate list is empty" in msg


def test_catalog_violations_requires_catalog():
    with pytest.raises(TypeError, match="expected Catalog"):
        catalog_violations({})  # type: ignore[arg-type]
