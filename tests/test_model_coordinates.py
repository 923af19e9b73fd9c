from __future__ import annotations

import pytest

from depalias.core.model import Coordinate, canonical_library_id, flatten_coordinates, parse_coordinate


def test_depalias_importable_and_has_version():
    import depalias

    assert isinstance(depalias.__version__, str)
    assert depalias.__version__


def test_coordinate_strips_and_dedupes_exclusions_in_order():
    c = Coordinate(" org/lib ", " 1.0 ", exclusions=["b", " a ", "b"])

    assert c.library == "org/lib"
    assert c.version == "1.0"
    assert c.exclusions == ("b", "a")
    assert c.scope is None


def test_coordinate_rejects_empty_strings():
    with pytest.raises(ValueError, match=r"Coordinate\.version: must be a non-empty string"):
        Coordinate("org/lib", "  ")
    with pytest.raises(ValueError, match=r"Coordinate\.library: expected str"):
        Coordinate(None, "1.0")  # type: ignore[arg-type]


def test_library_id_canonicalizes_ungrouped_names():
    assert canonical_library_id("aero") == "aero/aero"
    assert canonical_library_id("org.clojure/clojure") == "org.clojure/clojure"
    assert Coordinate("aero", "1.0").library_id == Coordinate("aero/aero", "2.0").library_id


def test_parse_coordinate_sequence_form_with_options():
    c = parse_coordinate(["com.amazonaws/aws-java-sdk", "1.9.39", ":exclusions", ["commons-logging"], "scope", "test"])

    assert c == Coordinate("com.amazonaws/aws-java-sdk", "1.9.39", exclusions=("commons-logging",), scope="test")


def test_parse_coordinate_object_form():
    c = parse_coordinate({"library": "weasel", "version": "0.7.0", "exclusions": ["x"]})

    assert c.library == "weasel"
    assert c.exclusions == ("x",)


def test_parse_coordinate_rejects_bad_shapes():
    with pytest.raises(ValueError, match=r"expected at least \[library, version\]"):
        parse_coordinate(["lonely"])
    with pytest.raises(ValueError, match="odd count"):
        parse_coordinate(["lib", "1.0", "scope"])
    with pytest.raises(ValueError, match="unknown coordinate option 'classifier'"):
        parse_coordinate(["lib", "1.0", "classifier", "sources"])
    with pytest.raises(ValueError, match="missing required key 'version'"):
        parse_coordinate({"library": "lib"})


def test_to_data_round_trips_through_parse():
    c = Coordinate("org/lib", "1.0", exclusions=("a",), scope="test")

    assert c.to_data() == ["org/lib", "1.0", "exclusions", ["a"], "scope", "test"]
    assert parse_coordinate(c.to_data()) == c


def test_flatten_coordinates_walks_nested_groups_depth_first():
    nested = [
        ["a", "1"],
        [["b", "2"], [["c", "3"]]],
        None,
        Coordinate("d", "4"),
    ]

    assert [c.library for c in flatten_coordinates(nested)] == ["a", "b", "c", "d"]


def test_flatten_coordinates_rejects_bare_strings_in_collections():
    with pytest.raises(ValueError, match=r"coordinates\[1\]: expected a list/tuple, got str"):
        flatten_coordinates([["a", "1"], "b"])
