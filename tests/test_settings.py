from __future__ import annotations

import json
from pathlib import Path

import pytest

from depalias.config import Settings, deep_merge, load_settings
from depalias.core.errors import ConfigError


def test_load_settings_defaults():
    s = load_settings(env={})

    assert s == Settings()
    assert s.default_scope == "test"
    assert s.catalog_path is None


def test_load_settings_file_then_local_then_env(tmp_path: Path):
    defaults = tmp_path / "depalias.yaml"
    defaults.write_text("default_scope: build\npod_workers: 2\n", encoding="utf-8")
    local = tmp_path / "depalias.local.json"
    local.write_text(json.dumps({"pod_workers": 8, "log_level": "info"}), encoding="utf-8")

    s = load_settings(
        defaults_path=defaults,
        local_path=local,
        env={"DEPALIAS_CATALOG": str(tmp_path / "cat.json")},
    )

    assert s.default_scope == "build"
    assert s.pod_workers == 8
    assert s.log_level == "INFO"
    assert s.catalog_path == tmp_path / "cat.json"


def test_local_override_is_optional(tmp_path: Path):
    s = load_settings(local_path=tmp_path / "absent.yaml", env={})

    assert s == Settings()


def test_empty_scope_env_means_unscoped():
    assert load_settings(env={"DEPALIAS_SCOPE": ""}).default_scope is None


def test_missing_defaults_file_and_bad_values(tmp_path: Path):
    with pytest.raises(ConfigError, match="settings file not found"):
        load_settings(defaults_path=tmp_path / "nope.yaml", env={})

    bad = tmp_path / "bad.yaml"
    bad.write_text("pod_workers: 0\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="must be a positive int"):
        load_settings(defaults_path=bad, env={})

    unknown = tmp_path / "unknown.yaml"
    unknown.write_text("colour: blue\n", encoding="utf-8")
    with pytest.raises(ConfigError, match=r"unknown settings: \['colour'\]"):
        load_settings(defaults_path=unknown, env={})


def test_non_object_settings_root(tmp_path: Path):
    p = tmp_path / "list.yaml"
    p.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="settings root must be an object"):
        load_settings(defaults_path=p, env={})


def test_deep_merge_policy():
    base = {"a": {"x": 1, "y": [1, 2]}, "b": "keep"}
    override = {"a": {"y": [3]}, "c": True}

    merged = deep_merge(base, override)

    assert merged == {"a": {"x": 1, "y": [3]}, "b": "keep", "c": True}
    assert base == {"a": {"x": 1, "y": [1, 2]}, "b": "keep"}

    with pytest.raises(ConfigError, match="type conflict for key 'b'"):
        deep_merge(base, {"b": 3})


def test_settings_load_catalog(tmp_path: Path):
    p = tmp_path / "cat.json"
    p.write_text(json.dumps({"only": [["org/only", "1"]]}), encoding="utf-8")

    assert Settings(catalog_path=p).load_catalog().keys() == ["only"]
    assert ("boot", "cljs") in Settings().load_catalog()


def test_configured_pod_workers_bound_concurrent_pod_creation(tmp_path: Path):
    import threading

    from depalias.core.model import Coordinate
    from depalias.env import BuildEnvironment, isolated_environment, shutdown_pod_executor

    f = tmp_path / "depalias.yaml"
    f.write_text("pod_workers: 1\n", encoding="utf-8")
    release = threading.Event()
    first_started = threading.Event()
    second_started = threading.Event()

    def hold(pod: BuildEnvironment) -> None:
        first_started.set()
        release.wait(timeout=5)

    def mark(pod: BuildEnvironment) -> None:
        second_started.set()

    load_settings(defaults_path=f, env={}).configure_pods()
    try:
        first = isolated_environment(BuildEnvironment([Coordinate("a", "1.0")]), initializer=hold)
        second = isolated_environment(BuildEnvironment([Coordinate("b", "2.0")]), initializer=mark)

        assert first_started.wait(timeout=5)
        # A single worker is busy with the first pod.
        assert not second_started.wait(timeout=0.2)
        release.set()
        assert second.result(timeout=5).active_libraries() == {"b/b"}
        assert first.result(timeout=5).active_libraries() == {"a/a"}
    finally:
        release.set()
        shutdown_pod_executor()
