from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from depalias.core.errors import InvalidExpressionError
from depalias.core.model import AliasKey, AliasMap, CoordinateLiteral
from depalias.io.request import parse_request_text, read_project_request, read_request_json


def test_read_request_json_mixed_items(tmp_path: Path):
    p = tmp_path / "request.json"
    p.write_text(json.dumps(["aero", {"boot": ["cljs"]}, ["org/lib", "1.0"]]), encoding="utf-8")

    req = read_request_json(p)

    assert isinstance(req[0], AliasKey)
    assert isinstance(req[1], AliasMap)
    assert isinstance(req[2], CoordinateLiteral)


def test_read_request_json_rejects_malformed(tmp_path: Path):
    p = tmp_path / "request.json"
    p.write_text(json.dumps([1, 2]), encoding="utf-8")

    with pytest.raises(InvalidExpressionError, match=r"request\[0\]"):
        read_request_json(p)


def test_parse_request_text_json_and_bare_names():
    assert parse_request_text("aero fs") == (AliasKey("aero"), AliasKey("fs"))
    assert parse_request_text("aero,fs") == (AliasKey("aero"), AliasKey("fs"))
    assert parse_request_text('"aero"') == (AliasKey("aero"),)
    (item,) = parse_request_text('{"boot": ["cljs"]}')
    assert isinstance(item, AliasMap)
    assert parse_request_text("   ") == ()


def test_read_project_request(tmp_path: Path):
    (tmp_path / "deps.json").write_text(json.dumps(["clojure", {"http": ["ring"]}]), encoding="utf-8")

    req = read_project_request(tmp_path)

    assert req[0] == AliasKey("clojure")
    assert len(req) == 2


def test_read_project_request_missing_file_warns(tmp_path: Path, caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.WARNING, logger="depalias.io.request"):
        req = read_project_request(tmp_path)

    assert req == ()
    assert "missing deps.json in dir" in caplog.text


def test_parse_request_text_only_decodes_json_looking_text():
    assert parse_request_text("null") == (AliasKey("null"),)
    assert parse_request_text("false, 1") == (AliasKey("false"), AliasKey("1"))
    (item,) = parse_request_text('[["org/lib", "1.0"]]')
    assert isinstance(item, CoordinateLiteral)

    with pytest.raises(InvalidExpressionError, match="invalid JSON request item"):
        parse_request_text("[aero")
