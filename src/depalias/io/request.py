"""Request expression I/O.

A request file holds one JSON value:
- an array of request items: ["aero", {"boot": ["cljs", "reload"]}]
- or a single alias name / alias map as shorthand for a one-item request

Within a request, strings are alias names, objects are alias maps and arrays
are coordinate literals (`["org/lib", "1.0"]`), used as-is without lookup.

Per-project requests live in `<project>/deps.json`. A project without one
simply requests nothing (a warning is logged).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from depalias.core.errors import InvalidExpressionError
from depalias.core.model import Request, parse_request

logger = logging.getLogger(__name__)

PROJECT_REQUEST_FILENAME = "deps.json"

JSON_REQUEST_PREFIXES = ("[", "{", "\"")


def parse_request_text(text: str) -> Request:
    """Parse a request given as text.

    Text starting with `[`, `{` or `"` is decoded as JSON; anything else is
    read as whitespace/comma separated alias names (eg `aero fs` on a command
    line), so `null` or `true` are alias names, never an empty request.

    Raises:
        InvalidExpressionError: for JSON-looking text that does not decode.
    """
    s = text.strip()
    if not s:
        return ()
    if s[0] not in JSON_REQUEST_PREFIXES:
        return parse_request([tok for tok in s.replace(",", " ").split() if tok])
    try:
        data: Any = json.loads(s)
    except json.JSONDecodeError as e:
        raise InvalidExpressionError(s, detail=f"invalid JSON request item ({e.msg})") from e
    return parse_request(data)


def read_request_json(path: str | Path) -> Request:
    """Read a request expression from a JSON file."""
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)
    return parse_request(data)


def read_project_request(project_dir: str | Path) -> Request:
    """Read `<project_dir>/deps.json`; a missing file yields the empty request."""
    p = Path(project_dir) / PROJECT_REQUEST_FILENAME
    if not p.is_file():
        logger.warning("missing %s in dir: %s", PROJECT_REQUEST_FILENAME, project_dir)
        return ()
    return read_request_json(p)


__all__ = [
    "PROJECT_REQUEST_FILENAME",
    "parse_request_text",
    "read_project_request",
    "read_request_json",
]
