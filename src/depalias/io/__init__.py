"""depalias I/O helpers: catalog documents and request expressions."""

from __future__ import annotations

from .catalog import load_default_catalog, read_catalog, write_catalog_json
from .request import parse_request_text, read_project_request, read_request_json

__all__ = [
    "load_default_catalog",
    "parse_request_text",
    "read_catalog",
    "read_project_request",
    "read_request_json",
    "write_catalog_json",
]
