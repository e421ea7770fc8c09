"""Parse package.json into a Manifest and expose its audited fields."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from npmdiff.models import Manifest

MANIFEST_FILENAME = "package.json"

_STRING_MAP = {"type": "object", "additionalProperties": {"type": "string"}}

MANIFEST_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "version": {"type": "string"},
        "description": {"type": "string"},
        "main": {"type": "string"},
        "scripts": _STRING_MAP,
        "repository": _STRING_MAP,
        "keywords": {"type": "array", "items": {"type": "string"}},
        "license": {"type": "string"},
        "devDependencies": _STRING_MAP,
    },
}

# Fields the audit reads; a schema violation here makes the manifest unusable.
STRICT_FIELDS = frozenset({"version", "devDependencies"})

_VALIDATOR = Draft202012Validator(MANIFEST_SCHEMA)


class FormatError(ValueError):
    """Raised when a manifest is not well-formed package.json content."""


def _pointer(error: Any) -> str:
    return "/".join(str(p) for p in error.path) or "<root>"


def parse_manifest(content: bytes, source: str = "<bytes>") -> Manifest:
    """Decode raw package.json bytes into a Manifest.

    Known fields holding the wrong type are left empty, except the ones in
    ``STRICT_FIELDS`` which raise ``FormatError`` like any structural problem.
    """
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise FormatError(f"{source}: not valid UTF-8: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise FormatError(f"{source}: invalid JSON: {exc}") from exc

    # A null field counts as absent.
    if isinstance(data, dict):
        data = {k: v for k, v in data.items() if v is not None}

    dropped: set[str] = set()
    for error in sorted(_VALIDATOR.iter_errors(data), key=_pointer):
        field = error.path[0] if error.path else None
        if field is None or field in STRICT_FIELDS:
            raise FormatError(f"{source}: {_pointer(error)}: {error.message}")
        dropped.add(str(field))

    return Manifest.from_dict({k: v for k, v in data.items() if k not in dropped})


def load_manifest(path: Path) -> Manifest:
    """Read and parse the manifest at ``path``.

    Raises ``OSError`` when the file cannot be read and ``FormatError`` when
    its content is malformed.
    """
    return parse_manifest(path.read_bytes(), source=str(path))


def get_dev_dependencies(path: Path) -> dict[str, str]:
    """Return the devDependencies mapping, empty when the field is absent."""
    return load_manifest(path).dev_dependencies


def get_version(path: Path) -> str:
    return load_manifest(path).version
