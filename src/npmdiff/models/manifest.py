"""Manifest model for parsed package.json files."""

from __future__ import annotations

from dataclasses import dataclass, field
from collections.abc import Mapping
from typing import Any


@dataclass(frozen=True)
class Manifest:
    """Structured view of a package.json file.

    Only ``version`` and ``dev_dependencies`` drive the audit; the remaining
    fields are carried so the record mirrors the file format.
    """

    name: str = ""
    version: str = ""
    description: str = ""
    main: str = ""
    scripts: dict[str, str] = field(default_factory=dict)
    repository: dict[str, str] = field(default_factory=dict)
    keywords: tuple[str, ...] = ()
    license: str = ""
    dev_dependencies: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Manifest:
        """Build a manifest from decoded JSON, leaving absent fields empty."""
        return cls(
            name=data.get("name") or "",
            version=data.get("version") or "",
            description=data.get("description") or "",
            main=data.get("main") or "",
            scripts=dict(data.get("scripts") or {}),
            repository=dict(data.get("repository") or {}),
            keywords=tuple(data.get("keywords") or ()),
            license=data.get("license") or "",
            dev_dependencies=dict(data.get("devDependencies") or {}),
        )
