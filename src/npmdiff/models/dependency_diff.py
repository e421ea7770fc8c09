"""Comparison result between declared and installed dependencies."""

from __future__ import annotations

import json
from dataclasses import dataclass
from collections.abc import Iterable


def printable(text: str) -> str:
    """Return ``text`` with undecodable filename bytes written as ``\\xNN``."""
    try:
        raw = text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return text.encode("utf-8", "backslashreplace").decode("utf-8")
    return raw.decode("utf-8", "backslashreplace")


def quote(name: str) -> str:
    return printable(json.dumps(name, ensure_ascii=False))


@dataclass(frozen=True)
class DependencyDiff:
    """Name-level comparison of a project's declared and installed packages."""

    shared: tuple[str, ...]
    missing: tuple[str, ...]
    undeclared: tuple[str, ...]

    def __post_init__(self) -> None:
        for group in (self.shared, self.missing, self.undeclared):
            if list(group) != sorted(group):
                raise ValueError("Dependency names must be sorted")
        if set(self.missing) & set(self.undeclared):
            raise ValueError("A dependency cannot be both missing and undeclared")

    def __bool__(self) -> bool:
        return bool(self.missing or self.undeclared)

    def entries(self) -> list[str]:
        """Return one human-readable line per asymmetric finding."""
        lines = [
            f"{quote(name)} is specified in the manifest but is not found locally"
            for name in self.missing
        ]
        lines.extend(
            f"{quote(name)} found locally but is not specified in the manifest"
            for name in self.undeclared
        )
        return lines

    def to_dict(self) -> dict[str, object]:
        return {
            "shared": list(self.shared),
            "missing": list(self.missing),
            "undeclared": list(self.undeclared),
        }

    @classmethod
    def from_names(
        cls, *, declared: Iterable[str], installed: Iterable[str]
    ) -> DependencyDiff:
        declared_names = set(declared)
        installed_names = set(installed)
        return cls(
            shared=tuple(sorted(declared_names & installed_names)),
            missing=tuple(sorted(declared_names - installed_names)),
            undeclared=tuple(sorted(installed_names - declared_names)),
        )
