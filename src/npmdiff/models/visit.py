"""Per-directory outcomes produced while walking a repository."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

STATE_PROJECT = "project"
STATE_MANIFEST_ONLY = "manifest-only"
STATE_INSTALL_ONLY = "install-only"
STATE_NEITHER = "neither"

_VALID_STATES = {STATE_PROJECT, STATE_MANIFEST_ONLY, STATE_INSTALL_ONLY, STATE_NEITHER}


@dataclass(frozen=True)
class DirectoryVisit:
    """Classification of one directory visited by the walker.

    A visit carrying ``error`` is a directory that could not be opened or
    listed; it has no subdirectories and is never a project.
    """

    path: Path
    state: str
    subdirectories: tuple[Path, ...] = ()
    error: str | None = None

    def __post_init__(self) -> None:
        if self.state not in _VALID_STATES:
            raise ValueError(f"Invalid state: {self.state}")
        if self.error is not None and (self.state != STATE_NEITHER or self.subdirectories):
            raise ValueError("Skipped visits cannot carry a state or subdirectories")

    @property
    def skipped(self) -> bool:
        return self.error is not None

    @property
    def is_project(self) -> bool:
        return self.state == STATE_PROJECT

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "path": str(self.path),
            "state": self.state,
            "subdirectories": [str(p) for p in self.subdirectories],
        }
        if self.error is not None:
            data["error"] = self.error
        return data

    @classmethod
    def from_markers(
        cls,
        path: Path,
        *,
        found_manifest: bool,
        found_install_dir: bool,
        subdirectories: tuple[Path, ...] = (),
    ) -> DirectoryVisit:
        if found_manifest and found_install_dir:
            state = STATE_PROJECT
        elif found_manifest:
            state = STATE_MANIFEST_ONLY
        elif found_install_dir:
            state = STATE_INSTALL_ONLY
        else:
            state = STATE_NEITHER
        return cls(path=path, state=state, subdirectories=subdirectories)

    @classmethod
    def unreadable(cls, path: Path, exc: OSError) -> DirectoryVisit:
        return cls(path=path, state=STATE_NEITHER, error=str(exc) or type(exc).__name__)


@dataclass(frozen=True)
class DirectoryWarning:
    """A directory holding only one of the two project markers."""

    path: Path
    found: str
    missing: str

    @property
    def message(self) -> str:
        return f"found '{self.found}' in {self.path}, but no '{self.missing}'"

    def to_dict(self) -> dict[str, str]:
        return {
            "path": str(self.path),
            "found": self.found,
            "missing": self.missing,
            "message": self.message,
        }


@dataclass(frozen=True)
class ProjectFailure:
    """A project directory whose diff was aborted by a read or parse error."""

    path: Path
    error: str

    def to_dict(self) -> dict[str, str]:
        return {"path": str(self.path), "error": self.error}
