"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .models import DirectoryVisit, DirectoryWarning, ProjectFailure


@dataclass(slots=True)
class AuditReport:
    """Accumulates findings for one run over a repository.

    ``differences`` is keyed by directory path and keeps discovery order.
    ``differences_found`` is set by any non-empty diff list or any
    single-marker warning; skipped directories and failed projects do not
    count as differences.
    """

    root: Path
    differences: dict[str, list[str]] = field(default_factory=dict)
    warnings: list[DirectoryWarning] = field(default_factory=list)
    skipped: list[DirectoryVisit] = field(default_factory=list)
    failures: list[ProjectFailure] = field(default_factory=list)
    visited: int = 0
    projects: int = 0

    @property
    def differences_found(self) -> bool:
        return bool(self.warnings) or any(self.differences.values())

    def record_visit(self, visit: DirectoryVisit) -> None:
        self.visited += 1
        if visit.skipped:
            self.skipped.append(visit)
        elif visit.is_project:
            self.projects += 1

    def record_diffs(self, directory: Path, diffs: list[str]) -> None:
        if not diffs:
            return
        self.differences.setdefault(str(directory), []).extend(diffs)

    def record_warning(self, warning: DirectoryWarning) -> None:
        self.warnings.append(warning)

    def record_failure(self, failure: ProjectFailure) -> None:
        self.failures.append(failure)

    def _relative(self, path: str | Path) -> str:
        try:
            return str(Path(path).relative_to(self.root))
        except ValueError:
            return str(path)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready report with totals and top-level flags."""
        projects = [
            {"path": self._relative(path), "differences": list(diffs)}
            for path, diffs in self.differences.items()
            if diffs
        ]
        total_differences = sum(len(p["differences"]) for p in projects)

        return {
            "version": "1",
            "root": str(self.root),
            "hasFindings": self.differences_found,
            "projects": projects,
            "warnings": [
                {**w.to_dict(), "path": self._relative(w.path)} for w in self.warnings
            ],
            "skipped": [
                {"path": self._relative(v.path), "error": v.error} for v in self.skipped
            ],
            "failed": [
                {**f.to_dict(), "path": self._relative(f.path)} for f in self.failures
            ],
            "totals": {
                "visited": self.visited,
                "projects": self.projects,
                "differences": total_differences,
                "warnings": len(self.warnings),
                "skipped": len(self.skipped),
                "failed": len(self.failures),
            },
        }
