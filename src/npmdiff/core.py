"""Core audit entrypoints.

This module does no printing and never exits the process, so the same audit
can back the CLI and be called from other tooling.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from .differ import diff_dependencies
from .discovery import INSTALL_DIRNAME, MANIFEST_FILENAME, walk, warning_for
from .models import ProjectFailure
from .parsers.node_modules import scan_installed
from .parsers.package_json import FormatError, get_dev_dependencies
from .report import AuditReport

log = structlog.get_logger("npmdiff.audit")


def diff_project(directory: Path) -> list[str]:
    """Diff one project's devDependencies against its node_modules.

    Raises ``OSError`` or ``FormatError`` when the manifest or any installed
    package cannot be read.
    """
    declared = get_dev_dependencies(directory / MANIFEST_FILENAME)
    installed = scan_installed(directory / INSTALL_DIRNAME)
    return diff_dependencies(declared, installed)


def audit_repository(root: Path) -> AuditReport:
    """Walk ``root`` breadth-first and diff every project found.

    A project whose manifest or installed packages cannot be read contributes
    nothing to the report beyond a recorded failure; the walk carries on.
    """
    report = AuditReport(root=root)

    for visit in walk(root):
        report.record_visit(visit)
        if visit.skipped:
            continue

        if visit.is_project:
            try:
                diffs = diff_project(visit.path)
            except (OSError, FormatError) as exc:
                log.warning("audit.project_failed", path=str(visit.path), error=str(exc))
                report.record_failure(ProjectFailure(path=visit.path, error=str(exc)))
                continue
            log.debug("audit.project_diffed", path=str(visit.path), differences=len(diffs))
            report.record_diffs(visit.path, diffs)
            continue

        warning = warning_for(visit)
        if warning is not None:
            report.record_warning(warning)

    log.info(
        "audit.complete",
        root=str(root),
        visited=report.visited,
        projects=report.projects,
        differences_found=report.differences_found,
    )
    return report
