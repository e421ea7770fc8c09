"""Human-readable rendering of an audit report."""

from __future__ import annotations

import json

from .models.dependency_diff import printable, quote
from .report import AuditReport


def render_text(report: AuditReport) -> str:
    """Return every directory with differences followed by its indexed entries."""
    lines = []
    for directory, diffs in report.differences.items():
        if not diffs:
            continue
        lines.append(f"differences found in {quote(directory)}:")
        for index, diff in enumerate(diffs):
            lines.append(f"[{index}] {diff}")

    return "".join(line + "\n" for line in lines)


def render_warnings(report: AuditReport) -> str:
    return "".join(printable(w.message) + "\n" for w in report.warnings)


def render_json(report: AuditReport) -> str:
    return json.dumps(report.to_dict(), indent=2) + "\n"


def render_markdown(report: AuditReport) -> str:
    """Return a Markdown string with totals and a table of findings."""
    totals = report.to_dict()["totals"]

    lines = []
    lines.append("# npmdiff Summary")
    lines.append("")
    lines.append(
        f"Directories visited: {totals['visited']} | Projects: {totals['projects']}"
        f" | Differences: {totals['differences']} | Warnings: {totals['warnings']}"
    )
    lines.append("")
    lines.append("| Directory | Finding |")
    lines.append("| --- | --- |")

    has_rows = False

    for directory, diffs in report.differences.items():
        for diff in diffs:
            cell = diff.replace("|", r"\|")
            lines.append(f"| {printable(directory)} | {cell} |")
            has_rows = True

    for warning in report.warnings:
        lines.append(f"| {printable(str(warning.path))} | {printable(warning.message)} |")
        has_rows = True

    for failure in report.failures:
        lines.append(
            f"| {printable(str(failure.path))} | diff failed: {printable(failure.error)} |"
        )
        has_rows = True

    if not has_rows:
        lines.append("| (no differences) | n/a |")

    return "\n".join(lines) + "\n"
