"""Command-line entrypoint.

Usage:
  npmdiff (--git | --hg) [--exit-stat] [--format text|json|markdown]

Resolves the repository root with the chosen version-control tool and audits
every package.json/node_modules pair underneath it.
"""

from __future__ import annotations

import argparse
import sys

from .config import OUTPUT_FORMATS, ConfigurationError, Settings, load_settings
from .core import audit_repository
from .logging import setup_logging
from .report import AuditReport
from .summary import render_json, render_markdown, render_text, render_warnings
from .vcs import ExternalToolError, NotARepositoryError, resolve_repo_root

_RENDERERS = {
    "text": render_text,
    "json": render_json,
    "markdown": render_markdown,
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="npmdiff",
        description="Report devDependencies that are missing from, or undeclared in, node_modules.",
    )
    parser.add_argument("--hg", action="store_true", help="act as if we're in a mercurial repo")
    parser.add_argument("--git", action="store_true", help="act as if we're in a git repo")
    parser.add_argument(
        "--exit-stat",
        action="store_true",
        help="exit with non-zero status if differences are found",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        default="text",
        help="report format written to stdout",
    )
    return parser.parse_args(argv)


def exit_status(report: AuditReport, settings: Settings) -> int:
    if report.differences_found and settings.exit_stat:
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        settings = load_settings(args)
    except ConfigurationError as exc:
        print(f"npmdiff: {exc}", file=sys.stderr)
        return 0

    setup_logging(settings.log_level, settings.log_format)

    try:
        root = resolve_repo_root(settings.backend)
    except NotARepositoryError:
        print("npmdiff: not in a repository", file=sys.stderr)
        return 0
    except ExternalToolError as exc:
        print(f"npmdiff: failed to identify root of repo: {exc}", file=sys.stderr)
        return 1

    report = audit_repository(root)

    sys.stderr.write(render_warnings(report))
    sys.stdout.write(_RENDERERS[settings.output_format](report))

    return exit_status(report, settings)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
