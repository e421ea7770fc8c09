"""Breadth-first project discovery under a repository root."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from pathlib import Path

import structlog

from .models import (
    STATE_INSTALL_ONLY,
    STATE_MANIFEST_ONLY,
    DirectoryVisit,
    DirectoryWarning,
)
from .parsers.package_json import MANIFEST_FILENAME

INSTALL_DIRNAME = "node_modules"

log = structlog.get_logger("npmdiff.walk")


def classify_directory(directory: Path) -> DirectoryVisit:
    """List ``directory`` once and decide whether it is a project.

    The markers are only evaluated after the whole listing is known, so a
    directory is classified (and later diffed) exactly once. Every
    subdirectory other than the install dir is returned for visiting, which
    means projects nested inside projects are discovered too.

    Failure to open or list the directory does not raise; it yields a
    skipped visit.
    """
    found_manifest = False
    found_install_dir = False
    subdirectories: list[Path] = []
    try:
        for entry in sorted(directory.iterdir(), key=lambda p: p.name):
            if entry.name == MANIFEST_FILENAME:
                found_manifest = True
            elif entry.name == INSTALL_DIRNAME and entry.is_dir():
                found_install_dir = True
            elif entry.is_dir():
                subdirectories.append(entry)
    except OSError as exc:
        log.debug("walk.directory_skipped", path=str(directory), error=str(exc))
        return DirectoryVisit.unreadable(directory, exc)

    return DirectoryVisit.from_markers(
        directory,
        found_manifest=found_manifest,
        found_install_dir=found_install_dir,
        subdirectories=tuple(subdirectories),
    )


def walk(root: Path) -> Iterator[DirectoryVisit]:
    """Visit ``root`` and everything below it in breadth-first order.

    There is no depth limit and no visited set; a symlink cycle under
    ``root`` keeps the walk going forever.
    """
    queue: deque[Path] = deque([root])
    while queue:
        visit = classify_directory(queue.popleft())
        queue.extend(visit.subdirectories)
        yield visit


def warning_for(visit: DirectoryVisit) -> DirectoryWarning | None:
    """Return the single-marker warning for ``visit``, if it needs one."""
    if visit.state == STATE_MANIFEST_ONLY:
        return DirectoryWarning(path=visit.path, found=MANIFEST_FILENAME, missing=INSTALL_DIRNAME)
    if visit.state == STATE_INSTALL_ONLY:
        return DirectoryWarning(path=visit.path, found=INSTALL_DIRNAME, missing=MANIFEST_FILENAME)
    return None
