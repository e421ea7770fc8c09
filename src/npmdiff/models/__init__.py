"""Data models for the dependency audit."""

from __future__ import annotations

from .dependency_diff import DependencyDiff
from .manifest import Manifest
from .visit import (
    STATE_INSTALL_ONLY,
    STATE_MANIFEST_ONLY,
    STATE_NEITHER,
    STATE_PROJECT,
    DirectoryVisit,
    DirectoryWarning,
    ProjectFailure,
)

__all__ = [
    "DependencyDiff",
    "DirectoryVisit",
    "DirectoryWarning",
    "Manifest",
    "ProjectFailure",
    "STATE_INSTALL_ONLY",
    "STATE_MANIFEST_ONLY",
    "STATE_NEITHER",
    "STATE_PROJECT",
]
