"""Compare declared devDependencies against installed packages by name."""

from __future__ import annotations

from collections.abc import Mapping

from .models import DependencyDiff


def compare_dependencies(
    declared: Mapping[str, str], installed: Mapping[str, str]
) -> DependencyDiff:
    """Split dependency names into shared, missing and undeclared groups.

    Version strings are ignored: a declared range is never checked against the
    installed version.
    """
    return DependencyDiff.from_names(declared=declared.keys(), installed=installed.keys())


def diff_dependencies(
    declared: Mapping[str, str], installed: Mapping[str, str]
) -> list[str]:
    """Return one diff entry per name present on only one side."""
    return compare_dependencies(declared, installed).entries()
