"""Enumerate packages installed in a node_modules directory."""

from __future__ import annotations

from pathlib import Path

from .package_json import MANIFEST_FILENAME, get_version


def _subdirectories(directory: Path) -> list[Path]:
    return sorted((p for p in directory.iterdir() if p.is_dir()), key=lambda p: p.name)


def scan_installed(install_dir: Path) -> dict[str, str]:
    """Return installed package name -> version read from its own package.json.

    Hidden entries such as ``.bin`` are not packages. ``@scope`` directories
    hold packages named ``@scope/<name>``. Any unreadable or malformed package
    manifest aborts the scan: ``OSError`` and ``FormatError`` propagate and no
    partial mapping is returned.
    """
    installed: dict[str, str] = {}
    for entry in _subdirectories(install_dir):
        if entry.name.startswith("."):
            continue
        if entry.name.startswith("@"):
            for scoped in _subdirectories(entry):
                name = f"{entry.name}/{scoped.name}"
                installed[name] = get_version(scoped / MANIFEST_FILENAME)
            continue
        installed[entry.name] = get_version(entry / MANIFEST_FILENAME)

    return installed
