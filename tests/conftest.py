"""Shared pytest fixtures for npmdiff tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest


def write_manifest(directory: Path, **fields) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "package.json"
    path.write_text(json.dumps(fields), encoding="utf-8")
    return path


def install(project: Path, name: str, version: str = "1.0.0") -> Path:
    """Create node_modules/<name>/package.json under ``project``."""
    pkg_dir = project / "node_modules" / name
    write_manifest(pkg_dir, name=name, version=version)
    return pkg_dir


@pytest.fixture
def make_project():
    def _make(directory: Path, declared: dict[str, str], installed: dict[str, str]) -> Path:
        write_manifest(directory, name=directory.name, devDependencies=declared)
        (directory / "node_modules").mkdir(exist_ok=True)
        for name, version in installed.items():
            install(directory, name, version)
        return directory

    return _make
