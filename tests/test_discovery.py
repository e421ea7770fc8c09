"""Tests for directory classification and the breadth-first walk."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from conftest import write_manifest
from npmdiff.discovery import classify_directory, walk, warning_for
from npmdiff.models import (
    STATE_INSTALL_ONLY,
    STATE_MANIFEST_ONLY,
    STATE_NEITHER,
    STATE_PROJECT,
    DirectoryVisit,
)


class TestClassifyDirectory:
    def test_project(self, tmp_path):
        write_manifest(tmp_path)
        (tmp_path / "node_modules").mkdir()
        (tmp_path / "src").mkdir()
        visit = classify_directory(tmp_path)
        assert visit.state == STATE_PROJECT
        assert visit.is_project
        assert visit.subdirectories == (tmp_path / "src",)

    def test_manifest_only(self, tmp_path):
        write_manifest(tmp_path)
        visit = classify_directory(tmp_path)
        assert visit.state == STATE_MANIFEST_ONLY
        warning = warning_for(visit)
        assert warning is not None
        assert warning.message == f"found 'package.json' in {tmp_path}, but no 'node_modules'"

    def test_install_only(self, tmp_path):
        (tmp_path / "node_modules").mkdir()
        visit = classify_directory(tmp_path)
        assert visit.state == STATE_INSTALL_ONLY
        assert warning_for(visit).message == (
            f"found 'node_modules' in {tmp_path}, but no 'package.json'"
        )

    def test_neither_queues_subdirectories(self, tmp_path):
        (tmp_path / "b").mkdir()
        (tmp_path / "a").mkdir()
        (tmp_path / "notes.txt").write_text("x")
        visit = classify_directory(tmp_path)
        assert visit.state == STATE_NEITHER
        assert warning_for(visit) is None
        assert visit.subdirectories == (tmp_path / "a", tmp_path / "b")

    def test_node_modules_file_is_not_install_dir(self, tmp_path):
        write_manifest(tmp_path)
        (tmp_path / "node_modules").write_text("")
        visit = classify_directory(tmp_path)
        assert visit.state == STATE_MANIFEST_ONLY
        assert visit.subdirectories == ()

    def test_install_dir_is_not_queued(self, tmp_path):
        write_manifest(tmp_path)
        (tmp_path / "node_modules" / "lodash").mkdir(parents=True)
        visit = classify_directory(tmp_path)
        assert tmp_path / "node_modules" not in visit.subdirectories

    def test_missing_directory_is_skipped(self, tmp_path):
        visit = classify_directory(tmp_path / "gone")
        assert visit.skipped
        assert visit.state == STATE_NEITHER
        assert visit.subdirectories == ()
        assert warning_for(visit) is None

    def test_file_instead_of_directory_is_skipped(self, tmp_path):
        target = tmp_path / "file"
        target.write_text("x")
        assert classify_directory(target).skipped


class TestWalk:
    def test_breadth_first_order(self, tmp_path):
        for rel in ("a/deep", "b", "a/deep/deeper"):
            (tmp_path / rel).mkdir(parents=True)
        visited = [v.path for v in walk(tmp_path)]
        assert visited == [
            tmp_path,
            tmp_path / "a",
            tmp_path / "b",
            tmp_path / "a" / "deep",
            tmp_path / "a" / "deep" / "deeper",
        ]

    def test_visits_each_directory_once(self, tmp_path):
        for rel in ("x/y/z", "x/w", "v"):
            (tmp_path / rel).mkdir(parents=True)
        visited = [v.path for v in walk(tmp_path)]
        assert len(visited) == len(set(visited))
        expected = {tmp_path} | {p for p in tmp_path.rglob("*") if p.is_dir()}
        assert set(visited) == expected

    def test_nested_projects_are_found(self, tmp_path):
        write_manifest(tmp_path)
        (tmp_path / "node_modules").mkdir()
        write_manifest(tmp_path / "packages" / "inner")
        (tmp_path / "packages" / "inner" / "node_modules").mkdir()
        projects = [v.path for v in walk(tmp_path) if v.is_project]
        assert projects == [tmp_path, tmp_path / "packages" / "inner"]

    def test_does_not_descend_into_node_modules(self, tmp_path):
        write_manifest(tmp_path)
        write_manifest(tmp_path / "node_modules" / "dep")
        (tmp_path / "node_modules" / "dep" / "node_modules").mkdir()
        visited = [v.path for v in walk(tmp_path)]
        assert visited == [tmp_path]

    @pytest.mark.skipif(
        sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="permission bits are not enforced",
    )
    def test_unreadable_directory_does_not_stop_walk(self, tmp_path):
        locked = tmp_path / "locked"
        locked.mkdir()
        (tmp_path / "open" / "child").mkdir(parents=True)
        locked.chmod(0)
        try:
            visits = list(walk(tmp_path))
        finally:
            locked.chmod(0o755)
        skipped = [v.path for v in visits if v.skipped]
        assert skipped == [locked]
        assert tmp_path / "open" / "child" in [v.path for v in visits]


def test_visit_rejects_unknown_state():
    with pytest.raises(ValueError):
        DirectoryVisit(path=Path("."), state="bogus")


def test_visit_to_dict(tmp_path):
    visit = DirectoryVisit.unreadable(tmp_path, PermissionError(13, "Permission denied"))
    data = visit.to_dict()
    assert data["state"] == STATE_NEITHER
    assert "Permission denied" in data["error"]
