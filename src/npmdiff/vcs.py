"""Resolve the top-level directory of the enclosing repository."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

import structlog

log = structlog.get_logger("npmdiff.vcs")

ROOT_COMMANDS: dict[str, list[str]] = {
    "git": ["git", "rev-parse", "--show-toplevel"],
    "hg": ["hg", "root"],
}

# Exit status each backend uses when run outside a repository.
NOT_A_REPOSITORY_STATUS: dict[str, int] = {
    "git": 128,
    "hg": 255,
}

# git also exits 128 for other fatal errors, so its message must match too.
NOT_A_REPOSITORY_MESSAGE: dict[str, str] = {
    "git": "not a git repository",
}


class ExternalToolError(RuntimeError):
    """Raised when the version-control command fails."""


class NotARepositoryError(ExternalToolError):
    """Raised when the working directory is not inside a repository."""


def resolve_repo_root(backend: str, cwd: Path | None = None) -> Path:
    """Run the backend's root command and return the directory it prints.

    Raises ``NotARepositoryError`` on the backend's "not a repository" exit
    status and ``ExternalToolError`` on any other failure.
    """
    try:
        cmd = ROOT_COMMANDS[backend]
    except KeyError:
        raise ExternalToolError(f"unsupported backend: {backend}") from None

    try:
        proc = subprocess.run(
            cmd,
            cwd=cwd,
            env={**os.environ, "LC_ALL": "C"},
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise ExternalToolError(f"could not run {cmd[0]}: {exc}") from exc

    marker = NOT_A_REPOSITORY_MESSAGE.get(backend, "")
    if proc.returncode == NOT_A_REPOSITORY_STATUS[backend] and marker in proc.stderr:
        raise NotARepositoryError(
            f"{' '.join(cmd)} exited with status {proc.returncode}: {proc.stderr.strip()}"
        )
    if proc.returncode != 0:
        raise ExternalToolError(
            f"{' '.join(cmd)} failed (exit {proc.returncode}): {proc.stderr.strip()}"
        )

    root = proc.stdout.strip("\r\n")
    if not root:
        raise ExternalToolError(f"{' '.join(cmd)} printed no repository root")

    log.debug("vcs.root_resolved", backend=backend, root=root)
    return Path(root)
