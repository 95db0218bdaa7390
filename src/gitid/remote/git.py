"""Thin wrapper around the git binary for reading and writing remotes."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from typing import Callable, Optional

from gitid.errors import GitCommandFailed, NotAGitRepository
from gitid.utils.logging import get_logger

Runner = Callable[..., subprocess.CompletedProcess]


def _get_subprocess_args() -> dict:
    """Get platform-specific subprocess arguments."""
    if sys.platform == "win32":
        startupinfo = subprocess.STARTUPINFO()
        startupinfo.dwFlags |= subprocess.STARTF_USESHOWWINDOW
        startupinfo.wShowWindow = 0
        return {
            "startupinfo": startupinfo,
            "creationflags": subprocess.CREATE_NO_WINDOW,
        }
    return {}


class GitRepository:
    """
    Git working tree accessed through the git CLI.

    Args:
        cwd: Directory to run git in. Defaults to the process cwd.
        runner: subprocess.run compatible callable (injectable for tests).
    """

    def __init__(self, cwd: Optional[Path] = None, runner: Optional[Runner] = None) -> None:
        self._cwd = Path(cwd) if cwd else None
        self._runner = runner or subprocess.run
        self._logger = get_logger("gitid.git")

    def _git(self, *args: str) -> subprocess.CompletedProcess:
        cmd = ["git", *args]
        self._logger.debug(f"Running: {' '.join(cmd)}")
        try:
            return self._runner(
                cmd,
                cwd=self._cwd,
                capture_output=True,
                text=True,
                **_get_subprocess_args(),
            )
        except OSError as e:
            raise GitCommandFailed(f"Could not run git: {e}") from e

    def is_work_tree(self) -> bool:
        """Check whether cwd is inside a git working tree."""
        result = self._git("rev-parse", "--is-inside-work-tree")
        return result.returncode == 0 and result.stdout.strip() == "true"

    def get_remote_url(self, name: str = "origin") -> str:
        """
        Read the URL of a remote.

        Raises:
            NotAGitRepository: If cwd is not inside a work tree.
            GitCommandFailed: If the remote does not exist.
        """
        if not self.is_work_tree():
            raise NotAGitRepository(
                "Not inside a git repository; pass --repo to give the remote URL",
                context=str(self._cwd or Path.cwd()),
            )

        result = self._git("remote", "get-url", name)
        if result.returncode != 0:
            raise GitCommandFailed(
                f"Could not read remote '{name}'",
                context=result.stderr.strip() or None,
            )
        return result.stdout.strip()

    def set_remote_url(self, url: str, name: str = "origin") -> None:
        """
        Point a remote at a new URL.

        Raises:
            GitCommandFailed: If git rejects the change.
        """
        result = self._git("remote", "set-url", name, url)
        if result.returncode != 0:
            raise GitCommandFailed(
                f"Could not set URL of remote '{name}'",
                context=result.stderr.strip() or None,
            )
        self._logger.info(f"Remote '{name}' now points at {url}")

    def __repr__(self) -> str:
        return f"GitRepository({str(self._cwd or Path.cwd())!r})"
