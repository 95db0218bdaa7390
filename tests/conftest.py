"""Shared fixtures."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Point ~ at a temporary directory."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("USERPROFILE", str(home_dir))
    return home_dir


@pytest.fixture
def ssh_dir(home):
    return home / ".ssh"


class FakeKeygen:
    """Stands in for subprocess.run when ssh-keygen would be called."""

    def __init__(self, returncode: int = 0, write: bool = True) -> None:
        self.calls: list[list[str]] = []
        self.returncode = returncode
        self.write = write

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        if self.write and self.returncode == 0:
            key_path = Path(cmd[cmd.index("-f") + 1])
            comment = cmd[cmd.index("-C") + 1]
            key_path.write_text("PRIVATE KEY\n")
            Path(f"{key_path}.pub").write_text(f"ssh-ed25519 AAAAFAKE {comment}\n")
        return subprocess.CompletedProcess(cmd, self.returncode)


class FakeGit:
    """Stands in for subprocess.run when git would be called."""

    def __init__(self, url: str | None = "git@github.com:acme/widget.git", work_tree: bool = True) -> None:
        self.url = url
        self.work_tree = work_tree
        self.calls: list[list[str]] = []

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        args = cmd[1:]
        if args[:2] == ["rev-parse", "--is-inside-work-tree"]:
            if self.work_tree:
                return subprocess.CompletedProcess(cmd, 0, "true\n", "")
            return subprocess.CompletedProcess(cmd, 128, "", "fatal: not a git repository\n")
        if args[:2] == ["remote", "get-url"]:
            if self.url is None:
                return subprocess.CompletedProcess(cmd, 2, "", "error: No such remote 'origin'\n")
            return subprocess.CompletedProcess(cmd, 0, self.url + "\n", "")
        if args[:2] == ["remote", "set-url"]:
            self.url = args[3]
            return subprocess.CompletedProcess(cmd, 0, "", "")
        return subprocess.CompletedProcess(cmd, 1, "", "unexpected command\n")


@pytest.fixture
def fake_keygen():
    return FakeKeygen()


@pytest.fixture
def fake_git():
    return FakeGit()
