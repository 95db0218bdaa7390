"""Keep ~/.ssh/config in step with an identity's aliased host."""

from __future__ import annotations

import os
import tempfile
from enum import Enum
from pathlib import Path

from gitid.errors import ConfigWriteFailed
from gitid.remote.url import strip_alias
from gitid.ssh.config_parser import SSHConfigDocument
from gitid.utils.logging import get_logger

# A user of ".git" means "leave the existing User line alone".
SKIP_USER = ".git"

GLOBAL_OPTIONS = (
    ("AddKeysToAgent", "yes"),
    ("IdentitiesOnly", "yes"),
)


class ReconcileAction(Enum):
    """What reconcile() did to the config file."""

    APPENDED = "appended"
    PATCHED = "patched"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"


def _quote(value: str) -> str:
    return f'"{value}"' if " " in value else value


def format_block(
    header: str, options: list[tuple[str, str]], indent: str, newline: str = "\n"
) -> str:
    """Render a Host block with one option per indented line."""
    lines = [header]
    lines.extend(f"{indent}{key} {value}" for key, value in options)
    return newline.join(lines) + newline


class SSHConfigReconciler:
    """
    Ensures an SSH config entry routes an aliased host to the right key.

    Example:
        reconciler = SSHConfigReconciler(Path("~/.ssh/config").expanduser())
        reconciler.reconcile("gitid-work.github.com", "git", key_path)
    """

    def __init__(self, config_path: Path, prefix: str = "gitid") -> None:
        """
        Args:
            config_path: SSH client config file.
            prefix: Alias prefix, stripped from the host to get HostName.
        """
        self._config_path = Path(config_path)
        self._prefix = prefix
        self._logger = get_logger("gitid.ssh.config")

    @property
    def config_path(self) -> Path:
        return self._config_path

    def _ensure_exists(self) -> None:
        """Create the config (and ~/.ssh) empty if missing."""
        if self._config_path.exists():
            return
        self._config_path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        self._config_path.touch(mode=0o600)
        self._logger.info(f"Created {self._config_path}")

    def _read(self) -> str:
        with open(self._config_path, encoding="utf-8", errors="surrogateescape", newline="") as f:
            return f.read()

    def _write(self, text: str) -> None:
        """Replace the file atomically, keeping its permissions."""
        mode = self._config_path.stat().st_mode & 0o777
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._config_path.name}.",
            dir=self._config_path.parent,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
                f.write(text)
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, self._config_path)
        except (OSError, UnicodeError):
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def host_block(
        self, hostname: str, user: str, key_path: Path, indent: str, newline: str = "\n"
    ) -> str:
        """Render the block for an aliased host."""
        return format_block(
            f"Host {hostname}",
            [
                ("User", user),
                ("HostName", strip_alias(hostname, self._prefix)),
                ("PreferredAuthentications", "publickey"),
                ("IdentitiesOnly", "yes"),
                ("IdentityFile", _quote(str(key_path))),
            ],
            indent,
            newline,
        )

    def plan(self, text: str, hostname: str, user: str, key_path: Path) -> tuple[ReconcileAction, str]:
        """
        Work out the new config text without touching the disk.

        Returns:
            The action and the resulting text (unchanged text for
            UNCHANGED and SKIPPED).
        """
        document = SSHConfigDocument.parse(text)
        block = document.find_host(hostname)

        if block is None:
            indent = document.indent_unit()
            newline = document.newline
            entry = self.host_block(hostname, user, key_path, indent, newline)
            if document.is_blank:
                preamble = format_block("Host *", list(GLOBAL_OPTIONS), indent, newline)
                return ReconcileAction.APPENDED, preamble + newline + entry
            base = text if text.endswith("\n") else text + newline
            return ReconcileAction.APPENDED, base + newline + entry

        if user == SKIP_USER:
            return ReconcileAction.SKIPPED, text

        if not block.set_option("User", user):
            return ReconcileAction.UNCHANGED, text
        return ReconcileAction.PATCHED, document.text

    def reconcile(self, hostname: str, user: str, key_path: Path) -> ReconcileAction:
        """
        Make sure the config has a block for hostname using key_path.

        Appends a new block when the host is unknown. For a known host the
        block's User is updated in place, unless user is ".git".

        Raises:
            ConfigWriteFailed: On any filesystem error.
        """
        try:
            self._ensure_exists()
            text = self._read()
            action, new_text = self.plan(text, hostname, user, key_path)
            if new_text != text:
                self._write(new_text)
        except OSError as e:
            raise ConfigWriteFailed(
                f"Could not update SSH config: {e.strerror or e}",
                context=str(self._config_path),
            ) from e
        except UnicodeError as e:
            raise ConfigWriteFailed(
                f"Could not encode SSH config: {e}",
                context=str(self._config_path),
            ) from e

        if action is ReconcileAction.APPENDED:
            self._logger.info(f"Added Host {hostname} to {self._config_path}")
        elif action is ReconcileAction.PATCHED:
            self._logger.info(f"Set User {user} for Host {hostname}")
        elif action is ReconcileAction.SKIPPED:
            self._logger.debug(f"Host {hostname} already configured, User left alone")
        else:
            self._logger.debug(f"Host {hostname} already up to date")
        return action

    def __repr__(self) -> str:
        return f"SSHConfigReconciler({str(self._config_path)!r})"
