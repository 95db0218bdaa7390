"""SSH key provisioning via ssh-keygen."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Optional

from gitid.errors import KeyGenerationFailed
from gitid.utils.logging import get_logger

Runner = Callable[..., subprocess.CompletedProcess]

KEY_TYPE = "ed25519"


class KeyProvisioner:
    """
    Creates an ed25519 keypair for an identity unless one already exists.

    ssh-keygen runs attached to the terminal so it can prompt for a
    passphrase; gitid never handles passphrases itself.
    """

    def __init__(self, runner: Optional[Runner] = None, keygen: str = "ssh-keygen") -> None:
        """
        Args:
            runner: subprocess.run compatible callable (injectable for tests).
            keygen: ssh-keygen executable.
        """
        self._runner = runner or subprocess.run
        self._keygen = keygen
        self._logger = get_logger("gitid.ssh.keys")

    def build_command(self, key_path: Path, comment: str) -> list[str]:
        return [self._keygen, "-t", KEY_TYPE, "-C", comment, "-f", str(key_path)]

    def ensure(self, key_path: Path, comment: str) -> bool:
        """
        Make sure a private key exists at key_path.

        Args:
            key_path: Private key path; ssh-keygen writes <key_path>.pub too.
            comment: Key comment, normally the aliased hostname.

        Returns:
            True if a key was generated, False if one was already there.

        Raises:
            KeyGenerationFailed: If ssh-keygen can't be run or exits non-zero.
        """
        key_path = Path(key_path)
        if key_path.exists():
            self._logger.debug(f"Key already exists: {key_path}")
            return False

        try:
            key_path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        except OSError as e:
            raise KeyGenerationFailed(
                f"Could not create key directory: {e}",
                context=str(key_path.parent),
            ) from e

        cmd = self.build_command(key_path, comment)
        self._logger.info(f"Generating {KEY_TYPE} key: {key_path}")
        self._logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = self._runner(cmd)
        except OSError as e:
            raise KeyGenerationFailed(f"Could not run {self._keygen}: {e}") from e

        if result.returncode != 0:
            raise KeyGenerationFailed(
                f"{self._keygen} exited with status {result.returncode}",
                context=str(key_path),
            )
        if not key_path.exists():
            raise KeyGenerationFailed(
                f"{self._keygen} finished but no key was written",
                context=str(key_path),
            )

        self._logger.info(f"Created {key_path} and {key_path}.pub")
        return True

    def public_key(self, key_path: Path) -> Optional[str]:
        """Read <key_path>.pub, or None if it isn't there."""
        pub_path = Path(f"{key_path}.pub")
        if not pub_path.exists():
            return None
        return pub_path.read_text().strip()
