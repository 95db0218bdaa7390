"""Wire an identity into a repository: remote URL, key and SSH config."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from gitid.core.config import RunContext
from gitid.remote.git import GitRepository
from gitid.remote.url import resolve_remote
from gitid.ssh.keys import KeyProvisioner
from gitid.ssh.reconciler import ReconcileAction, SSHConfigReconciler
from gitid.utils.logging import get_logger


@dataclass
class SetupResult:
    """What a setup run did."""

    hostname: str
    remote_url: str
    url_rewritten: bool
    url_applied: bool
    key_path: Path
    key_created: bool
    config_action: ReconcileAction


class IdentitySetup:
    """
    Runs the setup steps for one identity, in order.

    Example:
        context = RunContext.create("work")
        result = IdentitySetup(context).run()
    """

    def __init__(
        self,
        context: RunContext,
        git: Optional[GitRepository] = None,
        provisioner: Optional[KeyProvisioner] = None,
        reconciler: Optional[SSHConfigReconciler] = None,
    ) -> None:
        self._context = context
        self._git = git or GitRepository()
        self._provisioner = provisioner or KeyProvisioner()
        self._reconciler = reconciler or SSHConfigReconciler(
            context.config_path, prefix=context.prefix
        )
        self._logger = get_logger("gitid.setup")

    @property
    def context(self) -> RunContext:
        return self._context

    def run(self, remote_url: Optional[str] = None) -> SetupResult:
        """
        Perform the full setup.

        Args:
            remote_url: Explicit remote URL. When given, git is not consulted
                and the rewritten URL is only reported, never applied.

        Returns:
            SetupResult describing each step.

        Raises:
            GitIdError: Any step failing aborts the run.
        """
        identity = self._context.identity
        self._logger.info(f"Setting up identity {identity.display}")

        from_repo = remote_url is None
        if from_repo:
            remote_url = self._git.get_remote_url()
            self._logger.debug(f"origin is {remote_url}")

        resolution = resolve_remote(remote_url, identity.prefix, identity.display)

        url_applied = False
        if resolution.rewrite_needed:
            if from_repo:
                self._git.set_remote_url(resolution.url)
                url_applied = True
            else:
                self._logger.info(f"Remote URL for this identity: {resolution.url}")
        else:
            self._logger.info(f"Remote already uses {resolution.hostname}")

        key_path = self._context.key_path
        key_created = self._provisioner.ensure(key_path, resolution.hostname)

        action = self._reconciler.reconcile(
            resolution.hostname, self._context.user, key_path
        )

        self._logger.info(f"Setup complete for {identity.display}")
        return SetupResult(
            hostname=resolution.hostname,
            remote_url=resolution.url,
            url_rewritten=resolution.rewrite_needed,
            url_applied=url_applied,
            key_path=key_path,
            key_created=key_created,
            config_action=action,
        )
