"""The setup command: alias a remote, create its key, update ~/.ssh/config."""

from __future__ import annotations

import argparse

from gitid.cli.formatters import print_info, print_success, print_warning


def cmd_setup(args: argparse.Namespace) -> int:
    """Set up an identity for a repository."""
    from gitid.core.config import Config
    from gitid.core.setup import IdentitySetup
    from gitid.ssh.keys import KeyProvisioner
    from gitid.ssh.reconciler import ReconcileAction

    config = Config()
    context = config.context(
        args.identity,
        prefix=args.prefix,
        user=args.user,
        ssh_dir=args.ssh_dir,
    )

    provisioner = KeyProvisioner()
    result = IdentitySetup(context, provisioner=provisioner).run(remote_url=args.repo)

    # Remote URL
    if result.url_applied:
        print_success(f"Remote origin set to {result.remote_url}")
    elif result.url_rewritten:
        print_info(f"Use this remote URL: {result.remote_url}")
    else:
        print_info(f"Remote already uses {result.hostname}")

    # Key
    if result.key_created:
        print_success(f"Created key {result.key_path}")
        public_key = provisioner.public_key(result.key_path)
        if public_key:
            print_info("Add this public key to your account on the git host:")
            print(public_key)
    else:
        print_info(f"Using existing key {result.key_path}")

    # SSH config
    if result.config_action is ReconcileAction.APPENDED:
        print_success(f"Added Host {result.hostname} to {context.config_path}")
    elif result.config_action is ReconcileAction.PATCHED:
        print_success(f"Updated User for Host {result.hostname}")
    elif result.config_action is ReconcileAction.SKIPPED:
        print_warning(f"Host {result.hostname} already configured, User left unchanged")
    else:
        print_info(f"Host {result.hostname} already configured")

    print_success(f"Identity {context.identity.display} is ready")
    return 0


def register_commands(subparsers: argparse._SubParsersAction) -> None:
    """Register the setup command."""
    setup_parser = subparsers.add_parser(
        "setup",
        help="Set up an identity for a repository",
    )
    setup_parser.add_argument(
        "-i", "--identity",
        required=True,
        help="Identity label, e.g. 'work' or 'personal'",
    )
    setup_parser.add_argument(
        "-u", "--user",
        help="SSH user for the host entry (default: git)",
    )
    setup_parser.add_argument(
        "-r", "--repo",
        help="Remote URL to use instead of origin of the current repository",
    )
    setup_parser.add_argument(
        "-p", "--prefix",
        help="Alias prefix (default: gitid)",
    )
    setup_parser.add_argument(
        "--ssh-dir",
        help="Directory holding the SSH config and keys (default: ~/.ssh)",
    )
    setup_parser.set_defaults(func=cmd_setup)
