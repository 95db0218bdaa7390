"""The list command: identities already present in ~/.ssh/config."""

from __future__ import annotations

import argparse

from gitid.cli.formatters import print_info, print_json, print_table


def cmd_list(args: argparse.Namespace) -> int:
    """List identity host aliases from the SSH config."""
    from gitid.core.config import Config
    from gitid.ssh.config_parser import SSHConfigParser
    from gitid.utils.paths import expand_path

    config = Config()
    prefix = args.prefix or config.data.prefix
    ssh_dir = expand_path(args.ssh_dir) if args.ssh_dir else config.data.ssh_dir

    hosts = SSHConfigParser(ssh_dir / "config").hosts_with_prefix(prefix)

    if args.json:
        print_json([host.to_dict() for host in hosts])
        return 0

    if not hosts:
        print_info(f"No '{prefix}-' hosts in {ssh_dir / 'config'}")
        print_info("Add one with: gitid setup -i <identity>")
        return 0

    rows = [
        {
            "Host": host.alias,
            "HostName": host.effective_hostname,
            "User": host.user or "",
            "IdentityFile": host.identity_file or "",
        }
        for host in hosts
    ]
    print_table(["Host", "HostName", "User", "IdentityFile"], rows)
    return 0


def register_commands(subparsers: argparse._SubParsersAction) -> None:
    """Register the list command."""
    list_parser = subparsers.add_parser(
        "list",
        help="List identity hosts in the SSH config",
    )
    list_parser.add_argument(
        "-p", "--prefix",
        help="Alias prefix (default: gitid)",
    )
    list_parser.add_argument(
        "--ssh-dir",
        help="Directory holding the SSH config (default: ~/.ssh)",
    )
    list_parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    list_parser.set_defaults(func=cmd_list)
