"""The resolve command: show the aliased URL without changing anything."""

from __future__ import annotations

import argparse


def cmd_resolve(args: argparse.Namespace) -> int:
    """Print the per-identity remote URL (or hostname) for a URL."""
    from gitid.core.config import Config
    from gitid.core.identity import normalize_identity
    from gitid.remote.url import resolve_remote

    prefix = args.prefix or Config().data.prefix
    identity = normalize_identity(args.identity, prefix)
    resolution = resolve_remote(args.url, identity.prefix, identity.display)

    if args.hostname:
        print(resolution.hostname)
    else:
        print(resolution.url)
    return 0


def register_commands(subparsers: argparse._SubParsersAction) -> None:
    """Register the resolve command."""
    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Show the aliased remote URL for an identity",
    )
    resolve_parser.add_argument("url", help="Remote URL, e.g. git@github.com:acme/widget.git")
    resolve_parser.add_argument(
        "-i", "--identity",
        required=True,
        help="Identity label",
    )
    resolve_parser.add_argument(
        "-p", "--prefix",
        help="Alias prefix (default: gitid)",
    )
    resolve_parser.add_argument(
        "--hostname",
        action="store_true",
        help="Print only the aliased hostname",
    )
    resolve_parser.set_defaults(func=cmd_resolve)
