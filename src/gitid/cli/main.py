"""Main CLI entry point."""

from __future__ import annotations

import argparse
import sys

from gitid import __version__
from gitid.cli.formatters import print_error
from gitid.errors import GitIdError

# Commands that must not create files, including the log file.
READ_ONLY_COMMANDS = ("resolve",)


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="gitid",
        description="Per-identity SSH keys and host aliases for git remotes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  gitid setup -i work                     Alias origin of the current repo
  gitid setup -i work -r git@github.com:acme/widget.git
  gitid resolve git@github.com:acme/widget.git -i work
  gitid list                              Show configured identities
  gitid config set user git               Change a default

Defaults: ~/.gitid/config.json
Logs:     ~/.gitid/gitid.log
""",
    )

    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"gitid {__version__}",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress error output",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log debug output to the console",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        metavar="<command>",
        title="Commands",
    )

    # Register all command modules
    from gitid.cli.commands import config, hosts, resolve, setup

    setup.register_commands(subparsers)
    resolve.register_commands(subparsers)
    hosts.register_commands(subparsers)
    config.register_commands(subparsers)

    return parser


def _setup_logging(args: argparse.Namespace) -> None:
    from gitid.core.config import Config
    from gitid.utils.logging import setup_logging

    settings = Config().data.logging
    level = "DEBUG" if args.debug else settings.level
    log_file = None if args.command in READ_ONLY_COMMANDS else settings.file
    try:
        setup_logging(log_file=log_file, level=level, console=args.debug)
    except OSError:
        # An unwritable log location shouldn't stop the tool from working
        setup_logging(level=level, console=args.debug)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # No command specified - show help
    if args.command is None:
        parser.print_help()
        return 0

    _setup_logging(args)

    # Handle config without subcommand
    if args.command == "config" and args.config_command is None:
        from gitid.cli.commands.config import cmd_config
        return cmd_config(args)

    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    from gitid.utils.logging import get_logger
    logger = get_logger("gitid.cli")

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130
    except GitIdError as e:
        logger.error(str(e))
        if not args.quiet:
            print_error(str(e))
        return 1
    except Exception as e:
        logger.exception("Unexpected error")
        if not args.quiet:
            print_error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
