"""Configuration management commands."""

from __future__ import annotations

import argparse

from gitid.cli.formatters import print_error, print_info, print_json, print_success


def cmd_config(args: argparse.Namespace) -> int:
    """Show current defaults."""
    from gitid.core.config import Config

    config = Config()

    if args.json:
        print_json(config._to_dict())
        return 0

    data = config.data
    print(f"Config file: {config.path}{'' if config.path.exists() else ' (not created yet)'}")
    print()
    print(f"prefix     {data.prefix}")
    print(f"user       {data.user}")
    print(f"ssh_dir    {data.ssh_dir}")
    print(f"log_level  {data.logging.level}")
    print(f"log_file   {data.logging.file or '(disabled)'}")
    return 0


def cmd_config_set(args: argparse.Namespace) -> int:
    """Set a default."""
    from gitid.core.config import SETTABLE_KEYS, Config

    key = args.key
    value = args.value

    config = Config()
    try:
        config.set(key, value)
    except KeyError:
        print_error(f"Unknown config key: {key}")
        print_info(f"Known keys: {', '.join(SETTABLE_KEYS)}")
        return 1
    except ValueError as e:
        print_error(str(e))
        return 1

    config.save()
    print_success(f"Set {key} = {value}")
    return 0


def register_commands(subparsers: argparse._SubParsersAction) -> None:
    """Register configuration commands."""
    config_parser = subparsers.add_parser(
        "config",
        help="Show or change defaults",
    )
    config_parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    config_parser.set_defaults(func=cmd_config)

    config_subparsers = config_parser.add_subparsers(
        dest="config_command",
        metavar="<command>",
    )

    set_parser = config_subparsers.add_parser(
        "set",
        help="Set a default value",
    )
    set_parser.add_argument("key", help="Config key to set")
    set_parser.add_argument("value", help="Value to set")
    set_parser.set_defaults(func=cmd_config_set)
