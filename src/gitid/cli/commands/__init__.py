"""CLI command modules, each exposing register_commands(subparsers)."""
