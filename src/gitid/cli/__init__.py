"""Command-line interface."""

from gitid.cli.main import main

__all__ = ["main"]
