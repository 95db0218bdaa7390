"""Utility functions and classes."""

from gitid.utils.logging import get_logger, setup_logging
from gitid.utils.paths import expand_path, get_ssh_dir

__all__ = ["expand_path", "get_logger", "get_ssh_dir", "setup_logging"]
