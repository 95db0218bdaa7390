"""Logging setup utilities."""

import logging
from pathlib import Path
from typing import Optional

from gitid.utils.paths import ensure_parent_exists

LOG_FORMAT = "[%(asctime)s] %(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    log_file: Optional[Path] = None,
    level: str = "INFO",
    name: str = "gitid",
    console: bool = True,
) -> logging.Logger:
    """
    Set up logging with console and file handlers.

    Args:
        log_file: Path to log file. If None, only console logging is enabled.
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        name: Logger name.
        console: Whether to attach a console handler.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Clear existing handlers to avoid duplicates
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_path = ensure_parent_exists(log_file)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


def get_logger(name: str = "gitid") -> logging.Logger:
    """
    Get a logger in the gitid hierarchy.

    Child loggers ("gitid.ssh", "gitid.setup", ...) propagate to the
    "gitid" logger configured by setup_logging().
    """
    if name != "gitid" and not name.startswith("gitid."):
        name = f"gitid.{name}"
    return logging.getLogger(name)
