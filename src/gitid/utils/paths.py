"""Path expansion and well-known locations."""

from pathlib import Path
from typing import Union


def expand_path(path: Union[str, Path]) -> Path:
    """Expand ~ in a path and make it absolute."""
    return Path(path).expanduser().resolve()


def ensure_parent_exists(path: Union[str, Path], mode: int = 0o777) -> Path:
    """Ensure the parent directory of a path exists, creating it if necessary."""
    path = expand_path(path)
    path.parent.mkdir(mode=mode, parents=True, exist_ok=True)
    return path


def get_ssh_dir() -> Path:
    """Get the user's SSH directory (~/.ssh on every platform OpenSSH supports)."""
    return Path.home() / ".ssh"


def get_config_dir() -> Path:
    """Get the gitid configuration directory (~/.gitid)."""
    return Path.home() / ".gitid"


def get_config_file() -> Path:
    """Get the path to the gitid defaults file."""
    return get_config_dir() / "config.json"


def get_log_file() -> Path:
    """Get the default log file path."""
    return get_config_dir() / "gitid.log"
