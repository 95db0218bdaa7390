"""User defaults and the per-run context."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from gitid.core.identity import DEFAULT_PREFIX, Identity, normalize_identity
from gitid.utils.fluent import FluentBuilder
from gitid.utils.logging import get_logger
from gitid.utils.paths import expand_path, get_config_file, get_log_file, get_ssh_dir

DEFAULT_USER = "git"

SETTABLE_KEYS = ("prefix", "user", "ssh_dir", "log_level", "log_file")


@dataclass
class LoggingConfig:
    """Logging configuration."""

    file: Optional[Path] = field(default_factory=get_log_file)
    level: str = "INFO"


@dataclass
class ConfigData:
    """Defaults applied when a flag is not given on the command line."""

    prefix: str = DEFAULT_PREFIX
    user: str = DEFAULT_USER
    ssh_dir: Path = field(default_factory=get_ssh_dir)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


@dataclass(frozen=True)
class RunContext:
    """Everything one invocation needs, computed once and passed around."""

    identity: Identity
    user: str
    ssh_dir: Path

    @property
    def prefix(self) -> str:
        return self.identity.prefix

    @property
    def config_path(self) -> Path:
        """SSH client config file."""
        return self.ssh_dir / "config"

    @property
    def key_path(self) -> Path:
        """Private key for this identity."""
        return self.ssh_dir / self.identity.key_name

    @classmethod
    def create(
        cls,
        identity: str,
        prefix: str = DEFAULT_PREFIX,
        user: str = DEFAULT_USER,
        ssh_dir: Optional[Path] = None,
    ) -> RunContext:
        """Normalize the identity and build a context."""
        return cls(
            identity=normalize_identity(identity, prefix),
            user=user,
            ssh_dir=Path(ssh_dir) if ssh_dir else get_ssh_dir(),
        )


class Config(FluentBuilder["Config"]):
    """
    Fluent builder over ~/.gitid/config.json.

    Example:
        config = (
            Config()
            .prefix("gitid")
            .user("git")
            .ssh_dir("~/.ssh")
            .save()
        )
    """

    def __init__(self, config_path: Optional[Path] = None) -> None:
        super().__init__()
        self._config_path = config_path or get_config_file()
        self._data = ConfigData()
        self._logger = get_logger("gitid.config")
        self._load_existing()

    def _load_existing(self) -> None:
        """Load existing config if present."""
        if not self._config_path.exists():
            return
        try:
            with open(self._config_path) as f:
                data = json.load(f)
            self._from_dict(data)
        except (json.JSONDecodeError, AttributeError, KeyError, TypeError) as e:
            self._logger.warning(f"Ignoring unreadable config {self._config_path}: {e}")

    def _from_dict(self, data: dict[str, Any]) -> None:
        """Populate config from dictionary (for loading from JSON)."""
        self._data.prefix = data.get("prefix", DEFAULT_PREFIX)
        self._data.user = data.get("user", DEFAULT_USER)
        if data.get("ssh_dir"):
            self._data.ssh_dir = expand_path(data["ssh_dir"])

        if "logging" in data:
            log = data["logging"]
            log_file = log.get("file")
            self._data.logging.file = expand_path(log_file) if log_file else None
            self._data.logging.level = log.get("level", "INFO").upper()

    def _to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for JSON serialization."""
        return {
            "prefix": self._data.prefix,
            "user": self._data.user,
            "ssh_dir": str(self._data.ssh_dir),
            "logging": {
                "file": str(self._data.logging.file) if self._data.logging.file else None,
                "level": self._data.logging.level,
            },
        }

    # Fluent builder methods

    def prefix(self, value: str) -> Config:
        """Set the default alias prefix."""
        self._check_not_built()
        value = value.strip()
        if not value:
            raise ValueError("Prefix must not be empty")
        self._data.prefix = value
        return self

    def user(self, value: str) -> Config:
        """Set the default SSH user for new host blocks."""
        self._check_not_built()
        self._data.user = value
        return self

    def ssh_dir(self, path: str) -> Config:
        """Set the directory holding the SSH config and keys."""
        self._check_not_built()
        self._data.ssh_dir = expand_path(path)
        return self

    def log_file(self, path: Optional[str]) -> Config:
        """Set the log file path (empty or None disables file logging)."""
        self._check_not_built()
        self._data.logging.file = expand_path(path) if path else None
        return self

    def log_level(self, level: str) -> Config:
        """Set the log level."""
        self._check_not_built()
        level = level.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {level}")
        self._data.logging.level = level
        return self

    def set(self, key: str, value: str) -> Config:
        """Set one of SETTABLE_KEYS by name."""
        setters = {
            "prefix": self.prefix,
            "user": self.user,
            "ssh_dir": self.ssh_dir,
            "log_level": self.log_level,
            "log_file": self.log_file,
        }
        if key not in setters:
            raise KeyError(key)
        return setters[key](value)

    def save(self) -> Config:
        """Save configuration to file."""
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._config_path, "w") as f:
            json.dump(self._to_dict(), f, indent=2)
        return self

    def build(self) -> ConfigData:
        """Build and return the configuration data."""
        self._mark_built()
        return self._data

    @property
    def data(self) -> ConfigData:
        """Get the configuration data without marking as built."""
        return self._data

    @property
    def path(self) -> Path:
        return self._config_path

    def context(
        self,
        identity: str,
        prefix: Optional[str] = None,
        user: Optional[str] = None,
        ssh_dir: Optional[str] = None,
    ) -> RunContext:
        """Build a RunContext, falling back to saved defaults for unset values."""
        return RunContext.create(
            identity,
            prefix=prefix or self._data.prefix,
            user=user or self._data.user,
            ssh_dir=expand_path(ssh_dir) if ssh_dir else self._data.ssh_dir,
        )

    def __repr__(self) -> str:
        return f"Config(path={self._config_path}, prefix={self._data.prefix!r})"


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file."""
    return Config(config_path)
