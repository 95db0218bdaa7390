"""Lossless parser for ~/.ssh/config files."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional

from gitid.utils.paths import get_ssh_dir

DEFAULT_INDENT = "  "

# "Keyword value" or "Keyword=value"; trailing whitespace (including a
# stray \r from CRLF files) is kept out of the value.
_OPTION = re.compile(r"^(?P<lead>\s*(?P<key>\w+)(?:\s*=\s*|\s+))(?P<value>.*?)(?P<trail>\s*)$")
_HEADER_KEYWORDS = ("host", "match")


def _split_option(line: str) -> Optional[tuple[str, str]]:
    """Return (lowercased keyword, value) for an option line, else None."""
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None
    match = _OPTION.match(line)
    if not match:
        return None
    return match.group("key").lower(), match.group("value")


def _leading_whitespace(line: str) -> str:
    expanded = line.expandtabs(4)
    return expanded[: len(expanded) - len(expanded.lstrip())]


@dataclass
class HostBlock:
    """
    One Host (or Match) section: the header line plus its raw body lines.

    Body lines are kept verbatim, including blank lines and comments that
    follow the block, so serializing an untouched block reproduces it exactly.
    """

    header: str
    lines: list[str] = field(default_factory=list)

    @property
    def keyword(self) -> str:
        parsed = _split_option(self.header)
        return parsed[0] if parsed else ""

    @property
    def patterns(self) -> list[str]:
        """Host patterns on the header line (empty for Match blocks)."""
        parsed = _split_option(self.header)
        if not parsed or parsed[0] != "host":
            return []
        return parsed[1].split()

    def matches(self, hostname: str) -> bool:
        """Exact, case-insensitive match against the header's patterns."""
        hostname = hostname.lower()
        return any(p.lower() == hostname for p in self.patterns)

    def options(self) -> Iterator[tuple[int, str, str]]:
        """Yield (line index, lowercased keyword, value) for each option line."""
        for index, line in enumerate(self.lines):
            parsed = _split_option(line)
            if parsed:
                yield index, parsed[0], parsed[1]

    def get(self, key: str) -> Optional[str]:
        """First value of an option, like ssh itself uses."""
        key = key.lower()
        for _, option, value in self.options():
            if option == key:
                return value
        return None

    @property
    def eol(self) -> str:
        """Carriage return for CRLF blocks, else empty."""
        return "\r" if self.header.endswith("\r") else ""

    @property
    def indent(self) -> str:
        """Indentation used by the block's option lines."""
        for index, _, _ in self.options():
            line = self.lines[index]
            return line[: len(line) - len(line.lstrip())] or DEFAULT_INDENT
        return DEFAULT_INDENT

    def set_option(self, key: str, value: str) -> bool:
        """
        Set an option in place, or insert it right after the header.

        Only the value of the first matching line changes; its keyword
        casing, indentation and separator are kept.

        Returns:
            True if the block changed.
        """
        for index, option, current in self.options():
            if option != key.lower():
                continue
            if current == value:
                return False
            match = _OPTION.match(self.lines[index])
            self.lines[index] = f"{match.group('lead')}{value}{match.group('trail')}"
            return True

        self.lines.insert(0, f"{self.indent}{key} {value}{self.eol}")
        return True

    def render(self) -> list[str]:
        return [self.header, *self.lines]


@dataclass
class SSHHost:
    """Parsed view of a single host alias."""

    alias: str
    hostname: Optional[str] = None
    user: Optional[str] = None
    port: int = 22
    identity_file: Optional[Path] = None
    other_options: dict[str, str] = field(default_factory=dict)

    @property
    def effective_hostname(self) -> str:
        """Get the effective hostname (alias if no explicit hostname)."""
        return self.hostname or self.alias

    @classmethod
    def from_block(cls, alias: str, block: HostBlock) -> SSHHost:
        host = cls(alias=alias)
        for _, key, value in block.options():
            if key == "hostname":
                host.hostname = host.hostname or value
            elif key == "user":
                host.user = host.user or value
            elif key == "port":
                try:
                    host.port = int(value)
                except ValueError:
                    pass
            elif key == "identityfile":
                if host.identity_file is None:
                    host.identity_file = Path(value.strip('"')).expanduser()
            else:
                host.other_options.setdefault(key, value)
        return host

    def to_dict(self) -> dict[str, object]:
        return {
            "alias": self.alias,
            "hostname": self.effective_hostname,
            "user": self.user,
            "port": self.port,
            "identity_file": str(self.identity_file) if self.identity_file else None,
        }


class SSHConfigDocument:
    """
    An SSH client config as an ordered list of lines.

    Lines before the first Host/Match header form the preamble; every other
    line belongs to the block above it. str(document) returns the original
    text byte for byte until a block is modified.
    """

    def __init__(self, preamble: list[str], blocks: list[HostBlock]) -> None:
        self.preamble = preamble
        self.blocks = blocks

    @classmethod
    def parse(cls, text: str) -> SSHConfigDocument:
        preamble: list[str] = []
        blocks: list[HostBlock] = []

        for line in text.split("\n"):
            parsed = _split_option(line)
            if parsed and parsed[0] in _HEADER_KEYWORDS:
                blocks.append(HostBlock(header=line))
            elif blocks:
                blocks[-1].lines.append(line)
            else:
                preamble.append(line)

        return cls(preamble, blocks)

    @classmethod
    def load(cls, path: Path) -> SSHConfigDocument:
        """Read a config file (a missing file is an empty document)."""
        if not path.exists():
            return cls.parse("")
        return cls.parse(path.read_text(encoding="utf-8", errors="surrogateescape"))

    @property
    def lines(self) -> list[str]:
        result = list(self.preamble)
        for block in self.blocks:
            result.extend(block.render())
        return result

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def newline(self) -> str:
        """Line ending for new lines: CRLF if the file already uses it."""
        return "\r\n" if "\r\n" in self.text else "\n"

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()

    def indent_unit(self) -> str:
        """
        Indentation for newly written option lines.

        Taken from the first non-blank line that is indented at all (tabs
        count as four spaces); two spaces when nothing is indented.
        Unlike a plain first-non-blank-line rule, unindented lines are
        skipped, so a leading Host header does not force zero indent.
        """
        for line in self.lines:
            if not line.strip():
                continue
            lead = _leading_whitespace(line)
            if lead:
                return lead
        return DEFAULT_INDENT

    def find_host(self, hostname: str) -> Optional[HostBlock]:
        """First Host block whose patterns include hostname exactly."""
        for block in self.blocks:
            if block.matches(hostname):
                return block
        return None

    def __contains__(self, hostname: str) -> bool:
        return self.find_host(hostname) is not None

    def __str__(self) -> str:
        return self.text


class SSHConfigParser:
    """
    Read-only access to host aliases defined in ~/.ssh/config.

    Wildcard patterns are skipped; when an alias appears in more than one
    block the first one wins, as with ssh itself.
    """

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Initialize the parser.

        Args:
            config_path: Path to SSH config file. Defaults to ~/.ssh/config.
        """
        self._config_path = config_path or get_ssh_dir() / "config"
        self._document = SSHConfigDocument.load(self._config_path)
        self._hosts: dict[str, SSHHost] = {}

        for block in self._document.blocks:
            for alias in block.patterns:
                if "*" in alias or "?" in alias or alias.startswith("!"):
                    continue
                self._hosts.setdefault(alias, SSHHost.from_block(alias, block))

    @property
    def document(self) -> SSHConfigDocument:
        return self._document

    def get_host(self, alias: str) -> Optional[SSHHost]:
        """Get SSH host configuration by alias."""
        return self._hosts.get(alias)

    def has_host(self, alias: str) -> bool:
        """Check if a host alias exists."""
        return alias in self._hosts

    def list_hosts(self) -> list[str]:
        """Get list of all configured host aliases."""
        return list(self._hosts.keys())

    def hosts_with_prefix(self, prefix: str) -> list[SSHHost]:
        """Hosts whose alias starts with '<prefix>-' (i.e. gitid identities)."""
        marker = f"{prefix.lower()}-"
        return [h for a, h in self._hosts.items() if a.lower().startswith(marker)]

    def __contains__(self, alias: str) -> bool:
        return alias in self._hosts

    def __len__(self) -> int:
        return len(self._hosts)
