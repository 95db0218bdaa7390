"""Remote URL parsing and per-identity host aliasing."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from gitid.errors import UnrecognizedFormat, UnsupportedScheme


class RemoteKind(Enum):
    """Remote URL grammars, in the order they are tried."""

    ALIASED_SHORTHAND = "aliased-shorthand"
    SSH_SHORTHAND = "ssh-shorthand"
    HTTPS = "https"
    CODECOMMIT = "codecommit"


@dataclass(frozen=True)
class RemoteReference:
    """A parsed remote URL."""

    kind: RemoteKind
    url: str
    user: Optional[str] = None
    host: Optional[str] = None
    path: Optional[str] = None
    repo: Optional[str] = None
    extension: str = ""
    alias: Optional[str] = None

    @property
    def is_ssh(self) -> bool:
        return self.kind in (RemoteKind.ALIASED_SHORTHAND, RemoteKind.SSH_SHORTHAND)

    def with_host(self, hostname: str) -> str:
        """Rebuild the scp-style URL with a different host."""
        return f"{self.user}@{hostname}:{self.path}/{self.repo}{self.extension}"


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving a remote URL for an identity."""

    reference: RemoteReference
    hostname: str
    url: str
    rewrite_needed: bool


# user@host:path/repo(.git) with no scheme. The host part can't contain
# '/', which keeps ssh://, https:// and similar URIs out.
_SHORTHAND_TAIL = r":(?P<path>\S+)/(?P<repo>[^/\s]+?)(?P<ext>\.git)?$"

_SSH_SHORTHAND = re.compile(
    r"^(?P<user>[^@\s/:]+)@(?P<host>[^@\s/:]+)" + _SHORTHAND_TAIL
)

_HTTPS = re.compile(
    r"^https?://(?:[^@/\s]+@)?(?P<host>[^/:\s]+)(?::\d+)?(?:/(?P<path>\S*))?$",
    re.IGNORECASE,
)

_CODECOMMIT = re.compile(
    r"^codecommit(?:::(?P<region>[A-Za-z0-9-]+))?://"
    r"(?:(?P<profile>[^@/\s]+)@)?(?P<repo>\S+)$",
    re.IGNORECASE,
)


def _aliased_pattern(prefix: str) -> re.Pattern[str]:
    return re.compile(
        r"^(?P<user>[^@\s/:]+)@"
        r"(?P<alias>" + re.escape(prefix) + r"-[^.@\s/:]+)\."
        r"(?P<host>[^@\s/:]+)" + _SHORTHAND_TAIL,
        re.IGNORECASE,
    )


def parse_aliased_shorthand(url: str, prefix: str) -> Optional[RemoteReference]:
    """Parse user@<prefix>-<label>.<host>:<path>/<repo>.git."""
    match = _aliased_pattern(prefix).match(url)
    if not match:
        return None
    return RemoteReference(
        kind=RemoteKind.ALIASED_SHORTHAND,
        url=url,
        user=match.group("user"),
        host=match.group("host"),
        path=match.group("path"),
        repo=match.group("repo"),
        extension=match.group("ext") or "",
        alias=match.group("alias"),
    )


def parse_ssh_shorthand(url: str, prefix: str) -> Optional[RemoteReference]:
    """Parse user@<host>:<path>/<repo>.git."""
    match = _SSH_SHORTHAND.match(url)
    if not match:
        return None
    return RemoteReference(
        kind=RemoteKind.SSH_SHORTHAND,
        url=url,
        user=match.group("user"),
        host=match.group("host"),
        path=match.group("path"),
        repo=match.group("repo"),
        extension=match.group("ext") or "",
    )


def parse_https(url: str, prefix: str) -> Optional[RemoteReference]:
    """Parse http(s)://[user@]host[:port]/path."""
    match = _HTTPS.match(url)
    if not match:
        return None
    return RemoteReference(
        kind=RemoteKind.HTTPS,
        url=url,
        host=match.group("host"),
        path=match.group("path"),
    )


def parse_codecommit(url: str, prefix: str) -> Optional[RemoteReference]:
    """Parse codecommit::<region>://[profile@]repo and codecommit://repo."""
    match = _CODECOMMIT.match(url)
    if not match:
        return None
    return RemoteReference(
        kind=RemoteKind.CODECOMMIT,
        url=url,
        host=match.group("region"),
        repo=match.group("repo"),
        user=match.group("profile"),
    )


Parser = Callable[[str, str], Optional[RemoteReference]]

# First match wins.
PARSERS: tuple[Parser, ...] = (
    parse_aliased_shorthand,
    parse_ssh_shorthand,
    parse_https,
    parse_codecommit,
)


def parse_remote(url: str, prefix: str) -> RemoteReference:
    """
    Parse a remote URL with the first grammar that matches.

    Raises:
        UnrecognizedFormat: If no grammar matches.
    """
    url = (url or "").strip()
    for parser in PARSERS:
        reference = parser(url, prefix)
        if reference is not None:
            return reference
    raise UnrecognizedFormat("Unrecognized remote URL format", url)


def resolve_remote(url: str, prefix: str, display: str) -> Resolution:
    """
    Compute the per-identity remote URL and aliased hostname.

    Args:
        url: Current remote URL.
        prefix: Alias prefix (e.g. "gitid").
        display: Prefixed identity (e.g. "gitid-work").

    Returns:
        Resolution. rewrite_needed is False when the URL is already aliased
        for this identity, in which case url is returned unchanged.

    Raises:
        UnsupportedScheme: For HTTPS and CodeCommit remotes.
        UnrecognizedFormat: If the URL matches no known grammar.
    """
    reference = parse_remote(url, prefix)

    if reference.kind is RemoteKind.HTTPS:
        raise UnsupportedScheme(
            "HTTPS remotes don't use SSH keys; switch the remote to SSH first",
            reference.url,
        )
    if reference.kind is RemoteKind.CODECOMMIT:
        raise UnsupportedScheme(
            "CodeCommit remotes authenticate through AWS credentials, not SSH keys",
            reference.url,
        )

    if (
        reference.kind is RemoteKind.ALIASED_SHORTHAND
        and reference.alias.lower() == display.lower()
    ):
        return Resolution(
            reference=reference,
            hostname=f"{reference.alias}.{reference.host}",
            url=reference.url,
            rewrite_needed=False,
        )

    hostname = f"{display}.{reference.host}"
    return Resolution(
        reference=reference,
        hostname=hostname,
        url=reference.with_host(hostname),
        rewrite_needed=True,
    )


def bare_hostname(url: str, prefix: str, display: str) -> str:
    """Return only the aliased hostname (<display>.<host>) for a remote URL."""
    return resolve_remote(url, prefix, display).hostname


def strip_alias(hostname: str, prefix: str) -> str:
    """Remove a leading '<prefix>-<label>.' segment, giving the real host."""
    return re.sub(
        r"^" + re.escape(prefix) + r"-[^.]+\.",
        "",
        hostname,
        count=1,
        flags=re.IGNORECASE,
    )
