"""Remote URL resolution and git access."""

from gitid.remote.git import GitRepository
from gitid.remote.url import (
    RemoteKind,
    RemoteReference,
    Resolution,
    bare_hostname,
    parse_remote,
    resolve_remote,
    strip_alias,
)

__all__ = [
    "GitRepository",
    "RemoteKind",
    "RemoteReference",
    "Resolution",
    "bare_hostname",
    "parse_remote",
    "resolve_remote",
    "strip_alias",
]
