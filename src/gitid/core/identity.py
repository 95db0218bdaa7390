"""Identity label validation and normalization."""

from __future__ import annotations

import re
from dataclasses import dataclass

from gitid.errors import InvalidIdentity

DEFAULT_PREFIX = "gitid"

# Identities end up as a hostname label and as part of a key file name.
_IDENTITY_CHARS = re.compile(r"^[A-Za-z0-9_-]+$")


@dataclass(frozen=True)
class Identity:
    """A normalized identity label and the names derived from it."""

    raw: str
    prefix: str

    @property
    def normalized(self) -> str:
        """Lowercased identity, hyphens kept."""
        return self.raw.lower()

    @property
    def display(self) -> str:
        """Prefixed identity used as the alias segment, e.g. 'gitid-work'."""
        return f"{self.prefix}-{self.normalized}"

    @property
    def key_name(self) -> str:
        """Private key file name, e.g. 'id_gitid_my_work'."""
        return f"id_{self.prefix}_{self.normalized.replace('-', '_')}"

    def __str__(self) -> str:
        return self.display


def normalize_identity(raw: str, prefix: str = DEFAULT_PREFIX) -> Identity:
    """
    Validate a user-supplied identity and derive its canonical names.

    Args:
        raw: Identity label as typed by the user (e.g. "Work", "acme-llc").
        prefix: Alias prefix (default "gitid").

    Returns:
        Identity with display and key file names.

    Raises:
        InvalidIdentity: If the identity is empty, holds characters that
            cannot appear in a hostname label, or already contains the prefix.
    """
    value = (raw or "").strip()
    prefix = (prefix or "").strip()

    if not prefix:
        raise InvalidIdentity("Prefix must not be empty")
    if not value:
        raise InvalidIdentity("Identity must not be empty")
    if not _IDENTITY_CHARS.match(value):
        raise InvalidIdentity(
            "Identity may only contain letters, digits, '-' and '_'",
            context=value,
        )
    if prefix.lower() in value.replace("-", "").lower():
        raise InvalidIdentity(
            f"Identity must not contain the prefix '{prefix}'",
            context=value,
        )

    return Identity(raw=value, prefix=prefix)
