"""Exception hierarchy for gitid."""

from __future__ import annotations

from typing import Optional


class GitIdError(Exception):
    """Base exception for all gitid errors."""

    def __init__(self, message: str, context: Optional[str] = None) -> None:
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message} ({self.context})"
        return self.message


class InvalidIdentity(GitIdError):
    """Raised when an identity label is empty, malformed or already prefixed."""

    pass


class RemoteURLError(GitIdError):
    """Base class for remote URL resolution failures."""

    def __init__(self, message: str, url: str) -> None:
        self.url = url
        super().__init__(message, context=url)


class UnsupportedScheme(RemoteURLError):
    """Raised for remote URLs where an SSH key has no meaning (HTTPS, CodeCommit)."""

    pass


class UnrecognizedFormat(RemoteURLError):
    """Raised when a remote URL matches none of the known grammars."""

    pass


class KeyGenerationFailed(GitIdError):
    """Raised when ssh-keygen fails or cannot be started."""

    pass


class ConfigWriteFailed(GitIdError):
    """Raised when the SSH client config cannot be read or written."""

    pass


class GitError(GitIdError):
    """Base class for git collaborator failures."""

    pass


class GitCommandFailed(GitError):
    """Raised when a git command exits non-zero or cannot be started."""

    pass


class NotAGitRepository(GitError):
    """Raised when no remote URL was given and the cwd is not a work tree."""

    pass
