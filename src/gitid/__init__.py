"""
gitid - per-identity SSH keys and host aliases for git remotes

Routes a repository's remote through a synthetic hostname such as
gitid-work.github.com, creates a key for that identity and maps the
hostname back to the real host in ~/.ssh/config.
"""

__version__ = "1.0.0"

from gitid.core.config import Config, RunContext
from gitid.core.setup import IdentitySetup

__all__ = ["Config", "IdentitySetup", "RunContext", "__version__"]
