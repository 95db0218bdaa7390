"""Identity handling, run context and the setup sequence."""

from gitid.core.config import Config, RunContext
from gitid.core.identity import Identity, normalize_identity
from gitid.core.setup import IdentitySetup, SetupResult

__all__ = ["Config", "Identity", "IdentitySetup", "RunContext", "SetupResult", "normalize_identity"]
