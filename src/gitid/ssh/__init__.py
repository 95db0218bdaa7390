"""SSH client config and key management."""

from gitid.ssh.config_parser import HostBlock, SSHConfigDocument, SSHConfigParser, SSHHost
from gitid.ssh.keys import KeyProvisioner
from gitid.ssh.reconciler import ReconcileAction, SSHConfigReconciler

__all__ = [
    "HostBlock",
    "KeyProvisioner",
    "ReconcileAction",
    "SSHConfigDocument",
    "SSHConfigParser",
    "SSHConfigReconciler",
    "SSHHost",
]
