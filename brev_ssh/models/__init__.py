"""Data models for brev_ssh."""

from brev_ssh.models.ssh import Directive, HostBlock
from brev_ssh.models.sync import SyncResult
from brev_ssh.models.workspace import Organization, User, Workspace, WorkspaceMetadata

__all__ = [
    "Directive",
    "HostBlock",
    "Organization",
    "SyncResult",
    "User",
    "Workspace",
    "WorkspaceMetadata",
]
