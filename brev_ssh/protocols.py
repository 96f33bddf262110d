"""Protocol interfaces for dependency inversion.

The reconciliation engine depends on these contracts rather than on the
local disk or a particular inventory backend, so tests can hand it an
in-memory filesystem and a fixed workspace list.

Usage Example:

    from brev_ssh.protocols import WorkspaceInventory

    def active_hosts(inventory: WorkspaceInventory) -> list[str]:
        return inventory.list_active_workspaces()

    # Real backend
    active_hosts(BrevAPIInventory(base_url, token))

    # Or a fixed list for testing
    active_hosts(StaticInventory(["ws-1", "ws-2"]))
"""

from pathlib import Path
from typing import Protocol, runtime_checkable

from brev_ssh.models import Workspace, WorkspaceMetadata


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for the file operations the engine performs."""

    def exists(self, path: Path) -> bool:
        """Return True if ``path`` is an existing file."""
        ...

    def read_text(self, path: Path) -> str:
        """Read a UTF-8 text file.

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        ...

    def write_text(self, path: Path, data: str) -> None:
        """Replace the file content, creating the file if needed."""
        ...

    def touch(self, path: Path) -> None:
        """Create an empty file (and parent directories) if missing."""
        ...

    def write_private(self, path: Path, data: str, mode: int) -> None:
        """Write a file and restrict its permission bits to ``mode``."""
        ...

    def mkdir(self, path: Path) -> None:
        """Create a directory and its parents; existing ones are left alone."""
        ...


@runtime_checkable
class WorkspaceInventory(Protocol):
    """Protocol for the remote source of workspaces.

    Implementations raise InventoryError on any failure; the engine never
    retries.
    """

    def list_active_workspaces(self) -> list[str]:
        """Return identifiers of active workspaces, in a stable order."""
        ...

    def list_workspaces(self) -> list[Workspace]:
        """Return the active workspaces with their details."""
        ...

    def get_workspace_metadata(self, workspace_id: str) -> WorkspaceMetadata:
        """Return metadata for one workspace."""
        ...


@runtime_checkable
class PrivateKeyProvider(Protocol):
    """Protocol for locating the private key used by managed entries."""

    def private_key_path(self) -> Path:
        """Return the key path, guaranteeing the key exists on disk.

        Raises:
            KeyMaterialError: If the key is not available
        """
        ...


__all__ = [
    "FileSystem",
    "PrivateKeyProvider",
    "WorkspaceInventory",
]
