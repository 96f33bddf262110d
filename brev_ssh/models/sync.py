"""Reconciliation result model."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class SyncResult:
    """Outcome of one reconciliation pass.

    ``ports`` is the run's port mapping: every active workspace that has a
    managed entry in the final file, mapped to its local port. It is rebuilt
    on each pass; the config file remains the source of truth.
    """

    config_path: Path
    key_path: Path
    active: list[str] = field(default_factory=list)
    added: dict[str, int] = field(default_factory=dict)
    removed: list[str] = field(default_factory=list)
    ports: dict[str, int] = field(default_factory=dict)
    backup_path: Path | None = None
    changed: bool = False

    def port_for(self, identifier: str) -> int:
        """Get the local port configured for a workspace.

        Raises:
            KeyError: If the workspace has no managed entry
        """
        try:
            return self.ports[identifier]
        except KeyError:
            raise KeyError(f"port not found for workspace {identifier!r}") from None
