"""Reconcile ~/.ssh/config with the active workspace inventory.

One pass:
    1. resolve the private key path
    2. fetch active workspace identifiers and check each is a valid Host
       pattern
    3. load the config (creating an empty file if missing)
    4. for each active workspace without a managed entry: reload the file,
       pick the next free port, append the entry and write the file back
    5. reload the file, drop managed entries whose workspace is gone, and
       overwrite the file with the result

Ports are allocated before pruning, so an entry about to be removed still
holds its port while new ones are handed out.
"""

import logging
import uuid
from collections.abc import Sequence
from pathlib import Path

from brev_ssh.config.parser import SSHConfigDocument
from brev_ssh.models import HostBlock, SyncResult
from brev_ssh.protocols import FileSystem, PrivateKeyProvider, WorkspaceInventory
from brev_ssh.services.detector import is_managed, managed_blocks, managed_identifiers
from brev_ssh.services.ports import (
    DEFAULT_PORT_BASE,
    DEFAULT_PORT_CEILING,
    block_port,
    next_free_port,
    used_ports,
)
from brev_ssh.services.renderer import render_entry, validate_identifier

logger = logging.getLogger(__name__)

BACKUP_FILE_PREFIX = "config.bak"


def prune_inactive(
    document: SSHConfigDocument,
    key_path: Path | str,
    active: Sequence[str],
) -> tuple[SSHConfigDocument, list[str]]:
    """Drop managed blocks that match none of the active identifiers.

    Foreign blocks are always kept, unchanged and in order.

    Returns:
        Tuple of (pruned document, patterns of removed blocks)
    """
    removed: list[str] = []

    def is_stale(block: HostBlock) -> bool:
        if not is_managed(block, key_path):
            return False
        if any(block.matches(identifier) for identifier in active):
            return False
        removed.extend(block.patterns)
        return True

    pruned = document.without(is_stale)
    return pruned, removed


def active_ports(
    document: SSHConfigDocument,
    key_path: Path | str,
    active: Sequence[str],
) -> dict[str, int]:
    """Map each active identifier to the port of the managed block serving it.

    Raises:
        ConfigIntegrityError: If that block has no usable Port
    """
    blocks = managed_blocks(document, key_path)
    ports: dict[str, int] = {}
    for identifier in active:
        for block in blocks:
            if block.matches(identifier):
                ports[identifier] = block_port(block)
                break
    return ports


class ReconciliationEngine:
    """Runs reconciliation passes against one SSH config file.

    Assumes a single writer: nothing is locked, and two passes running at
    the same time on the same file can race.
    """

    def __init__(
        self,
        fs: FileSystem,
        inventory: WorkspaceInventory,
        keys: PrivateKeyProvider,
        config_path: Path | str,
        port_base: int = DEFAULT_PORT_BASE,
        port_ceiling: int = DEFAULT_PORT_CEILING,
        backup_dir: Path | str | None = None,
    ):
        """Initialize the engine.

        Args:
            fs: Filesystem used for every read and write
            inventory: Source of active workspace identifiers
            keys: Provider of the private key path
            config_path: SSH config file to maintain
            port_base: First local port to hand out
            port_ceiling: Last local port that may be handed out
            backup_dir: Copy the config here before changing it (off if None)
        """
        self.fs = fs
        self.inventory = inventory
        self.keys = keys
        self.config_path = Path(config_path)
        self.port_base = port_base
        self.port_ceiling = port_ceiling
        self.backup_dir = Path(backup_dir) if backup_dir is not None else None

    def load_document(self) -> SSHConfigDocument:
        """Read and parse the config file, creating it empty if missing.

        Raises:
            ParseError: If the file content is malformed
            OSError: If the file cannot be created or read
        """
        if not self.fs.exists(self.config_path):
            self.fs.touch(self.config_path)
        text = self.fs.read_text(self.config_path)
        return SSHConfigDocument.load(text, source=self.config_path)

    def reload_document(self) -> SSHConfigDocument:
        """Re-read the config from disk to pick up writes made this pass."""
        logger.debug("Reloading %s", self.config_path)
        return self.load_document()

    def backup(self, text: str, directory: Path) -> Path:
        """Write ``text`` to a uniquely named backup file in ``directory``."""
        path = directory / f"{BACKUP_FILE_PREFIX}.{uuid.uuid4()}"
        self.fs.write_text(path, text)
        logger.info("Backed up %s to %s", self.config_path, path)
        return path

    def add_missing(
        self,
        document: SSHConfigDocument,
        key_path: Path,
        active: Sequence[str],
    ) -> dict[str, int]:
        """Append an entry for every active workspace that lacks one.

        Each entry is written to disk before the next port is chosen, so two
        workspaces added in the same pass never share a port.

        Returns:
            Identifier to port for each entry added, in processing order
        """
        managed = managed_identifiers(document, key_path)
        added: dict[str, int] = {}

        for identifier in active:
            if identifier in managed:
                continue

            current = self.reload_document()
            port = next_free_port(
                used_ports(current, key_path),
                base=self.port_base,
                ceiling=self.port_ceiling,
            )
            current.append(render_entry(identifier, key_path, port))
            self.fs.write_text(self.config_path, current.render())

            managed.add(identifier)
            added[identifier] = port
            logger.info("Added %s on local port %d", identifier, port)

        return added

    def reconcile(self) -> SyncResult:
        """Run one full reconciliation pass.

        Returns:
            Summary of what changed and the port of each active workspace

        Raises:
            KeyMaterialError: If the private key is unavailable
            InventoryError: If the inventory cannot be read
            InvalidIdentifierError: If an active identifier is not a valid Host
                pattern
            ParseError: If the config file is malformed
            ConfigIntegrityError: If a managed entry has no usable Port
            PortExhaustedError: If no port is left for a new entry
            OSError: If the config file cannot be read or written
        """
        key_path = self.keys.private_key_path()
        active = list(self.inventory.list_active_workspaces())
        for identifier in active:
            validate_identifier(identifier)
        logger.debug("Inventory reports %d active workspace(s)", len(active))

        document = self.load_document()
        original = document.render()

        result = SyncResult(config_path=self.config_path, key_path=key_path, active=active)
        if self.backup_dir is not None:
            result.backup_path = self.backup(original, self.backup_dir)

        result.added = self.add_missing(document, key_path, active)

        document = self.reload_document()
        pruned, result.removed = prune_inactive(document, key_path, active)
        for pattern in result.removed:
            logger.info("Removed inactive workspace %s", pattern)

        result.ports = active_ports(pruned, key_path, active)
        text = pruned.render()
        self.fs.write_text(self.config_path, text)
        result.changed = bool(result.added or result.removed) or text != original

        logger.info(
            "Reconciled %s: %d active, %d added, %d removed",
            self.config_path,
            len(active),
            len(result.added),
            len(result.removed),
        )
        return result
