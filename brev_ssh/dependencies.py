"""Dependency injection container for brev_ssh.

Builds the filesystem, inventory, key provider and engine from one Config
so tools and tests can share or replace them explicitly.
"""

import logging
from dataclasses import dataclass

from brev_ssh.config import Config
from brev_ssh.protocols import FileSystem, PrivateKeyProvider, WorkspaceInventory
from brev_ssh.services.filesystem import LocalFileSystem
from brev_ssh.services.inventory import BrevAPIInventory, InventoryError, StaticInventory
from brev_ssh.services.keys import PrivateKeyFile
from brev_ssh.services.reconcile import ReconciliationEngine

logger = logging.getLogger(__name__)


def _build_inventory(config: Config, fs: FileSystem) -> WorkspaceInventory | None:
    settings = config.settings
    if settings.api_url and settings.api_token:
        logger.info("Using Brev API inventory at %s", settings.api_url)
        return BrevAPIInventory(
            base_url=settings.api_url,
            token=settings.api_token,
            org_id=settings.org_id or None,
            fs=fs,
            active_org_path=config.active_org_path,
            timeout=settings.request_timeout,
        )
    if settings.workspaces:
        logger.info("Using static inventory with %d workspace(s)", len(settings.workspaces))
        return StaticInventory(settings.workspaces)
    logger.warning("No workspace inventory configured (set BREV_SSH_API_URL or BREV_SSH_WORKSPACES)")
    return None


@dataclass
class Dependencies:
    """Container for brev_ssh dependencies.

    Example:
        deps = Dependencies.create()
        result = deps.engine().reconcile()
    """

    config: Config
    fs: FileSystem
    keys: PrivateKeyProvider
    inventory: WorkspaceInventory | None = None

    @classmethod
    def create(cls) -> "Dependencies":
        """Create dependencies from the environment.

        Returns:
            Initialized Dependencies instance
        """
        return cls.from_config(Config.from_env())

    @classmethod
    def from_config(cls, config: Config, fs: FileSystem | None = None) -> "Dependencies":
        """Create dependencies for a given configuration.

        Args:
            config: Config instance
            fs: Filesystem to use (local disk if None)

        Returns:
            Dependencies wired from config
        """
        fs = fs or LocalFileSystem()
        keys = PrivateKeyFile(
            fs,
            config.private_key_path,
            material=config.settings.private_key_material,
        )
        return cls(config=config, fs=fs, keys=keys, inventory=_build_inventory(config, fs))

    def require_inventory(self) -> WorkspaceInventory:
        """Return the inventory or fail if none is configured.

        Raises:
            InventoryError: If no inventory backend is configured
        """
        if self.inventory is None:
            raise InventoryError(
                "No workspace inventory configured; set BREV_SSH_API_URL and "
                "BREV_SSH_API_TOKEN, or BREV_SSH_WORKSPACES"
            )
        return self.inventory

    def engine(self) -> ReconciliationEngine:
        """Build a reconciliation engine for the configured SSH config.

        Raises:
            InventoryError: If no inventory backend is configured
        """
        return ReconciliationEngine(
            fs=self.fs,
            inventory=self.require_inventory(),
            keys=self.keys,
            config_path=self.config.ssh_config_path,
            port_base=self.config.port_base,
            port_ceiling=self.config.port_ceiling,
            backup_dir=self.config.backup_dir,
        )

    def cleanup(self) -> None:
        """Release resources held by the inventory."""
        close = getattr(self.inventory, "close", None)
        if close is not None:
            close()
