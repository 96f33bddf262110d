"""Application configuration.

Delegates to specialized components:
- Settings: Environment variables
- SSHConfigDocument: Parsed ~/.ssh/config (see parser.py)
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from brev_ssh.config.settings import Settings

logger = logging.getLogger(__name__)

PRIVATE_KEY_FILE_NAME = "brev.pem"
ACTIVE_ORG_FILE_NAME = "active_org.json"


def _expand(path: str) -> Path:
    return Path(os.path.expanduser(os.path.expandvars(path)))


@dataclass
class Config:
    """Application configuration.

    Resolves file locations from settings and exposes the values the
    reconciliation engine and server need.
    """

    settings: Settings = field(default_factory=Settings)

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment.

        Returns:
            Configured instance
        """
        return cls(settings=Settings.from_env())

    @property
    def ssh_config_path(self) -> Path:
        """SSH client config file to reconcile."""
        return _expand(self.settings.ssh_config_path)

    @property
    def brev_dir(self) -> Path:
        """Directory holding the private key, org context and backups."""
        return _expand(self.settings.brev_dir)

    @property
    def private_key_path(self) -> Path:
        """Private key referenced by managed entries."""
        if self.settings.private_key_path:
            return _expand(self.settings.private_key_path)
        return self.brev_dir / PRIVATE_KEY_FILE_NAME

    @property
    def active_org_path(self) -> Path:
        """JSON file naming the active organization."""
        return self.brev_dir / ACTIVE_ORG_FILE_NAME

    @property
    def backup_dir(self) -> Path | None:
        """Where config backups go, or None when backups are off."""
        return self.brev_dir if self.settings.backup else None

    # Delegate to settings for convenience
    @property
    def port_base(self) -> int:
        """First local port handed out to a workspace."""
        return self.settings.port_base

    @property
    def port_ceiling(self) -> int:
        """Highest local port that may be handed out."""
        return self.settings.port_ceiling

    @property
    def transport(self) -> str:
        """Transport type (http or stdio)."""
        return self.settings.transport

    @property
    def http_host(self) -> str:
        """HTTP server bind address."""
        return self.settings.http_host

    @property
    def http_port(self) -> int:
        """HTTP server port."""
        return self.settings.http_port
