"""Services for brev_ssh."""

from brev_ssh.services.detector import host_identifiers, is_managed, managed_identifiers
from brev_ssh.services.filesystem import LocalFileSystem, MemoryFileSystem
from brev_ssh.services.inventory import BrevAPIInventory, InventoryError, StaticInventory
from brev_ssh.services.keys import KeyMaterialError, PrivateKeyFile
from brev_ssh.services.ports import (
    ConfigIntegrityError,
    PortExhaustedError,
    next_free_port,
    used_ports,
)
from brev_ssh.services.reconcile import ReconciliationEngine, prune_inactive
from brev_ssh.services.renderer import InvalidIdentifierError, render_entry

__all__ = [
    "BrevAPIInventory",
    "ConfigIntegrityError",
    "InvalidIdentifierError",
    "InventoryError",
    "KeyMaterialError",
    "LocalFileSystem",
    "MemoryFileSystem",
    "PortExhaustedError",
    "PrivateKeyFile",
    "ReconciliationEngine",
    "StaticInventory",
    "host_identifiers",
    "is_managed",
    "managed_identifiers",
    "next_free_port",
    "prune_inactive",
    "render_entry",
    "used_ports",
]
