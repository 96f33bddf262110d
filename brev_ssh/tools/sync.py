"""Tools for reconciling and inspecting the Brev SSH configuration."""

import asyncio
import logging

from brev_ssh.config.parser import ParseError, SSHConfigDocument
from brev_ssh.models import SyncResult
from brev_ssh.services.inventory import InventoryError
from brev_ssh.services.keys import KeyMaterialError
from brev_ssh.services.ports import ConfigIntegrityError, PortExhaustedError, port_mapping
from brev_ssh.services.renderer import InvalidIdentifierError
from brev_ssh.services.state import get_deps

logger = logging.getLogger(__name__)

SYNC_ERRORS = (
    ConfigIntegrityError,
    InvalidIdentifierError,
    InventoryError,
    KeyMaterialError,
    OSError,
    ParseError,
    PortExhaustedError,
)


def format_sync_result(result: SyncResult) -> str:
    """Render a reconciliation summary for display."""
    lines = [f"SSH config: {result.config_path}"]
    if result.backup_path is not None:
        lines.append(f"Backup:     {result.backup_path}")
    lines.append(f"Identity:   {result.key_path}")
    lines.append("")

    if not (result.changed or result.added or result.removed):
        lines.append("Already up to date.")
    for identifier, port in result.added.items():
        lines.append(f"+ {identifier} (port {port})")
    for pattern in result.removed:
        lines.append(f"- {pattern}")

    lines.append("")
    if result.ports:
        width = max(len(identifier) for identifier in result.ports)
        lines.append(f"{'HOST':<{width}}  PORT")
        for identifier, port in result.ports.items():
            lines.append(f"{identifier:<{width}}  {port}")
    else:
        lines.append("No active workspaces.")

    return "\n".join(lines)


async def sync_ssh_config() -> str:
    """Bring ~/.ssh/config in line with the active Brev workspaces.

    Adds an entry with a unique local port for every active workspace that
    lacks one, and removes entries for workspaces that no longer exist.
    Entries written by hand are never touched.

    Returns:
        Summary of added and removed hosts and the port of each workspace.
    """
    deps = get_deps()
    try:
        engine = deps.engine()
        result = await asyncio.to_thread(engine.reconcile)
    except SYNC_ERRORS as e:
        logger.warning("Sync failed: %s", e)
        return f"Error: Sync failed: {e}"
    return format_sync_result(result)


async def list_workspaces() -> str:
    """List workspaces in the inventory with their configured SSH port.

    Returns:
        Table of workspaces; hosts not yet in ~/.ssh/config show "-".
    """
    deps = get_deps()
    try:
        inventory = deps.require_inventory()
        workspaces = await asyncio.to_thread(inventory.list_workspaces)
    except InventoryError as e:
        return f"Error: {e}"

    if not workspaces:
        return "No workspaces found."

    ports: dict[str, int] = {}
    config_path = deps.config.ssh_config_path
    try:
        if deps.fs.exists(config_path):
            document = SSHConfigDocument.load(deps.fs.read_text(config_path), source=config_path)
            ports = port_mapping(document, deps.config.private_key_path)
    except (ConfigIntegrityError, OSError, ParseError) as e:
        logger.warning("Cannot read ports from %s: %s", config_path, e)

    rows = [
        (w.id, w.identifier, w.status or "-", str(ports.get(w.identifier, "-")))
        for w in workspaces
    ]
    headers = ("ID", "HOST", "STATUS", "PORT")
    widths = [max(len(row[i]) for row in [headers, *rows]) for i in range(len(headers))]

    lines = ["  ".join(cell.ljust(widths[i]) for i, cell in enumerate(headers)).rstrip()]
    for row in rows:
        lines.append("  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip())
    return "\n".join(lines)
