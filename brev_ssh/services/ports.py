"""Local port allocation for managed entries."""

import logging
from collections.abc import Collection
from pathlib import Path

from brev_ssh.config.parser import SSHConfigDocument
from brev_ssh.models import HostBlock
from brev_ssh.services.detector import host_identifiers, managed_blocks

logger = logging.getLogger(__name__)

DEFAULT_PORT_BASE = 2222
DEFAULT_PORT_CEILING = 65535


class ConfigIntegrityError(Exception):
    """A managed entry has a missing or non-numeric Port."""

    def __init__(self, host: str, value: str | None):
        """Initialize integrity error.

        Args:
            host: First pattern of the offending block
            value: Port value found, or None if missing
        """
        self.host = host
        self.value = value
        if value is None:
            detail = "has no Port directive"
        else:
            detail = f"has non-numeric Port {value!r}"
        super().__init__(f"Managed host {host} {detail}")


class PortExhaustedError(Exception):
    """No free port left between the base and the ceiling."""

    def __init__(self, base: int, ceiling: int):
        self.base = base
        self.ceiling = ceiling
        super().__init__(f"No free local port in range {base}-{ceiling}")


def next_free_port(
    used_ports: Collection[int],
    base: int = DEFAULT_PORT_BASE,
    ceiling: int = DEFAULT_PORT_CEILING,
) -> int:
    """Return the smallest port >= ``base`` not in ``used_ports``.

    Raises:
        PortExhaustedError: If every port up to ``ceiling`` is taken
    """
    port = base
    while port in used_ports:
        port += 1
    if port > ceiling:
        raise PortExhaustedError(base, ceiling)
    return port


def block_port(block: HostBlock) -> int:
    """Parse the Port directive of a managed block.

    Raises:
        ConfigIntegrityError: If Port is missing or not an integer
    """
    value = block.get("Port")
    if value is None:
        raise ConfigIntegrityError(block.patterns[0], None)
    try:
        return int(value)
    except ValueError:
        raise ConfigIntegrityError(block.patterns[0], value) from None


def port_mapping(document: SSHConfigDocument, key_path: Path | str) -> dict[str, int]:
    """Map each managed host pattern to its Port.

    Multi-pattern blocks are keyed by every pattern; when two blocks share
    a pattern the first one wins, as it does for ssh.

    Raises:
        ConfigIntegrityError: If a managed block has no usable Port
    """
    mapping: dict[str, int] = {}
    for block in managed_blocks(document, key_path):
        port = block_port(block)
        for pattern in host_identifiers(block):
            mapping.setdefault(pattern, port)
    return mapping


def used_ports(document: SSHConfigDocument, key_path: Path | str) -> set[int]:
    """Collect the ports held by managed blocks.

    Every block counts, including ones shadowed by an earlier block with
    the same pattern.

    Raises:
        ConfigIntegrityError: If a managed block has no usable Port
    """
    ports = {block_port(block) for block in managed_blocks(document, key_path)}
    logger.debug("Ports in use by managed hosts: %s", sorted(ports))
    return ports
