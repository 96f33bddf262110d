"""Reachability of the local ports that workspace entries forward to."""

import asyncio
from collections.abc import Mapping

# Entries bind the wildcard address; a client reaches it through loopback
ANY_ADDRESS = "0.0.0.0"
LOOPBACK = "127.0.0.1"

CONNECT_TIMEOUT = 1.0


def connect_address(hostname: str | None) -> str:
    """Address to connect to for an entry's ``Hostname``."""
    if not hostname or hostname == ANY_ADDRESS:
        return LOOPBACK
    return hostname


async def forward_is_listening(
    hostname: str | None,
    port: int,
    timeout: float = CONNECT_TIMEOUT,
) -> bool:
    """True if a TCP connection to the entry's local forward succeeds."""
    connect = asyncio.open_connection(connect_address(hostname), port)
    try:
        _, writer = await asyncio.wait_for(connect, timeout=timeout)
    except (TimeoutError, OSError):
        return False
    writer.close()
    await writer.wait_closed()
    return True


async def check_forwards(
    forwards: Mapping[str, tuple[str | None, int]],
    timeout: float = CONNECT_TIMEOUT,
) -> dict[str, bool]:
    """Check every ``{host: (Hostname, Port)}`` forward at once.

    Returns:
        Dict of {host: is_listening}, in the order of ``forwards``.
    """
    hosts = list(forwards)
    checks = [forward_is_listening(hostname, port, timeout) for hostname, port in forwards.values()]
    return dict(zip(hosts, await asyncio.gather(*checks)))
