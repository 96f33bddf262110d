"""Utilities for brev_ssh."""

from brev_ssh.utils.console import ColorfulFormatter, MCPRequestFormatter
from brev_ssh.utils.ping import check_forwards, connect_address, forward_is_listening

__all__ = [
    "ColorfulFormatter",
    "MCPRequestFormatter",
    "check_forwards",
    "connect_address",
    "forward_is_listening",
]
