"""MCP resources for brev_ssh."""

from brev_ssh.resources.hosts import list_hosts_resource

__all__ = ["list_hosts_resource"]
