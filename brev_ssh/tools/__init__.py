"""MCP tools for brev_ssh."""

from brev_ssh.tools.sync import list_workspaces, sync_ssh_config

__all__ = ["list_workspaces", "sync_ssh_config"]
