"""Workspace inventory data models."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Workspace:
    """A remote workspace as reported by the inventory."""

    id: str
    name: str
    dns: str
    status: str = ""
    organization_id: str = ""
    created_by_user_id: str = ""

    @property
    def identifier(self) -> str:
        """Name used as the SSH Host pattern."""
        return self.dns

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Workspace":
        """Build a workspace from an API payload.

        Raises:
            KeyError: If ``id`` or ``dns`` is missing
        """
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            dns=data["dns"],
            status=data.get("status", ""),
            organization_id=data.get("organizationId", ""),
            created_by_user_id=data.get("createdByUserId", ""),
        )


@dataclass
class WorkspaceMetadata:
    """Per-workspace metadata returned by the inventory."""

    workspace_id: str
    pod_name: str = ""
    namespace_name: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, workspace_id: str, data: dict[str, Any]) -> "WorkspaceMetadata":
        known = {"podName", "namespaceName"}
        return cls(
            workspace_id=workspace_id,
            pod_name=data.get("podName", ""),
            namespace_name=data.get("namespaceName", ""),
            extra={k: v for k, v in data.items() if k not in known},
        )


@dataclass
class Organization:
    """An organization that owns workspaces."""

    id: str
    name: str = ""


@dataclass
class User:
    """The authenticated user."""

    id: str
    name: str = ""
    email: str = ""
