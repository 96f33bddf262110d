"""Workspace inventory providers.

The engine only needs the ordered list of active workspace identifiers.
BrevAPIInventory fetches it over HTTP; StaticInventory serves a fixed list
for offline use and tests.
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import httpx

from brev_ssh.models import Organization, User, Workspace, WorkspaceMetadata
from brev_ssh.protocols import FileSystem

logger = logging.getLogger(__name__)


class InventoryError(Exception):
    """The workspace inventory could not be read."""

    pass


def load_active_org(fs: FileSystem, path: Path) -> Organization:
    """Read the active organization from its JSON context file.

    Raises:
        InventoryError: If the file is missing or malformed
    """
    if not fs.exists(path):
        raise InventoryError(f"No active organization set (missing {path})")
    try:
        data = json.loads(fs.read_text(path))
        return Organization(id=data["id"], name=data.get("name", ""))
    except (OSError, ValueError, KeyError, TypeError) as e:
        raise InventoryError(f"Cannot read active organization from {path}: {e}") from e


class BrevAPIInventory:
    """Inventory backed by the Brev REST API.

    Lists the current user's workspaces in the active organization; the
    workspace DNS name is the identifier used as SSH Host.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        org_id: str | None = None,
        fs: FileSystem | None = None,
        active_org_path: Path | None = None,
        client: httpx.Client | None = None,
        timeout: float = 30.0,
    ):
        """Initialize API inventory.

        Args:
            base_url: API root, e.g. https://api.example.com/
            token: Bearer token for the API
            org_id: Organization to list; read from active_org_path if None
            fs: Filesystem used to read active_org_path
            active_org_path: JSON file holding the active organization
            client: Preconfigured httpx client (tests pass a mock transport)
            timeout: Request timeout in seconds
        """
        self.base_url = base_url
        self._token = token
        self.org_id = org_id
        self.fs = fs
        self.active_org_path = active_org_path
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
        }

    def _get(self, path: str) -> Any:
        try:
            response = self._client.get(path, headers=self._headers())
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            logger.warning("Inventory request GET %s failed: %s", path, e)
            raise InventoryError(f"GET {path} failed: {e}") from e
        except ValueError as e:
            raise InventoryError(f"GET {path} returned invalid JSON: {e}") from e

    def _active_org_id(self) -> str:
        if self.org_id:
            return self.org_id
        if self.fs is None or self.active_org_path is None:
            raise InventoryError("No active organization configured")
        return load_active_org(self.fs, self.active_org_path).id

    def get_current_user(self) -> User:
        data = self._get("api/me")
        try:
            return User(id=data["id"], name=data.get("name", ""), email=data.get("email", ""))
        except (KeyError, TypeError, AttributeError) as e:
            raise InventoryError(f"Unexpected user payload: {e}") from e

    def list_workspaces(self) -> list[Workspace]:
        """List workspaces created by the current user in the active org.

        Raises:
            InventoryError: On HTTP failure or unexpected payload
        """
        org_id = self._active_org_id()
        user = self.get_current_user()
        data = self._get(f"api/organizations/{org_id}/workspaces")
        try:
            workspaces = [Workspace.from_api(item) for item in data]
        except (KeyError, TypeError, AttributeError) as e:
            raise InventoryError(f"Unexpected workspace payload: {e}") from e

        mine = [w for w in workspaces if w.created_by_user_id == user.id]
        logger.debug(
            "Inventory returned %d workspace(s), %d owned by %s",
            len(workspaces),
            len(mine),
            user.id,
        )
        return mine

    def list_active_workspaces(self) -> list[str]:
        return [w.identifier for w in self.list_workspaces()]

    def get_workspace_metadata(self, workspace_id: str) -> WorkspaceMetadata:
        data = self._get(f"api/workspaces/{workspace_id}/metadata")
        if not isinstance(data, dict):
            raise InventoryError(f"Unexpected metadata payload for {workspace_id}")
        return WorkspaceMetadata.from_api(workspace_id, data)

    def close(self) -> None:
        """Close the HTTP client if this inventory created it."""
        if self._owns_client:
            self._client.close()


class StaticInventory:
    """Inventory serving a fixed workspace list.

    Bare strings are treated as workspaces whose id, name and DNS name are
    all that string.
    """

    def __init__(self, workspaces: Iterable[Workspace | str]):
        self._workspaces = [
            w if isinstance(w, Workspace) else Workspace(id=w, name=w, dns=w)
            for w in workspaces
        ]

    def list_workspaces(self) -> list[Workspace]:
        return list(self._workspaces)

    def list_active_workspaces(self) -> list[str]:
        return [w.identifier for w in self._workspaces]

    def get_workspace_metadata(self, workspace_id: str) -> WorkspaceMetadata:
        for workspace in self._workspaces:
            if workspace.id == workspace_id:
                return WorkspaceMetadata(workspace_id=workspace_id)
        raise InventoryError(f"Unknown workspace {workspace_id}")
