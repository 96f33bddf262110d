"""Tests for the dependency container."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from brev_ssh.config import Config, Settings
from brev_ssh.dependencies import Dependencies
from brev_ssh.services.filesystem import LocalFileSystem, MemoryFileSystem
from brev_ssh.services.inventory import BrevAPIInventory, InventoryError, StaticInventory
from brev_ssh.services.keys import PrivateKeyFile
from brev_ssh.services.state import get_deps, set_deps


def test_static_inventory_from_workspace_list() -> None:
    deps = Dependencies.from_config(Config(settings=Settings(workspaces=["ws-1"])), fs=MemoryFileSystem())

    assert isinstance(deps.inventory, StaticInventory)
    assert deps.inventory.list_active_workspaces() == ["ws-1"]


def test_api_inventory_when_url_and_token_set() -> None:
    settings = Settings(api_url="https://api.test/", api_token="tok", workspaces=["ignored"])
    deps = Dependencies.from_config(Config(settings=settings), fs=MemoryFileSystem())

    assert isinstance(deps.inventory, BrevAPIInventory)
    deps.cleanup()


def test_no_inventory_configured() -> None:
    deps = Dependencies.from_config(Config(settings=Settings()), fs=MemoryFileSystem())

    assert deps.inventory is None
    with pytest.raises(InventoryError, match="No workspace inventory configured"):
        deps.engine()


def test_defaults_to_local_filesystem() -> None:
    deps = Dependencies.from_config(Config(settings=Settings(workspaces=["ws-1"])))

    assert isinstance(deps.fs, LocalFileSystem)


def test_engine_uses_config_values() -> None:
    settings = Settings(
        ssh_config_path="/c/config",
        brev_dir="/b",
        backup=True,
        port_base=3000,
        port_ceiling=3100,
        workspaces=["ws-1"],
    )
    deps = Dependencies.from_config(Config(settings=settings), fs=MemoryFileSystem())

    engine = deps.engine()

    assert engine.config_path == Path("/c/config")
    assert engine.port_base == 3000
    assert engine.port_ceiling == 3100
    assert engine.backup_dir == Path("/b")
    assert isinstance(engine.keys, PrivateKeyFile)
    assert engine.keys.path == Path("/b/brev.pem")


def test_cleanup_closes_inventory() -> None:
    inventory = MagicMock()
    deps = Dependencies(config=Config(), fs=MemoryFileSystem(), keys=MagicMock(), inventory=inventory)

    deps.cleanup()

    inventory.close.assert_called_once()


def test_cleanup_without_close() -> None:
    deps = Dependencies(config=Config(), fs=MemoryFileSystem(), keys=MagicMock(), inventory=StaticInventory([]))

    deps.cleanup()


def test_global_state_injection() -> None:
    deps = Dependencies(config=Config(), fs=MemoryFileSystem(), keys=MagicMock())

    set_deps(deps)

    assert get_deps() is deps
