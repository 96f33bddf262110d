"""Tests for the hosts resource."""

from unittest.mock import patch

import pytest

from brev_ssh.config import Config, Settings
from brev_ssh.dependencies import Dependencies
from brev_ssh.resources.hosts import list_hosts_resource
from brev_ssh.services.filesystem import MemoryFileSystem
from brev_ssh.services.keys import PrivateKeyFile
from brev_ssh.services.state import set_deps
from tests.helpers import CONFIG_PATH, KEY_PATH, managed_entry


@pytest.fixture
def install(fs: MemoryFileSystem) -> MemoryFileSystem:
    config = Config(settings=Settings(ssh_config_path=str(CONFIG_PATH), private_key_path=str(KEY_PATH)))
    set_deps(Dependencies(config=config, fs=fs, keys=PrivateKeyFile(fs, KEY_PATH)))
    return fs


@pytest.mark.asyncio
async def test_lists_managed_hosts_with_status(install: MemoryFileSystem) -> None:
    install.files[CONFIG_PATH] = (
        "Host myserver\n  HostName 10.0.0.5\n\n"
        + managed_entry("ws-1", 2222)
        + "\n"
        + managed_entry("ws-2", 2223)
    )
    checked: dict[str, tuple[str, int]] = {}

    async def fake_check(forwards: dict[str, tuple[str, int]]) -> dict[str, bool]:
        checked.update(forwards)
        return {name: name == "ws-1" for name in forwards}

    with patch("brev_ssh.resources.hosts.check_forwards", side_effect=fake_check):
        output = await list_hosts_resource()

    assert checked == {"ws-1": ("0.0.0.0", 2222), "ws-2": ("0.0.0.0", 2223)}
    assert "[✓] ws-1 (listening)" in output
    assert "[✗] ws-2 (not listening)" in output
    assert "Port: 0.0.0.0:2223" in output
    assert "myserver" not in output


@pytest.mark.asyncio
async def test_invalid_port_is_flagged(install: MemoryFileSystem) -> None:
    install.files[CONFIG_PATH] = managed_entry("ws-1", "ssh")

    async def fake_check(forwards: dict[str, tuple[str, int]]) -> dict[str, bool]:
        return {}

    with patch("brev_ssh.resources.hosts.check_forwards", side_effect=fake_check):
        output = await list_hosts_resource()

    assert "[?] ws-1 (invalid Port)" in output


@pytest.mark.asyncio
async def test_missing_config(install: MemoryFileSystem) -> None:
    output = await list_hosts_resource()

    assert output == f"No SSH config at {CONFIG_PATH}."


@pytest.mark.asyncio
async def test_no_managed_hosts(install: MemoryFileSystem) -> None:
    install.files[CONFIG_PATH] = "Host myserver\n  HostName 10.0.0.5\n"

    output = await list_hosts_resource()

    assert output == f"No Brev workspace hosts in {CONFIG_PATH}."


@pytest.mark.asyncio
async def test_parse_error(install: MemoryFileSystem) -> None:
    install.files[CONFIG_PATH] = "Host\n"

    output = await list_hosts_resource()

    assert output.startswith("Error: ")
