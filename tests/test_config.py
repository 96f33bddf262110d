"""Tests for Config path resolution."""

from pathlib import Path

import pytest

from brev_ssh.config import Config, Settings


def test_paths_expand_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    config = Config(settings=Settings())

    assert config.ssh_config_path == tmp_path / ".ssh" / "config"
    assert config.brev_dir == tmp_path / ".brev"
    assert config.private_key_path == tmp_path / ".brev" / "brev.pem"
    assert config.active_org_path == tmp_path / ".brev" / "active_org.json"


def test_explicit_private_key_path() -> None:
    config = Config(settings=Settings(private_key_path="/keys/id_brev"))

    assert config.private_key_path == Path("/keys/id_brev")


def test_backup_dir_only_when_enabled() -> None:
    assert Config(settings=Settings(brev_dir="/b")).backup_dir is None
    assert Config(settings=Settings(brev_dir="/b", backup=True)).backup_dir == Path("/b")


def test_delegates_to_settings() -> None:
    config = Config(settings=Settings(port_base=4000, port_ceiling=4010, transport="http", http_port=9000))

    assert config.port_base == 4000
    assert config.port_ceiling == 4010
    assert config.transport == "http"
    assert config.http_host == "127.0.0.1"
    assert config.http_port == 9000


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BREV_SSH_SSH_CONFIG", "/etc/brev/ssh_config")

    assert Config.from_env().ssh_config_path == Path("/etc/brev/ssh_config")
