"""Helpers shared by brev_ssh tests."""

from pathlib import Path

KEY_PATH = Path("/home/dev/.brev/brev.pem")
CONFIG_PATH = Path("/home/dev/.ssh/config")


def managed_entry(host: str, port: int | str, key: Path | str = KEY_PATH) -> str:
    """Text of an entry as the reconciler writes it."""
    return (
        f"Host {host}\n"
        "\t Hostname 0.0.0.0\n"
        f"\t IdentityFile {key}\n"
        "\t User brev\n"
        f"\t Port {port}\n"
    )
