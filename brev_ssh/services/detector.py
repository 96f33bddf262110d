"""Classify Host blocks as managed (ours) or foreign (user-authored).

A block is managed when it carries ``IdentityFile <our key path>``. There is
no other marker, so a hand-written block pointing at the same key is treated
as managed too.
"""

import os
from pathlib import Path

from brev_ssh.config.parser import SSHConfigDocument
from brev_ssh.models import HostBlock

IDENTITY_FILE = "IdentityFile"


def normalize_path(path: Path | str) -> str:
    """Expand ``~`` and collapse redundant separators."""
    return os.path.normpath(os.path.expanduser(str(path)))


def is_managed(block: HostBlock, key_path: Path | str) -> bool:
    """Check whether ``block`` is a managed entry.

    Args:
        block: Host block to classify
        key_path: Private key path written into managed entries

    Returns:
        True if any ``IdentityFile`` directive points at ``key_path``
    """
    target = normalize_path(key_path)
    return any(normalize_path(value) == target for value in block.get_all(IDENTITY_FILE))


def host_identifiers(block: HostBlock) -> tuple[str, ...]:
    """Return the block's host patterns in order."""
    return block.patterns


def managed_blocks(document: SSHConfigDocument, key_path: Path | str) -> list[HostBlock]:
    """Return the managed blocks of ``document`` in file order."""
    return [block for block in document.blocks if is_managed(block, key_path)]


def managed_identifiers(document: SSHConfigDocument, key_path: Path | str) -> set[str]:
    """Return every host pattern used by a managed block."""
    identifiers: set[str] = set()
    for block in managed_blocks(document, key_path):
        identifiers.update(host_identifiers(block))
    return identifiers
