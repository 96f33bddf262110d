"""Build the Host block written for a workspace."""

import re
from dataclasses import dataclass
from pathlib import Path

from brev_ssh.models import Directive, HostBlock

WORKSPACE_HOSTNAME = "0.0.0.0"
WORKSPACE_USER = "brev"

# Whitespace splits a Host line into patterns, '#' starts a comment, '"' quotes
_UNSAFE_IDENTIFIER = re.compile(r'[\s#"]')


class InvalidIdentifierError(ValueError):
    """A workspace identifier cannot be written as a single Host pattern."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        if not identifier:
            detail = "is empty"
        else:
            detail = "contains whitespace, '#' or '\"'"
        super().__init__(f"Workspace identifier {identifier!r} {detail}")


def validate_identifier(identifier: str) -> str:
    """Return ``identifier`` if it renders as exactly one Host pattern.

    Raises:
        InvalidIdentifierError: If it is empty or would split or comment out
    """
    if not identifier or _UNSAFE_IDENTIFIER.search(identifier):
        raise InvalidIdentifierError(identifier)
    return identifier


@dataclass(frozen=True)
class WorkspaceEntry:
    """Values that go into one managed entry."""

    host: str
    identity_file: str
    port: int
    hostname: str = WORKSPACE_HOSTNAME
    user: str = WORKSPACE_USER

    def to_block(self) -> HostBlock:
        return HostBlock(
            patterns=(validate_identifier(self.host),),
            directives=[
                Directive("Hostname", self.hostname),
                Directive("IdentityFile", self.identity_file),
                Directive("User", self.user),
                Directive("Port", str(self.port)),
            ],
        )


def render_entry(identifier: str, key_path: Path | str, port: int) -> HostBlock:
    """Create the managed Host block for a workspace.

    The block renders as::

        Host <identifier>
        \t Hostname 0.0.0.0
        \t IdentityFile <key_path>
        \t User brev
        \t Port <port>

    Raises:
        InvalidIdentifierError: If ``identifier`` is not a single Host pattern
    """
    return WorkspaceEntry(host=identifier, identity_file=str(key_path), port=port).to_block()
