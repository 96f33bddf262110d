"""Tests for HostBlock."""

import pytest

from brev_ssh.models import Directive, HostBlock


def test_host_block_requires_pattern() -> None:
    with pytest.raises(ValueError, match="at least one pattern"):
        HostBlock(patterns=())


def test_get_is_case_sensitive() -> None:
    block = HostBlock(
        patterns=("a",),
        directives=[Directive("identityfile", "/x"), Directive("IdentityFile", "/y")],
    )

    assert block.get("IdentityFile") == "/y"
    assert block.get_all("IdentityFile") == ["/y"]
    assert block.get("Port") is None


@pytest.mark.parametrize(
    ("patterns", "name", "expected"),
    [
        (("ws-1",), "ws-1", True),
        (("ws-1",), "ws-10", False),
        (("ws-*",), "ws-10", True),
        (("ws-?",), "ws-1", True),
        (("ws-?",), "ws-10", False),
        (("*", "!bastion"), "bastion", False),
        (("*", "!bastion"), "other", True),
        (("!bastion",), "other", False),
    ],
)
def test_matches_follows_ssh_patterns(patterns: tuple[str, ...], name: str, expected: bool) -> None:
    assert HostBlock(patterns=patterns).matches(name) is expected


def test_match_block_never_matches_by_name() -> None:
    assert not HostBlock(patterns=("host", "ws-1"), keyword="Match").matches("ws-1")


def test_generated_block_renders_from_fields() -> None:
    block = HostBlock(
        patterns=("ws-1",),
        directives=[Directive("IdentityFile", "/home/dev/my keys/brev.pem")],
        leading="\n",
    )

    assert block.is_generated
    assert block.to_text() == 'Host ws-1\n\t IdentityFile "/home/dev/my keys/brev.pem"\n'
    assert block.text == '\nHost ws-1\n\t IdentityFile "/home/dev/my keys/brev.pem"\n'


def test_loaded_block_renders_raw_text() -> None:
    block = HostBlock(patterns=("a",), directives=[Directive("User", "x")], raw_text="Host   a\n  User x\n")

    assert not block.is_generated
    assert block.text == "Host   a\n  User x\n"
