"""SSH config document model.

Splits an SSH client config into Host/Match stanzas while keeping the exact
text of each stanza, so that the file can be written back without touching
anything it does not need to change.
"""

import dataclasses
import logging
import re
from collections.abc import Callable, Iterable
from pathlib import Path

from brev_ssh.models import Directive, HostBlock

logger = logging.getLogger(__name__)

STANZA_KEYWORDS = frozenset({"host", "match"})

# Keyword, then whitespace and/or "=", then the rest of the line
LINE_RE = re.compile(r"^\s*([^\s=]+)\s*(?:=\s*)?(.*?)\s*$")
KEYWORD_RE = re.compile(r"^[A-Za-z][A-Za-z0-9]*$")
PATTERN_RE = re.compile(r'"([^"]*)"|(\S+)')


class ParseError(ValueError):
    """SSH config text cannot be split into Host blocks."""

    def __init__(self, message: str, line: int, source: Path | str | None = None):
        """Initialize parse error.

        Args:
            message: What is wrong with the line
            line: 1-based line number
            source: File the text came from, if known
        """
        self.line = line
        self.source = source
        where = f"{source}:{line}" if source else f"line {line}"
        super().__init__(f"{where}: {message}")


def _split_lines(text: str) -> list[str]:
    """Split on newlines only, keeping the terminators."""
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def _unquote(value: str) -> str:
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


class _BlockBuilder:
    """Accumulates lines for the stanza currently being parsed."""

    def __init__(self, keyword: str, patterns: tuple[str, ...], leading: str, header: str):
        self.keyword = keyword
        self.patterns = patterns
        self.leading = leading
        self.lines = [header]
        self.directives: list[Directive] = []

    def build(self) -> HostBlock:
        return HostBlock(
            patterns=self.patterns,
            directives=self.directives,
            keyword=self.keyword,
            raw_text="".join(self.lines),
            leading=self.leading,
        )


class SSHConfigDocument:
    """Ordered sequence of Host blocks making up one SSH config file.

    Text ahead of the first stanza (global options, comments) is kept as an
    opaque preamble. Blank lines between two stanzas belong to the second
    one, so dropping a stanza also drops the gap in front of it.
    """

    def __init__(self, preamble: str = "", blocks: Iterable[HostBlock] | None = None):
        self.preamble = preamble
        self._blocks: list[HostBlock] = list(blocks or [])

    @classmethod
    def load(cls, text: str, source: Path | str | None = None) -> "SSHConfigDocument":
        """Parse config text into a document.

        Args:
            text: Full config file content
            source: Path used in error messages

        Returns:
            Parsed document (empty for blank input)

        Raises:
            ParseError: If a stanza or directive line is malformed
        """
        preamble: list[str] = []
        blocks: list[HostBlock] = []
        current: _BlockBuilder | None = None
        pending_blank: list[str] = []

        for lineno, line in enumerate(_split_lines(text), start=1):
            stripped = line.strip()

            if not stripped:
                if current is None:
                    preamble.append(line)
                else:
                    pending_blank.append(line)
                continue

            if stripped.startswith("#"):
                if current is None:
                    preamble.append(line)
                else:
                    current.lines.extend(pending_blank)
                    current.lines.append(line)
                    pending_blank = []
                continue

            key, value = cls._split_directive(stripped, lineno, source)

            if key.lower() in STANZA_KEYWORDS:
                patterns = cls._split_patterns(value, lineno, source)
                if not patterns:
                    raise ParseError(f"{key} line has no patterns", lineno, source)
                if current is not None:
                    blocks.append(current.build())
                current = _BlockBuilder(key, patterns, "".join(pending_blank), line)
                pending_blank = []
                continue

            if current is None:
                preamble.append(line)
            else:
                current.lines.extend(pending_blank)
                current.lines.append(line)
                current.directives.append(Directive(key, _unquote(value)))
                pending_blank = []

        if current is not None:
            current.lines.extend(pending_blank)
            blocks.append(current.build())

        logger.debug(
            "Loaded %d block(s) from %s",
            len(blocks),
            source if source else "<text>",
        )
        return cls(preamble="".join(preamble), blocks=blocks)

    @staticmethod
    def _split_directive(
        line: str, lineno: int, source: Path | str | None
    ) -> tuple[str, str]:
        match = LINE_RE.match(line)
        if not match:
            raise ParseError(f"cannot parse line: {line!r}", lineno, source)
        key, value = match.group(1), match.group(2)
        if not KEYWORD_RE.match(key):
            raise ParseError(f"invalid keyword {key!r}", lineno, source)
        if not value:
            raise ParseError(f"{key} has no value", lineno, source)
        if value.count('"') % 2:
            raise ParseError(f"unbalanced quotes in {key} value", lineno, source)
        return key, value

    @staticmethod
    def _split_patterns(
        value: str, lineno: int, source: Path | str | None
    ) -> tuple[str, ...]:
        patterns = []
        for quoted, bare in PATTERN_RE.findall(value):
            pattern = quoted or bare
            if pattern:
                patterns.append(pattern)
        return tuple(patterns)

    @property
    def blocks(self) -> tuple[HostBlock, ...]:
        """Read-only view of the blocks in file order."""
        return tuple(self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)

    def render(self) -> str:
        """Serialize the document back to config text."""
        return self.preamble + "".join(block.text for block in self._blocks)

    def append(self, block: HostBlock) -> HostBlock:
        """Add a new block at the end of the document.

        A separator is put in front of the block so that it starts on its
        own line after one blank line.

        Returns:
            The block as stored (with its separator)
        """
        current = self.render()
        if not current:
            separator = ""
        elif not current.endswith("\n"):
            separator = "\n\n"
        elif current.endswith("\n\n"):
            separator = ""
        else:
            separator = "\n"

        stored = dataclasses.replace(block, leading=separator)
        self._blocks.append(stored)
        return stored

    def without(self, predicate: Callable[[HostBlock], bool]) -> "SSHConfigDocument":
        """Return a copy without the blocks for which ``predicate`` is true."""
        kept = [block for block in self._blocks if not predicate(block)]
        return SSHConfigDocument(preamble=self.preamble, blocks=kept)
