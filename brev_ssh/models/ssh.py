"""SSH config data models."""

from dataclasses import dataclass, field
from fnmatch import fnmatchcase


@dataclass(frozen=True)
class Directive:
    """A single `Key value` line inside a Host block."""

    key: str
    value: str


def _quote(value: str) -> str:
    """Quote a directive value if it contains whitespace."""
    if any(ch.isspace() for ch in value):
        return f'"{value}"'
    return value


@dataclass
class HostBlock:
    """One Host (or Match) stanza of an SSH client config.

    Blocks loaded from disk keep their exact text in ``raw_text`` so they can
    be written back untouched. Blocks built in code have ``raw_text=None`` and
    are rendered from their patterns and directives.
    """

    patterns: tuple[str, ...]
    directives: list[Directive] = field(default_factory=list)
    keyword: str = "Host"
    raw_text: str | None = None
    leading: str = ""

    def __post_init__(self) -> None:
        if not self.patterns:
            raise ValueError(f"{self.keyword} block requires at least one pattern")
        self.patterns = tuple(self.patterns)

    def get(self, key: str) -> str | None:
        """Return the first value for ``key`` (exact match), or None."""
        for directive in self.directives:
            if directive.key == key:
                return directive.value
        return None

    def get_all(self, key: str) -> list[str]:
        """Return every value for ``key`` in file order."""
        return [d.value for d in self.directives if d.key == key]

    def matches(self, name: str) -> bool:
        """Check ``name`` against the block's patterns.

        Follows OpenSSH rules: ``*`` and ``?`` wildcards, and a matching
        ``!pattern`` excludes the name regardless of other patterns.
        Match blocks never match by name.
        """
        if self.keyword.lower() != "host":
            return False

        matched = False
        for pattern in self.patterns:
            if pattern.startswith("!"):
                if fnmatchcase(name, pattern[1:]):
                    return False
            elif fnmatchcase(name, pattern):
                matched = True
        return matched

    def to_text(self) -> str:
        """Render the block from its fields."""
        lines = [f"{self.keyword} {' '.join(self.patterns)}\n"]
        for directive in self.directives:
            lines.append(f"\t {directive.key} {_quote(directive.value)}\n")
        return "".join(lines)

    @property
    def is_generated(self) -> bool:
        """True for blocks created in code rather than loaded from text."""
        return self.raw_text is None

    @property
    def text(self) -> str:
        """Text emitted for this block, including leading blank lines."""
        body = self.raw_text if self.raw_text is not None else self.to_text()
        return self.leading + body
