"""Console log formatting for brev_ssh.

Lines look like ``14:02:07.412 10/19 | INFO     | services.reconcile   | ...``
with ANSI colours when writing to a terminal.
"""

import logging
import re
from datetime import datetime

RESET = "\033[0m"

PALETTE = {
    "dim": "\033[2m",
    "plain": "\033[37m",
    "grey": "\033[90m",
    "red": "\033[91m",
    "green": "\033[92m",
    "yellow": "\033[93m",
    "blue": "\033[94m",
    "magenta": "\033[95m",
    "cyan": "\033[96m",
    "alarm": "\033[41m\033[37m\033[1m",
}

LEVEL_STYLE = {
    logging.DEBUG: "grey",
    logging.INFO: "green",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "alarm",
}

# Checked in order; first matching logger-name prefix wins
COMPONENT_STYLE = (
    ("brev_ssh.services.reconcile", "magenta"),
    ("brev_ssh.services.inventory", "blue"),
    ("brev_ssh.server", "cyan"),
    ("brev_ssh.tools", "blue"),
    ("brev_ssh.resources", "cyan"),
    ("brev_ssh.middleware", "yellow"),
    ("brev_ssh.config", "green"),
)

HIGHLIGHTS = (
    (re.compile(r"\w+://\S+"), "blue"),
    (re.compile(r"\d+(?:\.\d+)?ms\b"), "yellow"),
    (re.compile(r"local port \d+"), "magenta"),
)

PACKAGE_PREFIX = "brev_ssh."
COMPONENT_WIDTH = 20


class ColorfulFormatter(logging.Formatter):
    """Pipe-separated formatter with per-component colours."""

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize the formatter.

        Args:
            use_colors: Emit ANSI colour codes.
        """
        super().__init__()
        self.use_colors = use_colors

    def paint(self, text: str, style: str) -> str:
        if not self.use_colors:
            return text
        return f"{PALETTE[style]}{text}{RESET}"

    @staticmethod
    def component_style(name: str) -> str:
        for prefix, style in COMPONENT_STYLE:
            if name.startswith(prefix):
                return style
        return "plain"

    def highlight(self, message: str) -> str:
        if not self.use_colors:
            return message
        for pattern, style in HIGHLIGHTS:
            message = pattern.sub(lambda m, s=style: self.paint(m.group(0), s), message)
        return message

    def format(self, record: logging.LogRecord) -> str:
        """Render ``time | level | component | message`` plus any traceback."""
        stamp = datetime.fromtimestamp(record.created).astimezone()
        when = f"{stamp:%H:%M:%S}.{int(record.msecs):03d} {stamp:%m/%d}"

        component = record.name.removeprefix(PACKAGE_PREFIX).ljust(COMPONENT_WIDTH)
        level_style = LEVEL_STYLE.get(record.levelno, "plain")
        sep = self.paint("|", "dim")

        line = " ".join(
            (
                self.paint(when, "dim"),
                sep,
                self.paint(record.levelname.ljust(8), level_style),
                sep,
                self.paint(component, self.component_style(record.name)),
                sep,
                self.highlight(record.getMessage()),
            )
        )
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class MCPRequestFormatter(ColorfulFormatter):
    """Prefixes lifecycle and sync events with a short coloured marker."""

    MARKERS = (
        (("starting", "ready"), "green", ">>>"),
        (("shutting down", "shutdown"), "red", "<<<"),
        (("error", "failed"), "red", "!!"),
        (("warning", "slow"), "yellow", "!"),
        (("reconciled", "completed"), "green", "OK"),
        (("added",), "cyan", "+"),
        (("removed",), "yellow", "-"),
    )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        if not self.use_colors:
            return line

        message = record.getMessage().lower()
        for words, style, marker in self.MARKERS:
            if any(word in message for word in words):
                return f"{self.paint(marker, style)}{' ' * (4 - len(marker))}{line}"
        return f"    {line}"
