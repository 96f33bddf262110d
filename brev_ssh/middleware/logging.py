"""Request logging middleware with integrated timing."""

import json
import logging
import time
from typing import Any

from fastmcp.server.middleware import MiddlewareContext

from brev_ssh.middleware.base import BrevMiddleware

# MCP method -> (label, level). Anything else is logged at DEBUG.
METHOD_LABELS = {
    "tools/call": ("TOOL", logging.INFO),
    "resources/read": ("RESOURCE", logging.INFO),
    "tools/list": ("LIST TOOLS", logging.INFO),
    "resources/list": ("LIST RESOURCES", logging.INFO),
}

TRUNCATED = "... [truncated]"


class LoggingMiddleware(BrevMiddleware):
    """Logs each MCP request on entry and on exit with its duration.

    Tool calls show their arguments and resource reads their URI. Requests
    taking at least ``slow_threshold_ms`` are logged at WARNING.

    Example:
        >>> mcp.add_middleware(LoggingMiddleware(slow_threshold_ms=500))
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        include_payloads: bool = False,
        max_payload_length: int = 1000,
        slow_threshold_ms: float = 1000.0,
    ) -> None:
        """Initialize logging middleware.

        Args:
            logger: Optional custom logger.
            include_payloads: Also log arguments and results at DEBUG.
            max_payload_length: Cut logged payloads to this many characters.
            slow_threshold_ms: Duration from which a request counts as slow.
        """
        super().__init__(logger=logger)
        self.include_payloads = include_payloads
        self.max_payload_length = max_payload_length
        self.slow_threshold_ms = slow_threshold_ms

    def describe(self, context: MiddlewareContext) -> tuple[str, int]:
        """Return the log label and level for a request."""
        label, level = METHOD_LABELS.get(context.method, (f"MCP: {context.method}", logging.DEBUG))
        message = context.message
        if context.method == "tools/call":
            arguments = getattr(message, "arguments", None) or {}
            rendered = ", ".join(f"{key}={value!r}" for key, value in arguments.items())
            label = f"{label}: {getattr(message, 'name', 'unknown')}({rendered})"
        elif context.method == "resources/read":
            label = f"{label}: {getattr(message, 'uri', 'unknown')}"
        return label, level

    def payload(self, data: Any) -> str:
        try:
            text = json.dumps(data, default=str)
        except (TypeError, ValueError):
            text = str(data)
        if len(text) > self.max_payload_length:
            text = text[: self.max_payload_length] + TRUNCATED
        return text

    def elapsed(self, started: float) -> tuple[float, str]:
        """Milliseconds since ``started`` and a display string for them."""
        ms = (time.perf_counter() - started) * 1000
        shown = f"{ms:.1f}ms"
        if ms >= self.slow_threshold_ms:
            shown += " SLOW!"
        return ms, shown

    @staticmethod
    def summarize(result: Any) -> str:
        """Short description of a handler result."""
        if result is None:
            return "null"
        if isinstance(result, str):
            lines = result.count("\n") + 1
            return f"{len(result)} chars" if lines == 1 else f"{len(result)} chars, {lines} lines"
        if isinstance(result, (list, tuple)):
            return f"{len(result)} items"
        if isinstance(result, dict):
            return f"{len(result)} keys"
        for attr in ("content", "contents", "tools", "resources"):
            value = getattr(result, attr, None)
            if isinstance(value, (list, tuple)):
                return f"{len(value)} {attr}"
        return type(result).__name__

    async def on_message(self, context: MiddlewareContext, call_next: Any) -> Any:
        """Log the request, run it and log the outcome.

        Raises:
            Exception: Whatever the handler raised, after logging it.
        """
        label, level = self.describe(context)
        self.logger.log(level, ">>> %s", label)

        arguments = getattr(context.message, "arguments", None)
        if self.include_payloads and context.method == "tools/call" and arguments:
            self.logger.debug("    Args: %s", self.payload(arguments))

        started = time.perf_counter()
        try:
            result = await call_next(context)
        except Exception as e:
            _, shown = self.elapsed(started)
            self.logger.error("!!! %s -> %s: %s [%s]", label, type(e).__name__, e, shown)
            raise

        ms, shown = self.elapsed(started)
        if ms >= self.slow_threshold_ms:
            level = logging.WARNING
        self.logger.log(level, "<<< %s -> %s [%s]", label, self.summarize(result), shown)
        if self.include_payloads and result is not None:
            self.logger.debug("    Result: %s", self.payload(result))
        return result
