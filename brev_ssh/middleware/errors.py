"""Error handling middleware for consistent error logging."""

import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any

from fastmcp.server.middleware import MiddlewareContext

from brev_ssh.config.parser import ParseError
from brev_ssh.middleware.base import BrevMiddleware
from brev_ssh.services.inventory import InventoryError
from brev_ssh.services.keys import KeyMaterialError
from brev_ssh.services.ports import ConfigIntegrityError, PortExhaustedError
from brev_ssh.services.renderer import InvalidIdentifierError

ErrorCallback = Callable[[Exception, MiddlewareContext], None]

# Failures caused by the user's environment rather than a bug; logged
# without traceback even when tracebacks are enabled.
EXPECTED_ERRORS: tuple[type[Exception], ...] = (
    ConfigIntegrityError,
    InvalidIdentifierError,
    InventoryError,
    KeyMaterialError,
    ParseError,
    PortExhaustedError,
)


class ErrorHandlingMiddleware(BrevMiddleware):
    """Logs every failed MCP message and counts failures by type.

    The original exception is always re-raised so FastMCP can turn it into
    an error response.

    Example:
        >>> middleware = ErrorHandlingMiddleware(include_traceback=True)
        >>> mcp.add_middleware(middleware)
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        include_traceback: bool = False,
        error_callback: ErrorCallback | None = None,
    ) -> None:
        """Initialize error handling middleware.

        Args:
            logger: Optional custom logger.
            include_traceback: Log tracebacks for unexpected errors.
            error_callback: Called with (exception, context) on each error.
        """
        super().__init__(logger=logger)
        self.include_traceback = include_traceback
        self.error_callback = error_callback
        self._error_counts: dict[str, int] = defaultdict(int)

    def get_error_stats(self) -> dict[str, int]:
        """Return occurrence counts keyed by exception type name."""
        return dict(self._error_counts)

    def reset_stats(self) -> None:
        self._error_counts.clear()

    def _log(self, method: str | None, exc: Exception) -> None:
        error_type = type(exc).__name__
        if isinstance(exc, EXPECTED_ERRORS):
            self.logger.warning("Error in %s: %s: %s", method, error_type, exc)
        else:
            self.logger.error(
                "Error in %s: %s: %s",
                method,
                error_type,
                exc,
                exc_info=exc if self.include_traceback else None,
            )

    async def on_message(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Run the next handler, recording any exception it raises.

        Raises:
            Exception: Re-raises the original exception after logging.
        """
        try:
            return await call_next(context)
        except Exception as e:
            self._error_counts[type(e).__name__] += 1
            self._log(context.method, e)

            if self.error_callback:
                try:
                    self.error_callback(e, context)
                except Exception as callback_error:
                    self.logger.warning("Error callback failed: %s", callback_error)
            raise
