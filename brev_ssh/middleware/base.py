"""Base middleware class for brev_ssh."""

import logging

from fastmcp.server.middleware import Middleware


class BrevMiddleware(Middleware):
    """FastMCP middleware carrying a configurable logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        """Initialize middleware.

        Args:
            logger: Optional custom logger. Defaults to module logger.
        """
        self.logger = logger or logging.getLogger(__name__)
