"""brev_ssh FastMCP server.

Wires the reconciliation tools and the hosts resource into an MCP server.
The work itself lives in tools/, resources/ and services/.
"""

import logging
import os
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from brev_ssh.config import Settings
from brev_ssh.dependencies import Dependencies
from brev_ssh.middleware import ErrorHandlingMiddleware, LoggingMiddleware
from brev_ssh.resources import list_hosts_resource
from brev_ssh.services.state import set_deps
from brev_ssh.tools import list_workspaces, sync_ssh_config
from brev_ssh.utils.console import MCPRequestFormatter

NOISY_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "httpx",
    "httpcore",
    "fastmcp",
    "starlette",
    "anyio",
)


def _configure_logging() -> None:
    """Configure colorful logging for the brev_ssh package.

    Runs at import so loggers are set up however the server is started.
    """
    log_level = os.getenv("BREV_SSH_LOG_LEVEL", "INFO").upper()
    use_colors = os.getenv("BREV_SSH_LOG_COLORS", "true").lower() != "false"
    if not sys.stderr.isatty():
        use_colors = False

    package_logger = logging.getLogger("brev_ssh")
    package_logger.setLevel(getattr(logging, log_level, logging.INFO))

    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(MCPRequestFormatter(use_colors=use_colors))
        package_logger.addHandler(handler)
        package_logger.propagate = False

    for name in NOISY_LOGGERS:
        noisy = logging.getLogger(name)
        noisy.setLevel(logging.WARNING)
        noisy.handlers = []
        noisy.propagate = False


_configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Build the dependency container for the lifetime of the server.

    Args:
        server: The FastMCP server instance

    Yields:
        Dict with the managed SSH config path
    """
    logger.info("brev_ssh server starting up")

    deps = Dependencies.create()
    set_deps(deps)

    config = deps.config
    logger.info(
        "Managing %s with identity %s (ports from %d)",
        config.ssh_config_path,
        config.private_key_path,
        config.port_base,
    )
    if config.backup_dir is not None:
        logger.info("Backups enabled in %s", config.backup_dir)
    logger.info("brev_ssh server ready to accept connections")

    try:
        yield {"ssh_config": str(config.ssh_config_path)}
    finally:
        logger.info("brev_ssh server shutting down")
        deps.cleanup()
        logger.info("brev_ssh server shutdown complete")


def configure_middleware(server: FastMCP, settings: Settings | None = None) -> None:
    """Add the middleware stack: ErrorHandling, then Logging with timing.

    Args:
        server: The FastMCP server to configure.
        settings: Settings to read logging options from (environment if None).
    """
    settings = settings or Settings.from_env()

    # First added = innermost
    server.add_middleware(ErrorHandlingMiddleware(include_traceback=settings.include_traceback))
    server.add_middleware(
        LoggingMiddleware(
            include_payloads=settings.log_payloads,
            slow_threshold_ms=float(settings.slow_threshold_ms),
        )
    )


def create_server() -> FastMCP:
    """Create and configure the MCP server with middleware, tools and resources.

    Returns:
        Configured FastMCP server instance
    """
    server = FastMCP("brev_ssh", lifespan=app_lifespan)

    configure_middleware(server)

    server.tool()(sync_ssh_config)
    server.tool()(list_workspaces)
    server.resource("hosts://list")(list_hosts_resource)

    @server.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        """Health check endpoint."""
        client_host = request.client.host if request.client else "unknown"
        logger.debug("Health check from %s", client_host)
        return PlainTextResponse("OK")

    return server


# Default server instance
mcp = create_server()
