"""Entry point for the brev_ssh server."""

import logging

from brev_ssh.config import Config
from brev_ssh.server import mcp  # importing also configures logging

logger = logging.getLogger(__name__)


def run_server() -> None:
    """Run the MCP server with the configured transport."""
    config = Config.from_env()

    if config.transport == "stdio":
        logger.info("Starting brev_ssh server (transport=stdio)")
        mcp.run(transport="stdio")
    else:
        logger.info(
            "Starting brev_ssh server (transport=http, host=%s, port=%d)",
            config.http_host,
            config.http_port,
        )
        mcp.run(
            transport="http",
            host=config.http_host,
            port=config.http_port,
        )


if __name__ == "__main__":
    run_server()
