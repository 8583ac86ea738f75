"""Run the content unroller as an MCP server (stdio, streamable HTTP or SSE)."""

from __future__ import annotations

import logging
import os

from content_unroller.mcp import mcp  # importing the package registers unroll tools and health resources

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))

_NETWORK_TRANSPORTS = ("http", "sse")


def _network_options(transport: str) -> dict[str, object]:
    options: dict[str, object] = {
        "host": os.getenv("MCP_HOST", "0.0.0.0"),
        "port": int(os.getenv("MCP_PORT", "8000")),
    }
    path = os.getenv("MCP_HTTP_PATH")
    if transport == "http" and path:
        options["path"] = path
    return options


def run() -> None:
    """Serve unroll requests over the transport named by ``MCP_TRANSPORT`` (default stdio)."""

    transport = os.getenv("MCP_TRANSPORT", "stdio").lower()
    if transport not in _NETWORK_TRANSPORTS:
        mcp.run()
        return
    logging.getLogger(__name__).info("Starting content unroller over %s", transport)
    mcp.run(transport=transport, **_network_options(transport))


if __name__ == "__main__":
    run()
