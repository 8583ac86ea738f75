"""MCP layer initialization for the content unroller server."""

from __future__ import annotations

from dotenv import load_dotenv
from fastmcp import FastMCP

__all__ = ["mcp"]

load_dotenv()

mcp = FastMCP(
    name="Content Unroller",
    instructions=(
        "Use the unroll tools to expand image, lead image and dynamic content "
        "references of a content document."
    ),
)

# Ensure resource/tool definitions are registered on import.
from content_unroller.mcp import resources as _mcp_resources  # noqa: F401,E402
from content_unroller.mcp import tools as _mcp_tools  # noqa: F401,E402
