"""Tool registration for the MCP server."""

from mcp.server.fastmcp import FastMCP


def register_all_tools(mcp: FastMCP) -> None:
    """
    Register all tools with the MCP server.

    Args:
        mcp: FastMCP server instance
    """
    from preview_relay.tools import links, metadata, redirect

    metadata.register(mcp)
    links.register(mcp)
    redirect.register(mcp)
