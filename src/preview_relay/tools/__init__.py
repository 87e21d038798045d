"""MCP tools for Preview Relay."""

from preview_relay.tools.registration import register_all_tools

__all__ = ["register_all_tools"]
