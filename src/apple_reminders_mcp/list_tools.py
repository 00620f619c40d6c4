"""Reminder list tools for the MCP server."""

from typing import Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult

from .dispatcher import Dispatcher


def register_list_tools(mcp: FastMCP, dispatcher: Dispatcher) -> None:
    """Register all reminder-list tools with the MCP server."""

    @mcp.tool()
    async def lists_create(name: Optional[str] = None) -> CallToolResult:
        """Create a new reminder list.

        Args:
            name: Name of the new list (required)
        """
        result = await dispatcher.dispatch("lists_create", {"name": name})
        return result.to_call_tool_result()

    @mcp.tool()
    async def lists_read(name: Optional[str] = None) -> CallToolResult:
        """List all reminder lists, or look one up by name.

        Args:
            name: List name, matched case-insensitively (optional)
        """
        result = await dispatcher.dispatch("lists_read", {"name": name})
        return result.to_call_tool_result()

    @mcp.tool()
    async def lists_update(
        name: Optional[str] = None,
        new_name: Optional[str] = None,
    ) -> CallToolResult:
        """Rename a reminder list.

        Args:
            name: Current list name (required)
            new_name: New list name (required)
        """
        result = await dispatcher.dispatch("lists_update", {"name": name, "new_name": new_name})
        return result.to_call_tool_result()

    @mcp.tool()
    async def lists_delete(name: Optional[str] = None) -> CallToolResult:
        """Delete a reminder list and every reminder in it.

        Args:
            name: Name of the list to delete (required)
        """
        result = await dispatcher.dispatch("lists_delete", {"name": name})
        return result.to_call_tool_result()
