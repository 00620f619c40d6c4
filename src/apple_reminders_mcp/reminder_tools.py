"""Reminder tools for the MCP server."""

from typing import Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult

from .dispatcher import Dispatcher


def register_reminder_tools(mcp: FastMCP, dispatcher: Dispatcher) -> None:
    """Register all reminder-related tools with the MCP server.

    Parameters are all optional at this layer; required fields are enforced
    by the dispatcher so that missing values come back as tool errors.
    """

    @mcp.tool()
    async def reminders_create(
        title: Optional[str] = None,
        notes: Optional[str] = None,
        url: Optional[str] = None,
        list_name: Optional[str] = None,
        due_date: Optional[str] = None,
    ) -> CallToolResult:
        """Create a new reminder.

        Args:
            title: Reminder title (required)
            notes: Additional notes (optional)
            url: Associated http(s) URL (optional)
            list_name: Target list (uses default if omitted)
            due_date: Due date - YYYY-MM-DD, 'YYYY-MM-DD HH:MM:SS' or ISO 8601 (optional)
        """
        result = await dispatcher.dispatch("reminders_create", {
            "title": title,
            "notes": notes,
            "url": url,
            "list_name": list_name,
            "due_date": due_date,
        })
        return result.to_call_tool_result()

    @mcp.tool()
    async def reminders_read(
        id: Optional[str] = None,
        list_name: Optional[str] = None,
        show_completed: Optional[bool] = None,
        search: Optional[str] = None,
        due_after: Optional[str] = None,
        due_before: Optional[str] = None,
        due_within: Optional[str] = None,
    ) -> CallToolResult:
        """Read one reminder by ID, or list reminders matching filters.

        Args:
            id: Reminder identifier; returns just that reminder (optional)
            list_name: Filter to a specific list (optional)
            show_completed: Include completed reminders (default: false)
            search: Case-insensitive text to match in title or notes (optional)
            due_after: Only reminders due on or after this date (optional)
            due_before: Only reminders due on or before this date (optional)
            due_within: 'today', 'tomorrow', 'this-week', 'overdue' or 'no-date' (optional)
        """
        result = await dispatcher.dispatch("reminders_read", {
            "id": id,
            "list_name": list_name,
            "show_completed": show_completed,
            "search": search,
            "due_after": due_after,
            "due_before": due_before,
            "due_within": due_within,
        })
        return result.to_call_tool_result()

    @mcp.tool()
    async def reminders_update(
        id: Optional[str] = None,
        title: Optional[str] = None,
        notes: Optional[str] = None,
        url: Optional[str] = None,
        list_name: Optional[str] = None,
        due_date: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> CallToolResult:
        """Update an existing reminder. Only the fields given are changed.

        Args:
            id: The reminder identifier (required)
            title: New title (optional)
            notes: New notes (optional)
            url: New URL (optional)
            list_name: Move to this list (optional)
            due_date: New due date (optional)
            completed: Mark as completed/incomplete (optional)
        """
        result = await dispatcher.dispatch("reminders_update", {
            "id": id,
            "title": title,
            "notes": notes,
            "url": url,
            "list_name": list_name,
            "due_date": due_date,
            "completed": completed,
        })
        return result.to_call_tool_result()

    @mcp.tool()
    async def reminders_delete(id: Optional[str] = None) -> CallToolResult:
        """Delete a reminder.

        Args:
            id: The reminder identifier (required)
        """
        result = await dispatcher.dispatch("reminders_delete", {"id": id})
        return result.to_call_tool_result()
