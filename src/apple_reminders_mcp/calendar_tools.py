"""Calendar tools for the MCP server."""

from typing import Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult

from .dispatcher import Dispatcher


def register_calendar_tools(mcp: FastMCP, dispatcher: Dispatcher) -> None:
    """Register all calendar-related tools with the MCP server."""

    @mcp.tool()
    async def calendars_read() -> CallToolResult:
        """List all available calendars.

        Returns the calendars that can be used for creating events.
        """
        result = await dispatcher.dispatch("calendars_read", {})
        return result.to_call_tool_result()

    @mcp.tool()
    async def calendar_create(
        title: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        notes: Optional[str] = None,
        location: Optional[str] = None,
        url: Optional[str] = None,
        calendar_name: Optional[str] = None,
        is_all_day: Optional[bool] = None,
    ) -> CallToolResult:
        """Create a new calendar event.

        Args:
            title: Event title (required)
            start_date: Start date/time in ISO 8601 format (required)
            end_date: End date/time in ISO 8601 format (required)
            notes: Event notes/description (optional)
            location: Event location (optional)
            url: Associated URL (optional)
            calendar_name: Target calendar (uses default if omitted)
            is_all_day: All-day event flag (optional)
        """
        result = await dispatcher.dispatch("calendar_create", {
            "title": title,
            "start_date": start_date,
            "end_date": end_date,
            "notes": notes,
            "location": location,
            "url": url,
            "calendar_name": calendar_name,
            "is_all_day": is_all_day,
        })
        return result.to_call_tool_result()

    @mcp.tool()
    async def calendar_read(
        id: Optional[str] = None,
        calendar_name: Optional[str] = None,
        search: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> CallToolResult:
        """Read one event by ID, or list events matching filters.

        Args:
            id: Event identifier; returns just that event (optional)
            calendar_name: Filter to a specific calendar (optional)
            search: Case-insensitive text to match in title, notes or location (optional)
            start_date: Window start in ISO 8601 format (optional)
            end_date: Window end in ISO 8601 format (optional)
        """
        result = await dispatcher.dispatch("calendar_read", {
            "id": id,
            "calendar_name": calendar_name,
            "search": search,
            "start_date": start_date,
            "end_date": end_date,
        })
        return result.to_call_tool_result()

    @mcp.tool()
    async def calendar_update(
        id: Optional[str] = None,
        title: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        notes: Optional[str] = None,
        location: Optional[str] = None,
        url: Optional[str] = None,
        calendar_name: Optional[str] = None,
        is_all_day: Optional[bool] = None,
    ) -> CallToolResult:
        """Update an existing calendar event. Only the fields given are changed.

        Args:
            id: The event identifier (required)
            title: New title (optional)
            start_date: New start date/time (optional)
            end_date: New end date/time (optional)
            notes: New notes (optional)
            location: New location (optional)
            url: New URL (optional)
            calendar_name: Move to this calendar (optional)
            is_all_day: All-day event flag (optional)
        """
        result = await dispatcher.dispatch("calendar_update", {
            "id": id,
            "title": title,
            "start_date": start_date,
            "end_date": end_date,
            "notes": notes,
            "location": location,
            "url": url,
            "calendar_name": calendar_name,
            "is_all_day": is_all_day,
        })
        return result.to_call_tool_result()

    @mcp.tool()
    async def calendar_delete(id: Optional[str] = None) -> CallToolResult:
        """Delete a calendar event.

        Args:
            id: The event identifier (required)
        """
        result = await dispatcher.dispatch("calendar_delete", {"id": id})
        return result.to_call_tool_result()
