"""Apple Reminders, lists and Calendar exposed as MCP tools."""

__version__ = "0.1.0"
