"""Apple Reminders MCP Server - Reminders, lists and Calendar via a native helper."""

import logging
import sys

from mcp.server.fastmcp import FastMCP

from .binary import BinaryResolver
from .calendar_tools import register_calendar_tools
from .config import configure_logging, get_settings
from .dispatcher import Dispatcher
from .errors import UntrustedBinaryError
from .helper import HelperClient
from .list_tools import register_list_tools
from .prompts import register_prompts
from .reminder_tools import register_reminder_tools

logger = logging.getLogger(__name__)

settings = get_settings()

# Initialize the FastMCP server
mcp = FastMCP(
    "Apple Reminders",
    host=settings.host,
    port=settings.port,
)

# Trusted helper path is resolved once and shared by every tool call
resolver = BinaryResolver(settings)
dispatcher = Dispatcher(settings, HelperClient(resolver, settings.helper_timeout_ms))


@mcp.tool()
def check_helper() -> dict:
    """Check that the native EventKit helper is installed and trusted.

    Returns the helper path and, if it cannot be used, why not.
    """
    try:
        path = resolver.resolve()
    except UntrustedBinaryError as e:
        return {
            "trusted": False,
            "path": e.path,
            "reason": e.reason if settings.is_development else "helper failed trust checks",
        }
    return {"trusted": True, "path": str(path)}


# Register reminder tools
register_reminder_tools(mcp, dispatcher)

# Register reminder list tools
register_list_tools(mcp, dispatcher)

# Register calendar tools
register_calendar_tools(mcp, dispatcher)

# Register prompt templates
register_prompts(mcp)


def main():
    """Entry point for the MCP server."""
    configure_logging(settings)

    # Refuse to start with an untrusted helper
    try:
        path = resolver.resolve()
    except UntrustedBinaryError as e:
        logger.error("Startup aborted: %s", e)
        sys.exit(1)

    logger.info("Using helper %s (%s mode, %s transport)", path, settings.env, settings.transport)
    mcp.run(transport=settings.transport)


if __name__ == "__main__":
    main()
