"""Tool dispatch: validation, execution and the uniform result envelope.

``Dispatcher.dispatch`` is the single place where pipeline errors are turned
into results. Every call returns a ``ToolResult``; no exception escapes to
the transport.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping, Optional

from mcp.types import CallToolResult, TextContent

from .binary import BinaryResolver
from .config import Settings
from .errors import (
    HelperExecutionError,
    HelperTimeoutError,
    NotFoundError,
    UnknownToolError,
    UntrustedBinaryError,
    ValidationError,
)
from .formatting import (
    format_calendar,
    format_delete,
    format_event,
    format_list,
    format_reminder,
    format_reminder_list,
    format_single,
    format_success,
)
from .helper import HelperClient
from .repositories import CalendarRepository, ListRepository, ReminderRepository
from .schemas import (
    CreateEventArgs,
    CreateListArgs,
    CreateReminderArgs,
    DeleteEventArgs,
    DeleteListArgs,
    DeleteReminderArgs,
    ReadCalendarsArgs,
    ReadEventsArgs,
    ReadListsArgs,
    ReadRemindersArgs,
    ToolArguments,
    UpdateEventArgs,
    UpdateListArgs,
    UpdateReminderArgs,
    validate,
)

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "System error occurred"


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one tool call, success or failure."""
    text: str
    is_error: bool = False

    def to_call_tool_result(self) -> CallToolResult:
        return CallToolResult(
            content=[TextContent(type="text", text=self.text)],
            isError=self.is_error,
        )


@dataclass(frozen=True)
class Repositories:
    reminders: ReminderRepository
    lists: ListRepository
    calendar: CalendarRepository


Handler = Callable[[Repositories, Any], Awaitable[str]]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    operation: str
    schema: type[ToolArguments]
    handler: Handler


# ----------------------------------------------------------------------------
# Reminders
# ----------------------------------------------------------------------------

async def handle_create_reminder(repos: Repositories, args: CreateReminderArgs) -> str:
    reminder = await repos.reminders.create_reminder(args)
    return format_success("created", "reminder", reminder.title, reminder.id)


async def handle_read_reminders(repos: Repositories, args: ReadRemindersArgs) -> str:
    # An explicit id is a lookup, not a filter: a miss is an error
    if args.id:
        reminder = await repos.reminders.find_reminder_by_id(args.id)
        return format_single("Reminder", format_reminder(reminder))

    reminders = await repos.reminders.find_reminders(args)
    return format_list(
        "Reminders",
        reminders,
        format_reminder,
        "No reminders found matching the criteria.",
    )


async def handle_update_reminder(repos: Repositories, args: UpdateReminderArgs) -> str:
    reminder = await repos.reminders.update_reminder(args)
    return format_success("updated", "reminder", reminder.title, reminder.id)


async def handle_delete_reminder(repos: Repositories, args: DeleteReminderArgs) -> str:
    await repos.reminders.delete_reminder(args)
    return format_delete("reminder", args.id, use_quotes=False, use_period=False)


# ----------------------------------------------------------------------------
# Reminder lists
# ----------------------------------------------------------------------------

async def handle_create_list(repos: Repositories, args: CreateListArgs) -> str:
    reminder_list = await repos.lists.create_list(args)
    return format_success("created", "list", reminder_list.name, reminder_list.id)


async def handle_read_lists(repos: Repositories, args: ReadListsArgs) -> str:
    if args.name:
        reminder_list = await repos.lists.find_list_by_name(args)
        return format_single("Reminder List", format_reminder_list(reminder_list))

    lists = await repos.lists.find_lists()
    return format_list("Reminder Lists", lists, format_reminder_list, "No reminder lists found.")


async def handle_update_list(repos: Repositories, args: UpdateListArgs) -> str:
    reminder_list = await repos.lists.update_list(args)
    return format_success("updated", "list", reminder_list.name, reminder_list.id)


async def handle_delete_list(repos: Repositories, args: DeleteListArgs) -> str:
    await repos.lists.delete_list(args)
    return format_delete("list", args.name, use_quotes=False, use_id_prefix=False)


# ----------------------------------------------------------------------------
# Calendar
# ----------------------------------------------------------------------------

async def handle_create_event(repos: Repositories, args: CreateEventArgs) -> str:
    event = await repos.calendar.create_event(args)
    return format_success("created", "event", event.title, event.id)


async def handle_read_events(repos: Repositories, args: ReadEventsArgs) -> str:
    if args.id:
        event = await repos.calendar.find_event_by_id(args.id)
        return format_single("Calendar Event", format_event(event))

    events = await repos.calendar.find_events(args)
    return format_list(
        "Calendar Events",
        events,
        format_event,
        "No calendar events found matching the criteria.",
    )


async def handle_update_event(repos: Repositories, args: UpdateEventArgs) -> str:
    event = await repos.calendar.update_event(args)
    return format_success("updated", "event", event.title, event.id)


async def handle_delete_event(repos: Repositories, args: DeleteEventArgs) -> str:
    await repos.calendar.delete_event(args)
    return format_delete("event", args.id)


async def handle_read_calendars(repos: Repositories, args: ReadCalendarsArgs) -> str:
    calendars = await repos.calendar.find_calendars()
    return format_list("Calendars", calendars, format_calendar, "No calendars found.")


def _build_registry(*specs: ToolSpec) -> Mapping[str, ToolSpec]:
    return MappingProxyType({spec.name: spec for spec in specs})


# Built once at import time and never mutated
TOOLS: Mapping[str, ToolSpec] = _build_registry(
    ToolSpec("reminders_create", "create reminder", CreateReminderArgs, handle_create_reminder),
    ToolSpec("reminders_read", "read reminders", ReadRemindersArgs, handle_read_reminders),
    ToolSpec("reminders_update", "update reminder", UpdateReminderArgs, handle_update_reminder),
    ToolSpec("reminders_delete", "delete reminder", DeleteReminderArgs, handle_delete_reminder),
    ToolSpec("lists_create", "create list", CreateListArgs, handle_create_list),
    ToolSpec("lists_read", "read lists", ReadListsArgs, handle_read_lists),
    ToolSpec("lists_update", "update list", UpdateListArgs, handle_update_list),
    ToolSpec("lists_delete", "delete list", DeleteListArgs, handle_delete_list),
    ToolSpec("calendar_create", "create event", CreateEventArgs, handle_create_event),
    ToolSpec("calendar_read", "read events", ReadEventsArgs, handle_read_events),
    ToolSpec("calendar_update", "update event", UpdateEventArgs, handle_update_event),
    ToolSpec("calendar_delete", "delete event", DeleteEventArgs, handle_delete_event),
    ToolSpec("calendars_read", "read calendars", ReadCalendarsArgs, handle_read_calendars),
)


def render_error(operation: str, error: Exception, development: bool) -> str:
    """Turn a pipeline error into caller-facing text.

    Validation errors are always shown in full. Not-found keeps its kind in
    production so it is never confused with an empty result. Everything else
    is generic unless running in development or debug mode.
    """
    if isinstance(error, ValidationError):
        return str(error)
    if development:
        return f"Failed to {operation}: {error}"
    if isinstance(error, NotFoundError):
        return f"Failed to {operation}: {error.kind.capitalize()} not found."
    return f"Failed to {operation}: {GENERIC_ERROR_MESSAGE}"


class Dispatcher:
    """Routes tool calls through validation, the helper and formatting."""

    def __init__(
        self,
        settings: Settings,
        client: HelperClient,
        tools: Mapping[str, ToolSpec] = TOOLS,
    ):
        self._settings = settings
        self._client = client
        self._tools = tools
        self._repositories = Repositories(
            reminders=ReminderRepository(client),
            lists=ListRepository(client),
            calendar=CalendarRepository(client),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Dispatcher":
        resolver = BinaryResolver(settings)
        return cls(settings, HelperClient(resolver, settings.helper_timeout_ms))

    @property
    def tool_names(self) -> list[str]:
        return list(self._tools)

    async def dispatch(self, tool_name: str, raw_arguments: Optional[dict[str, Any]]) -> ToolResult:
        spec = self._tools.get(tool_name)
        operation = spec.operation if spec else f"run {tool_name}"
        try:
            if spec is None:
                raise UnknownToolError(tool_name)
            args = validate(spec.schema, raw_arguments)
            # Trust check runs before any helper argument list is built
            self._client.ensure_trusted()
            text = await spec.handler(self._repositories, args)
        except (ValidationError, NotFoundError, UnknownToolError) as e:
            logger.info("Tool %s rejected: %s", tool_name, e)
            return ToolResult(render_error(operation, e, self._settings.is_development), is_error=True)
        except (HelperExecutionError, HelperTimeoutError, UntrustedBinaryError) as e:
            logger.warning("Tool %s failed: %s", tool_name, e)
            return ToolResult(render_error(operation, e, self._settings.is_development), is_error=True)
        except Exception as e:
            logger.exception("Unexpected error in tool %s", tool_name)
            return ToolResult(render_error(operation, e, self._settings.is_development), is_error=True)
        return ToolResult(text)
