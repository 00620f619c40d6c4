"""Repositories translating validated requests into helper commands.

Each repository builds a fixed ``CommandInvocation``, runs it through the
helper client and parses the result into domain records. Nothing is cached;
the OS store owned by the helper is the source of truth.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from .errors import HelperExecutionError, NotFoundError
from .filters import filter_events, filter_reminders
from .helper import CommandInvocation, HelperClient, HelperCommand, flag_arguments
from .models import Calendar, CalendarEvent, HelperRecord, Reminder, ReminderList
from .permissions import classify_helper_failure
from .schemas import (
    CreateEventArgs,
    CreateListArgs,
    CreateReminderArgs,
    DeleteEventArgs,
    DeleteListArgs,
    DeleteReminderArgs,
    ReadEventsArgs,
    ReadListsArgs,
    ReadRemindersArgs,
    UpdateEventArgs,
    UpdateListArgs,
    UpdateReminderArgs,
)

# Argument field -> helper flag, in the order flags are emitted
REMINDER_FLAGS = (
    ("title", "--title"),
    ("notes", "--notes"),
    ("url", "--url"),
    ("list_name", "--list"),
    ("due_date", "--due-date"),
    ("completed", "--completed"),
)

EVENT_FLAGS = (
    ("title", "--title"),
    ("start_date", "--start-date"),
    ("end_date", "--end-date"),
    ("notes", "--notes"),
    ("location", "--location"),
    ("url", "--url"),
    ("calendar_name", "--calendar"),
    ("is_all_day", "--all-day"),
)


def _supplied_flags(supplied: dict[str, Any], flags: tuple[tuple[str, str], ...]) -> tuple[str, ...]:
    return flag_arguments([(flag, supplied.get(field)) for field, flag in flags])


def _parse(model: type[HelperRecord], data: Any, many: bool = False):
    try:
        if many:
            return model.many_from_helper(data)
        return model.from_helper(data)
    except PydanticValidationError as e:
        raise HelperExecutionError(
            f"Helper returned an unexpected {model.__name__} payload: {e.error_count()} error(s)"
        ) from e


class HelperRepository:
    """Shared command execution and failure classification."""

    kind = "item"

    def __init__(self, client: HelperClient):
        self._client = client

    async def _run(
        self,
        command: HelperCommand,
        arguments: tuple[str, ...] = (),
        identifier: Optional[str] = None,
    ) -> Any:
        try:
            return await self._client.run(CommandInvocation(command, arguments))
        except HelperExecutionError as e:
            classified = classify_helper_failure(e, self.kind, identifier)
            if classified is e:
                raise
            raise classified from e

    async def _run_by_id(
        self,
        command: HelperCommand,
        identifier: str,
        arguments: tuple[str, ...] = (),
    ) -> Any:
        result = await self._run(command, ("--id", identifier, *arguments), identifier)
        if result is None:
            raise NotFoundError(self.kind, identifier)
        return result


class ReminderRepository(HelperRepository):
    kind = "reminder"

    async def create_reminder(self, args: CreateReminderArgs) -> Reminder:
        arguments = _supplied_flags(args.supplied(), REMINDER_FLAGS)
        result = await self._run(HelperCommand.REMINDERS_CREATE, arguments)
        return _parse(Reminder, result)

    async def find_reminder_by_id(self, reminder_id: str) -> Reminder:
        result = await self._run_by_id(HelperCommand.REMINDERS_READ, reminder_id)
        if isinstance(result, list):
            if not result:
                raise NotFoundError(self.kind, reminder_id)
            result = result[0]
        return _parse(Reminder, result)

    async def find_reminders(
        self, args: ReadRemindersArgs, now: Optional[datetime] = None
    ) -> list[Reminder]:
        arguments = flag_arguments([("--list", args.list_name)])
        result = await self._run(HelperCommand.REMINDERS_READ, arguments)
        reminders = _parse(Reminder, result, many=True)
        return filter_reminders(
            reminders,
            show_completed=args.show_completed,
            search=args.search,
            due_after=args.due_after,
            due_before=args.due_before,
            due_within=args.due_within,
            now=now,
        )

    async def update_reminder(self, args: UpdateReminderArgs) -> Reminder:
        """Change only the supplied fields; the helper keeps the rest."""
        supplied = args.supplied()
        supplied.pop("id")
        arguments = _supplied_flags(supplied, REMINDER_FLAGS)
        result = await self._run_by_id(HelperCommand.REMINDERS_UPDATE, args.id, arguments)
        return _parse(Reminder, result)

    async def delete_reminder(self, args: DeleteReminderArgs) -> None:
        await self._run(HelperCommand.REMINDERS_DELETE, ("--id", args.id), args.id)


class ListRepository(HelperRepository):
    kind = "list"

    async def create_list(self, args: CreateListArgs) -> ReminderList:
        result = await self._run(HelperCommand.LISTS_CREATE, ("--name", args.name))
        return _parse(ReminderList, result)

    async def find_lists(self) -> list[ReminderList]:
        result = await self._run(HelperCommand.LISTS_READ)
        return _parse(ReminderList, result, many=True)

    async def find_list_by_name(self, args: ReadListsArgs) -> ReminderList:
        """Look up one list by name (case-insensitive)."""
        for reminder_list in await self.find_lists():
            if reminder_list.name.lower() == args.name.lower():
                return reminder_list
        raise NotFoundError(self.kind, args.name)

    async def update_list(self, args: UpdateListArgs) -> ReminderList:
        result = await self._run(
            HelperCommand.LISTS_UPDATE,
            ("--name", args.name, "--new-name", args.new_name),
            args.name,
        )
        if result is None:
            raise NotFoundError(self.kind, args.name)
        return _parse(ReminderList, result)

    async def delete_list(self, args: DeleteListArgs) -> None:
        await self._run(HelperCommand.LISTS_DELETE, ("--name", args.name), args.name)


class CalendarRepository(HelperRepository):
    kind = "event"

    async def create_event(self, args: CreateEventArgs) -> CalendarEvent:
        arguments = _supplied_flags(args.supplied(), EVENT_FLAGS)
        result = await self._run(HelperCommand.EVENTS_CREATE, arguments)
        return _parse(CalendarEvent, result)

    async def find_event_by_id(self, event_id: str) -> CalendarEvent:
        result = await self._run_by_id(HelperCommand.EVENTS_READ, event_id)
        if isinstance(result, list):
            if not result:
                raise NotFoundError(self.kind, event_id)
            result = result[0]
        return _parse(CalendarEvent, result)

    async def find_events(self, args: ReadEventsArgs) -> list[CalendarEvent]:
        arguments = flag_arguments([
            ("--calendar", args.calendar_name),
            ("--start-date", args.start_date),
            ("--end-date", args.end_date),
        ])
        result = await self._run(HelperCommand.EVENTS_READ, arguments)
        events = _parse(CalendarEvent, result, many=True)
        return filter_events(
            events,
            search=args.search,
            start_date=args.start_date,
            end_date=args.end_date,
        )

    async def update_event(self, args: UpdateEventArgs) -> CalendarEvent:
        supplied = args.supplied()
        supplied.pop("id")
        arguments = _supplied_flags(supplied, EVENT_FLAGS)
        result = await self._run_by_id(HelperCommand.EVENTS_UPDATE, args.id, arguments)
        return _parse(CalendarEvent, result)

    async def delete_event(self, args: DeleteEventArgs) -> None:
        await self._run(HelperCommand.EVENTS_DELETE, ("--id", args.id), args.id)

    async def find_calendars(self) -> list[Calendar]:
        result = await self._run(HelperCommand.CALENDARS_READ)
        return _parse(Calendar, result, many=True)
