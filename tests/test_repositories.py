import pytest

from apple_reminders_mcp.errors import HelperExecutionError, NotFoundError
from apple_reminders_mcp.helper import HelperCommand
from apple_reminders_mcp.permissions import PermissionDeniedError
from apple_reminders_mcp.repositories import CalendarRepository, ListRepository, ReminderRepository
from apple_reminders_mcp.schemas import (
    CreateEventArgs,
    CreateReminderArgs,
    DeleteReminderArgs,
    ReadEventsArgs,
    ReadListsArgs,
    ReadRemindersArgs,
    UpdateEventArgs,
    UpdateListArgs,
    UpdateReminderArgs,
    validate,
)

MILK = {"id": "ABC123", "title": "Buy milk", "completed": False}


@pytest.fixture
def reminders(helper):
    return ReminderRepository(helper)


@pytest.fixture
def lists(helper):
    return ListRepository(helper)


@pytest.fixture
def calendar(helper):
    return CalendarRepository(helper)


async def test_create_passes_only_supplied_fields(reminders, helper):
    helper.respond(HelperCommand.REMINDERS_CREATE, MILK)
    reminder = await reminders.create_reminder(validate(CreateReminderArgs, {"title": "Buy milk"}))

    assert reminder.id == "ABC123"
    [call] = helper.calls
    assert call.command == HelperCommand.REMINDERS_CREATE
    assert call.arguments == ("--title", "Buy milk")


async def test_create_maps_every_field_to_a_flag(reminders, helper):
    helper.respond(HelperCommand.REMINDERS_CREATE, MILK)
    await reminders.create_reminder(validate(CreateReminderArgs, {
        "title": "Buy milk",
        "notes": "--list Evil",
        "url": "https://example.com",
        "list_name": "Groceries",
        "due_date": "2025-11-18 15:00:00",
    }))
    assert helper.calls[0].arguments == (
        "--title", "Buy milk",
        "--notes", "--list Evil",
        "--url", "https://example.com",
        "--list", "Groceries",
        "--due-date", "2025-11-18 15:00:00",
    )


async def test_update_sends_only_changed_fields(reminders, helper):
    helper.respond(HelperCommand.REMINDERS_UPDATE, {**MILK, "completed": True, "notes": "kept"})
    reminder = await reminders.update_reminder(
        validate(UpdateReminderArgs, {"id": "ABC123", "completed": True})
    )

    assert helper.calls[0].arguments == ("--id", "ABC123", "--completed", "true")
    assert reminder.completed is True
    assert reminder.notes == "kept"


async def test_update_unknown_id_is_not_found(reminders, helper):
    helper.respond(HelperCommand.REMINDERS_UPDATE, HelperExecutionError("Reminder not found: nope", 1))
    with pytest.raises(NotFoundError) as exc:
        await reminders.update_reminder(validate(UpdateReminderArgs, {"id": "nope", "title": "x"}))
    assert exc.value.identifier == "nope"
    assert exc.value.kind == "reminder"


async def test_find_by_id(reminders, helper):
    helper.respond(HelperCommand.REMINDERS_READ, MILK)
    reminder = await reminders.find_reminder_by_id("ABC123")
    assert reminder.title == "Buy milk"
    assert helper.calls[0].arguments == ("--id", "ABC123")


@pytest.mark.parametrize("response", [None, []])
async def test_find_by_id_empty_result_is_not_found(reminders, helper, response):
    helper.respond(HelperCommand.REMINDERS_READ, response)
    with pytest.raises(NotFoundError):
        await reminders.find_reminder_by_id("missing")


async def test_find_by_filter_empty_is_not_an_error(reminders, helper):
    helper.respond(HelperCommand.REMINDERS_READ, [])
    assert await reminders.find_reminders(validate(ReadRemindersArgs, {"search": "milk"})) == []


async def test_find_by_filter_sends_list_and_filters_locally(reminders, helper):
    helper.respond(HelperCommand.REMINDERS_READ, [
        MILK,
        {"id": "2", "title": "Walk dog", "completed": False},
        {"id": "3", "title": "Milk the cow", "completed": True},
    ])
    result = await reminders.find_reminders(
        validate(ReadRemindersArgs, {"list_name": "Home", "search": "milk"})
    )
    assert [r.id for r in result] == ["ABC123"]
    assert helper.calls[0].arguments == ("--list", "Home")


async def test_parse_tolerates_missing_and_null_optional_fields(reminders, helper):
    helper.respond(HelperCommand.REMINDERS_READ, [
        {"id": "1", "title": "Bare"},
        {"id": "2", "title": "Nulls", "notes": None, "due_date": None, "completed": None, "extra": 1},
    ])
    result = await reminders.find_reminders(validate(ReadRemindersArgs, {}))
    assert [r.title for r in result] == ["Bare", "Nulls"]
    assert result[1].notes is None


async def test_malformed_record_is_helper_error(reminders, helper):
    helper.respond(HelperCommand.REMINDERS_READ, [{"title": "no id"}])
    with pytest.raises(HelperExecutionError):
        await reminders.find_reminders(validate(ReadRemindersArgs, {}))


async def test_delete_twice_is_not_found(reminders, helper):
    deleted = set()

    def delete(invocation):
        reminder_id = invocation.arguments[1]
        if reminder_id in deleted:
            raise HelperExecutionError(f"Reminder not found: {reminder_id}", 1)
        deleted.add(reminder_id)
        return None

    helper.respond(HelperCommand.REMINDERS_DELETE, delete)
    args = validate(DeleteReminderArgs, {"id": "ABC123"})
    await reminders.delete_reminder(args)
    with pytest.raises(NotFoundError):
        await reminders.delete_reminder(args)


async def test_permission_failure_is_classified(reminders, helper):
    helper.respond(HelperCommand.REMINDERS_READ, HelperExecutionError("Reminders access denied", 2))
    with pytest.raises(PermissionDeniedError) as exc:
        await reminders.find_reminders(validate(ReadRemindersArgs, {}))
    assert exc.value.entity_type == "Reminders"
    assert exc.value.exit_code == 2


async def test_other_helper_failures_bubble_unchanged(reminders, helper):
    failure = HelperExecutionError("store unavailable", 3)
    helper.respond(HelperCommand.REMINDERS_READ, failure)
    with pytest.raises(HelperExecutionError) as exc:
        await reminders.find_reminders(validate(ReadRemindersArgs, {}))
    assert exc.value is failure


async def test_not_found_on_filter_read_is_not_reclassified(reminders, helper):
    helper.respond(HelperCommand.REMINDERS_READ, HelperExecutionError("List not found: Nope", 1))
    with pytest.raises(HelperExecutionError) as exc:
        await reminders.find_reminders(validate(ReadRemindersArgs, {"list_name": "Nope"}))
    assert not isinstance(exc.value, NotFoundError)


async def test_find_list_by_name_is_case_insensitive(lists, helper):
    helper.respond(HelperCommand.LISTS_READ, [{"id": "L1", "name": "Groceries"}])
    found = await lists.find_list_by_name(validate(ReadListsArgs, {"name": "groceries"}))
    assert found.id == "L1"
    with pytest.raises(NotFoundError):
        await lists.find_list_by_name(validate(ReadListsArgs, {"name": "Work"}))


async def test_rename_list(lists, helper):
    helper.respond(HelperCommand.LISTS_UPDATE, {"id": "L1", "name": "Shopping"})
    renamed = await lists.update_list(validate(UpdateListArgs, {"name": "Groceries", "new_name": "Shopping"}))
    assert renamed.name == "Shopping"
    assert helper.calls[0].arguments == ("--name", "Groceries", "--new-name", "Shopping")


async def test_create_event_arguments(calendar, helper):
    helper.respond(HelperCommand.EVENTS_CREATE, {"id": "E1", "title": "Standup"})
    await calendar.create_event(validate(CreateEventArgs, {
        "title": "Standup",
        "start_date": "2025-11-18T09:00:00",
        "end_date": "2025-11-18T09:15:00",
        "is_all_day": False,
    }))
    assert helper.calls[0].arguments == (
        "--title", "Standup",
        "--start-date", "2025-11-18T09:00:00",
        "--end-date", "2025-11-18T09:15:00",
        "--all-day", "false",
    )


async def test_update_event_partial(calendar, helper):
    helper.respond(HelperCommand.EVENTS_UPDATE, {"id": "E1", "title": "Standup", "location": "Room 4"})
    await calendar.update_event(validate(UpdateEventArgs, {"id": "E1", "location": "Room 4"}))
    assert helper.calls[0].arguments == ("--id", "E1", "--location", "Room 4")


async def test_find_events_sends_window(calendar, helper):
    helper.respond(HelperCommand.EVENTS_READ, [])
    await calendar.find_events(validate(ReadEventsArgs, {"calendar_name": "Work", "start_date": "2025-11-18"}))
    assert helper.calls[0].arguments == ("--calendar", "Work", "--start-date", "2025-11-18")
