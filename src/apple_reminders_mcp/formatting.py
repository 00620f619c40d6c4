"""Markdown rendering of tool results.

All functions here are pure string construction. Optional fields are only
rendered when present.
"""

from typing import Callable, Iterable, Sequence, TypeVar

from .models import Calendar, CalendarEvent, Reminder, ReminderList

T = TypeVar("T")

NOTES_INDENT = "    "


def format_multiline_notes(notes: str) -> str:
    """Continue multi-line notes on indented lines under their bullet."""
    return notes.replace("\r\n", "\n").replace("\n", "\n" + NOTES_INDENT)


def format_single(heading: str, lines: Iterable[str]) -> str:
    """Render one record under a ``###`` heading."""
    return "\n".join([f"### {heading}", "", *lines])


def format_list(
    title: str,
    items: Sequence[T],
    format_item: Callable[[T], list[str]],
    empty_message: str,
) -> str:
    """Render a collection with a counted header.

    An empty collection renders ``empty_message``; it is not an error.
    """
    lines = [f"### {title} (Total: {len(items)})", ""]
    if not items:
        lines.append(empty_message)
    else:
        for item in items:
            lines.extend(format_item(item))
    return "\n".join(lines)


def format_success(action: str, kind: str, title: str, identifier: str) -> str:
    """Confirmation for a created or updated record.

    >>> format_success("created", "reminder", "Buy milk", "ABC123")
    'Successfully created reminder "Buy milk".\\n- ID: ABC123'
    """
    if action == "updated" and kind == "list":
        prefix = f"Successfully updated {kind} to"
    else:
        prefix = f"Successfully {action} {kind}"
    return f'{prefix} "{title}".\n- ID: {identifier}'


def format_delete(
    kind: str,
    identifier: str,
    use_quotes: bool = True,
    use_id_prefix: bool = True,
    use_period: bool = True,
    use_colon: bool = True,
) -> str:
    """Confirmation for a deleted record."""
    formatted = f'"{identifier}"' if use_quotes else identifier
    if use_id_prefix:
        separator = ": " if use_colon else " "
        formatted = f"with ID{separator}{formatted}"
    period = "." if use_period else ""
    return f"Successfully deleted {kind} {formatted}{period}"


def format_reminder(reminder: Reminder) -> list[str]:
    checkbox = "[x]" if reminder.completed else "[ ]"
    lines = [f"- {checkbox} {reminder.title}"]
    if reminder.list:
        lines.append(f"  - List: {reminder.list}")
    lines.append(f"  - ID: {reminder.id}")
    if reminder.notes:
        lines.append(f"  - Notes: {format_multiline_notes(reminder.notes)}")
    if reminder.due_date:
        lines.append(f"  - Due: {reminder.due_date}")
    if reminder.url:
        lines.append(f"  - URL: {reminder.url}")
    return lines


def format_reminder_list(reminder_list: ReminderList) -> list[str]:
    return [f"- {reminder_list.name}", f"  - ID: {reminder_list.id}"]


def format_event(event: CalendarEvent) -> list[str]:
    lines = [f"- {event.title}"]
    if event.calendar:
        lines.append(f"  - Calendar: {event.calendar}")
    lines.append(f"  - ID: {event.id}")
    if event.start_date:
        lines.append(f"  - Start: {event.start_date}")
    if event.end_date:
        lines.append(f"  - End: {event.end_date}")
    if event.is_all_day:
        lines.append("  - All day: yes")
    if event.location:
        lines.append(f"  - Location: {event.location}")
    if event.notes:
        lines.append(f"  - Notes: {format_multiline_notes(event.notes)}")
    if event.url:
        lines.append(f"  - URL: {event.url}")
    return lines


def format_calendar(calendar: Calendar) -> list[str]:
    return [f"- {calendar.title}", f"  - ID: {calendar.id}"]
