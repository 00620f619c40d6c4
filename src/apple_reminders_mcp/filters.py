"""In-process filtering of records returned by the helper."""

from datetime import datetime, timedelta
from typing import Iterable, Optional

from .models import CalendarEvent, Reminder
from .schemas import DueWithin, parse_date


def _parse_optional(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return parse_date(value)
    except ValueError:
        return None


def _is_date_only(value: Optional[str]) -> bool:
    return bool(value) and len(value) == 10


def _upper_bound(value: str) -> datetime:
    """A date-only upper bound covers the whole day."""
    bound = parse_date(value)
    if _is_date_only(value):
        bound += timedelta(days=1) - timedelta(microseconds=1)
    return bound


def _due_sort_key(reminder: Reminder) -> tuple[bool, datetime]:
    due = _parse_optional(reminder.due_date)
    return due is None, due or datetime.max


def _matches_text(query: str, *fields: Optional[str]) -> bool:
    # Each field is matched on its own, never across a boundary
    query = query.lower()
    return any(query in (field or "").lower() for field in fields)


def due_window(
    due_within: Optional[str], now: datetime
) -> tuple[Optional[datetime], Optional[datetime]]:
    """Return the inclusive (start, end) bounds of a named window."""
    start_of_today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    end_of_day = timedelta(days=1) - timedelta(microseconds=1)

    if due_within == DueWithin.TODAY:
        return start_of_today, start_of_today + end_of_day
    if due_within == DueWithin.TOMORROW:
        start = start_of_today + timedelta(days=1)
        return start, start + end_of_day
    if due_within == DueWithin.THIS_WEEK:
        # Today through the coming Sunday
        days_left = 6 - start_of_today.weekday()
        return start_of_today, start_of_today + timedelta(days=days_left) + end_of_day
    if due_within == DueWithin.OVERDUE:
        return None, now
    return None, None


def filter_reminders(
    reminders: Iterable[Reminder],
    show_completed: bool = False,
    search: Optional[str] = None,
    due_after: Optional[str] = None,
    due_before: Optional[str] = None,
    due_within: Optional[str] = None,
    now: Optional[datetime] = None,
) -> list[Reminder]:
    """Filter reminders by completion, text and due window.

    Reminders without a due date never match a due window; ``no-date``
    selects exactly those.
    """
    now = now or datetime.now()
    lower = parse_date(due_after) if due_after else None
    upper = _upper_bound(due_before) if due_before else None
    named_lower, named_upper = due_window(due_within, now)

    results = []
    for reminder in reminders:
        if reminder.completed and not show_completed:
            continue
        if due_within == DueWithin.OVERDUE and reminder.completed:
            continue
        if search and not _matches_text(search, reminder.title, reminder.notes):
            continue

        due = _parse_optional(reminder.due_date)
        if due is not None and due_within == DueWithin.OVERDUE and _is_date_only(reminder.due_date):
            # A date-only reminder is not overdue until its day is over
            due = _upper_bound(reminder.due_date)
        if due_within == DueWithin.NO_DATE:
            if due is not None:
                continue
        elif lower or upper or named_lower or named_upper:
            if due is None:
                continue
            if lower and due < lower:
                continue
            if upper and due > upper:
                continue
            if named_lower and due < named_lower:
                continue
            if named_upper and due > named_upper:
                continue

        results.append(reminder)

    # Sort by due date, undated last
    results.sort(key=_due_sort_key)
    return results


def filter_events(
    events: Iterable[CalendarEvent],
    search: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> list[CalendarEvent]:
    """Filter events by text and by overlap with a date window."""
    lower = parse_date(start_date) if start_date else None
    upper = _upper_bound(end_date) if end_date else None

    results = []
    for event in events:
        if search and not _matches_text(search, event.title, event.notes, event.location):
            continue

        start = _parse_optional(event.start_date)
        end = _parse_optional(event.end_date) or start
        if lower and (end is None or end < lower):
            continue
        if upper and (start is None or start > upper):
            continue

        results.append(event)

    results.sort(key=lambda e: _parse_optional(e.start_date) or datetime.max)
    return results
