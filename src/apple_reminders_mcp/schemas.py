"""Per-operation input schemas for the MCP tools.

Each tool validates its raw arguments into one of these models before
anything else happens. Absent and ``null`` fields are both treated as not
supplied, so ``model_fields_set`` is exactly what the caller provided.
"""

import re
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError

MAX_TITLE_LENGTH = 200
MAX_NOTES_LENGTH = 2000
MAX_SEARCH_LENGTH = 100
MAX_ID_LENGTH = 200

DATE_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}"
    r"(?:[ T]\d{2}:\d{2}(?::\d{2}(?:\.\d{1,6})?)?(?:Z|[+-]\d{2}:?\d{2})?)?$"
)
URL_PATTERN = re.compile(r"^https?://[^\s/$.?#][^\s]*$", re.IGNORECASE)


class DueWithin(str, Enum):
    """Named due-date windows for reminder reads."""
    TODAY = "today"
    TOMORROW = "tomorrow"
    THIS_WEEK = "this-week"
    OVERDUE = "overdue"
    NO_DATE = "no-date"


def parse_date(value: str) -> datetime:
    """Parse an accepted date string into a naive local datetime."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _check_date(value: str) -> str:
    if not DATE_PATTERN.match(value):
        raise ValueError(
            "must be a date in YYYY-MM-DD, 'YYYY-MM-DD HH:MM:SS' or ISO 8601 format"
        )
    try:
        parse_date(value)
    except ValueError:
        raise ValueError(f"'{value}' is not a valid calendar date") from None
    return value


def _check_url(value: str) -> str:
    if not URL_PATTERN.match(value):
        raise ValueError("must be an http:// or https:// URL")
    return value


DateString = Annotated[str, AfterValidator(_check_date)]
UrlString = Annotated[str, Field(max_length=MAX_NOTES_LENGTH), AfterValidator(_check_url)]


class ToolArguments(BaseModel):
    """Base for all tool argument models."""
    model_config = ConfigDict(
        strict=True,
        extra="forbid",
        str_strip_whitespace=True,
        frozen=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    def supplied(self) -> dict[str, Any]:
        """Return only the fields the caller supplied."""
        return self.model_dump(exclude_unset=True)


# ============================================================================
# REMINDERS
# ============================================================================

class CreateReminderArgs(ToolArguments):
    """Arguments for creating a reminder."""
    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)
    notes: Optional[str] = Field(default=None, max_length=MAX_NOTES_LENGTH)
    url: Optional[UrlString] = None
    list_name: Optional[str] = Field(default=None, min_length=1, max_length=MAX_TITLE_LENGTH)
    due_date: Optional[DateString] = None


class ReadRemindersArgs(ToolArguments):
    """Arguments for reading one reminder by id or filtering many."""
    id: Optional[str] = Field(default=None, min_length=1, max_length=MAX_ID_LENGTH)
    list_name: Optional[str] = Field(default=None, min_length=1, max_length=MAX_TITLE_LENGTH)
    show_completed: bool = False
    search: Optional[str] = Field(default=None, min_length=1, max_length=MAX_SEARCH_LENGTH)
    due_after: Optional[DateString] = None
    due_before: Optional[DateString] = None
    due_within: Optional[Literal["today", "tomorrow", "this-week", "overdue", "no-date"]] = None

    @model_validator(mode="after")
    def _check_window(self) -> "ReadRemindersArgs":
        if self.due_after and self.due_before:
            if parse_date(self.due_after) > parse_date(self.due_before):
                raise ValueError("due_after must not be later than due_before")
        return self


class UpdateReminderArgs(ToolArguments):
    """Arguments for a partial reminder update."""
    id: str = Field(..., min_length=1, max_length=MAX_ID_LENGTH)
    title: Optional[str] = Field(default=None, min_length=1, max_length=MAX_TITLE_LENGTH)
    notes: Optional[str] = Field(default=None, max_length=MAX_NOTES_LENGTH)
    url: Optional[UrlString] = None
    list_name: Optional[str] = Field(default=None, min_length=1, max_length=MAX_TITLE_LENGTH)
    due_date: Optional[DateString] = None
    completed: Optional[bool] = None


class DeleteReminderArgs(ToolArguments):
    """Arguments for deleting a reminder."""
    id: str = Field(..., min_length=1, max_length=MAX_ID_LENGTH)


# ============================================================================
# REMINDER LISTS
# ============================================================================

class CreateListArgs(ToolArguments):
    """Arguments for creating a reminder list."""
    name: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)


class ReadListsArgs(ToolArguments):
    """Arguments for reading reminder lists."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=MAX_TITLE_LENGTH)


class UpdateListArgs(ToolArguments):
    """Arguments for renaming a reminder list."""
    name: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)
    new_name: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)


class DeleteListArgs(ToolArguments):
    """Arguments for deleting a reminder list."""
    name: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)


# ============================================================================
# CALENDAR EVENTS
# ============================================================================

class CreateEventArgs(ToolArguments):
    """Arguments for creating a calendar event."""
    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)
    start_date: DateString
    end_date: DateString
    notes: Optional[str] = Field(default=None, max_length=MAX_NOTES_LENGTH)
    location: Optional[str] = Field(default=None, max_length=MAX_TITLE_LENGTH)
    url: Optional[UrlString] = None
    calendar_name: Optional[str] = Field(default=None, min_length=1, max_length=MAX_TITLE_LENGTH)
    is_all_day: Optional[bool] = None

    @model_validator(mode="after")
    def _check_range(self) -> "CreateEventArgs":
        if parse_date(self.start_date) > parse_date(self.end_date):
            raise ValueError("start_date must not be later than end_date")
        return self


class ReadEventsArgs(ToolArguments):
    """Arguments for reading one event by id or filtering many."""
    id: Optional[str] = Field(default=None, min_length=1, max_length=MAX_ID_LENGTH)
    calendar_name: Optional[str] = Field(default=None, min_length=1, max_length=MAX_TITLE_LENGTH)
    search: Optional[str] = Field(default=None, min_length=1, max_length=MAX_SEARCH_LENGTH)
    start_date: Optional[DateString] = None
    end_date: Optional[DateString] = None

    @model_validator(mode="after")
    def _check_range(self) -> "ReadEventsArgs":
        if self.start_date and self.end_date:
            if parse_date(self.start_date) > parse_date(self.end_date):
                raise ValueError("start_date must not be later than end_date")
        return self


class UpdateEventArgs(ToolArguments):
    """Arguments for a partial event update."""
    id: str = Field(..., min_length=1, max_length=MAX_ID_LENGTH)
    title: Optional[str] = Field(default=None, min_length=1, max_length=MAX_TITLE_LENGTH)
    start_date: Optional[DateString] = None
    end_date: Optional[DateString] = None
    notes: Optional[str] = Field(default=None, max_length=MAX_NOTES_LENGTH)
    location: Optional[str] = Field(default=None, max_length=MAX_TITLE_LENGTH)
    url: Optional[UrlString] = None
    calendar_name: Optional[str] = Field(default=None, min_length=1, max_length=MAX_TITLE_LENGTH)
    is_all_day: Optional[bool] = None

    @model_validator(mode="after")
    def _check_range(self) -> "UpdateEventArgs":
        if self.start_date and self.end_date:
            if parse_date(self.start_date) > parse_date(self.end_date):
                raise ValueError("start_date must not be later than end_date")
        return self


class DeleteEventArgs(ToolArguments):
    """Arguments for deleting a calendar event."""
    id: str = Field(..., min_length=1, max_length=MAX_ID_LENGTH)


class ReadCalendarsArgs(ToolArguments):
    """Reading calendars takes no arguments."""


# ============================================================================
# VALIDATION
# ============================================================================

def _field_name(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "arguments"


def validate(schema: type[ToolArguments], raw_arguments: Optional[dict[str, Any]]):
    """Validate raw tool arguments against ``schema``.

    Raises:
        ValidationError: naming the first offending field; the message lists
            every problem found.
    """
    if raw_arguments is None:
        raw_arguments = {}
    if not isinstance(raw_arguments, dict):
        raise ValidationError("arguments", "must be an object")

    try:
        return schema.model_validate(raw_arguments)
    except PydanticValidationError as e:
        errors = e.errors(include_url=False)
        problems = []
        for error in errors:
            reason = error["msg"].removeprefix("Value error, ")
            problems.append(f"{_field_name(error['loc'])}: {reason}")
        first = errors[0]
        raise ValidationError(
            _field_name(first["loc"]),
            first["msg"].removeprefix("Value error, "),
            "Input validation failed: " + "; ".join(problems),
        ) from None
