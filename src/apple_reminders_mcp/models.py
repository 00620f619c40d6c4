"""Domain records parsed from helper output."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, model_validator


class HelperRecord(BaseModel):
    """Base for records returned by the helper.

    Unknown keys are ignored and every optional key may be missing or null.
    """
    model_config = ConfigDict(extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @classmethod
    def from_helper(cls, data: Any):
        return cls.model_validate(data)

    @classmethod
    def many_from_helper(cls, data: Any) -> list:
        return [cls.model_validate(item) for item in (data or [])]


class Reminder(HelperRecord):
    id: str
    title: str
    completed: bool = False
    notes: Optional[str] = None
    url: Optional[str] = None
    list: Optional[str] = None
    due_date: Optional[str] = None


class ReminderList(HelperRecord):
    id: str
    name: str


class CalendarEvent(HelperRecord):
    id: str
    title: str
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    calendar: Optional[str] = None
    notes: Optional[str] = None
    location: Optional[str] = None
    url: Optional[str] = None
    is_all_day: bool = False


class Calendar(HelperRecord):
    id: str
    title: str
