import pytest

from apple_reminders_mcp.errors import ValidationError
from apple_reminders_mcp.schemas import (
    CreateEventArgs,
    CreateReminderArgs,
    DeleteReminderArgs,
    DueWithin,
    ReadEventsArgs,
    ReadRemindersArgs,
    UpdateEventArgs,
    UpdateListArgs,
    UpdateReminderArgs,
    validate,
)


@pytest.mark.parametrize("supplied", [
    {"title": "Buy milk"},
    {"title": "Buy milk", "notes": "2 litres"},
    {"title": "Buy milk", "url": "https://shop.example.com/milk", "list_name": "Groceries"},
    {"title": "Buy milk", "due_date": "2025-11-18 15:00:00", "notes": "semi-skimmed"},
])
def test_create_fields_set_matches_supplied(supplied):
    args = validate(CreateReminderArgs, supplied)
    assert args.model_fields_set == set(supplied)
    assert args.supplied() == supplied


def test_update_fields_set_matches_supplied():
    args = validate(UpdateReminderArgs, {"id": "ABC123", "completed": True})
    assert args.model_fields_set == {"id", "completed"}
    assert args.supplied() == {"id": "ABC123", "completed": True}


def test_nulls_count_as_absent():
    args = validate(UpdateReminderArgs, {"id": "ABC123", "title": None, "notes": None})
    assert args.model_fields_set == {"id"}


def test_missing_required_field_is_named():
    with pytest.raises(ValidationError) as exc:
        validate(CreateReminderArgs, {"notes": "no title"})
    assert exc.value.field == "title"
    assert "title" in str(exc.value)


def test_missing_id_on_delete():
    with pytest.raises(ValidationError) as exc:
        validate(DeleteReminderArgs, {})
    assert exc.value.field == "id"


def test_blank_title_rejected():
    with pytest.raises(ValidationError) as exc:
        validate(CreateReminderArgs, {"title": "   "})
    assert exc.value.field == "title"


def test_wrong_type_rejected():
    with pytest.raises(ValidationError) as exc:
        validate(UpdateReminderArgs, {"id": "ABC123", "completed": "yes"})
    assert exc.value.field == "completed"


def test_unknown_field_rejected():
    with pytest.raises(ValidationError) as exc:
        validate(DeleteReminderArgs, {"id": "ABC123", "force": True})
    assert exc.value.field == "force"


def test_title_is_stripped():
    args = validate(CreateReminderArgs, {"title": "  Buy milk  "})
    assert args.title == "Buy milk"


@pytest.mark.parametrize("value", [
    "2025-11-18",
    "2025-11-18 15:00",
    "2025-11-18 15:00:00",
    "2025-11-18T15:00:00",
    "2025-11-18T15:00:00Z",
    "2025-11-18T15:00:00+02:00",
    "2025-11-18T15:00:00.250",
])
def test_accepted_date_formats(value):
    args = validate(CreateReminderArgs, {"title": "x", "due_date": value})
    assert args.due_date == value


@pytest.mark.parametrize("value", [
    "tomorrow",
    "18/11/2025",
    "2025-13-01",
    "2025-02-30",
    "2025-11-18; rm -rf /",
])
def test_rejected_date_formats(value):
    with pytest.raises(ValidationError) as exc:
        validate(CreateReminderArgs, {"title": "x", "due_date": value})
    assert exc.value.field == "due_date"


def test_url_must_be_http():
    with pytest.raises(ValidationError) as exc:
        validate(CreateReminderArgs, {"title": "x", "url": "javascript:alert(1)"})
    assert exc.value.field == "url"


def test_read_all_optional():
    args = validate(ReadRemindersArgs, {})
    assert args.model_fields_set == set()
    assert args.show_completed is False


def test_read_due_within_accepts_string():
    args = validate(ReadRemindersArgs, {"due_within": "this-week"})
    assert args.due_within == DueWithin.THIS_WEEK


def test_read_due_within_unknown_value():
    with pytest.raises(ValidationError) as exc:
        validate(ReadRemindersArgs, {"due_within": "someday"})
    assert exc.value.field == "due_within"


def test_read_due_window_order():
    with pytest.raises(ValidationError) as exc:
        validate(ReadRemindersArgs, {"due_after": "2025-12-01", "due_before": "2025-11-01"})
    assert "due_after" in str(exc.value)


def test_event_range_order():
    with pytest.raises(ValidationError):
        validate(CreateEventArgs, {
            "title": "Standup",
            "start_date": "2025-11-18T10:00:00",
            "end_date": "2025-11-18T09:00:00",
        })


def test_event_update_range_order():
    with pytest.raises(ValidationError) as exc:
        validate(UpdateEventArgs, {"id": "E1", "start_date": "2025-11-19", "end_date": "2025-11-18"})
    assert "start_date" in str(exc.value)

    args = validate(UpdateEventArgs, {"id": "E1", "start_date": "2025-11-19"})
    assert args.end_date is None


def test_event_read_window_accepts_open_bounds():
    args = validate(ReadEventsArgs, {"start_date": "2025-11-18"})
    assert args.end_date is None


def test_list_update_requires_both_names():
    with pytest.raises(ValidationError) as exc:
        validate(UpdateListArgs, {"name": "Work"})
    assert exc.value.field == "new_name"


def test_non_mapping_arguments_rejected():
    with pytest.raises(ValidationError) as exc:
        validate(CreateReminderArgs, ["Buy milk"])
    assert exc.value.field == "arguments"


def test_none_arguments_treated_as_empty():
    args = validate(ReadRemindersArgs, None)
    assert args.model_fields_set == set()
