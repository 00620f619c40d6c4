"""Prompt templates for the MCP server.

Each prompt is a planning workflow that steers the agent through the
reminder and calendar tools; none of them touches the helper itself.
"""

from typing import Optional

from mcp.server.fastmcp import FastMCP

NO_CHANGES_NOTE = (
    "Do not create, update or delete anything until the user has confirmed "
    "the proposed changes."
)


def daily_task_organizer(today_focus: Optional[str] = None) -> str:
    lines = [
        "Help me organize today's tasks.",
        "",
        "1. Call `reminders_read` with `due_within` set to `overdue`, then to `today`.",
        "2. Call `calendar_read` with today's date as both `start_date` and `end_date`.",
        "3. Group the reminders into must-do, should-do and can-wait, fitting them "
        "around the fixed calendar events.",
        "4. Propose due-date changes for anything that will not fit today.",
    ]
    if today_focus:
        lines += ["", f"My focus for today: {today_focus}"]
    lines += ["", NO_CHANGES_NOTE]
    return "\n".join(lines)


def weekly_planning(user_ideas: Optional[str] = None) -> str:
    lines = [
        "Help me plan the coming week.",
        "",
        "1. Call `calendar_read` for today through the coming Sunday.",
        "2. Call `reminders_read` with `due_within` set to `this-week`, and once "
        "more with `no-date` to find unscheduled work.",
        "3. Suggest which unscheduled reminders to give due dates, spreading them "
        "over days with free time.",
        "4. Point out days that are already overloaded.",
    ]
    if user_ideas:
        lines += ["", f"Things I want to get done this week: {user_ideas}"]
    lines += ["", NO_CHANGES_NOTE]
    return "\n".join(lines)


def reminder_review(list_name: Optional[str] = None) -> str:
    scope = f"the `{list_name}` list" if list_name else "all of my lists"
    lines = [
        f"Review the reminders in {scope} and help me clean them up.",
        "",
        "1. Call `lists_read` to see the available lists.",
        "2. Call `reminders_read` with `show_completed` set to true"
        + (f" and `list_name` set to `{list_name}`." if list_name else "."),
        "3. Flag duplicates, stale overdue items and reminders without enough "
        "detail to act on.",
        "4. Suggest which to complete, reword, move to another list or delete.",
        "",
        NO_CHANGES_NOTE,
    ]
    return "\n".join(lines)


# Prompt name -> template, in the order they are listed
PROMPTS = {
    "daily-task-organizer": daily_task_organizer,
    "weekly-planning": weekly_planning,
    "reminder-review": reminder_review,
}

PROMPT_DESCRIPTIONS = {
    "daily-task-organizer": "Sort today's reminders around today's calendar events",
    "weekly-planning": "Plan the coming week from calendar events and open reminders",
    "reminder-review": "Review reminders for duplicates, stale items and cleanup",
}


def register_prompts(mcp: FastMCP) -> None:
    """Register all prompt templates with the MCP server."""
    for name, template in PROMPTS.items():
        mcp.prompt(name=name, description=PROMPT_DESCRIPTIONS[name])(template)
