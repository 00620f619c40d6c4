"""Mapping of helper failures onto permission and not-found errors.

The helper owns every EventKit authorization check; all this module sees is
the diagnostic text the helper writes to stderr.
"""

import re
from typing import Optional

from .errors import HelperExecutionError, NotFoundError

NOT_FOUND_PATTERN = re.compile(r"\bnot\s+found\b", re.IGNORECASE)
PERMISSION_PATTERN = re.compile(
    r"permission|not\s+authori[sz]ed|access\s+denied|restricted|write[-_ ]only",
    re.IGNORECASE,
)

# Entity kind as seen by the caller -> privacy pane that grants it
PRIVACY_PANES = {
    "reminder": "Reminders",
    "list": "Reminders",
    "event": "Calendars",
    "calendar": "Calendars",
}


def get_status_name(stderr: str) -> str:
    """Extract a readable authorization status from helper diagnostics."""
    text = stderr.lower()
    if "restricted" in text:
        return "restricted"
    if re.search(r"write[-_ ]only", text):
        return "write_only"
    if "not determined" in text or "notdetermined" in text:
        return "not_determined"
    return "denied"


class PermissionDeniedError(HelperExecutionError):
    """Raised when the helper lacks Reminders or Calendar access."""

    def __init__(self, entity_type: str, status: str, stderr: str, exit_code: Optional[int] = None):
        self.entity_type = entity_type
        self.status = status
        self.stderr = stderr
        self.exit_code = exit_code
        Exception.__init__(self, f"{entity_type} access {status}. {self._get_instructions()}")

    def _get_instructions(self) -> str:
        if self.status == "restricted":
            return "Access is restricted by device policy."
        if self.status == "write_only":
            return (
                f"{self.entity_type} has write-only access; full access is required. "
                f"Open System Settings > Privacy & Security > {self.entity_type} "
                "and grant full access to the app running this server."
            )
        return (
            f"Open System Settings > Privacy & Security > {self.entity_type} "
            "and allow access for the app running this server."
        )


def classify_helper_failure(
    error: HelperExecutionError,
    kind: str,
    identifier: Optional[str] = None,
) -> Exception:
    """Return the most specific error for a failed helper call.

    Not-found is only reported for id-based operations; a filter that matches
    nothing is not a failure at all.
    """
    if isinstance(error, PermissionDeniedError):
        return error
    if identifier is not None and NOT_FOUND_PATTERN.search(error.stderr):
        return NotFoundError(kind, identifier)
    if PERMISSION_PATTERN.search(error.stderr):
        return PermissionDeniedError(
            PRIVACY_PANES.get(kind, "Reminders"),
            get_status_name(error.stderr),
            error.stderr,
            error.exit_code,
        )
    return error
