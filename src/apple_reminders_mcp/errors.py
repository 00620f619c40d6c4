"""Exception types raised along the tool-call pipeline.

Every stage raises one of these; the dispatcher is the only place that turns
them into a tool result.
"""

from typing import Optional


class ReminderToolError(Exception):
    """Base class for all pipeline errors."""


class ValidationError(ReminderToolError):
    """Raised when tool arguments do not satisfy the operation schema.

    The message is always shown to the caller in full.
    """

    def __init__(self, field: str, reason: str, message: Optional[str] = None):
        self.field = field
        self.reason = reason
        super().__init__(message or f"Input validation failed: {field}: {reason}")


class UnknownToolError(ReminderToolError):
    """Raised when the dispatcher has no entry for a tool name."""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class UntrustedBinaryError(ReminderToolError):
    """Raised when the helper binary fails a trust check."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Untrusted helper binary {path}: {reason}")


class HelperTimeoutError(ReminderToolError, TimeoutError):
    """Raised when the helper exceeds its time budget and was killed."""

    def __init__(self, command: str, timeout_ms: int):
        self.command = command
        self.timeout_ms = timeout_ms
        super().__init__(f"Helper command '{command}' timed out after {timeout_ms} ms")


class HelperExecutionError(ReminderToolError):
    """Raised when the helper ran but reported failure."""

    def __init__(self, stderr: str, exit_code: Optional[int] = None):
        self.stderr = stderr
        self.exit_code = exit_code
        detail = stderr.strip() or "no diagnostic output"
        if exit_code is None:
            super().__init__(f"Helper failed: {detail}")
        else:
            super().__init__(f"Helper exited with code {exit_code}: {detail}")


class NotFoundError(ReminderToolError):
    """Raised when an id-based operation matches nothing."""

    def __init__(self, kind: str, identifier: str):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind.capitalize()} not found: {identifier}")
