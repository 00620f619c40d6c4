"""Invocation of the native EventKit helper.

The helper is always started with an explicit argument vector; there is no
shell in between, so argument values are never parsed or interpolated.

Wire format: on success the helper exits 0 and prints a single JSON document
to stdout::

    {"status": "success", "result": <object | array | null>}

On failure it exits non-zero and writes a diagnostic to stderr, either plain
text or ``{"status": "error", "message": "..."}``. A zero exit carrying
``"status": "error"`` is treated as a failure too.
"""

import asyncio
import contextlib
import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Sequence

from .binary import BinaryResolver
from .errors import HelperExecutionError, HelperTimeoutError

logger = logging.getLogger(__name__)


class HelperCommand(str, Enum):
    """Subcommands understood by the helper."""
    REMINDERS_CREATE = "reminders-create"
    REMINDERS_READ = "reminders-read"
    REMINDERS_UPDATE = "reminders-update"
    REMINDERS_DELETE = "reminders-delete"
    LISTS_CREATE = "lists-create"
    LISTS_READ = "lists-read"
    LISTS_UPDATE = "lists-update"
    LISTS_DELETE = "lists-delete"
    EVENTS_CREATE = "events-create"
    EVENTS_READ = "events-read"
    EVENTS_UPDATE = "events-update"
    EVENTS_DELETE = "events-delete"
    CALENDARS_READ = "calendars-read"


@dataclass(frozen=True)
class CommandInvocation:
    """A helper subcommand plus its ordered arguments."""
    command: HelperCommand
    arguments: tuple[str, ...] = ()


@dataclass(frozen=True)
class HelperOutput:
    stdout: str
    stderr: str
    exit_code: int


def flag_arguments(pairs: Sequence[tuple[str, Any]]) -> tuple[str, ...]:
    """Build ``--flag value`` pairs, skipping values that are None.

    Every value becomes its own argument element; booleans are rendered as
    ``true``/``false``.
    """
    arguments: list[str] = []
    for flag, value in pairs:
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        elif isinstance(value, Enum):
            value = value.value
        arguments.extend((flag, str(value)))
    return tuple(arguments)


async def invoke(path: Path, arguments: Sequence[str], timeout_ms: int) -> HelperOutput:
    """Run ``path`` with ``arguments`` and capture its output.

    Raises:
        HelperTimeoutError: The process outlived ``timeout_ms``; it has been
            killed and reaped.
        HelperExecutionError: The process exited non-zero or could not start.
    """
    command = arguments[0] if arguments else str(path)
    try:
        proc = await asyncio.create_subprocess_exec(
            str(path),
            *arguments,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise HelperExecutionError(f"Could not start helper: {e}") from e

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout_ms / 1000)
    except asyncio.TimeoutError:
        # The process may have exited on its own after the deadline
        with contextlib.suppress(ProcessLookupError):
            proc.kill()
        await proc.wait()
        logger.warning("Helper command %s killed after %d ms", command, timeout_ms)
        raise HelperTimeoutError(command, timeout_ms) from None

    output = HelperOutput(
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
        exit_code=proc.returncode if proc.returncode is not None else -1,
    )
    if output.exit_code != 0:
        logger.warning("Helper command %s exited with code %d", command, output.exit_code)
        raise HelperExecutionError(_error_message(output.stderr), output.exit_code)
    return output


def _error_message(stderr: str) -> str:
    """Unwrap a JSON error document if the helper wrote one."""
    try:
        payload = json.loads(stderr)
    except ValueError:
        return stderr.strip()
    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        return payload["message"]
    return stderr.strip()


def parse_output(output: HelperOutput) -> Any:
    """Return the ``result`` member of a successful helper response."""
    try:
        payload = json.loads(output.stdout)
    except ValueError as e:
        raise HelperExecutionError(f"Helper returned malformed JSON: {e}") from e

    if not isinstance(payload, dict) or "status" not in payload:
        raise HelperExecutionError("Helper response is missing a status")
    if payload["status"] != "success":
        message = payload.get("message") or output.stderr or "unknown helper error"
        raise HelperExecutionError(str(message), output.exit_code)
    return payload.get("result")


class HelperClient:
    """Runs helper commands against the trusted binary."""

    def __init__(self, resolver: BinaryResolver, timeout_ms: int):
        self._resolver = resolver
        self._timeout_ms = timeout_ms

    def ensure_trusted(self) -> Path:
        return self._resolver.resolve()

    async def run(self, invocation: CommandInvocation) -> Any:
        """Execute ``invocation`` and return the parsed ``result``."""
        path = self._resolver.resolve()
        logger.debug("Running helper command %s", invocation.command.value)
        output = await invoke(
            path,
            [invocation.command.value, *invocation.arguments],
            self._timeout_ms,
        )
        return parse_output(output)
