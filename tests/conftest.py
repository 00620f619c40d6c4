from pathlib import Path
from typing import Any

import pytest

from apple_reminders_mcp.config import Settings
from apple_reminders_mcp.dispatcher import Dispatcher
from apple_reminders_mcp.helper import CommandInvocation, HelperCommand

TRUSTED_PATH = Path("/usr/local/bin/EventKitCLI")


class FakeHelperClient:
    """Stands in for HelperClient and records every invocation."""

    def __init__(self):
        self.calls: list[CommandInvocation] = []
        self.responses: dict[HelperCommand, Any] = {}
        self.trust_error: Exception | None = None

    def respond(self, command: HelperCommand, response: Any) -> None:
        """Set the result (or exception, or callable) for a command."""
        self.responses[command] = response

    def ensure_trusted(self) -> Path:
        if self.trust_error is not None:
            raise self.trust_error
        return TRUSTED_PATH

    async def run(self, invocation: CommandInvocation) -> Any:
        self.ensure_trusted()
        self.calls.append(invocation)
        response = self.responses.get(invocation.command)
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(invocation)
        return response


def make_settings(**overrides) -> Settings:
    values = {"env": "production", "debug": False, "helper_path": TRUSTED_PATH}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def helper() -> FakeHelperClient:
    return FakeHelperClient()


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def dispatcher(settings, helper) -> Dispatcher:
    return Dispatcher(settings, helper)


@pytest.fixture
def dev_dispatcher(helper) -> Dispatcher:
    return Dispatcher(make_settings(env="development"), helper)


@pytest.fixture
def settings_factory():
    return make_settings
