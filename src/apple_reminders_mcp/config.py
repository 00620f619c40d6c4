"""Settings and logging configuration.

Settings are read from environment variables prefixed with
``APPLE_REMINDERS_MCP_`` (or a local ``.env`` file).
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Default location of the bundled helper, next to the package
DEFAULT_HELPER_DIR = Path(__file__).resolve().parent / "bin"
DEFAULT_HELPER_NAME = "EventKitCLI"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """Server settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="APPLE_REMINDERS_MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Error detail posture
    env: Literal["production", "development"] = "production"
    debug: bool = False

    # Native helper
    helper_path: Path = DEFAULT_HELPER_DIR / DEFAULT_HELPER_NAME
    helper_allowed_dirs: list[Path] = Field(
        default_factory=lambda: [
            DEFAULT_HELPER_DIR,
            Path("/usr/local/bin"),
            Path("/opt/homebrew/bin"),
        ]
    )
    helper_sha256: Optional[str] = None
    helper_timeout_ms: int = Field(default=10_000, gt=0)

    # Logging
    log_level: str = "INFO"

    # Transport
    transport: Literal["stdio", "sse"] = "stdio"
    host: str = "127.0.0.1"
    port: int = 3000

    @property
    def is_development(self) -> bool:
        """True when full error detail may be shown to the caller."""
        return self.env == "development" or self.debug


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()


def configure_logging(settings: Settings) -> None:
    """Send log records to stderr; stdout is owned by the stdio transport."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format=LOG_FORMAT,
    )
