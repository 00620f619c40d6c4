"""Trust checks for the native EventKit helper binary.

The helper runs with the user's Reminders and Calendar permissions, so its
path is treated as a trust boundary: it must be absolute, must resolve into
an allow-listed directory, and in production may be pinned to a SHA-256.
"""

import hashlib
import hmac
import logging
import os
from pathlib import Path
from typing import Optional

from .config import Settings
from .errors import UntrustedBinaryError

logger = logging.getLogger(__name__)

HASH_CHUNK_SIZE = 1 << 16


def file_sha256(path: Path) -> str:
    """Return the hex SHA-256 digest of a file."""
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(HASH_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def _is_within(path: Path, directory: Path) -> bool:
    try:
        path.relative_to(directory)
    except ValueError:
        return False
    return True


class BinaryResolver:
    """Resolve and validate the helper path once per process."""

    def __init__(self, settings: Settings):
        self._settings = settings
        self._resolved: Optional[Path] = None

    @property
    def configured_path(self) -> Path:
        return Path(self._settings.helper_path)

    def resolve(self) -> Path:
        """Return the trusted absolute helper path.

        Raises:
            UntrustedBinaryError: If any trust check fails. Nothing is cached
                on failure, so a later call checks again.
        """
        if self._resolved is not None:
            return self._resolved

        configured = self.configured_path
        if not configured.is_absolute():
            raise self._reject(configured, "path is not absolute")

        real_path = Path(os.path.realpath(configured))
        allowed = [Path(os.path.realpath(d)) for d in self._settings.helper_allowed_dirs]
        if not any(_is_within(real_path, directory) for directory in allowed):
            raise self._reject(
                configured,
                f"resolves to {real_path}, outside the allowed directories",
            )

        if not real_path.is_file():
            raise self._reject(configured, "not a regular file")
        if not os.access(real_path, os.X_OK):
            raise self._reject(configured, "not executable")

        expected = self._settings.helper_sha256
        if expected and not self._settings.is_development:
            actual = file_sha256(real_path)
            if not hmac.compare_digest(actual, expected.strip().lower()):
                raise self._reject(configured, "SHA-256 does not match the pinned value")
        elif not expected and not self._settings.is_development:
            logger.warning("No SHA-256 pinned for helper %s; skipping integrity check", real_path)

        logger.debug("Helper binary trusted at %s", real_path)
        self._resolved = real_path
        return real_path

    def _reject(self, path: Path, reason: str) -> UntrustedBinaryError:
        logger.error("Refusing helper binary %s: %s", path, reason)
        return UntrustedBinaryError(str(path), reason)
