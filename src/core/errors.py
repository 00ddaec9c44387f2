"""Exception hierarchy for useridmap.

Every failure of an invocation is one of three kinds:
- usage errors (arguments, flags) raised before any network activity
- configuration errors (connection settings cannot be resolved)
- remote errors (the API server rejected the request)

None of them is recovered internally; the CLI turns them into exit code 1.
"""

from __future__ import annotations

from core.domain.models import Status


class UserIdMapError(Exception):
    """Base exception for all useridmap errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UsageError(UserIdMapError):
    """Wrong arguments or flags for a command."""


class ConfigurationError(UserIdMapError):
    """The connection to the API server cannot be configured."""


class APIStatusError(UserIdMapError):
    """The API server answered a request with a non-success status."""

    def __init__(self, status: Status, *, status_code: int) -> None:
        self.status = status
        self.status_code = status.code or status_code
        self.reason = status.reason or "Unknown"
        message = status.message or f"the server responded with HTTP {self.status_code}"
        super().__init__(f"Error from server ({self.reason}): {message}")

    @property
    def is_already_exists(self) -> bool:
        return self.reason == "AlreadyExists"

    @property
    def is_not_found(self) -> bool:
        return self.reason == "NotFound"
