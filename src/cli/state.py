"""State shared between the root callback and subcommands."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from core.config import AppSettings
from core.errors import ConfigurationError


@dataclass
class CLIState:
    """Per-invocation state, stored as the Click context object."""

    overrides: dict[str, Any] = field(default_factory=dict)

    def settings(self) -> AppSettings:
        """`AppSettings` with CLI flags taking precedence over env/.env values."""

        try:
            return AppSettings(**self.overrides)
        except ValidationError as exc:
            raise ConfigurationError(f"invalid configuration: {exc}") from exc
