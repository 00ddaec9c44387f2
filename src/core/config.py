"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without polluting the CLI.
- Lets adapters (HTTP, printers) read configuration consistently.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "useridmap"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "useridmap"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "useridmap"
    return Path.home() / ".config" / "useridmap"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def default_kubeconfig_path() -> Path:
    """First entry of `$KUBECONFIG`, else `~/.kube/config`."""

    env_value = (os.environ.get("KUBECONFIG") or "").strip()
    if env_value:
        first = env_value.split(os.pathsep)[0].strip()
        if first:
            return Path(first).expanduser()
    return Path.home() / ".kube" / "config"


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typed and validated at the edge (env vars) without putting that logic in the Core.
    - A single configuration contract for CLI and adapters.

    Every connection field is optional here: unset values are filled from the
    kubeconfig by `core.client_config.resolve_client_config`.
    """

    model_config = SettingsConfigDict(
        env_prefix="USERIDMAP_",
        extra="ignore",
        case_sensitive=False,
        # Order: project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    server: str | None = Field(
        default=None,
        description="API server URL (e.g. https://api.cluster.example.com:6443).",
    )
    token: str | None = Field(
        default=None,
        description="Bearer token for the API server.",
    )
    username: str | None = Field(
        default=None,
        description="Username for HTTP basic auth.",
    )
    password: str | None = Field(
        default=None,
        description="Password for HTTP basic auth.",
    )
    certificate_authority: Path | None = Field(
        default=None,
        description="Path to a PEM bundle used to verify the server certificate.",
    )
    insecure_skip_tls_verify: bool | None = Field(
        default=None,
        description="Skip server certificate verification.",
    )

    kubeconfig: Path | None = Field(
        default=None,
        description="kubeconfig file. Defaults to $KUBECONFIG or ~/.kube/config.",
    )
    context: str | None = Field(
        default=None,
        description="kubeconfig context to use instead of current-context.",
    )

    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default="useridmap/0.1",
        min_length=1,
        description="User-Agent sent to the API server.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Root log level when no -v flag is given.",
    )

    def resolved_log_level(self) -> int:
        level = logging.getLevelName(self.log_level.strip().upper())
        return level if isinstance(level, int) else logging.WARNING
