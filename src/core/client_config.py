"""Ambient connection configuration.

Resolves where the API server lives and how to authenticate, merging field by
field (first match wins):
1) `AppSettings` (CLI global flags and `USERIDMAP_*` env vars)
2) the kubeconfig's selected context (`--context` or `current-context`)

The kubeconfig is optional as long as the settings name a server.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from core.config import AppSettings, default_kubeconfig_path
from core.errors import ConfigurationError

logger = logging.getLogger(__name__)


class ClientConfig(BaseModel):
    """Everything the HTTP adapter needs to talk to the API server."""

    server: str = Field(..., min_length=1)
    token: str | None = None
    username: str | None = None
    password: str | None = None

    certificate_authority: Path | None = None
    certificate_authority_data: str | None = Field(
        default=None,
        description="Base64 PEM bundle, as stored in kubeconfig.",
    )
    client_certificate: Path | None = None
    client_certificate_data: str | None = None
    client_key: Path | None = None
    client_key_data: str | None = None
    insecure_skip_tls_verify: bool = False

    timeout_seconds: float = Field(default=30.0, gt=0)
    user_agent: str = "useridmap/0.1"

    @property
    def auth_mode(self) -> str:
        if self.token:
            return "bearer-token"
        if self.username:
            return "basic"
        if self.client_certificate or self.client_certificate_data:
            return "client-certificate"
        return "anonymous"


def load_kubeconfig(path: Path) -> dict[str, Any]:
    """Parse a kubeconfig file; an empty file yields an empty dict."""

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f'error loading config file "{path}": {exc}') from exc
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f'error loading config file "{path}": {exc}') from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f'error loading config file "{path}": not a kubeconfig mapping')
    return data


def _named(entries: Any, name: str, key: str) -> dict[str, Any] | None:
    if not isinstance(entries, list):
        return None
    for entry in entries:
        if isinstance(entry, dict) and entry.get("name") == name:
            value = entry.get(key)
            return value if isinstance(value, dict) else {}
    return None


def _relative_to(base: Path, value: Any) -> Path | None:
    if not value:
        return None
    path = Path(str(value)).expanduser()
    return path if path.is_absolute() else base / path


def _context_fields(kubeconfig: dict[str, Any], *, path: Path, context_name: str | None) -> dict[str, Any]:
    """Flatten the selected context's cluster and user into `ClientConfig` fields."""

    name = context_name or kubeconfig.get("current-context")
    if not name:
        return {}

    context = _named(kubeconfig.get("contexts"), name, "context")
    if context is None:
        raise ConfigurationError(f'context "{name}" does not exist')

    base = path.parent
    fields: dict[str, Any] = {}

    cluster_name = context.get("cluster")
    if cluster_name:
        cluster = _named(kubeconfig.get("clusters"), cluster_name, "cluster")
        if cluster is None:
            raise ConfigurationError(f'cluster "{cluster_name}" not found in context "{name}"')
        fields["server"] = cluster.get("server")
        fields["certificate_authority"] = _relative_to(base, cluster.get("certificate-authority"))
        fields["certificate_authority_data"] = cluster.get("certificate-authority-data")
        fields["insecure_skip_tls_verify"] = cluster.get("insecure-skip-tls-verify")

    user_name = context.get("user")
    if user_name:
        user = _named(kubeconfig.get("users"), user_name, "user")
        if user is None:
            raise ConfigurationError(f'user "{user_name}" not found in context "{name}"')
        token = user.get("token")
        token_file = _relative_to(base, user.get("tokenFile"))
        if not token and token_file is not None:
            try:
                token = token_file.read_text(encoding="utf-8").strip()
            except OSError as exc:
                raise ConfigurationError(f'unable to read token file "{token_file}": {exc}') from exc
        fields["token"] = token
        fields["username"] = user.get("username")
        fields["password"] = user.get("password")
        fields["client_certificate"] = _relative_to(base, user.get("client-certificate"))
        fields["client_certificate_data"] = user.get("client-certificate-data")
        fields["client_key"] = _relative_to(base, user.get("client-key"))
        fields["client_key_data"] = user.get("client-key-data")

    return {k: v for k, v in fields.items() if v not in (None, "")}


def resolve_client_config(settings: AppSettings | None = None) -> ClientConfig:
    """Build the `ClientConfig` for this invocation.

    Raises:
    - `ConfigurationError` when no server can be determined or the kubeconfig
      cannot be used.
    """

    settings = settings or AppSettings()

    kubeconfig_path = settings.kubeconfig or default_kubeconfig_path()
    from_kubeconfig: dict[str, Any] = {}
    if kubeconfig_path.is_file():
        kubeconfig = load_kubeconfig(kubeconfig_path)
        from_kubeconfig = _context_fields(kubeconfig, path=kubeconfig_path, context_name=settings.context)
    elif settings.kubeconfig is not None:
        raise ConfigurationError(f'error loading config file "{kubeconfig_path}": file does not exist')
    elif settings.context:
        raise ConfigurationError(f'context "{settings.context}" does not exist')

    from_settings: dict[str, Any] = {
        "server": settings.server,
        "token": settings.token,
        "username": settings.username,
        "password": settings.password,
        "certificate_authority": settings.certificate_authority,
        "insecure_skip_tls_verify": settings.insecure_skip_tls_verify,
    }
    merged = dict(from_kubeconfig)
    merged.update({k: v for k, v in from_settings.items() if v not in (None, "")})

    # An explicit CA drops the kubeconfig's inline bundle.
    if settings.certificate_authority is not None:
        merged.pop("certificate_authority_data", None)

    if not merged.get("server"):
        raise ConfigurationError("invalid configuration: no configuration has been provided, try setting --server")

    try:
        config = ClientConfig(
            **merged,
            timeout_seconds=settings.request_timeout_seconds,
            user_agent=settings.user_agent,
        )
    except ValidationError as exc:
        raise ConfigurationError(f"invalid configuration: {exc}") from exc
    logger.info("Using server %s (auth: %s)", config.server, config.auth_mode)
    return config
