"""Shared test fixtures and configuration."""

from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest

from core.domain.models import UserIdentityMapping
from core.interfaces.mapping_client import UserIdentityMappingClient

IDENTITY = "acme_ldap:adamjones"
USER = "ajones"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Keep the developer's kubeconfig, .env files and env vars out of the tests."""

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.delenv("KUBECONFIG", raising=False)
    for name in [
        "SERVER",
        "TOKEN",
        "USERNAME",
        "PASSWORD",
        "CERTIFICATE_AUTHORITY",
        "INSECURE_SKIP_TLS_VERIFY",
        "KUBECONFIG",
        "CONTEXT",
        "REQUEST_TIMEOUT_SECONDS",
        "LOG_LEVEL",
    ]:
        monkeypatch.delenv(f"USERIDMAP_{name}", raising=False)
    monkeypatch.chdir(tmp_path)
    return home


@pytest.fixture
def server_payload() -> dict[str, Any]:
    """A mapping as the API server returns it after a create."""

    return {
        "kind": "UserIdentityMapping",
        "apiVersion": "user.openshift.io/v1",
        "metadata": {
            "name": IDENTITY,
            "uid": "4f1c2a9e-0000-4000-8000-000000000001",
            "resourceVersion": "1042",
            "creationTimestamp": "2026-10-18T09:30:00Z",
        },
        "identity": {"name": IDENTITY, "uid": "identity-uid"},
        "user": {"name": USER, "uid": "user-uid"},
    }


@pytest.fixture
def server_mapping(server_payload: dict[str, Any]) -> UserIdentityMapping:
    return UserIdentityMapping.model_validate(server_payload)


@pytest.fixture
def fake_client(server_mapping: UserIdentityMapping) -> MagicMock:
    client = MagicMock(spec=UserIdentityMappingClient)
    client.create.return_value = server_mapping
    return client


@pytest.fixture
def recording_transport() -> Callable[..., tuple[httpx.MockTransport, list[httpx.Request]]]:
    """Build an `httpx.MockTransport` that answers every request the same way."""

    def factory(
        status_code: int = 201,
        *,
        json: Any = None,
        text: str | None = None,
    ) -> tuple[httpx.MockTransport, list[httpx.Request]]:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, json=json)

        return httpx.MockTransport(handler), requests

    return factory
