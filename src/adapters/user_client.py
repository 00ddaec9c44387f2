"""HTTP client for the `user.openshift.io` API group.

Only the piece the CLI needs: creating `UserIdentityMapping` objects.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from core.client_config import ClientConfig
from core.domain.models import API_VERSION, MAPPING_KIND, MAPPING_RESOURCE, Status, UserIdentityMapping
from core.errors import APIStatusError
from core.interfaces.mapping_client import UserIdentityMappingClient

from adapters.http_client import build_client

logger = logging.getLogger(__name__)


def status_error_from_response(response: httpx.Response) -> APIStatusError:
    """Turn a non-2xx response into an `APIStatusError`.

    Prefers the server's `Status` body; otherwise falls back to the HTTP reason
    phrase and the raw body text.
    """

    status: Status | None = None
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("kind") == "Status":
        try:
            status = Status.model_validate(payload)
        except ValidationError:
            status = None

    if status is None:
        text = response.text.strip()
        status = Status(
            status="Failure",
            code=response.status_code,
            reason=response.reason_phrase.replace(" ", "") or "Unknown",
            message=text or f"the server responded with HTTP {response.status_code}",
        )
    return APIStatusError(status, status_code=response.status_code)


def undecodable_response_error(response: httpx.Response) -> APIStatusError:
    """A success status whose body is not a `UserIdentityMapping` (proxies, HTML pages)."""

    body = response.text.strip()
    if len(body) > 200:
        body = body[:200] + "..."
    status = Status(
        status="Failure",
        code=response.status_code,
        reason="InvalidResponse",
        message=f"unable to decode the server response as {MAPPING_KIND}: {body or '<empty body>'}",
    )
    return APIStatusError(status, status_code=response.status_code)


class HTTPUserIdentityMappingClient(UserIdentityMappingClient):
    """`UserIdentityMappingClient` over the cluster's REST API."""

    _path = f"/apis/{API_VERSION}/{MAPPING_RESOURCE}"

    def __init__(self, http: httpx.Client) -> None:
        self._http = http

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> "HTTPUserIdentityMappingClient":
        return cls(build_client(config, transport=transport))

    def create(self, mapping: UserIdentityMapping) -> UserIdentityMapping:
        logger.debug("POST %s%s", self._http.base_url, self._path)
        response = self._http.post(self._path, json=mapping.to_wire())
        logger.info("POST %s -> %s", self._path, response.status_code)

        if not response.is_success:
            raise status_error_from_response(response)
        try:
            return UserIdentityMapping.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise undecodable_response_error(response) from exc

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "HTTPUserIdentityMappingClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
