"""httpx wrapper.

Why a wrapper:
- Standardizes timeouts, headers, TLS and authentication for the API server.
- Makes testing easy: tests pass an `httpx.MockTransport` instead of a network.
"""

from __future__ import annotations

import base64
import os
import ssl
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import httpx

from core.client_config import ClientConfig
from core.errors import ConfigurationError


def _decode_b64(value: str, *, field: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except ValueError as exc:
        raise ConfigurationError(f"invalid {field}: {exc}") from exc


@contextmanager
def _pem_file(data: bytes) -> Iterator[str]:
    # `load_cert_chain` only accepts paths; the file lives just long enough to be read.
    fd, path = tempfile.mkstemp(suffix=".pem")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        yield path
    finally:
        Path(path).unlink(missing_ok=True)


def build_ssl_context(config: ClientConfig) -> ssl.SSLContext | bool:
    """TLS verification settings for `httpx.Client(verify=...)`."""

    if config.insecure_skip_tls_verify:
        return False

    cadata = None
    if config.certificate_authority_data:
        raw_ca = _decode_b64(config.certificate_authority_data, field="certificate-authority-data")
        try:
            cadata = raw_ca.decode("ascii")
        except UnicodeDecodeError as exc:
            raise ConfigurationError(f"invalid certificate-authority-data: not a PEM bundle ({exc})") from exc
    try:
        context = ssl.create_default_context(
            cafile=str(config.certificate_authority) if config.certificate_authority else None,
            cadata=cadata,
        )
    except (OSError, ssl.SSLError) as exc:
        raise ConfigurationError(f"unable to load certificate authority: {exc}") from exc

    cert = config.client_certificate
    key = config.client_key
    try:
        if config.client_certificate_data:
            cert_bytes = _decode_b64(config.client_certificate_data, field="client-certificate-data")
            key_bytes = _decode_b64(config.client_key_data or "", field="client-key-data")
            with _pem_file(cert_bytes) as cert_path, _pem_file(key_bytes) as key_path:
                context.load_cert_chain(cert_path, key_path)
        elif cert is not None:
            context.load_cert_chain(str(cert), str(key) if key else None)
    except (OSError, ssl.SSLError) as exc:
        raise ConfigurationError(f"unable to load client certificate: {exc}") from exc

    return context


def build_client(
    config: ClientConfig,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create an `httpx.Client` bound to the API server.

    Why a builder:
    - Every request shares base URL, timeout, auth and TLS policy.
    - `transport` lets tests swap the network for `httpx.MockTransport`.
    """

    headers: dict[str, str] = {
        "User-Agent": config.user_agent,
        "Accept": "application/json",
    }
    auth: httpx.Auth | None = None
    if config.token:
        headers["Authorization"] = f"Bearer {config.token}"
    elif config.username:
        auth = httpx.BasicAuth(config.username, config.password or "")

    return httpx.Client(
        base_url=config.server.rstrip("/"),
        timeout=httpx.Timeout(config.timeout_seconds),
        headers=headers,
        auth=auth,
        verify=build_ssl_context(config),
        transport=transport,
        follow_redirects=False,
    )
