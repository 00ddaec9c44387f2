"""Root of the `useridmap` CLI (Typer).

Holds the global connection and logging options; subcommands read them back
through `CLIState`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import typer

from cli.create import app as create_app
from cli.state import CLIState
from core.errors import ConfigurationError
from core.logging_setup import configure_logging, verbosity_to_level

app = typer.Typer(
    no_args_is_help=True,
    help="Manage user identity mappings on a cluster API server.",
)
app.add_typer(create_app, name="create")


@app.callback()
def main(
    ctx: typer.Context,
    server: str | None = typer.Option(None, "--server", "-s", help="The address and port of the API server."),
    token: str | None = typer.Option(None, "--token", help="Bearer token for authentication to the API server."),
    username: str | None = typer.Option(None, "--username", help="Username for basic authentication."),
    password: str | None = typer.Option(None, "--password", help="Password for basic authentication."),
    certificate_authority: Path | None = typer.Option(
        None, "--certificate-authority", help="Path to a cert file for the certificate authority."
    ),
    insecure_skip_tls_verify: bool | None = typer.Option(
        None,
        "--insecure-skip-tls-verify/--no-insecure-skip-tls-verify",
        help="Do not check the server's certificate for validity (insecure).",
        show_default=False,
    ),
    kubeconfig: Path | None = typer.Option(None, "--kubeconfig", help="Path to the kubeconfig file to use."),
    context: str | None = typer.Option(None, "--context", help="The name of the kubeconfig context to use."),
    request_timeout: float | None = typer.Option(
        None, "--request-timeout", help="Seconds to wait for the server before giving up."
    ),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Increase log verbosity (-v, -vv)."),
) -> None:
    state = ctx.ensure_object(CLIState)
    flags: dict[str, Any] = {
        "server": server,
        "token": token,
        "username": username,
        "password": password,
        "certificate_authority": certificate_authority,
        "insecure_skip_tls_verify": insecure_skip_tls_verify,
        "kubeconfig": kubeconfig,
        "context": context,
        "request_timeout_seconds": request_timeout,
    }
    state.overrides.update({k: v for k, v in flags.items() if v is not None})

    # A broken setting must not hide usage errors; it resurfaces when the client is built.
    try:
        default_level = state.settings().resolved_log_level()
    except ConfigurationError:
        default_level = logging.WARNING
    configure_logging(verbosity_to_level(verbose, default_level))


def run() -> None:
    app(prog_name="useridmap")
