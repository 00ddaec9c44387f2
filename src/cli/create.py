"""`create` commands."""

from __future__ import annotations

import logging
import sys
from contextlib import ExitStack

import httpx
import typer
from rich.console import Console

from adapters.printers import allowed_formats
from adapters.user_client import HTTPUserIdentityMappingClient
from cli.state import CLIState
from cli.ui_components import print_error, print_usage_hint
from core.client_config import resolve_client_config
from core.config import AppSettings
from core.errors import UsageError, UserIdMapError
from core.services.create_mapping import RECOMMENDED_NAME, CreateUserIdentityMappingOptions

app = typer.Typer(no_args_is_help=True, help="Create a resource on the API server.")

_err_console = Console(stderr=True)
logger = logging.getLogger(__name__)


def build_mapping_client(settings: AppSettings) -> HTTPUserIdentityMappingClient:
    """Client bound to the ambient connection configuration."""

    return HTTPUserIdentityMappingClient.from_config(resolve_client_config(settings))


_MAPPING_HELP = """Manually map an identity to a user.

Typically, identities are automatically mapped to users during login. If automatic
mapping is disabled (by using the "lookup" mapping method), or a mapping needs to
be manually established between an identity and a user, this command can be used
to create a useridentitymapping object.
"""

_MAPPING_EXAMPLE = """Examples:

# Map the identity "acme_ldap:adamjones" to the user "ajones"

useridmap create useridentitymapping acme_ldap:adamjones ajones
"""


@app.callback()
def create() -> None:
    """Create a resource on the API server."""


@app.command(RECOMMENDED_NAME, help=_MAPPING_HELP, epilog=_MAPPING_EXAMPLE)
def create_user_identity_mapping(
    ctx: typer.Context,
    args: list[str] | None = typer.Argument(
        None,
        metavar="IDENTITY_NAME USER_NAME",
        show_default=False,
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Only print the object that would be sent, without sending it.",
    ),
    output: str = typer.Option(
        "",
        "--output",
        "-o",
        help=f"Output format. One of: {'|'.join(allowed_formats())}.",
        show_default=False,
    ),
) -> None:
    state = ctx.find_object(CLIState) or CLIState()
    options = CreateUserIdentityMappingOptions(out=sys.stdout)

    with ExitStack() as stack:

        def client_factory() -> HTTPUserIdentityMappingClient:
            return stack.enter_context(build_mapping_client(state.settings()))

        try:
            options.complete(args or [], dry_run=dry_run, output_format=output, client_factory=client_factory)
            options.validate()
            options.run()
        except UsageError as exc:
            print_error(_err_console, str(exc))
            print_usage_hint(_err_console, ctx.command_path)
            raise typer.Exit(code=1) from exc
        except (UserIdMapError, httpx.HTTPError) as exc:
            logger.debug("create %s failed", RECOMMENDED_NAME, exc_info=True)
            print_error(_err_console, str(exc))
            raise typer.Exit(code=1) from exc
