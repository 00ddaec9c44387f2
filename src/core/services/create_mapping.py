"""`create useridentitymapping`: command logic without the CLI framework.

Typically identities are mapped to users automatically during login. When
automatic mapping is disabled (the "lookup" mapping method), or a mapping has
to be established by hand, this creates the `UserIdentityMapping` object.

The handler runs in three phases, each of which may raise and end the
invocation:
- `complete`: take arguments and flags, build the API client and printer
- `validate`: check that `complete` left the options usable
- `run`: create (or, in dry-run, only build) the mapping and print it
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence, TextIO

from adapters.printers import NAME_FORMAT, ObjectPrinter, print_success, printer_for
from core.domain.models import UserIdentityMapping
from core.errors import UsageError
from core.interfaces.mapping_client import UserIdentityMappingClient

logger = logging.getLogger(__name__)

RECOMMENDED_NAME = "useridentitymapping"


def _format_args(args: Sequence[str]) -> str:
    return "[" + " ".join(args) + "]"


@dataclass
class CreateUserIdentityMappingOptions:
    """Options for a single `create useridentitymapping` invocation."""

    out: TextIO | None = None

    identity: str = ""
    user: str = ""

    client: UserIdentityMappingClient | None = None

    dry_run: bool = False

    output_format: str = ""
    printer: ObjectPrinter | None = None

    def complete(
        self,
        args: Sequence[str],
        *,
        dry_run: bool,
        output_format: str,
        client_factory: Callable[[], UserIdentityMappingClient],
    ) -> None:
        """Fill the options from positional arguments and flags.

        `client_factory` resolves the ambient connection settings; whatever it
        raises is surfaced unchanged.
        """

        if len(args) == 0:
            raise UsageError("identity is required")
        if len(args) == 1:
            raise UsageError("user name is required")
        if len(args) > 2:
            raise UsageError(
                f"exactly two arguments (identity and user name) are supported, not: {_format_args(args)}"
            )
        self.identity, self.user = args[0], args[1]

        self.dry_run = dry_run
        self.output_format = (output_format or "").strip()
        self.printer = printer_for(self.output_format)

        self.client = client_factory()

    def validate(self) -> None:
        if not self.identity:
            raise UsageError("identity is required")
        if not self.user:
            raise UsageError("user is required")
        if self.client is None:
            raise UsageError("UserIdentityMappingClient is required")
        if self.out is None:
            raise UsageError("Out is required")
        if self.printer is None:
            raise UsageError("Printer is required")

    def run(self) -> UserIdentityMapping:
        """Create the mapping and print it; returns the printed object."""

        mapping = UserIdentityMapping.for_names(self.identity, self.user)

        actual = mapping
        if self.dry_run:
            logger.info("Dry run: not sending %s %r to the server", RECOMMENDED_NAME, mapping.name)
        else:
            assert self.client is not None
            actual = self.client.create(mapping)

        assert self.out is not None
        short_output = self.output_format == NAME_FORMAT
        if short_output or not self.output_format:
            print_success(short_output, self.out, actual, self.dry_run, "created")
            return actual

        assert self.printer is not None
        self.printer(actual, self.out)
        return actual
