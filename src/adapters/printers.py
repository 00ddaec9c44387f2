"""Output of created objects.

Two shapes:
- a one-line confirmation (`useridentitymapping "x" created`), also used for `-o name`
- a full object dump for `-o json` / `-o yaml`
"""

from __future__ import annotations

import json
from typing import Callable, TextIO

import yaml

from core.domain.models import UserIdentityMapping
from core.errors import UsageError

NAME_FORMAT = "name"

ObjectPrinter = Callable[[UserIdentityMapping, TextIO], None]


def resource_name(obj: UserIdentityMapping) -> str:
    """Lower-cased kind, the way the CLI names resources."""

    return obj.kind.lower()


def print_success(short_output: bool, out: TextIO, obj: UserIdentityMapping, dry_run: bool, operation: str) -> None:
    if short_output:
        out.write(f"{resource_name(obj)}/{obj.name}\n")
        return
    dry_run_msg = " (dry run)" if dry_run else ""
    out.write(f'{resource_name(obj)} "{obj.name}" {operation}{dry_run_msg}\n')


def print_json(obj: UserIdentityMapping, out: TextIO) -> None:
    out.write(json.dumps(obj.to_wire(), ensure_ascii=False, indent=4) + "\n")


def print_yaml(obj: UserIdentityMapping, out: TextIO) -> None:
    out.write(yaml.safe_dump(obj.to_wire(), sort_keys=False, default_flow_style=False, allow_unicode=True))


_PRINTERS: dict[str, ObjectPrinter] = {
    "json": print_json,
    "yaml": print_yaml,
}


def allowed_formats() -> list[str]:
    return sorted([NAME_FORMAT, *_PRINTERS])


def printer_for(output_format: str) -> ObjectPrinter:
    """Return the object printer for `output_format`.

    `""` and `"name"` never reach the printer (the short confirmation is used
    instead) but are accepted so callers can resolve the printer up front.
    """

    fmt = output_format.strip()
    if fmt in ("", NAME_FORMAT):
        return print_yaml
    printer = _PRINTERS.get(fmt)
    if printer is None:
        raise UsageError(
            f'unable to match a printer suitable for the output format "{output_format}", '
            f"allowed formats are: {','.join(allowed_formats())}"
        )
    return printer
